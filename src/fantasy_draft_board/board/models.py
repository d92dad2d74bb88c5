from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class EntityRecord:
    """A draftable player on the board.

    Attributes:
        id: Opaque token, unique for the lifetime of the collection.
        name: Display name (e.g., "Ja'Marr Chase").
        category: Position code ("WR", "RB", ...); may be empty.
        group: Team code ("CIN", ...); may be empty.
        rank: Position in the single global ordering. Only relative order matters.
        drafted: Whether the player has been taken.
        priority: Tier captured at import time. Not used by ranking.
    """

    id: str
    name: str
    category: str = ""
    group: str = ""
    rank: int = 0
    drafted: bool = False
    priority: int = 1

    def with_rank(self, rank: int) -> EntityRecord:
        return replace(self, rank=rank)

    def with_drafted(self, drafted: bool) -> EntityRecord:
        return replace(self, drafted=drafted)


@dataclass(frozen=True)
class ParsedEntry:
    """One record produced by the import parsers, before ids and ranks are assigned."""

    name: str
    category: str = ""
    group: str = ""
    priority: int = 1


@dataclass(frozen=True)
class BoardSettings:
    num_slots: int = 12
    num_rounds: int = 14
    slot_labels: tuple[str, ...] = ()
    highlighted_slot: int | None = None

    def __post_init__(self) -> None:
        if self.num_slots <= 0:
            raise ValueError(f"num_slots must be positive, got {self.num_slots}")
        if self.num_rounds <= 0:
            raise ValueError(f"num_rounds must be positive, got {self.num_rounds}")
        # Pad or truncate labels so there is exactly one per slot
        labels = tuple(self.slot_labels[: self.num_slots])
        if len(labels) < self.num_slots:
            labels = labels + tuple(f"Team {i + 1}" for i in range(len(labels), self.num_slots))
        object.__setattr__(self, "slot_labels", labels)
        if self.highlighted_slot is not None and not 0 <= self.highlighted_slot < self.num_slots:
            object.__setattr__(self, "highlighted_slot", None)


@dataclass(frozen=True)
class BoardDocument:
    """Everything that is persisted for one board."""

    records: tuple[EntityRecord, ...] = ()
    history: tuple[str, ...] = ()
    settings: BoardSettings = field(default_factory=BoardSettings)
    adp: dict[str, dict[str, float]] = field(default_factory=dict)
    stats: dict[str, dict[str, dict[str, float]]] = field(default_factory=dict)


@dataclass(frozen=True)
class GridCell:
    """One cell of the rendered snake board."""

    round_index: int
    column: int
    pick_number: int
    record: EntityRecord | None
    highlighted: bool = False
