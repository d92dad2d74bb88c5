from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

import typer

from fantasy_draft_board.board.drag import DragSession
from fantasy_draft_board.board.filtering import ALL_TAB, POSITION_TABS, filter_available
from fantasy_draft_board.board.report import print_available, print_grid, print_roster
from fantasy_draft_board.board.snake import picks_for_slot
from fantasy_draft_board.config import load_board_settings
from fantasy_draft_board.services.board_session import BoardSession, open_session, save_session
from fantasy_draft_board.storage.factory import create_repository

if TYPE_CHECKING:
    from collections.abc import Callable

    from fantasy_draft_board.board.models import EntityRecord
    from fantasy_draft_board.storage.repository import BoardRepository

# Module-level factory for dependency injection in tests
_repository_factory: Callable[[], BoardRepository] = create_repository


def set_repository_factory(factory: Callable[[], BoardRepository]) -> None:
    global _repository_factory
    _repository_factory = factory


def get_repository() -> BoardRepository:
    return _repository_factory()


def load_session() -> tuple[BoardRepository, BoardSession]:
    repository = get_repository()
    return repository, open_session(repository, load_board_settings())


def commit(repository: BoardRepository, session: BoardSession) -> None:
    if not save_session(repository, session):
        typer.echo("Warning: board could not be saved; changes are not persisted.", err=True)


def resolve_player(session: BoardSession, name_or_id: str) -> EntityRecord:
    record = session.find(name_or_id)
    if record is None:
        typer.echo(f"No unique player matches {name_or_id!r}", err=True)
        raise typer.Exit(code=1)
    return record


def show(
    pos: Annotated[str, typer.Option("--pos", help=f"Position tab: {', '.join(POSITION_TABS)}.")] = ALL_TAB,
    search: Annotated[str, typer.Option("--search", "-s", help="Filter by name, position or team.")] = "",
    top: Annotated[int | None, typer.Option(min=0, help="Number of players to show.")] = None,
) -> None:
    """List available players in rank order."""
    tab = pos.upper()
    if tab not in POSITION_TABS:
        typer.echo(f"Unknown position tab: {pos}", err=True)
        raise typer.Exit(code=1)
    _, session = load_session()
    available = session.board.get_available()
    sequence = session.category_sequence()
    shown = filter_available(available, tab=tab, query=search)
    print_available(shown[:top] if top is not None else shown, sequence, title=f"Available ({tab})")


def draft(player: Annotated[str, typer.Argument(help="Player id or name.")]) -> None:
    """Mark a player as drafted by the next pick."""
    repository, session = load_session()
    record = resolve_player(session, player)
    drafted = session.board.draft(record.id)
    if drafted is None:
        typer.echo(f"{record.name} is already drafted", err=True)
        raise typer.Exit(code=1)
    commit(repository, session)
    typer.echo(f"Pick {len(session.board.history)}: {drafted.name}")


def undo() -> None:
    """Undo the most recent pick."""
    repository, session = load_session()
    restored = session.board.undo_last()
    if restored is None:
        typer.echo("No picks to undo", err=True)
        raise typer.Exit(code=1)
    commit(repository, session)
    typer.echo(f"Returned {restored.name} to the board")


def reset(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt.")] = False,
) -> None:
    """Undo every pick and clear the draft log."""
    if not yes:
        typer.confirm("Reset the entire draft?", abort=True)
    repository, session = load_session()
    session.board.reset()
    commit(repository, session)
    typer.echo("Draft reset")


def move(
    player: Annotated[str, typer.Argument(help="Player id or name to move.")],
    before: Annotated[str | None, typer.Option("--before", help="Place directly ahead of this player.")] = None,
    to: Annotated[int | None, typer.Option("--to", help="Target position in the available list (1-based).")] = None,
    to_end: Annotated[bool, typer.Option("--to-end", help="Move to the bottom of the available list.")] = False,
) -> None:
    """Re-rank an available player. Drafted players keep their slots."""
    if sum((before is not None, to is not None, to_end)) != 1:
        typer.echo("Specify exactly one of --before, --to or --to-end", err=True)
        raise typer.Exit(code=1)
    repository, session = load_session()
    source = resolve_player(session, player)

    ids = session.board.available_ids()
    if to is not None:
        moved = source.id in ids and session.board.reorder(ids.index(source.id), max(to - 1, 0))
    else:
        target = resolve_player(session, before).id if before is not None else None
        drag = DragSession.begin(source.id, ids)
        if drag is None or (target is not None and target not in ids):
            moved = False
        else:
            moved = drag.with_target(len(ids) if target is None else ids.index(target)).finish(session.board)

    if not moved:
        typer.echo(f"Could not move {source.name}; only available players can be re-ranked", err=True)
        raise typer.Exit(code=1)
    commit(repository, session)
    position = session.board.available_ids().index(source.id) + 1
    typer.echo(f"{source.name} is now #{position}")


def grid() -> None:
    """Show the snake draft board."""
    _, session = load_session()
    print_grid(session.grid(), session.settings)


def roster(slot: Annotated[int, typer.Argument(help="Draft slot (1-based).")]) -> None:
    """Show the players taken by one draft slot."""
    _, session = load_session()
    if not 1 <= slot <= session.settings.num_slots:
        typer.echo(f"Slot must be between 1 and {session.settings.num_slots}", err=True)
        raise typer.Exit(code=1)
    picks: list[tuple[int, EntityRecord]] = []
    for round_index, entity_id in picks_for_slot(session.board.history, slot - 1, session.settings.num_slots):
        record = session.board.get(entity_id)
        if record is not None:
            picks.append((round_index, record))
    print_roster(session.settings.slot_labels[slot - 1], picks)


def settings(
    slots: Annotated[int | None, typer.Option("--slots", min=1, help="Number of teams.")] = None,
    rounds: Annotated[int | None, typer.Option("--rounds", min=1, help="Number of rounds.")] = None,
    label: Annotated[list[str] | None, typer.Option("--label", help="Team name, in slot order (repeatable).")] = None,
    highlight: Annotated[
        int | None, typer.Option("--highlight", min=0, help="Slot to highlight (1-based, 0 clears).")
    ] = None,
) -> None:
    """Show or change the board shape."""
    repository, session = load_session()
    changes: dict[str, object] = {}
    if slots is not None:
        changes["num_slots"] = slots
    if rounds is not None:
        changes["num_rounds"] = rounds
    if label:
        changes["slot_labels"] = tuple(label) + session.settings.slot_labels[len(label) :]
    if highlight is not None:
        num_slots = slots if slots is not None else session.settings.num_slots
        if highlight > num_slots:
            typer.echo(f"Highlight must be between 0 and {num_slots}", err=True)
            raise typer.Exit(code=1)
        changes["highlighted_slot"] = highlight - 1 if highlight > 0 else None
    if changes:
        session.update_settings(**changes)
        commit(repository, session)

    current = session.settings
    typer.echo(f"Teams: {current.num_slots}  Rounds: {current.num_rounds}")
    for i, name in enumerate(current.slot_labels, start=1):
        marker = " *" if current.highlighted_slot == i - 1 else ""
        typer.echo(f"  {i}. {name}{marker}")


board_app = typer.Typer(help="Rank, draft and view the board.")
board_app.command(name="show")(show)
board_app.command(name="draft")(draft)
board_app.command(name="undo")(undo)
board_app.command(name="reset")(reset)
board_app.command(name="move")(move)
board_app.command(name="grid")(grid)
board_app.command(name="roster")(roster)
board_app.command(name="settings")(settings)
