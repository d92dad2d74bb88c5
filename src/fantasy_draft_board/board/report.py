from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fantasy_draft_board.board.sequencer import format_label

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from fantasy_draft_board.board.models import BoardSettings, EntityRecord, GridCell

console = Console(highlight=False)


def print_available(
    records: Sequence[EntityRecord],
    sequence: Mapping[str, int],
    title: str = "Available",
) -> None:
    """Print the available list with dynamic position labels (WR1, RB2, ...)."""
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Pos")
    table.add_column("Player")
    table.add_column("Team")
    table.add_column("Tier", justify="right")
    table.add_column("Id", style="dim")

    for i, record in enumerate(records, start=1):
        table.add_row(
            str(i),
            escape(format_label(record, sequence)),
            escape(record.name),
            escape(record.group or "-"),
            str(record.priority),
            escape(record.id),
        )
    console.print(table)
    if not records:
        console.print("No players match.")


def print_grid(grid: Sequence[Sequence[GridCell]], settings: BoardSettings) -> None:
    """Print the snake board, one row per round."""
    table = Table(title="Draft Board", show_lines=True)
    table.add_column("Rd", justify="right")
    for column, label in enumerate(settings.slot_labels):
        header = escape(label)
        if settings.highlighted_slot == column:
            header = f"[bold yellow]{header}[/bold yellow]"
        table.add_column(header)

    for row in grid:
        cells: list[str] = []
        for cell in row:
            if cell.record is None:
                cells.append(f"[dim]{cell.pick_number}[/dim]")
            else:
                name, category = escape(cell.record.name), escape(cell.record.category or "-")
                cells.append(f"{cell.pick_number}. {name} ({category})")
        table.add_row(str(row[0].round_index + 1) if row else "", *cells)
    console.print(table)


def print_roster(label: str, picks: Sequence[tuple[int, EntityRecord]]) -> None:
    table = Table(title=escape(label))
    table.add_column("Rd", justify="right")
    table.add_column("Player")
    table.add_column("Pos")
    table.add_column("Team")
    for round_index, record in picks:
        table.add_row(
            str(round_index + 1),
            escape(record.name),
            escape(record.category or "-"),
            escape(record.group or "-"),
        )
    console.print(table)


def print_player_info(
    record: EntityRecord,
    adp: Mapping[str, float],
    stats: Mapping[str, Mapping[str, float]],
) -> None:
    status = "drafted" if record.drafted else "available"
    details = f"{record.category or '-'} {record.group or '-'}"
    console.print(f"[bold]{escape(record.name)}[/bold] {escape(details)} ({status})")
    if adp:
        for source, value in sorted(adp.items()):
            console.print(f"  ADP ({escape(source)}): {value:g}")
    else:
        console.print("  ADP: -")
    if not stats:
        return
    fields = sorted({stat for season in stats.values() for stat in season})
    table = Table(title="Season Stats")
    table.add_column("Year")
    for stat in fields:
        table.add_column(escape(stat), justify="right")
    for year in sorted(stats, reverse=True):
        season = stats[year]
        table.add_row(escape(year), *(f"{season[s]:g}" if s in season else "-" for s in fields))
    console.print(table)
