from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path  # noqa: TC003 - used at runtime by typer
from typing import Annotated

import typer

from fantasy_draft_board.board.cli import commit, load_session, resolve_player
from fantasy_draft_board.board.report import print_player_info
from fantasy_draft_board.export import to_csv, to_json, to_lines
from fantasy_draft_board.ingest.auxiliary import AuxiliaryKind

logger = logging.getLogger(__name__)


class ExportFormat(Enum):
    LINES = "lines"
    CSV = "csv"
    JSON = "json"


def _read_input(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8-sig")
    except OSError as err:
        typer.echo(f"Could not read {path}: {err}", err=True)
        raise typer.Exit(code=1) from err


def import_text(
    source: Annotated[Path, typer.Argument(help="Text file of 'Tier, POS, Team, Name' lines ('-' for stdin).")],
) -> None:
    """Replace the board with pasted rankings. Clears the draft log."""
    repository, session = load_session()
    count = session.replace_all_from_text(_read_input(source))
    if count == 0:
        typer.echo("No players found; board unchanged", err=True)
        raise typer.Exit(code=1)
    commit(repository, session)
    typer.echo(f"Imported {count} players")


def import_csv(
    source: Annotated[Path, typer.Argument(help="CSV with a header row (name/player, pos, team, tier).")],
) -> None:
    """Replace the board with a ranking CSV. Clears the draft log."""
    repository, session = load_session()
    count = session.replace_all_from_table(_read_input(source))
    if count == 0:
        typer.echo("No players found; board unchanged", err=True)
        raise typer.Exit(code=1)
    commit(repository, session)
    typer.echo(f"Imported {count} players")


def _merge(source: Path, kind: AuxiliaryKind) -> None:
    repository, session = load_session()
    count = session.merge_auxiliary_data(_read_input(source), kind)
    if count == 0:
        typer.echo(f"No {kind.value} rows found", err=True)
        raise typer.Exit(code=1)
    commit(repository, session)
    typer.echo(f"Merged {kind.value} data for {count} players")


def merge_adp(
    source: Annotated[Path, typer.Argument(help="CSV with name/player, adp and optional source columns.")],
) -> None:
    """Merge ADP data keyed by player name."""
    _merge(source, AuxiliaryKind.ADP)


def merge_stats(
    source: Annotated[Path, typer.Argument(help="CSV with name, year and season stat columns.")],
) -> None:
    """Merge past-season stats keyed by player name and year."""
    _merge(source, AuxiliaryKind.STATS)


def info(player: Annotated[str, typer.Argument(help="Player id or name.")]) -> None:
    """Show ADP and past-season stats for one player."""
    _, session = load_session()
    record = resolve_player(session, player)
    adp, stats = session.auxiliary.lookup(record.name)
    print_player_info(record, adp, stats)


def export(
    fmt: Annotated[ExportFormat, typer.Option("--format", "-f", help="Output format.")] = ExportFormat.CSV,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write to file instead of stdout.")] = None,
) -> None:
    """Export the full ranked board, drafted players included."""
    _, session = load_session()
    records = session.board.get_all()
    if fmt is ExportFormat.LINES:
        payload = to_lines(records)
    elif fmt is ExportFormat.JSON:
        payload = to_json(records)
    else:
        payload = to_csv(records)

    if output is None:
        typer.echo(payload, nl=False)
        return
    try:
        output.write_text(payload)
    except OSError as err:
        typer.echo(f"Could not write {output}: {err}", err=True)
        raise typer.Exit(code=1) from err
    logger.debug("Wrote %d players to %s", len(records), output)
    typer.echo(f"Exported {len(records)} players to {output}")
