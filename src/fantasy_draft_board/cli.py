import logging

import typer

from fantasy_draft_board.board.cli import board_app, get_repository
from fantasy_draft_board.config import apply_cli_overrides
from fantasy_draft_board.ingest.cli import export, import_csv, import_text, info, merge_adp, merge_stats

app = typer.Typer(help="Fantasy football draft board.")
app.add_typer(board_app, name="board")
app.command(name="import-text")(import_text)
app.command(name="import-csv")(import_csv)
app.command(name="merge-adp")(merge_adp)
app.command(name="merge-stats")(merge_stats)
app.command(name="info")(info)
app.command(name="export")(export)


@app.callback()
def main_callback(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity (-v debug)."),
    board: str | None = typer.Option(None, "--board", "-b", help="Stored board to use (default from config)."),
) -> None:
    if verbose >= 1:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    apply_cli_overrides(board)


@app.command(name="boards")
def boards() -> None:
    """List saved boards."""
    repository = get_repository()
    for key in repository.list_keys():
        marker = " *" if key == repository.key else ""
        typer.echo(f"{key}{marker}")
