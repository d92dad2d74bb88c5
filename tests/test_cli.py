from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from fantasy_draft_board.board.cli import set_repository_factory
from fantasy_draft_board.cli import app
from fantasy_draft_board.storage.factory import create_repository

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

runner = CliRunner()

RANKINGS = "1, QB, BUF, Josh Allen\n2, RB, NYJ, Breece Hall\nSome Rookie\n"


@pytest.fixture(autouse=True)
def _repository() -> Generator[None]:
    set_repository_factory(create_repository)
    yield
    set_repository_factory(create_repository)


def _invoke(*args: str, input: str | None = None) -> str:
    result = runner.invoke(app, list(args), input=input)
    assert result.exit_code == 0, result.output
    return result.output


class TestRootCli:
    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Fantasy football draft board" in result.output

    def test_board_help(self) -> None:
        result = runner.invoke(app, ["board", "--help"])
        assert result.exit_code == 0
        assert "Rank, draft and view the board" in result.output


class TestShow:
    def test_first_run_shows_starter_list(self) -> None:
        output = _invoke("board", "show")
        assert "Ja'Marr Chase" in output
        assert "WR1" in output
        assert "Jonathan Taylor" in output

    def test_position_tab(self) -> None:
        output = _invoke("board", "show", "--pos", "rb")
        assert "Breece Hall" in output
        assert "Ja'Marr Chase" not in output

    def test_search_and_top(self) -> None:
        output = _invoke("board", "show", "--search", "nyj", "--top", "1")
        assert "Breece Hall" in output
        assert "Garrett Wilson" not in output

    def test_unknown_tab(self) -> None:
        result = runner.invoke(app, ["board", "show", "--pos", "OL"])
        assert result.exit_code == 1
        assert "Unknown position tab" in result.output

    def test_no_matches(self) -> None:
        assert "No players match." in _invoke("board", "show", "--search", "zzz")


class TestDraftAndUndo:
    def test_draft_persists(self) -> None:
        assert "Pick 1: Breece Hall" in _invoke("board", "draft", "Breece Hall")
        assert "Breece Hall" not in _invoke("board", "show")
        assert "Pick 2: Bijan Robinson" in _invoke("board", "draft", "bijan")

    def test_draft_twice_fails(self) -> None:
        _invoke("board", "draft", "Breece Hall")
        result = runner.invoke(app, ["board", "draft", "Breece Hall"])
        assert result.exit_code == 1
        assert "already drafted" in result.output

    def test_draft_unknown_player(self) -> None:
        result = runner.invoke(app, ["board", "draft", "Nobody"])
        assert result.exit_code == 1
        assert "No unique player matches" in result.output

    def test_undo(self) -> None:
        _invoke("board", "draft", "Breece Hall")
        assert "Returned Breece Hall to the board" in _invoke("board", "undo")
        assert "Breece Hall" in _invoke("board", "show")

    def test_undo_with_no_picks(self) -> None:
        result = runner.invoke(app, ["board", "undo"])
        assert result.exit_code == 1
        assert "No picks to undo" in result.output

    def test_reset(self) -> None:
        _invoke("board", "draft", "Breece Hall")
        assert "Draft reset" in _invoke("board", "reset", "--yes")
        assert "Breece Hall" in _invoke("board", "show")

    def test_reset_declined(self) -> None:
        _invoke("board", "draft", "Breece Hall")
        result = runner.invoke(app, ["board", "reset"], input="n\n")
        assert result.exit_code == 1
        assert "Breece Hall" not in _invoke("board", "show")


class TestMove:
    def test_to_position(self) -> None:
        assert "Jonathan Taylor is now #1" in _invoke("board", "move", "Jonathan Taylor", "--to", "1")

    def test_before_player(self) -> None:
        assert "Bijan Robinson is now #1" in _invoke("board", "move", "Bijan", "--before", "Ja'Marr Chase")

    def test_moving_down_before_player(self) -> None:
        assert "Ja'Marr Chase is now #3" in _invoke("board", "move", "Ja'Marr Chase", "--before", "CeeDee Lamb")

    def test_to_end(self) -> None:
        assert "Ja'Marr Chase is now #10" in _invoke("board", "move", "Ja'Marr Chase", "--to-end")

    def test_order_survives_reload(self) -> None:
        _invoke("board", "move", "Jonathan Taylor", "--to", "1")
        output = _invoke("board", "show", "--top", "1")
        assert "Jonathan Taylor" in output
        assert "Ja'Marr Chase" not in output

    def test_requires_exactly_one_target(self) -> None:
        result = runner.invoke(app, ["board", "move", "Bijan", "--to", "1", "--to-end"])
        assert result.exit_code == 1
        assert "exactly one" in result.output

    def test_drafted_player_cannot_move(self) -> None:
        _invoke("board", "draft", "Breece Hall")
        result = runner.invoke(app, ["board", "move", "Breece Hall", "--to", "1"])
        assert result.exit_code == 1
        assert "Could not move Breece Hall" in result.output

    def test_drafted_target_rejected(self) -> None:
        _invoke("board", "draft", "Breece Hall")
        result = runner.invoke(app, ["board", "move", "Bijan", "--before", "Breece Hall"])
        assert result.exit_code == 1


class TestGridRosterSettings:
    def test_settings_show_defaults(self) -> None:
        output = _invoke("board", "settings")
        assert "Teams: 12  Rounds: 14" in output
        assert "1. Team 1" in output

    def test_settings_update_persists(self) -> None:
        _invoke("board", "settings", "--slots", "4", "--rounds", "3", "--label", "Me", "--highlight", "1")
        output = _invoke("board", "settings")
        assert "Teams: 4  Rounds: 3" in output
        assert "1. Me *" in output
        assert "4. Team 4" in output

    def test_highlight_zero_clears(self) -> None:
        _invoke("board", "settings", "--highlight", "2")
        assert "*" not in _invoke("board", "settings", "--highlight", "0")

    def test_grid(self) -> None:
        _invoke("board", "settings", "--slots", "2", "--rounds", "2")
        _invoke("board", "draft", "Breece Hall")
        output = _invoke("board", "grid")
        assert "Draft Board" in output
        assert "Breece Hall" in output

    def test_roster_snake_order(self) -> None:
        _invoke("board", "settings", "--slots", "2", "--rounds", "3")
        for name in ("Breece Hall", "Bijan Robinson", "Tyreek Hill", "CeeDee Lamb"):
            _invoke("board", "draft", name)
        output = _invoke("board", "roster", "2")
        assert "Bijan Robinson" in output
        assert "Tyreek Hill" in output
        assert "Breece Hall" not in output

    def test_roster_slot_out_of_range(self) -> None:
        result = runner.invoke(app, ["board", "roster", "13"])
        assert result.exit_code == 1
        assert "between 1 and 12" in result.output


class TestImport:
    def test_import_text_file(self, tmp_path: Path) -> None:
        source = tmp_path / "rankings.txt"
        source.write_text(RANKINGS)
        _invoke("board", "draft", "Breece Hall")
        assert "Imported 3 players" in _invoke("import-text", str(source))
        output = _invoke("board", "show")
        assert "Josh Allen" in output
        assert "Breece Hall" in output
        assert "Ja'Marr Chase" not in output

    def test_import_text_stdin(self) -> None:
        assert "Imported 3 players" in _invoke("import-text", "-", input=RANKINGS)

    def test_import_nothing_keeps_board(self, tmp_path: Path) -> None:
        source = tmp_path / "empty.txt"
        source.write_text("\n\n")
        result = runner.invoke(app, ["import-text", str(source)])
        assert result.exit_code == 1
        assert "board unchanged" in result.output
        assert "Ja'Marr Chase" in _invoke("board", "show")

    def test_import_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["import-text", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1
        assert "Could not read" in result.output

    def test_import_csv(self, tmp_path: Path) -> None:
        source = tmp_path / "rankings.csv"
        source.write_text("Team,Player,Pos\nBUF,Josh Allen,QB\n")
        assert "Imported 1 players" in _invoke("import-csv", str(source))
        assert "QB1" in _invoke("board", "show")


class TestAuxiliaryData:
    def test_merge_adp_and_info(self, tmp_path: Path) -> None:
        source = tmp_path / "adp.csv"
        source.write_text("name,adp,source\nJa'Marr Chase,1.4,yahoo\n")
        assert "Merged adp data for 1 players" in _invoke("merge-adp", str(source))
        output = _invoke("info", "Ja'Marr Chase")
        assert "ADP (yahoo): 1.4" in output
        assert "available" in output

    def test_merge_stats_and_info(self, tmp_path: Path) -> None:
        source = tmp_path / "stats.csv"
        source.write_text("name,year,targets,rec yds\nBreece Hall,2024,76,483\n")
        assert "Merged stats data for 1 players" in _invoke("merge-stats", str(source))
        output = _invoke("info", "Breece Hall")
        assert "Season Stats" in output
        assert "2024" in output
        assert "483" in output
        assert "ADP: -" in output

    def test_merge_nothing(self, tmp_path: Path) -> None:
        source = tmp_path / "adp.csv"
        source.write_text("player,rank\nA,1\n")
        result = runner.invoke(app, ["merge-adp", str(source)])
        assert result.exit_code == 1
        assert "No adp rows found" in result.output


class TestExport:
    def test_csv_to_stdout(self) -> None:
        lines = _invoke("export").splitlines()
        assert lines[0] == "rank,tier,pos,team,name,drafted"
        assert lines[1] == "1,1,WR,CIN,Ja'Marr Chase,no"
        assert len(lines) == 11

    def test_lines_includes_drafted(self) -> None:
        _invoke("board", "draft", "Breece Hall")
        assert "1, RB, NYJ, Breece Hall" in _invoke("export", "--format", "lines")

    def test_json_to_file(self, tmp_path: Path) -> None:
        target = tmp_path / "board.json"
        assert "Exported 10 players" in _invoke("export", "-f", "json", "-o", str(target))
        data = json.loads(target.read_text())
        assert data[0]["name"] == "Ja'Marr Chase"


class TestBoards:
    def test_board_option_selects_separate_board(self) -> None:
        _invoke("--board", "mock", "board", "draft", "Breece Hall")
        assert "Breece Hall" in _invoke("board", "show")
        assert "Breece Hall" not in _invoke("--board", "mock", "board", "show")

    def test_boards_lists_saved_keys(self) -> None:
        _invoke("board", "draft", "Breece Hall")
        _invoke("--board", "mock", "board", "draft", "Bijan")
        output = _invoke("--board", "mock", "boards")
        assert output.splitlines() == ["default", "mock *"]


class TestMarkupNames:
    def test_bracketed_name_survives_every_view(self, tmp_path: Path) -> None:
        source = tmp_path / "rankings.txt"
        source.write_text("1, WR, CIN, Odell [/b] Beckham\n2, RB, NYJ, [red]Hall\n")
        _invoke("import-text", str(source))
        assert "Odell [/b] Beckham" in _invoke("board", "show")
        _invoke("board", "settings", "--slots", "2", "--rounds", "1")
        _invoke("board", "draft", "Odell [/b] Beckham")
        assert "Odell [/b] Beckham" in _invoke("board", "grid")
        assert "Odell [/b] Beckham" in _invoke("board", "roster", "1")
        assert "[red]Hall" in _invoke("info", "[red]Hall")


class TestOptionValidation:
    def test_negative_top_rejected(self) -> None:
        result = runner.invoke(app, ["board", "show", "--top", "-3"])
        assert result.exit_code != 0
        assert "Jonathan Taylor" not in result.output

    def test_top_zero_shows_no_rows(self) -> None:
        assert "Ja'Marr Chase" not in _invoke("board", "show", "--top", "0")

    def test_highlight_past_slot_count_rejected(self) -> None:
        result = runner.invoke(app, ["board", "settings", "--highlight", "13"])
        assert result.exit_code == 1
        assert "between 0 and 12" in result.output
        assert "*" not in _invoke("board", "settings")

    def test_highlight_checked_against_new_slot_count(self) -> None:
        result = runner.invoke(app, ["board", "settings", "--slots", "4", "--highlight", "5"])
        assert result.exit_code == 1
        assert "Teams: 12" in _invoke("board", "settings")
        assert "4. Team 4 *" in _invoke("board", "settings", "--slots", "4", "--highlight", "4")

    def test_export_to_unwritable_path(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["export", "-o", str(tmp_path / "missing" / "board.csv")])
        assert result.exit_code == 1
        assert "Could not write" in result.output
