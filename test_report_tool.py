#!/usr/bin/env python3
"""Tests for the games log report tool and its command line interface."""

import csv
import json
import logging
import os

import pytest

from quake_report.exceptions import LogParseError, LogReadError
from quake_report.tools.report_tool import (EXIT_OK, EXIT_PARSE_ERROR, EXIT_READ_ERROR,
                                            QuakeReportTool, main)

FIXTURE_LOG = os.path.join(os.path.dirname(__file__), 'fixtures', 'qgames.log')

SEP = "------------------------------------------------------------"


@pytest.fixture(autouse=True)
def restore_logging():
    """main() reconfigures the root logger, drop the handlers it added."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def tool(tmp_path):
    return QuakeReportTool({'general': {'output_path': str(tmp_path / 'output')}})


@pytest.fixture
def small_log(tmp_path):
    path = tmp_path / 'games.log'
    path.write_text(
        "  0:00 InitGame: \\sv_hostname\\Code Miner Server\\mapname\\q3dm17\n"
        "  0:10 Kill: 2 3 7: Isgalamido killed Mocinha by MOD_ROCKET\n"
        "  0:20 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT\n"
        "  0:30 ShutdownGame:\n"
        f"  0:30 {SEP}\n"
        f"  0:30 {SEP}\n",
        encoding='utf-8'
    )
    return str(path)


class TestQuakeReportTool:

    def test_build_reference_log(self, tool):
        reports = tool.build(FIXTURE_LOG)
        assert len(reports) == 21
        assert [r.index for r in reports] == list(range(21))

    def test_render_json(self, tool, small_log):
        data = json.loads(tool.render_json(tool.build(small_log)))
        assert data == [{
            "game": 0,
            "total_kills": 2,
            "kills": {"Isgalamido": 0},
            "kills_by_means": {"MOD_ROCKET": 1, "MOD_TRIGGER_HURT": 1},
        }]

    def test_indent_from_config(self, small_log, tmp_path):
        tool = QuakeReportTool({'report': {'indent': 4}})
        assert tool.indent == 4
        text = tool.render_json(tool.build(small_log))
        assert '\n    {' in text

    def test_indent_argument_overrides_config(self):
        assert QuakeReportTool({'report': {'indent': 4}}, indent=0).indent == 0

    def test_missing_file_is_a_read_error(self, tool, tmp_path):
        with pytest.raises(LogReadError):
            tool.build(str(tmp_path / 'missing.log'))

    def test_invalid_utf8_is_a_read_error(self, tool, tmp_path):
        path = tmp_path / 'binary.log'
        path.write_bytes(b"  0:00 InitGame: \xff\xfe\n")
        with pytest.raises(LogReadError):
            tool.build(str(path))

    def test_malformed_log_is_a_parse_error(self, tool, tmp_path):
        path = tmp_path / 'bad.log'
        path.write_text("  0:00 InitGame: \\x\n  0:10 ClientConnect: 2\n", encoding='utf-8')
        with pytest.raises(LogParseError):
            tool.build(str(path))

    def test_run_writes_json_file(self, tool, small_log, tmp_path):
        output_file = tmp_path / 'report.json'
        result = tool.run(small_log, output_file=str(output_file))
        assert result["game_count"] == 1
        assert result["kill_count"] == 2
        assert result["output_files"] == [str(output_file)]
        assert json.loads(output_file.read_text(encoding='utf-8')) == json.loads(result["json"])

    def test_leaderboard_csv(self, tool):
        path = tool.export_leaderboard_csv(tool.build(FIXTURE_LOG))
        assert os.path.dirname(path) == tool.resolve_path(tool.output_dir)
        with open(path, newline='') as f:
            rows = list(csv.DictReader(f))
        assert list(rows[0].keys()) == QuakeReportTool.LEADERBOARD_HEADERS
        assert [row["Rank"] for row in rows] == [str(i) for i in range(1, len(rows) + 1)]
        scores = [int(row["Kills"]) for row in rows]
        assert scores == sorted(scores, reverse=True)

    def test_excel_export(self, tool, small_log):
        pd = pytest.importorskip("pandas")
        pytest.importorskip("openpyxl")
        path = tool.export_excel(tool.build(small_log))
        sheets = pd.read_excel(path, sheet_name=None)
        assert set(sheets) == {"Games", "Kills", "Means"}
        assert sheets["Games"]["total_kills"].tolist() == [2]
        assert sheets["Kills"]["player"].tolist() == ["Isgalamido"]
        assert sorted(sheets["Means"]["means_of_death"].tolist()) == ["MOD_ROCKET", "MOD_TRIGGER_HURT"]

    def test_chart_export(self, tool):
        pytest.importorskip("matplotlib")
        path = tool.export_chart(tool.build(FIXTURE_LOG))
        assert path.endswith('.png')
        assert os.path.getsize(path) > 0


class TestCommandLine:

    def test_prints_json_report(self, small_log, capsys):
        assert main([small_log]) == EXIT_OK
        captured = capsys.readouterr()
        data = json.loads(captured.out)
        assert data[0]["kills"] == {"Isgalamido": 0}

    def test_reference_log(self, capsys):
        assert main([FIXTURE_LOG, "--indent", "0"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert len(data) == 21
        assert data[1]["kills"] == {"Isgalamido": -3, "Mocinha": 0}

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / 'missing.log')]) == EXIT_READ_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "missing.log" in captured.err

    def test_parse_failure(self, tmp_path, capsys):
        path = tmp_path / 'bad.log'
        path.write_text("this is not a games log\n", encoding='utf-8')
        assert main([str(path)]) == EXIT_PARSE_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Failed to parse log file" in captured.err

    def test_requires_log_file_argument(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_csv_export_goes_to_output_dir(self, small_log, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main([small_log, "--csv", "--console"]) == EXIT_OK
        exported = os.listdir(tmp_path / 'output')
        assert len(exported) == 1
        assert exported[0].startswith("quake_leaderboard_")
        assert exported[0].endswith(".csv")
