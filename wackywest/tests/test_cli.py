"""
Tests for the command-line interface.
"""

import pytest

from ..api import app as app_module
from ..cli import build_parser, main


class TestParser:
    def test_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("WACKYWEST_LOG_LEVEL", "DEBUG")
        args = build_parser().parse_args(["simulate"])
        assert args.log_level == "DEBUG"

    def test_log_level_flag_wins(self, monkeypatch):
        monkeypatch.setenv("WACKYWEST_LOG_LEVEL", "DEBUG")
        args = build_parser().parse_args(["--log-level", "WARNING", "simulate"])
        assert args.log_level == "WARNING"

    def test_api_does_not_read_log_level(self):
        # logging is configured by the CLI only
        assert not hasattr(app_module, "WACKYWEST_LOG_LEVEL")

    def test_simulate_defaults(self):
        args = build_parser().parse_args(["simulate"])
        assert (args.players, args.seed, args.games) == (2, None, 1)


class TestSimulate:
    def test_prints_each_game(self, capsys):
        main(["--log-level", "WARNING", "simulate", "--players", "3", "--seed", "4", "--games", "2"])
        out = capsys.readouterr().out

        assert "Game 1:" in out
        assert "Game 2:" in out

    def test_rejects_bad_player_count(self, capsys):
        with pytest.raises(SystemExit):
            main(["simulate", "--players", "5"])
        assert "between 2 and 4" in capsys.readouterr().out

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])
