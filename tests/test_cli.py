"""
test_cli.py
-----------
Tests for the command-line entry point that do not open a window.
"""

import pytest

from dino_deputy.__main__ import build_parser, main
from dino_deputy.core.services import config_manager


@pytest.fixture
def isolated_search_dirs(monkeypatch):
    monkeypatch.setattr(config_manager, "USER_DIRS", [])
    yield
    monkeypatch.undo()
    config_manager.rebuild_file_index()


class TestCli:

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.preset is None
        assert args.seed is None
        assert args.data_dir == "."
        assert not args.mute

    def test_parser_options(self):
        args = build_parser().parse_args(["--preset", "classic", "--seed", "42", "--mute"])
        assert (args.preset, args.seed, args.mute) == ("classic", 42, True)

    def test_list_presets(self, capsys, isolated_search_dirs):
        assert main(["--list-presets"]) == 0
        names = capsys.readouterr().out.split()
        assert "classic" in names and "frontier" in names

    def test_unknown_preset_exits_with_error(self, tmp_path, isolated_search_dirs):
        assert main(["--preset", "spaghetti", "--data-dir", str(tmp_path)]) == 2
