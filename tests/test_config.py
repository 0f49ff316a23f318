"""Tests for dupdetect.config — configuration loading, merging, and interactive creation."""

from __future__ import annotations

from dupdetect.config import CONFIG_FILENAME
from dupdetect.config import create_config_interactive
from dupdetect.config import load_config
from dupdetect.config import merge_config_into_args

import argparse
import os
import tomllib


def _args(**kwargs) -> argparse.Namespace:
    defaults = dict(directories=None, ignore_empty=None, progress=None, digest_length=None, jobs=None)
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


class TestLoadConfig:
    """Test loading config.toml."""

    def test_returns_empty_dict_when_no_file(self, tmp_path):
        assert load_config(tmp_path) == {}

    def test_loads_valid_toml(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(
            'directories = ["/data"]\nignore_empty = true\njobs = 4\n'
        )
        cfg = load_config(tmp_path)
        assert cfg == {"directories": ["/data"], "ignore_empty": True, "jobs": 4}

    def test_returns_empty_dict_on_parse_error(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("this is not valid toml [[[")
        assert load_config(tmp_path) == {}

    def test_uses_xdg_config_home(self, isolated_config):
        (isolated_config / "dupdetect").mkdir(parents=True)
        (isolated_config / "dupdetect" / CONFIG_FILENAME).write_text("digest_length = 0\n")
        assert load_config() == {"digest_length": 0}


class TestMergeConfigIntoArgs:
    """Test CLI > config > defaults precedence."""

    def test_defaults_when_nothing_set(self):
        args = _args()
        merge_config_into_args(args, {})
        assert args.directories == ["./"]
        assert args.ignore_empty is False
        assert args.progress is False
        assert args.digest_length == 10
        assert args.jobs == 1

    def test_config_fills_unset_values(self):
        args = _args()
        merge_config_into_args(args, {"directories": ["/a", "/b"], "ignore_empty": True, "jobs": 3})
        assert args.directories == ["/a", "/b"]
        assert args.ignore_empty is True
        assert args.jobs == 3

    def test_cli_wins_over_config(self):
        args = _args(directories=["/cli"], ignore_empty=False, jobs=2, digest_length=64)
        merge_config_into_args(args, {"directories": ["/cfg"], "ignore_empty": True, "jobs": 8, "digest_length": 4})
        assert args.directories == ["/cli"]
        assert args.ignore_empty is False
        assert args.jobs == 2
        assert args.digest_length == 64

    def test_config_directories_expand_home(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/someone")
        args = _args()
        merge_config_into_args(args, {"directories": ["~/pics"]})
        assert args.directories == [os.path.join("/home/someone", "pics")]

    def test_invalid_values_fall_back_to_defaults(self, caplog):
        args = _args()
        merge_config_into_args(args, {"jobs": 0, "digest_length": "ten", "ignore_empty": "yes"})
        assert args.jobs == 1
        assert args.digest_length == 10
        assert args.ignore_empty is False
        assert "jobs" in caplog.text


class TestCreateConfigInteractive:
    """Test interactive config creation."""

    def test_writes_answers(self, tmp_path):
        answers = iter(["/photos, /backup", "true", "", "0", "4"])
        printed = []
        path = create_config_interactive(tmp_path, input_fn=lambda _: next(answers), print_fn=printed.append)

        cfg = tomllib.loads(path.read_text())
        assert cfg == {"directories": ["/photos", "/backup"], "ignore_empty": True, "digest_length": 0, "jobs": 4}
        assert "Configuration saved" in printed[-1]

    def test_empty_answers_keep_existing(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text('directories = ["/kept"]\njobs = 6\nprogress = true\n')
        path = create_config_interactive(tmp_path, input_fn=lambda _: "", print_fn=lambda _: None)

        cfg = tomllib.loads(path.read_text())
        assert cfg["directories"] == ["/kept"]
        assert cfg["jobs"] == 6
        assert cfg["progress"] is True
        assert "ignore_empty" not in cfg

    def test_invalid_number_keeps_default(self, tmp_path):
        answers = iter(["", "", "", "many", ""])
        printed = []
        path = create_config_interactive(tmp_path, input_fn=lambda _: next(answers), print_fn=printed.append)
        cfg = tomllib.loads(path.read_text())
        assert cfg["digest_length"] == 10
        assert any("Invalid number" in line for line in printed)

    def test_values_below_minimum_keep_default(self, tmp_path):
        answers = iter(["", "", "", "-3", "0"])
        printed = []
        path = create_config_interactive(tmp_path, input_fn=lambda _: next(answers), print_fn=printed.append)
        cfg = tomllib.loads(path.read_text())
        assert cfg["digest_length"] == 10
        assert cfg["jobs"] == 1
        assert sum("Invalid number" in line for line in printed) == 2

    def test_invalid_existing_value_not_offered_as_default(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("jobs = 0\n")
        path = create_config_interactive(tmp_path, input_fn=lambda _: "", print_fn=lambda _: None)
        assert tomllib.loads(path.read_text())["jobs"] == 1

    def test_paths_with_quotes_round_trip(self, tmp_path):
        answers = iter(['C:\\data\\"x"', "", "", "", ""])
        path = create_config_interactive(tmp_path, input_fn=lambda _: next(answers), print_fn=lambda _: None)
        assert tomllib.loads(path.read_text())["directories"] == ['C:\\data\\"x"']
