"""Configuration loading, merging, and interactive creation."""

from __future__ import annotations

import logging
import os
import pathlib
import tomllib


logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"

_DEFAULTS: dict[str, object] = {
    "directories": ["./"],
    "ignore_empty": False,
    "progress": False,
    "digest_length": 10,
    "jobs": 1,
}

_BOOL_KEYS = {"ignore_empty", "progress"}
_INT_MINIMUMS = {"digest_length": 0, "jobs": 1}


def _config_dir() -> pathlib.Path:
    """Return the dupdetect config directory."""
    base = pathlib.Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
    return base / "dupdetect"


def load_config(config_dir: pathlib.Path | None = None) -> dict:
    """Load config.toml and return its contents as a dict.

    Returns {} if no file exists or on parse error.
    """
    if config_dir is None:
        config_dir = _config_dir()
    path = config_dir / CONFIG_FILENAME
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}


def _valid_int(value, minimum: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= minimum


def merge_config_into_args(args, config: dict) -> None:
    """Three-layer merge: CLI > config > hardcoded defaults.

    Mutates *args* in place.
    """
    if not getattr(args, "directories", None):
        cfg_val = config.get("directories")
        if isinstance(cfg_val, list) and cfg_val:
            args.directories = [os.path.expanduser(str(v)) for v in cfg_val]
        else:
            args.directories = list(_DEFAULTS["directories"])

    for key in _BOOL_KEYS:
        if getattr(args, key, None) is not None:
            continue
        cfg_val = config.get(key)
        if isinstance(cfg_val, bool):
            setattr(args, key, cfg_val)
        else:
            setattr(args, key, _DEFAULTS[key])

    for key, minimum in _INT_MINIMUMS.items():
        if getattr(args, key, None) is not None:
            continue
        cfg_val = config.get(key)
        if _valid_int(cfg_val, minimum):
            setattr(args, key, cfg_val)
        else:
            if cfg_val is not None:
                logger.warning(f"Ignoring invalid config value {key} = {cfg_val!r}")
            setattr(args, key, _DEFAULTS[key])


def create_config_interactive(
    config_dir: pathlib.Path | None = None,
    input_fn=input,
    print_fn=print,
) -> pathlib.Path:
    """Interactively create or update config.toml.

    Returns the path to the written config file.
    """
    if config_dir is None:
        config_dir = _config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    existing = load_config(config_dir)

    existing_dirs = existing.get("directories")
    if not isinstance(existing_dirs, list):
        existing_dirs = _DEFAULTS["directories"]
    dirs_default = ", ".join(str(d) for d in existing_dirs)
    value = input_fn(f"  Directories to scan, comma separated [{dirs_default}]: ").strip()
    if not value:
        value = dirs_default

    result: dict[str, object] = {
        "directories": [d.strip() for d in value.split(",") if d.strip()],
    }

    settings: list[tuple[str, str]] = [
        ("ignore_empty", "Ignore empty files (true/false)"),
        ("progress", "Show hashing progress bar (true/false)"),
        ("digest_length", "Digest prefix length, 0 for full digest"),
        ("jobs", "Hashing threads"),
    ]

    for key, label in settings:
        default = existing.get(key, _DEFAULTS[key])
        if key in _INT_MINIMUMS and not _valid_int(default, _INT_MINIMUMS[key]):
            default = _DEFAULTS[key]
        default_str = str(default).lower() if isinstance(default, bool) else str(default)
        value = input_fn(f"  {label} [{default_str}]: ").strip()
        if not value:
            value = default_str
        if key in _BOOL_KEYS:
            result[key] = value.lower() in ("true", "1", "yes")
        else:
            minimum = _INT_MINIMUMS[key]
            try:
                number = int(value)
            except ValueError:
                number = None
            if number is None or number < minimum:
                print_fn(f"  Invalid number {value!r} (minimum {minimum}), keeping {default}")
                number = default
            result[key] = number

    # Remove boolean defaults that are False to keep config clean
    for key in _BOOL_KEYS:
        if result.get(key) is False:
            del result[key]

    path = config_dir / CONFIG_FILENAME
    path.write_text(_to_toml(result))
    print_fn(f"Configuration saved to {path}")
    return path


def _to_toml(data: dict) -> str:
    """Serialize a flat dict to TOML format."""
    lines: list[str] = []
    for key, value in data.items():
        if isinstance(value, bool):
            lines.append(f"{key} = {str(value).lower()}")
        elif isinstance(value, list):
            items = ", ".join(_quote(str(v)) for v in value)
            lines.append(f"{key} = [{items}]")
        elif isinstance(value, str):
            lines.append(f"{key} = {_quote(value)}")
        elif value is None:
            continue
        else:
            lines.append(f"{key} = {value}")
    return "\n".join(lines) + "\n" if lines else ""


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
