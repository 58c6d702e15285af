"""
CLI configuration — TOML file overlaid on defaults.

Default location: ~/.lzopack/config.toml

    compressor = "lzo1x_1"   # or "store"
    suffix = ".lzo"
    keep_mtime = true        # header mtime from the input file, else now
    log_level = "WARNING"

The encoding core never reads this; only the CLI does.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from lzopack import DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_NAME, DEFAULT_SUFFIX

log = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "compressor": "lzo1x_1",
    "suffix": DEFAULT_SUFFIX,
    "keep_mtime": True,
    "log_level": "WARNING",
}


def default_config_path() -> Path:
    return Path.home() / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_NAME


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config from a TOML file, falling back to defaults."""
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path) if config_path else default_config_path()
    if not path.is_file():
        if config_path:
            log.warning("Config file %s not found, using defaults", path)
        return config

    try:
        import tomllib
    except ImportError:
        try:
            import tomli as tomllib
        except ImportError:
            log.warning("tomllib/tomli not available, using default config")
            return config

    try:
        with open(path, "rb") as f:
            file_config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        log.warning("Failed to load config from %s: %s", path, e)
        return config

    for key, value in file_config.items():
        if key not in DEFAULT_CONFIG:
            log.warning("Ignoring unknown config key %r in %s", key, path)
            continue
        if not isinstance(value, type(DEFAULT_CONFIG[key])):
            log.warning(
                "Ignoring config key %r in %s: expected %s, got %s",
                key, path, type(DEFAULT_CONFIG[key]).__name__, type(value).__name__,
            )
            continue
        config[key] = value

    return config
