"""Locate, load and cache the YAML configuration file."""

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV_VAR = "QUOTECORD_CONFIG_DIR"
SECRETS_DIR = Path("/etc/secrets")
CONFIG_CACHE_TTL = 5  # Seconds between modification-time checks


class ConfigFileNotFoundError(FileNotFoundError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, filename: str, searched: tuple[Path, ...] = ()) -> None:
        """Initialize the error with the missing filename and searched paths."""
        self.filename = filename
        self.searched = searched
        super().__init__(filename)

    def __str__(self) -> str:
        """Return a readable error message."""
        locations = ", ".join(str(path) for path in self.searched) or "nowhere"
        return f"Config file '{self.filename}' not found (searched: {locations})"


class ConfigFileEmptyError(ValueError):
    """Raised when a configuration file does not hold a YAML mapping."""

    def __init__(self, path: Path, loaded_type: str = "NoneType") -> None:
        """Initialize the error with the offending path and parsed type."""
        self.path = path
        self.loaded_type = loaded_type
        super().__init__(path)

    def __str__(self) -> str:
        """Return a readable error message."""
        return (
            f"Config file {self.path} is empty or corrupted: expected a mapping, "
            f"got {self.loaded_type}"
        )


@dataclass(slots=True)
class _CachedConfig:
    path: Path
    mtime: float
    checked_at: float
    data: dict[str, Any]


_CONFIG_CACHE: dict[str, _CachedConfig] = {}


def _search_paths(filename: str) -> tuple[Path, ...]:
    candidate = Path(filename)
    if candidate.is_absolute():
        return (candidate,)
    paths = [candidate]
    config_dir = os.environ.get(CONFIG_DIR_ENV_VAR)
    if config_dir:
        paths.append(Path(config_dir) / filename)
    paths.append(SECRETS_DIR / filename)
    return tuple(paths)


def _resolve_config_path(filename: str) -> Path:
    searched = _search_paths(filename)
    for candidate in searched:
        if candidate.is_file():
            return candidate
    raise ConfigFileNotFoundError(filename, searched)


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as file:
        loaded = yaml.safe_load(file)
    if not isinstance(loaded, dict):
        raise ConfigFileEmptyError(path, type(loaded).__name__)
    return loaded


def get_config(filename: str = "config.yaml") -> dict[str, Any]:
    """Load ``filename`` as YAML, reusing the cached copy while it is unchanged.

    Relative names are looked up in the working directory, then in
    ``$QUOTECORD_CONFIG_DIR``, then in ``/etc/secrets``. The modification time
    is checked at most once every ``CONFIG_CACHE_TTL`` seconds.
    """
    now = time.monotonic()
    cached = _CONFIG_CACHE.get(filename)
    if cached is not None and now - cached.checked_at <= CONFIG_CACHE_TTL:
        return cached.data

    path = _resolve_config_path(filename)
    mtime = path.stat().st_mtime
    if cached is not None and cached.path == path and cached.mtime == mtime:
        cached.checked_at = now
        return cached.data

    data = _load_yaml(path)
    logger.info("Loaded config from %s", path)
    _CONFIG_CACHE[filename] = _CachedConfig(
        path=path,
        mtime=mtime,
        checked_at=now,
        data=data,
    )
    return data


def clear_config_cache() -> None:
    """Forget every cached config so the next `get_config()` reads from disk."""
    _CONFIG_CACHE.clear()
