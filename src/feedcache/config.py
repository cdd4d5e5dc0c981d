"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for feedcache:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.feedcache/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_cache_dir`.
* **Config file** -- A single :class:`~feedcache.models.FeedCacheConfig`
  JSON file. Managed via :func:`load_config` and :func:`save_config`.
* **Precedence resolution** -- :func:`resolve_config` merges explicit
  arguments, environment variables and the config file into the effective
  configuration.

File writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`), which the JSON file store reuses for the cache itself.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from feedcache.exceptions import ConfigError
from feedcache.models import FeedCacheConfig

logger = logging.getLogger(__name__)

_APP_NAME = "feedcache"
_CONFIG_FILENAME = "config.json"

ENV_URL = "FEEDCACHE_URL"
ENV_STORE = "FEEDCACHE_STORE"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/feedcache/`` (default ``~/.config/feedcache/``).
    On macOS/Windows: ``~/.feedcache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    Holds the cached feed.  Its contents can be deleted at any time.

    On Linux/BSD: ``$XDG_CACHE_HOME/feedcache/`` (default ``~/.cache/feedcache/``).
    On macOS/Windows: ``~/.feedcache/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.  On any failure the
    temp file is removed and the exception propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                logger.warning("Could not remove temporary file %s", tmp_path)
        raise


# --- Config file ---


def config_path() -> Path:
    """Path to the config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_config() -> FeedCacheConfig:
    """Load the configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~feedcache.models.FeedCacheConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = config_path()
    if not path.is_file():
        logger.debug("No config file at %s, using defaults", path)
        return FeedCacheConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return FeedCacheConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_config(config: FeedCacheConfig) -> None:
    """Persist the configuration atomically to disk."""
    data = config.model_dump(mode="json")
    atomic_write(config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_config(cli_url: Optional[str] = None) -> FeedCacheConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. Explicit arguments (``cli_url``)
        2. Environment variables (``FEEDCACHE_URL``, ``FEEDCACHE_STORE``)
        3. User config (``~/.config/feedcache/config.json``)
        4. Defaults

    Raises:
        ConfigError: If the config file is invalid or ``FEEDCACHE_STORE``
            names an unknown backend.
    """
    config = load_config()

    env_url = os.environ.get(ENV_URL)
    if cli_url is not None:
        config.remote.url = cli_url
    elif env_url:
        config.remote.url = env_url

    env_store = os.environ.get(ENV_STORE)
    if env_store:
        try:
            config.store = config.store.model_validate(
                {**config.store.model_dump(), "backend": env_store}
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid {ENV_STORE} value '{env_store}': {exc}") from exc

    return config
