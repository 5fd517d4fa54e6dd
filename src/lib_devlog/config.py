"""Environment and ``.env`` configuration for the rendering runtime.

Purpose
-------
Resolve :class:`~lib_devlog.domain.render_config.RenderConfig` values from
``LOG_*`` environment variables and optionally seed the environment from the
nearest ``.env`` file via python-dotenv.

Contents
--------
* :func:`enable_dotenv` / :func:`should_use_dotenv` – opt-in ``.env`` loading.
* :func:`env_bool` / :func:`parse_console_styles` – value parsers.
* :func:`render_config_from_env` – build a config with environment overrides.

System Role
-----------
Used by :func:`lib_devlog.init` when no explicit config is supplied and by the
CLI before running a command. Invalid values raise :class:`ValueError` naming
the offending variable; rendering itself never reads the environment.

Environment variables
---------------------
``LOG_FORCE_COLOR`` / ``LOG_NO_COLOR``
    Force styled output on or off (``LOG_NO_COLOR`` wins when both are set).
``LOG_SHOW_TIMESTAMP``
    Prefix records with ``[HH:MM:SS]``.
``LOG_MAX_LINE_WIDTH``
    Wrap width for fields, ``0`` disables wrapping.
``LOG_CONSOLE_THEME``
    One of the built-in palettes.
``LOG_CONSOLE_STYLES``
    Per-level overrides such as ``WARN=bold yellow,ERROR=white on red``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

from lib_devlog.domain.render_config import RenderConfig

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LIB_DEVLOG_USE_DOTENV"

ENV_FORCE_COLOR = "LOG_FORCE_COLOR"
ENV_NO_COLOR = "LOG_NO_COLOR"
ENV_SHOW_TIMESTAMP = "LOG_SHOW_TIMESTAMP"
ENV_MAX_LINE_WIDTH = "LOG_MAX_LINE_WIDTH"
ENV_CONSOLE_THEME = "LOG_CONSOLE_THEME"
ENV_CONSOLE_STYLES = "LOG_CONSOLE_STYLES"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

_DOTENV_LOADED = False
_DOTENV_PATH: Path | None = None


def env_bool(name: str, default: bool | None = None, *, environ: Mapping[str, str] | None = None) -> bool | None:
    """Return the boolean value of environment variable ``name``.

    Examples
    --------
    >>> env_bool("X", environ={"X": "Yes"})
    True
    >>> env_bool("X", default=None, environ={}) is None
    True
    """
    source = os.environ if environ is None else environ
    raw = source.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def parse_console_styles(raw: str | None) -> dict[str, str]:
    """Parse ``LEVEL=style`` pairs separated by commas.

    Examples
    --------
    >>> parse_console_styles("warn=bold yellow, ERROR=white on red")
    {'WARN': 'bold yellow', 'ERROR': 'white on red'}
    """
    if not raw:
        return {}
    styles: dict[str, str] = {}
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        if "=" not in chunk:
            raise ValueError(f"{ENV_CONSOLE_STYLES} entries must look like LEVEL=style, got {chunk!r}")
        key, value = chunk.split("=", 1)
        styles[key.strip().upper()] = value.strip()
    return styles


def render_config_from_env(base: RenderConfig | None = None, **overrides: Any) -> RenderConfig:
    """Return ``base`` with ``overrides`` and then environment values applied.

    Environment variables win over both the base config and the keyword
    overrides, so operators can adjust output without touching code.
    """
    config = base if base is not None else RenderConfig()
    if overrides:
        config = config.replace(**overrides)

    changes: dict[str, Any] = {}
    if env_bool(ENV_FORCE_COLOR, default=False):
        changes["color_enabled"] = True
    if env_bool(ENV_NO_COLOR, default=False):
        changes["color_enabled"] = False

    show_timestamp = env_bool(ENV_SHOW_TIMESTAMP)
    if show_timestamp is not None:
        changes["show_timestamp"] = show_timestamp

    raw_width = os.environ.get(ENV_MAX_LINE_WIDTH)
    if raw_width is not None and raw_width.strip():
        try:
            width = int(raw_width.strip())
        except ValueError as exc:
            raise ValueError(f"{ENV_MAX_LINE_WIDTH} must be an integer, got {raw_width!r}") from exc
        if width < 0:
            raise ValueError(f"{ENV_MAX_LINE_WIDTH} must be >= 0, got {width}")
        changes["max_line_width"] = width

    theme = os.environ.get(ENV_CONSOLE_THEME)
    if theme and theme.strip():
        changes["theme"] = theme.strip()

    raw_styles = os.environ.get(ENV_CONSOLE_STYLES)
    if raw_styles:
        merged = dict(config.styles)
        merged.update(parse_console_styles(raw_styles))
        changes["styles"] = merged

    if not changes:
        return config
    try:
        return config.replace(**changes)
    except ValueError as exc:
        raise ValueError(f"invalid LOG_* environment configuration: {exc}") from exc


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is requested.

    An explicit CLI flag wins; otherwise the toggle variable decides.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="on")
    True
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        env_value = os.environ.get(DOTENV_ENV_VAR)
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file without overriding existing variables.

    Returns the resolved path of the loaded file, or ``None`` when none was
    found. Repeated calls return the first result.
    """
    global _DOTENV_LOADED, _DOTENV_PATH
    if _DOTENV_LOADED:
        return _DOTENV_PATH

    if search_from is not None:
        candidate = _search_upwards(search_from)
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found) if found else None

    _DOTENV_LOADED = True
    if candidate is None:
        logger.debug("no .env file found")
        return None
    load_dotenv(dotenv_path=candidate, override=False)
    _DOTENV_PATH = candidate.resolve()
    logger.debug("loaded environment from %s", _DOTENV_PATH)
    return _DOTENV_PATH


def _search_upwards(start: Path) -> Path | None:
    directory = start.resolve()
    if directory.is_file():
        directory = directory.parent
    for folder in (directory, *directory.parents):
        candidate = folder / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED, _DOTENV_PATH
    _DOTENV_LOADED = False
    _DOTENV_PATH = None


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_CONSOLE_STYLES",
    "ENV_CONSOLE_THEME",
    "ENV_FORCE_COLOR",
    "ENV_MAX_LINE_WIDTH",
    "ENV_NO_COLOR",
    "ENV_SHOW_TIMESTAMP",
    "enable_dotenv",
    "env_bool",
    "parse_console_styles",
    "render_config_from_env",
    "should_use_dotenv",
]
