"""Settings loader: defaults, config files, then environment overrides."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
import logging
import os
from pathlib import Path
import tomllib
from typing import Any

from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_ENABLED,
    DEFAULT_MAX_LINE_LENGTH,
    DEFAULT_VALID_COLOR,
    DEFAULT_WARNING_COLOR,
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_TABLE,
)
from .exceptions import ConfigError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    enabled: bool = DEFAULT_ENABLED
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    valid_color: str = DEFAULT_VALID_COLOR
    warning_color: str = DEFAULT_WARNING_COLOR


# Accept both the editor extension's camelCase keys and snake_case.
_KEY_MAP: dict[str, str] = {
    "enabled": "enabled",
    "maxLineLength": "max_line_length",
    "max_line_length": "max_line_length",
    "validColor": "valid_color",
    "valid_color": "valid_color",
    "warningColor": "warning_color",
    "warning_color": "warning_color",
}

_ENV_OVERRIDE_MAP: dict[str, str] = {
    "PORYTEXT_ENABLED": "enabled",
    "PORYTEXT_MAX_LINE_LENGTH": "max_line_length",
    "PORYTEXT_VALID_COLOR": "valid_color",
    "PORYTEXT_WARNING_COLOR": "warning_color",
}

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _coerce(field_name: str, value: object, source: str | Path) -> object:
    if field_name == "enabled":
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE_VALUES | _FALSE_VALUES:
            return value.strip().lower() in _TRUE_VALUES
        raise ConfigError(source, f"'enabled' must be a boolean, got {value!r}")

    if field_name == "max_line_length":
        if isinstance(value, bool):
            raise ConfigError(source, "'maxLineLength' must be an integer")
        try:
            width = int(value)  # type: ignore[call-overload]
        except (TypeError, ValueError) as exc:
            raise ConfigError(source, f"'maxLineLength' must be an integer, got {value!r}") from exc
        if width <= 0:
            raise ConfigError(source, "'maxLineLength' must be positive")
        return width

    if not isinstance(value, str) or not value.strip():
        raise ConfigError(source, f"'{field_name}' must be a non-empty string")
    return value.strip()


def apply_mapping(settings: Settings, values: Mapping[str, Any], source: str | Path) -> Settings:
    """Overlay ``values`` (camelCase or snake_case keys) on ``settings``."""
    updates: dict[str, object] = {}
    for key, value in values.items():
        field_name = _KEY_MAP.get(key)
        if field_name is None:
            raise ConfigError(source, f"unknown key '{key}'")
        updates[field_name] = _coerce(field_name, value, source)
    return replace(settings, **updates)


def apply_env_overrides(settings: Settings, environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    updates: dict[str, object] = {}
    for env_name, field_name in _ENV_OVERRIDE_MAP.items():
        raw = env.get(env_name)
        if raw is None or not raw.strip():
            continue
        updates[field_name] = _coerce(field_name, raw, env_name)
    return replace(settings, **updates)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(path, str(exc)) from exc
    except OSError as exc:
        raise ConfigError(path, exc.__class__.__name__) from exc


def _tool_table(pyproject: dict[str, Any]) -> dict[str, Any] | None:
    tool = pyproject.get("tool")
    table = tool.get(PYPROJECT_TOOL_TABLE) if isinstance(tool, dict) else None
    return table if isinstance(table, dict) else None


def read_config_file(path: Path) -> dict[str, Any]:
    """Read settings from a porytext.toml, or the [tool.porytext] table of a pyproject.toml."""
    data = _read_toml(path)
    if path.name == PYPROJECT_FILE_NAME:
        return _tool_table(data) or {}
    return data


def find_config_file(start: Path) -> tuple[Path, dict[str, Any]] | None:
    """Walk up from ``start`` to the first porytext.toml or [tool.porytext] table."""
    directory = (start if start.is_dir() else start.parent).resolve()
    for candidate_dir in (directory, *directory.parents):
        config_path = candidate_dir / CONFIG_FILE_NAME
        if config_path.is_file():
            return config_path, _read_toml(config_path)

        pyproject_path = candidate_dir / PYPROJECT_FILE_NAME
        if pyproject_path.is_file():
            table = _tool_table(_read_toml(pyproject_path))
            if table is not None:
                return pyproject_path, table
    return None


def load_settings(
    document: Path | None = None,
    *,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve settings for ``document``; an explicit ``config_path`` wins over discovery."""
    settings = Settings()

    found: tuple[Path, dict[str, Any]] | None = None
    if config_path is not None:
        found = config_path, read_config_file(config_path)
    elif document is not None:
        found = find_config_file(document)

    if found is not None:
        path, values = found
        LOGGER.debug("loading settings from %s", path)
        settings = apply_mapping(settings, values, path)

    return apply_env_overrides(settings, environ)
