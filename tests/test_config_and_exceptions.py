from __future__ import annotations

from pathlib import Path

import pytest

from porytext.config import (
    Settings,
    apply_env_overrides,
    apply_mapping,
    find_config_file,
    load_settings,
)
from porytext.exceptions import ConfigError, DocumentError, EditConflictError


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PORYTEXT_ENABLED",
        "PORYTEXT_MAX_LINE_LENGTH",
        "PORYTEXT_VALID_COLOR",
        "PORYTEXT_WARNING_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings()

    assert settings.enabled is True
    assert settings.max_line_length == 208
    assert settings.valid_color == "#0072B2"
    assert settings.warning_color == "#E69F00"


def test_apply_mapping_accepts_camel_and_snake_case() -> None:
    settings = apply_mapping(
        Settings(),
        {"maxLineLength": 200, "warning_color": "red", "enabled": False},
        "test",
    )

    assert settings == Settings(enabled=False, max_line_length=200, warning_color="red")


@pytest.mark.parametrize(
    "values",
    [
        {"unknownKey": 1},
        {"maxLineLength": 0},
        {"maxLineLength": "wide"},
        {"maxLineLength": True},
        {"enabled": "maybe"},
        {"validColor": ""},
    ],
)
def test_apply_mapping_rejects_invalid_values(values: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        apply_mapping(Settings(), values, "test")


def test_env_overrides() -> None:
    settings = apply_env_overrides(
        Settings(),
        {"PORYTEXT_MAX_LINE_LENGTH": "180", "PORYTEXT_ENABLED": "off", "OTHER": "x"},
    )

    assert settings.max_line_length == 180
    assert settings.enabled is False


def test_env_override_invalid_value() -> None:
    with pytest.raises(ConfigError, match="PORYTEXT_MAX_LINE_LENGTH"):
        apply_env_overrides(Settings(), {"PORYTEXT_MAX_LINE_LENGTH": "-3"})


def test_load_settings_discovers_porytext_toml_above_document(tmp_path: Path) -> None:
    (tmp_path / "porytext.toml").write_text("maxLineLength = 190\n", encoding="utf-8")
    scripts = tmp_path / "data" / "maps"
    scripts.mkdir(parents=True)
    document = scripts / "scripts.pory"
    document.write_text("", encoding="utf-8")

    settings = load_settings(document, environ={})

    assert settings.max_line_length == 190


def test_load_settings_reads_pyproject_tool_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "x"\n\n[tool.porytext]\nvalidColor = "blue"\n',
        encoding="utf-8",
    )
    document = tmp_path / "a.pory"
    document.write_text("", encoding="utf-8")

    found = find_config_file(document)

    assert found is not None
    assert found[0].name == "pyproject.toml"
    assert load_settings(document, environ={}).valid_color == "blue"


def test_load_settings_env_wins_over_file(tmp_path: Path) -> None:
    config = tmp_path / "custom.toml"
    config.write_text("maxLineLength = 190\n", encoding="utf-8")

    settings = load_settings(
        config_path=config, environ={"PORYTEXT_MAX_LINE_LENGTH": "150"}
    )

    assert settings.max_line_length == 150


def test_load_settings_without_document_uses_defaults() -> None:
    assert load_settings(environ={}) == Settings()


def test_load_settings_malformed_toml(tmp_path: Path) -> None:
    config = tmp_path / "porytext.toml"
    config.write_text("maxLineLength = = 1\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="porytext.toml"):
        load_settings(config_path=config, environ={})


def test_exception_messages() -> None:
    assert "Invalid configuration in x.toml" in str(ConfigError("x.toml", "bad"))
    assert "Unable to access a.pory" in str(DocumentError("a.pory"))
    assert "Boom" in str(DocumentError("a.pory", cause="Boom"))
    assert "0-3 and 2-4" in str(EditConflictError((0, 3), (2, 4)))
