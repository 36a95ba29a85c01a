from __future__ import annotations

import logging
from pathlib import Path

import pytest

from quotecord.core.config import (
    ConfigFileEmptyError,
    ConfigFileNotFoundError,
    RenderSettings,
    get_config,
)

pytestmark = pytest.mark.usefixtures("fresh_config_cache")


def test_defaults() -> None:
    settings = RenderSettings()

    assert settings.author_default_color == "#ffffff"
    assert settings.reply_default_color == "#b5bac1"
    assert dict(settings.options) == {}


def test_merged_splits_known_fields_and_options() -> None:
    settings = RenderSettings().merged(
        {"author_default_color": "#abcdef", "width": 900, "options": {"type": "png"}},
    )

    assert settings.author_default_color == "#abcdef"
    assert dict(settings.options) == {"width": 900, "type": "png"}


def test_merged_keeps_original_untouched() -> None:
    base = RenderSettings().merged({"width": 700})

    merged = base.merged({"width": 900, "height": 300})

    assert dict(base.options) == {"width": 700}
    assert dict(merged.options) == {"width": 900, "height": 300}


def test_merged_without_overrides_returns_self() -> None:
    settings = RenderSettings()

    assert settings.merged(None) is settings
    assert settings.merged({}) is settings


def test_from_config_reads_renderer_section() -> None:
    settings = RenderSettings.from_config(
        {
            "renderer": {
                "render_service_url": "http://render.local/render",
                "request_timeout": 5,
                "options": {"type": "jpeg"},
            },
        },
    )

    assert settings.render_service_url == "http://render.local/render"
    assert settings.request_timeout == 5
    assert dict(settings.options) == {"type": "jpeg"}


def test_from_config_without_section() -> None:
    assert RenderSettings.from_config({}) == RenderSettings()
    assert RenderSettings.from_config(None) == RenderSettings()


def test_from_config_ignores_malformed_section(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING):
        settings = RenderSettings.from_config({"renderer": ["not", "a", "mapping"]})

    assert settings == RenderSettings()
    assert "expected a mapping" in caplog.text


def test_get_config_loads_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "config.yaml").write_text(
        "renderer:\n  reply_default_color: '#000000'\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    config = get_config()

    assert config == {"renderer": {"reply_default_color": "#000000"}}
    assert RenderSettings.from_config(config).reply_default_color == "#000000"


def test_get_config_rejects_empty_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / "config.yaml").write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ConfigFileEmptyError):
        get_config()


def test_get_config_missing_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ConfigFileNotFoundError) as exc_info:
        get_config("missing.yaml")

    assert "missing.yaml" in str(exc_info.value)


def test_get_config_searches_config_dir(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    config_dir = tmp_path / "conf"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text("renderer: {}\n", encoding="utf-8")
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("QUOTECORD_CONFIG_DIR", str(config_dir))

    assert get_config() == {"renderer": {}}


def test_get_config_reuses_cached_copy(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("renderer:\n  request_timeout: 5\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    first = get_config()
    path.write_text("renderer:\n  request_timeout: 9\n", encoding="utf-8")

    assert get_config() is first
