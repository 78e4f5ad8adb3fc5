from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config import AppSettings, ShareSettings, is_absolute_url, load_settings


def test_defaults_without_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    settings = load_settings()

    assert settings.share.base_url == "http://localhost:5173/"
    assert settings.share.max_url_length == 2000
    assert settings.share.max_size_kb == 50
    assert settings.canvas.grid_size == 80
    assert settings.canvas.snap_to_grid is True


def test_yaml_config_is_loaded(tmp_path: Path) -> None:
    config = tmp_path / "archboard.yaml"
    config.write_text(
        "share:\n  base_url: https://boards.example.com/app\n  max_url_length: 4000\n"
        "canvas:\n  grid_size: 40\n",
        encoding="utf-8",
    )

    settings = load_settings(config)

    assert settings.share.base_url == "https://boards.example.com/app"
    assert settings.share.max_url_length == 4000
    assert settings.canvas.grid_size == 40


def test_config_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "custom.yaml"
    config.write_text("share:\n  max_size_kb: 20\n", encoding="utf-8")
    monkeypatch.setenv("ARCHBOARD_CONFIG_PATH", str(config))

    assert load_settings().share.max_size_kb == 20


def test_environment_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "archboard.yaml"
    config.write_text("share:\n  max_url_length: 4000\n", encoding="utf-8")
    monkeypatch.setenv("ARCHBOARD_SHARE__MAX_URL_LENGTH", "1500")

    assert load_settings(config).share.max_url_length == 1500


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml")


def test_base_url_drops_query_and_fragment() -> None:
    settings = ShareSettings(base_url="https://boards.example.com/?data=old#top")

    assert settings.base_url == "https://boards.example.com/"


def test_invalid_settings_are_rejected() -> None:
    with pytest.raises(ValidationError):
        ShareSettings(base_url="not a url")
    with pytest.raises(ValidationError):
        ShareSettings(max_url_length=0)
    with pytest.raises(ValidationError):
        AppSettings(canvas={"default_zoom_level": 0})


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://boards.example.com/?data=abc", True),
        ("http://localhost:5173/", True),
        ("ftp://files.example.com/", False),
        ("boards.example.com", False),
        ("", False),
    ],
)
def test_is_absolute_url(value: str, expected: bool) -> None:
    assert is_absolute_url(value) is expected


def test_share_overrides_keep_other_fields(settings_factory: Callable[..., AppSettings]) -> None:
    settings = settings_factory(max_url_length=500)

    assert settings.share.max_url_length == 500
    assert settings.share.base_url == "https://boards.example.com/"
