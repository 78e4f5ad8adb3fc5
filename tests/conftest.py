from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from app.config import AppSettings, ShareSettings
from domain.models import Diagram
from tests.helpers.diagram_fixtures import nested_diagram_payload


def _clear_archboard_env() -> None:
    for key in list(os.environ):
        if key.startswith("ARCHBOARD_"):
            os.environ.pop(key, None)


_clear_archboard_env()


@pytest.fixture(autouse=True)
def clear_archboard_env() -> Generator[None, None, None]:
    _clear_archboard_env()
    yield
    _clear_archboard_env()


@pytest.fixture
def nested_diagram() -> Diagram:
    return Diagram.model_validate(nested_diagram_payload())


@pytest.fixture
def share_settings() -> ShareSettings:
    return ShareSettings(base_url="https://boards.example.com/", max_url_length=2000)


@pytest.fixture
def settings_factory(share_settings: ShareSettings) -> Callable[..., AppSettings]:
    def _factory(**share_overrides: object) -> AppSettings:
        return AppSettings(share=share_settings.model_copy(update=share_overrides))

    return _factory


@pytest.fixture
def diagram_file(tmp_path: Path, nested_diagram: Diagram) -> Path:
    path = tmp_path / "diagram.json"
    path.write_text(nested_diagram.model_dump_json(by_alias=True), encoding="utf-8")
    return path
