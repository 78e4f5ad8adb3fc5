from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from adapters.filesystem.diagram_repository import FileSystemDiagramRepository
from domain.models import Diagram


def test_save_and_load_round_trip(tmp_path: Path, nested_diagram: Diagram) -> None:
    repository = FileSystemDiagramRepository()
    path = tmp_path / "boards" / "prod.json"

    repository.save(nested_diagram, path)

    assert repository.load(path) == nested_diagram
    assert orjson.loads(path.read_bytes())["boardItems"][1]["customName"] == "Web"
    assert not path.with_suffix(".json.tmp").exists()


def test_load_all_with_paths_sorted(tmp_path: Path, nested_diagram: Diagram) -> None:
    repository = FileSystemDiagramRepository()
    repository.save(nested_diagram, tmp_path / "b.json")
    repository.save(Diagram(), tmp_path / "a.json")
    (tmp_path / "notes.txt").write_text("skip me", encoding="utf-8")

    loaded = repository.load_all_with_paths(tmp_path)

    assert [path.name for path, _ in loaded] == ["a.json", "b.json"]
    assert loaded[1][1] == nested_diagram


def test_load_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(orjson.JSONDecodeError):
        FileSystemDiagramRepository().load(path)


def test_load_rejects_non_object_payload(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_bytes(b"[1, 2]")

    with pytest.raises(ValueError, match="does not contain a diagram object"):
        FileSystemDiagramRepository().load(path)
