from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import orjson

from domain.models import Diagram
from domain.ports.repositories import DiagramRepository
from domain.services.diagram_compaction import restore

DIAGRAM_SUFFIX = ".json"
_DUMP_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE


class FileSystemDiagramRepository(DiagramRepository):
    """Stores diagrams as indented wire-format JSON files."""

    def load(self, path: Path) -> Diagram:
        return restore(_read_object(path))

    def load_all_with_paths(self, directory: Path) -> list[tuple[Path, Diagram]]:
        return [(path, self.load(path)) for path in sorted(self._iter_paths(directory))]

    def save(self, diagram: Diagram, path: Path) -> None:
        _write_atomic(path, orjson.dumps(diagram.to_wire(), option=_DUMP_OPTIONS))

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        yield from directory.glob(f"*{DIAGRAM_SUFFIX}")


def _read_object(path: Path) -> dict[str, Any]:
    data = orjson.loads(path.read_bytes())
    if not isinstance(data, dict):
        msg = f"{path} does not contain a diagram object"
        raise ValueError(msg)
    return data


def _write_atomic(path: Path, payload: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp")
    tmp_path.write_bytes(payload)
    tmp_path.replace(path)
