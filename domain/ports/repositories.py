from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import Diagram


class DiagramRepository(Protocol):
    def load(self, path: Path) -> Diagram: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, Diagram]]: ...

    def save(self, diagram: Diagram, path: Path) -> None: ...
