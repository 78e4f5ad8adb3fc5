from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from domain.catalog import DEFAULT_CATALOG, ServiceCatalog
from domain.models import Connection, ContainerGroup, Diagram, ServiceNode

_UNSAFE_IDENT_CHARS = re.compile(r"[^a-zA-Z0-9]")


def sanitize_identifier(value: str) -> str:
    return _UNSAFE_IDENT_CHARS.sub("_", value)


@dataclass
class ContainmentTree:
    root_nodes: list[ServiceNode] = field(default_factory=list)
    root_groups: list[ContainerGroup] = field(default_factory=list)
    nodes_by_group: dict[str, list[ServiceNode]] = field(default_factory=dict)
    groups_by_parent: dict[str, list[ContainerGroup]] = field(default_factory=dict)

    @classmethod
    def build(cls, diagram: Diagram) -> ContainmentTree:
        group_ids = {group.id for group in diagram.groups}
        tree = cls()
        for node in diagram.nodes:
            parent_id = node.parent_container_id
            if parent_id and parent_id in group_ids:
                tree.nodes_by_group.setdefault(parent_id, []).append(node)
            else:
                tree.root_nodes.append(node)
        for group in diagram.groups:
            parent_id = group.parent_container_id
            if parent_id and parent_id in group_ids and parent_id != group.id:
                tree.groups_by_parent.setdefault(parent_id, []).append(group)
            else:
                tree.root_groups.append(group)
        return tree


class DiagramTextExporter(ABC):
    """Linearizes the containment tree into a textual diagram language.

    Every group is emitted exactly once: its opening line precedes everything it
    contains and its closing line follows all of it. Groups whose parent is
    missing are treated as roots; groups reachable only through a parent loop
    are appended as roots after the regular traversal.
    """

    def __init__(self, catalog: ServiceCatalog = DEFAULT_CATALOG) -> None:
        self.catalog = catalog

    def export(self, diagram: Diagram) -> str:
        tree = ContainmentTree.build(diagram)
        lines: list[str] = list(self._header())
        lines.extend(self._root_node_lines(tree.root_nodes))

        visited: set[str] = set()
        for group in tree.root_groups:
            lines.extend(self._emit_group(group, tree, 0, visited))
            lines.extend(self._after_root_group())
        for group in diagram.groups:
            if group.id not in visited:
                lines.extend(self._emit_group(group, tree, 0, visited))
                lines.extend(self._after_root_group())

        lines.extend(self._connection_lines(diagram.connections))
        lines.extend(self._footer(diagram))
        return "\n".join(lines) + "\n"

    def _emit_group(
        self,
        group: ContainerGroup,
        tree: ContainmentTree,
        depth: int,
        visited: set[str],
    ) -> list[str]:
        visited.add(group.id)
        contained = tree.nodes_by_group.get(group.id, [])
        lines = [self._group_open(group, contained, depth)]
        lines.extend(self._node_line(node, depth + 1) for node in contained)
        for child in tree.groups_by_parent.get(group.id, []):
            if child.id not in visited:
                lines.extend(self._emit_group(child, tree, depth + 1, visited))
        lines.append(self._group_close(depth))
        return lines

    def _after_root_group(self) -> list[str]:
        return []

    def _footer(self, diagram: Diagram) -> list[str]:
        return []

    @abstractmethod
    def _header(self) -> list[str]: ...

    @abstractmethod
    def _root_node_lines(self, nodes: list[ServiceNode]) -> list[str]: ...

    @abstractmethod
    def _node_line(self, node: ServiceNode, depth: int) -> str: ...

    @abstractmethod
    def _group_open(
        self, group: ContainerGroup, contained: list[ServiceNode], depth: int
    ) -> str: ...

    @abstractmethod
    def _group_close(self, depth: int) -> str: ...

    @abstractmethod
    def _connection_lines(self, connections: list[Connection]) -> list[str]: ...
