from __future__ import annotations

from domain.models import Connection, ContainerGroup, ServiceNode
from domain.services.export_diagram_base import DiagramTextExporter, sanitize_identifier

INDENT = "  "


class EraserDslExporter(DiagramTextExporter):
    def _header(self) -> list[str]:
        return ["direction right", ""]

    def _root_node_lines(self, nodes: list[ServiceNode]) -> list[str]:
        if not nodes:
            return []
        return [self._node_line(node, 0) for node in nodes] + [""]

    def _node_line(self, node: ServiceNode, depth: int) -> str:
        icon = self.catalog.icon_for(node.base_name)
        ident = sanitize_identifier(node.id)
        return f'{INDENT * depth}{ident} [label: "{node.display_name}", icon: {icon}]'

    def _group_open(self, group: ContainerGroup, contained: list[ServiceNode], depth: int) -> str:
        icon = self.catalog.group_icon(group.name, contained[0] if contained else None)
        ident = sanitize_identifier(group.id)
        return f'{INDENT * depth}{ident} [label: "{group.name}", icon: {icon}] {{'

    def _group_close(self, depth: int) -> str:
        return f"{INDENT * depth}}}"

    def _after_root_group(self) -> list[str]:
        return [""]

    def _connection_lines(self, connections: list[Connection]) -> list[str]:
        if not connections:
            return []
        lines = ["// Connections"]
        for connection in connections:
            source = sanitize_identifier(connection.from_id)
            target = sanitize_identifier(connection.to_id)
            if connection.label.strip():
                lines.append(f'{source} > {target} : "{connection.label}"')
            else:
                lines.append(f"{source} > {target}")
        return lines
