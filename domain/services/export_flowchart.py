from __future__ import annotations

from domain.models import Connection, ContainerGroup, Diagram, ServiceNode
from domain.services.export_diagram_base import DiagramTextExporter, sanitize_identifier

INDENT = "    "
NODE_STYLE = "stroke:#333,stroke-width:2px,color:#fff"


class FlowchartExporter(DiagramTextExporter):
    def _header(self) -> list[str]:
        return ["flowchart TD"]

    def _root_node_lines(self, nodes: list[ServiceNode]) -> list[str]:
        return [self._node_line(node, 0) for node in nodes]

    def _node_line(self, node: ServiceNode, depth: int) -> str:
        return f'{INDENT * (depth + 1)}{sanitize_identifier(node.id)}["{node.display_name}"]'

    def _group_open(self, group: ContainerGroup, contained: list[ServiceNode], depth: int) -> str:
        # The leading newline keeps a blank line before every subgraph.
        return f'\n{INDENT * (depth + 1)}subgraph {sanitize_identifier(group.id)}["{group.name}"]'

    def _group_close(self, depth: int) -> str:
        return f"{INDENT * (depth + 1)}end"

    def _connection_lines(self, connections: list[Connection]) -> list[str]:
        if not connections:
            return []
        lines = ["", f"{INDENT}%% Connections"]
        for connection in connections:
            source = sanitize_identifier(connection.from_id)
            target = sanitize_identifier(connection.to_id)
            if connection.label.strip():
                lines.append(f'{INDENT}{source} -->|"{connection.label}"| {target}')
            else:
                lines.append(f"{INDENT}{source} --> {target}")
        return lines

    def _footer(self, diagram: Diagram) -> list[str]:
        lines = ["", f"{INDENT}%% Styling"]
        for node in diagram.nodes:
            lines.append(
                f"{INDENT}style {sanitize_identifier(node.id)} fill:{node.color},{NODE_STYLE}"
            )
        return lines
