from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from domain.catalog import DEFAULT_CATALOG, ServiceCatalog
from domain.models import Connection, ContainerGroup, Diagram, ServiceNode

logger = logging.getLogger(__name__)

GROUP_PATTERN = re.compile(r'(\w+)\s*\[label:\s*"([^"]+)",?\s*icon:\s*([^\]]+)\]\s*\{')
NODE_PATTERN = re.compile(r'(\w+)\s*\[label:\s*"([^"]+)",?\s*icon:\s*([^\]]+)\]')
CONNECTION_PATTERN = re.compile(r'(\w+)\s*>\s*(\w+)(?:\s*:\s*"([^"]+)")?')

COMMENT_PREFIX = "//"
DIRECTION_PREFIX = "direction"
GROUP_CLOSE = "}"
CONNECTION_TOKEN = " > "

GROUP_ORIGIN = 100
GROUP_DEPTH_OFFSET = 60
GROUP_BASE_WIDTH = 400
GROUP_BASE_HEIGHT = 320
GROUP_DEPTH_SHRINK = 40
GROUP_MIN_WIDTH = 240
GROUP_MIN_HEIGHT = 180

NODE_ORIGIN = 180
NODE_SPACING = 100
NODE_COLUMNS = 4
NODE_DEPTH_OFFSET = 30


def _epoch_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class _ParseState:
    stamp: int
    nodes: list[ServiceNode] = field(default_factory=list)
    groups: list[ContainerGroup] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)
    group_stack: list[ContainerGroup] = field(default_factory=list)
    nodes_by_ident: dict[str, ServiceNode] = field(default_factory=dict)
    groups_by_ident: dict[str, ContainerGroup] = field(default_factory=dict)
    node_counter: int = 0
    group_counter: int = 0
    connection_counter: int = 0

    @property
    def depth(self) -> int:
        return len(self.group_stack)

    @property
    def current_group(self) -> Optional[ContainerGroup]:
        return self.group_stack[-1] if self.group_stack else None


class EraserDslParser:
    """Builds a diagram from Eraser-style nested-group text.

    Parsing is best effort: lines that match nothing, stray closing braces and
    connections whose endpoints are not previously declared nodes are skipped.
    """

    def __init__(
        self,
        catalog: ServiceCatalog = DEFAULT_CATALOG,
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        self.catalog = catalog
        self.clock = clock

    def parse(self, text: str) -> Diagram:
        stamp = self.clock()
        state = _ParseState(stamp=stamp)
        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line or line.startswith(COMMENT_PREFIX) or line.startswith(DIRECTION_PREFIX):
                continue
            if "[" in line and "icon:" in line and "{" in line:
                self._open_group(line, state)
            elif line == GROUP_CLOSE:
                if state.group_stack:
                    state.group_stack.pop()
            elif "[label:" in line and "icon:" in line:
                self._add_node(line, state)
            elif CONNECTION_TOKEN in line:
                self._add_connection(line, state)

        return Diagram(
            timestamp=stamp,
            nodes=state.nodes,
            groups=state.groups,
            connections=state.connections,
        )

    def _open_group(self, line: str, state: _ParseState) -> None:
        match = GROUP_PATTERN.search(line)
        if not match:
            return
        ident, label, _icon = match.groups()
        style = self.catalog.classify_group(label)
        parent = state.current_group
        depth = state.depth
        group = ContainerGroup(
            id=f"container-{state.group_counter}-{state.stamp}",
            name=label,
            color=style.color,
            border_style=style.border_style,
            x=GROUP_ORIGIN + depth * GROUP_DEPTH_OFFSET,
            y=GROUP_ORIGIN + depth * GROUP_DEPTH_OFFSET,
            width=max(GROUP_BASE_WIDTH - depth * GROUP_DEPTH_SHRINK, GROUP_MIN_WIDTH),
            height=max(GROUP_BASE_HEIGHT - depth * GROUP_DEPTH_SHRINK, GROUP_MIN_HEIGHT),
            parent_container_id=parent.id if parent else None,
        )
        state.group_counter += 1
        state.groups.append(group)
        state.group_stack.append(group)
        state.groups_by_ident[ident] = group

    def _add_node(self, line: str, state: _ParseState) -> None:
        match = NODE_PATTERN.search(line)
        if not match:
            return
        ident, label, icon = match.groups()
        service = self.catalog.classify_node(label, icon.strip())
        node_id = f"{service.service_id}-{state.node_counter}-{state.stamp}"
        state.node_counter += 1
        slot = state.node_counter
        depth = state.depth
        parent = state.current_group
        node = ServiceNode(
            id=node_id,
            name=service.name,
            custom_name=label if label != service.name else None,
            color=service.color,
            category=service.category,
            x=NODE_ORIGIN + (slot % NODE_COLUMNS) * NODE_SPACING + depth * NODE_DEPTH_OFFSET,
            y=NODE_ORIGIN + (slot // NODE_COLUMNS) * NODE_SPACING + depth * NODE_DEPTH_OFFSET,
            parent_container_id=parent.id if parent else None,
        )
        state.nodes.append(node)
        state.nodes_by_ident[ident] = node

    def _add_connection(self, line: str, state: _ParseState) -> None:
        match = CONNECTION_PATTERN.search(line)
        if not match:
            return
        from_ident, to_ident, label = match.groups()
        source = state.nodes_by_ident.get(from_ident)
        target = state.nodes_by_ident.get(to_ident)
        if source is None or target is None:
            logger.debug(
                "Skipping connection %s > %s: endpoint is not a node", from_ident, to_ident
            )
            return
        state.connections.append(
            Connection(
                id=f"conn-{state.stamp}-{state.connection_counter}",
                from_id=source.id,
                to_id=target.id,
                label=label or "",
            )
        )
        state.connection_counter += 1
