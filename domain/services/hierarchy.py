from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from domain.models import ContainerGroup, Diagram, Number, ServiceNode

DEFAULT_GRID_SIZE = 80
DEFAULT_ITEM_SIZE = 80
MIN_GROUP_GRID_CELLS = 3


@dataclass(frozen=True)
class Descendants:
    nodes: list[ServiceNode] = field(default_factory=list)
    groups: list[ContainerGroup] = field(default_factory=list)

    @property
    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    @property
    def group_ids(self) -> set[str]:
        return {group.id for group in self.groups}

    def is_empty(self) -> bool:
        return not self.nodes and not self.groups


def is_contained(
    x: Number, y: Number, width: Number, height: Number, group: ContainerGroup
) -> bool:
    return (
        x >= group.x
        and y >= group.y
        and x + width <= group.x + group.width
        and y + height <= group.y + group.height
    )


def find_parent(
    groups: Sequence[ContainerGroup],
    x: Number,
    y: Number,
    width: Number,
    height: Number,
    exclude_group_id: Optional[str] = None,
) -> Optional[ContainerGroup]:
    candidates = [
        group
        for group in groups
        if group.id != exclude_group_id and is_contained(x, y, width, height, group)
    ]
    if not candidates:
        return None
    # min() keeps the first of equal areas, so ties follow collection order.
    return min(candidates, key=lambda group: group.area)


def collect_descendants(diagram: Diagram, group_id: str) -> Descendants:
    nodes: list[ServiceNode] = []
    groups: list[ContainerGroup] = []
    visited: set[str] = set()

    def collect(parent_id: str) -> None:
        visited.add(parent_id)
        nodes.extend(node for node in diagram.nodes if node.parent_container_id == parent_id)
        children = [
            group
            for group in diagram.groups
            if group.parent_container_id == parent_id and group.id not in visited
        ]
        groups.extend(children)
        for child in children:
            if child.id not in visited:
                collect(child.id)

    collect(group_id)
    return Descendants(nodes=nodes, groups=groups)


def would_create_cycle(
    groups: Sequence[ContainerGroup], child_id: str, parent_id: Optional[str]
) -> bool:
    if parent_id is None:
        return False
    if child_id == parent_id:
        return True
    parents = {group.id: group.parent_container_id for group in groups}
    seen: set[str] = set()
    current: Optional[str] = parent_id
    while current:
        if current == child_id:
            return True
        if current in seen:
            # The existing chain already loops; refuse rather than extend it.
            return True
        seen.add(current)
        current = parents.get(current)
    return False


def depth_of(groups: Sequence[ContainerGroup], group_id: str) -> int:
    parents = {group.id: group.parent_container_id for group in groups}
    depth = 0
    seen = {group_id}
    current = parents.get(group_id)
    while current and current not in seen:
        seen.add(current)
        depth += 1
        current = parents.get(current)
    return depth


def round_half_up(value: Number) -> int:
    return math.floor(value + 0.5)


def snap_to_grid(x: Number, y: Number, grid_size: Number = DEFAULT_GRID_SIZE) -> tuple[int, int]:
    return (
        int(round_half_up(x / grid_size) * grid_size),
        int(round_half_up(y / grid_size) * grid_size),
    )


def auto_fit(
    diagram: Diagram,
    group_id: str,
    *,
    item_size: Number = DEFAULT_ITEM_SIZE,
    grid_size: Number = DEFAULT_GRID_SIZE,
    snap: bool = True,
) -> Diagram:
    group = diagram.group_by_id(group_id)
    children = [node for node in diagram.nodes if node.parent_container_id == group_id]
    if group is None or not children:
        return diagram

    min_x = min(node.x for node in children)
    min_y = min(node.y for node in children)
    max_x = max(node.x + item_size for node in children)
    max_y = max(node.y + item_size for node in children)

    padding = grid_size
    floor = grid_size * MIN_GROUP_GRID_CELLS
    new_x = min(group.x, min_x - padding)
    new_y = min(group.y, min_y - padding)
    new_width = max(group.width, max_x - new_x + padding, floor)
    new_height = max(group.height, max_y - new_y + padding, floor)

    if snap:
        new_x, new_y = snap_to_grid(new_x, new_y, grid_size)
        new_width = math.ceil(new_width / grid_size) * grid_size
        new_height = math.ceil(new_height / grid_size) * grid_size

    resized = group.model_copy(
        update={"x": new_x, "y": new_y, "width": new_width, "height": new_height}
    )
    groups = [resized if item.id == group_id else item for item in diagram.groups]

    nodes = diagram.nodes
    if (resized.x, resized.y, resized.width, resized.height) != (
        group.x,
        group.y,
        group.width,
        group.height,
    ):
        nodes = [
            node
            if node.parent_container_id == group_id
            else _reparent_node(node, groups, item_size)
            for node in diagram.nodes
        ]
    return diagram.model_copy(update={"groups": groups, "nodes": nodes})


def _reparent_node(
    node: ServiceNode, groups: Sequence[ContainerGroup], item_size: Number
) -> ServiceNode:
    parent = find_parent(groups, node.x, node.y, item_size, item_size)
    parent_id = parent.id if parent else None
    if parent_id == node.parent_container_id:
        return node
    return node.model_copy(update={"parent_container_id": parent_id})
