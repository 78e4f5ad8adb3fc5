from __future__ import annotations

import logging

from domain.models import Diagram, Number
from domain.services.hierarchy import (
    DEFAULT_GRID_SIZE,
    DEFAULT_ITEM_SIZE,
    auto_fit,
    collect_descendants,
    find_parent,
    round_half_up,
    snap_to_grid,
    would_create_cycle,
)

logger = logging.getLogger(__name__)


def remove_node(diagram: Diagram, node_id: str) -> Diagram:
    return diagram.model_copy(
        update={
            "nodes": [node for node in diagram.nodes if node.id != node_id],
            "connections": [
                connection
                for connection in diagram.connections
                if connection.from_id != node_id and connection.to_id != node_id
            ],
        }
    )


def remove_group(diagram: Diagram, group_id: str) -> Diagram:
    descendants = collect_descendants(diagram, group_id)
    removed_group_ids = {group_id} | descendants.group_ids
    orphaned_node_ids = descendants.node_ids
    return diagram.model_copy(
        update={
            "groups": [group for group in diagram.groups if group.id not in removed_group_ids],
            "nodes": [
                node.model_copy(update={"parent_container_id": None})
                if node.id in orphaned_node_ids
                else node
                for node in diagram.nodes
            ],
        }
    )


def remove_connection(diagram: Diagram, connection_id: str) -> Diagram:
    return diagram.model_copy(
        update={
            "connections": [
                connection for connection in diagram.connections if connection.id != connection_id
            ]
        }
    )


def move_node(
    diagram: Diagram,
    node_id: str,
    x: Number,
    y: Number,
    *,
    item_size: Number = DEFAULT_ITEM_SIZE,
    grid_size: Number = DEFAULT_GRID_SIZE,
    snap: bool = True,
) -> Diagram:
    node = diagram.node_by_id(node_id)
    if node is None:
        return diagram
    if snap:
        x, y = snap_to_grid(x, y, grid_size)
    parent = find_parent(diagram.groups, x, y, item_size, item_size)
    moved = node.model_copy(
        update={"x": x, "y": y, "parent_container_id": parent.id if parent else None}
    )
    return diagram.model_copy(
        update={"nodes": [moved if item.id == node_id else item for item in diagram.nodes]}
    )


def move_group(
    diagram: Diagram,
    group_id: str,
    x: Number,
    y: Number,
    *,
    item_size: Number = DEFAULT_ITEM_SIZE,
    grid_size: Number = DEFAULT_GRID_SIZE,
    snap: bool = True,
) -> Diagram:
    group = diagram.group_by_id(group_id)
    if group is None:
        return diagram
    if snap:
        x, y = snap_to_grid(x, y, grid_size)

    parent = find_parent(diagram.groups, x, y, group.width, group.height, group_id)
    if parent is not None and would_create_cycle(diagram.groups, group_id, parent.id):
        logger.debug("Refusing to nest group %s under %s: cycle", group_id, parent.id)
        return diagram

    delta_x = x - group.x
    delta_y = y - group.y
    descendants = collect_descendants(diagram, group_id)
    node_ids = descendants.node_ids
    child_group_ids = descendants.group_ids

    def shifted(item_x: Number, item_y: Number) -> tuple[Number, Number]:
        new_x, new_y = item_x + delta_x, item_y + delta_y
        return snap_to_grid(new_x, new_y, grid_size) if snap else (new_x, new_y)

    groups = []
    for item in diagram.groups:
        if item.id == group_id:
            item = item.model_copy(
                update={"x": x, "y": y, "parent_container_id": parent.id if parent else None}
            )
        elif item.id in child_group_ids:
            new_x, new_y = shifted(item.x, item.y)
            item = item.model_copy(update={"x": new_x, "y": new_y})
        groups.append(item)

    nodes = []
    for node in diagram.nodes:
        if node.id in node_ids:
            new_x, new_y = shifted(node.x, node.y)
            node = node.model_copy(update={"x": new_x, "y": new_y})
        nodes.append(node)

    moved = diagram.model_copy(update={"groups": groups, "nodes": nodes})
    return auto_fit(moved, group_id, item_size=item_size, grid_size=grid_size, snap=snap)


def rescale_zoom(diagram: Diagram, zoom_level: Number) -> Diagram:
    current = diagram.settings.zoom_level
    if zoom_level == current:
        return diagram
    ratio = zoom_level / current
    return diagram.model_copy(
        update={
            "nodes": [
                node.model_copy(
                    update={"x": round_half_up(node.x * ratio), "y": round_half_up(node.y * ratio)}
                )
                for node in diagram.nodes
            ],
            "groups": [
                group.model_copy(
                    update={
                        "x": round_half_up(group.x * ratio),
                        "y": round_half_up(group.y * ratio),
                        "width": round_half_up(group.width * ratio),
                        "height": round_half_up(group.height * ratio),
                    }
                )
                for group in diagram.groups
            ],
            "settings": diagram.settings.model_copy(update={"zoom_level": zoom_level}),
        }
    )
