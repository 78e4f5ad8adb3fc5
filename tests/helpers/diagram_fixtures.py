from __future__ import annotations

from typing import Any

FIXED_STAMP = 1700000000000


def fixed_clock() -> int:
    return FIXED_STAMP


def service(
    node_id: str,
    name: str,
    x: float,
    y: float,
    parent: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": node_id,
        "name": name,
        "color": "#FF9900",
        "category": "Compute",
        "x": x,
        "y": y,
        "type": "service",
    }
    if parent is not None:
        payload["parentContainerId"] = parent
    payload.update(extra)
    return payload


def container(
    group_id: str,
    name: str,
    x: float,
    y: float,
    width: float,
    height: float,
    parent: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": group_id,
        "name": name,
        "color": "#FF6B6B",
        "x": x,
        "y": y,
        "width": width,
        "height": height,
        "type": "container",
    }
    if parent is not None:
        payload["parentContainerId"] = parent
    payload.update(extra)
    return payload


def nested_diagram_payload() -> dict[str, Any]:
    """AWS Cloud > VPC > web node, plus a root user and two connections."""
    return {
        "version": "1.0",
        "timestamp": FIXED_STAMP,
        "boardItems": [
            service("user-1", "User", 0, 0),
            service("ec2-1", "EC2", 240, 240, parent="vpc", customName="Web"),
            service("rds-1", "RDS", 400, 240, parent="vpc"),
        ],
        "containers": [
            container("cloud", "AWS Cloud", 80, 80, 640, 480),
            container("vpc", "VPC", 160, 160, 400, 240, parent="cloud", borderStyle="dashed"),
        ],
        "connections": [
            {"id": "c1", "from": "user-1", "to": "ec2-1", "label": "HTTPS"},
            {"id": "c2", "from": "ec2-1", "to": "rds-1", "label": ""},
        ],
        "settings": {"zoomLevel": 100},
    }
