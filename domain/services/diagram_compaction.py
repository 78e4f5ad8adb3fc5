"""Default-value elision for the share-link payload.

``optimize`` drops every field whose value equals the documented default and
``restore`` puts the defaults back, so ``restore(optimize(d)) == d`` holds for
any diagram independently of the compression step.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from domain.models import BORDER_SOLID, DEFAULT_ZOOM_LEVEL, Diagram

Payload = dict[str, Any]

COLLECTION_KEYS = ("boardItems", "containers", "connections")
NODE_KEYS = ("id", "name", "color", "category", "x", "y", "type")
GROUP_KEYS = ("id", "name", "color", "x", "y", "width", "height", "type")
CONNECTION_KEYS = ("id", "from", "to")

RESTORE_DEFAULTS: dict[str, dict[str, Any]] = {
    "boardItems": {"customName": None, "parentContainerId": None},
    "containers": {"borderStyle": BORDER_SOLID, "parentContainerId": None},
    "connections": {"label": ""},
    "settings": {"zoomLevel": DEFAULT_ZOOM_LEVEL},
}


def optimize(data: Union[Diagram, Mapping[str, Any]]) -> Payload:
    source = data.to_wire() if isinstance(data, Diagram) else data
    optimized: Payload = {
        "version": source.get("version"),
        "timestamp": source.get("timestamp"),
        "boardItems": [_optimize_node(item) for item in source.get("boardItems") or []],
        "containers": [_optimize_group(item) for item in source.get("containers") or []],
        "connections": [_optimize_connection(item) for item in source.get("connections") or []],
    }
    zoom_level = (source.get("settings") or {}).get("zoomLevel")
    if zoom_level and zoom_level != DEFAULT_ZOOM_LEVEL:
        optimized["settings"] = {"zoomLevel": zoom_level}
    return optimized


def has_collections(data: Mapping[str, Any]) -> bool:
    return all(isinstance(data.get(key), list) for key in COLLECTION_KEYS)


def restore(compact: Mapping[str, Any]) -> Diagram:
    if not isinstance(compact, Mapping):
        msg = "Diagram payload must be an object"
        raise ValueError(msg)
    settings = compact.get("settings") or {}
    if not isinstance(settings, Mapping):
        msg = "Diagram settings must be an object"
        raise ValueError(msg)
    payload: Payload = {
        "version": compact.get("version"),
        "timestamp": compact.get("timestamp"),
        "boardItems": _with_defaults(compact.get("boardItems"), "boardItems"),
        "containers": _with_defaults(compact.get("containers"), "containers"),
        "connections": _with_defaults(compact.get("connections"), "connections"),
        "settings": {
            "zoomLevel": settings.get("zoomLevel")
            or RESTORE_DEFAULTS["settings"]["zoomLevel"]
        },
    }
    if payload["version"] is None:
        payload.pop("version")
    if payload["timestamp"] is None:
        payload.pop("timestamp")
    return Diagram.model_validate(payload)


def _optimize_node(item: Mapping[str, Any]) -> Payload:
    optimized = _pick(item, NODE_KEYS)
    custom_name = item.get("customName")
    if custom_name and custom_name != item.get("name"):
        optimized["customName"] = custom_name
    if item.get("parentContainerId"):
        optimized["parentContainerId"] = item["parentContainerId"]
    return optimized


def _optimize_group(item: Mapping[str, Any]) -> Payload:
    optimized = _pick(item, GROUP_KEYS)
    border_style = item.get("borderStyle")
    if border_style and border_style != BORDER_SOLID:
        optimized["borderStyle"] = border_style
    if item.get("parentContainerId"):
        optimized["parentContainerId"] = item["parentContainerId"]
    return optimized


def _optimize_connection(item: Mapping[str, Any]) -> Payload:
    optimized = _pick(item, CONNECTION_KEYS)
    label = item.get("label")
    if isinstance(label, str) and label.strip():
        optimized["label"] = label
    return optimized


def _pick(item: Mapping[str, Any], keys: tuple[str, ...]) -> Payload:
    return {key: item[key] for key in keys if key in item}


def _with_defaults(items: Any, collection: str) -> list[Payload]:
    if items is None:
        return []
    if not isinstance(items, list):
        msg = f"{collection} must be a list"
        raise ValueError(msg)
    defaults = RESTORE_DEFAULTS[collection]
    restored: list[Payload] = []
    for item in items:
        if not isinstance(item, Mapping):
            msg = f"{collection} entries must be objects"
            raise ValueError(msg)
        entry = dict(item)
        for key, default in defaults.items():
            if not entry.get(key):
                entry[key] = default
        restored.append(entry)
    return restored
