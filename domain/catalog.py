from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from domain.catalog_tables import (
    DEFAULT_GROUP_ICON,
    DEFAULT_GROUP_STYLE_ROW,
    DEFAULT_SERVICE_ICON,
    GROUP_ICON_ROWS,
    GROUP_STYLE_ROWS,
    ICON_SERVICE_ROWS,
    LABEL_SERVICE_ROWS,
    SERVICE_ICONS,
    ServiceRow,
)
from domain.models import ServiceNode

UNKNOWN_SERVICE_ID = "unknown"
UNKNOWN_SERVICE_NAME = "Unknown Service"
UNKNOWN_SERVICE_COLOR = "#6B7280"
UNKNOWN_SERVICE_CATEGORY = "Other"


@dataclass(frozen=True)
class ServiceInfo:
    service_id: str
    name: str
    color: str
    category: str

    @classmethod
    def from_row(cls, row: ServiceRow) -> ServiceInfo:
        service_id, name, color, category = row
        return cls(service_id=service_id, name=name, color=color, category=category)


@dataclass(frozen=True)
class GroupStyle:
    color: str
    border_style: str


@dataclass(frozen=True)
class GroupStyleRule:
    keywords: tuple[str, ...]
    style: GroupStyle

    def matches(self, label: str) -> bool:
        lowered = label.lower()
        return any(keyword in lowered for keyword in self.keywords)


@dataclass(frozen=True)
class ServiceCatalog:
    """Static lookup data used to classify imported labels and pick export icons."""

    label_services: Mapping[str, ServiceInfo]
    icon_services: Mapping[str, ServiceInfo]
    service_icons: Mapping[str, str]
    group_rules: Sequence[GroupStyleRule]
    default_group_style: GroupStyle
    group_icon_rules: Sequence[tuple[tuple[str, ...], str]] = field(default_factory=tuple)
    default_service_icon: str = DEFAULT_SERVICE_ICON
    default_group_icon: str = DEFAULT_GROUP_ICON

    def classify_node(self, label: str, icon: str) -> ServiceInfo:
        if label and label in self.label_services:
            return self.label_services[label]
        service = self.icon_services.get(icon.strip())
        if service is not None:
            return service
        return ServiceInfo(
            service_id=UNKNOWN_SERVICE_ID,
            name=label or UNKNOWN_SERVICE_NAME,
            color=UNKNOWN_SERVICE_COLOR,
            category=UNKNOWN_SERVICE_CATEGORY,
        )

    def classify_group(self, label: str) -> GroupStyle:
        for rule in self.group_rules:
            if rule.matches(label):
                return rule.style
        return self.default_group_style

    def icon_for(self, service_name: str) -> str:
        return self.service_icons.get(service_name, self.default_service_icon)

    def group_icon(self, group_name: str, first_node: Optional[ServiceNode] = None) -> str:
        lowered = group_name.lower()
        for keywords, icon in self.group_icon_rules:
            if any(keyword in lowered for keyword in keywords):
                return icon
        if first_node is not None:
            return self.icon_for(first_node.base_name)
        return self.default_group_icon


def build_default_catalog() -> ServiceCatalog:
    return ServiceCatalog(
        label_services={
            label: ServiceInfo.from_row(row) for label, row in LABEL_SERVICE_ROWS.items()
        },
        icon_services={icon: ServiceInfo.from_row(row) for icon, row in ICON_SERVICE_ROWS.items()},
        service_icons=dict(SERVICE_ICONS),
        group_rules=tuple(
            GroupStyleRule(keywords=keywords, style=GroupStyle(color, border_style))
            for keywords, color, border_style in GROUP_STYLE_ROWS
        ),
        default_group_style=GroupStyle(*DEFAULT_GROUP_STYLE_ROW),
        group_icon_rules=tuple(GROUP_ICON_ROWS),
    )


DEFAULT_CATALOG = build_default_catalog()
