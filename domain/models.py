from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

FORMAT_VERSION = "1.0"
DEFAULT_ZOOM_LEVEL = 100
BORDER_SOLID = "solid"
BORDER_DASHED = "dashed"
BORDER_DOTTED = "dotted"
BORDER_STYLES = (BORDER_SOLID, BORDER_DASHED, BORDER_DOTTED)

Number = Union[int, float]

SERVICE_TYPE = "service"
CONTAINER_TYPE = "container"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ServiceNode(_WireModel):
    id: str = Field(..., min_length=1)
    base_name: str = Field(..., alias="name")
    custom_name: Optional[str] = Field(default=None, alias="customName")
    color: str = ""
    category: str = ""
    x: Number = 0
    y: Number = 0
    parent_container_id: Optional[str] = Field(default=None, alias="parentContainerId")
    type: str = SERVICE_TYPE

    @field_validator("parent_container_id", mode="before")
    @classmethod
    def blank_parent_is_root(cls, value: object) -> object:
        return value or None

    @model_validator(mode="after")
    def drop_redundant_override(self) -> "ServiceNode":
        if not self.custom_name or self.custom_name == self.base_name:
            self.custom_name = None
        return self

    @property
    def display_name(self) -> str:
        return self.custom_name or self.base_name


class ContainerGroup(_WireModel):
    id: str = Field(..., min_length=1)
    name: str
    color: str = ""
    border_style: str = Field(default=BORDER_SOLID, alias="borderStyle")
    x: Number = 0
    y: Number = 0
    width: Number = 0
    height: Number = 0
    parent_container_id: Optional[str] = Field(default=None, alias="parentContainerId")
    type: str = CONTAINER_TYPE

    @field_validator("border_style", mode="before")
    @classmethod
    def ensure_border_style(cls, value: object) -> str:
        if not value:
            return BORDER_SOLID
        style = str(value)
        if style not in BORDER_STYLES:
            msg = f"Unsupported border style: {style}"
            raise ValueError(msg)
        return style

    @field_validator("parent_container_id", mode="before")
    @classmethod
    def blank_parent_is_root(cls, value: object) -> object:
        return value or None

    @property
    def area(self) -> float:
        return self.width * self.height


class Connection(_WireModel):
    id: str = Field(..., min_length=1)
    from_id: str = Field(..., alias="from")
    to_id: str = Field(..., alias="to")
    label: str = ""

    @field_validator("label", mode="before")
    @classmethod
    def blank_label_is_empty(cls, value: object) -> str:
        if value is None or not str(value).strip():
            return ""
        return str(value)


class DiagramSettings(_WireModel):
    zoom_level: Number = Field(default=DEFAULT_ZOOM_LEVEL, alias="zoomLevel")

    @field_validator("zoom_level", mode="before")
    @classmethod
    def missing_zoom_is_default(cls, value: object) -> object:
        return value or DEFAULT_ZOOM_LEVEL


class Diagram(_WireModel):
    version: str = FORMAT_VERSION
    timestamp: int = 0
    nodes: List[ServiceNode] = Field(default_factory=list, alias="boardItems")
    groups: List[ContainerGroup] = Field(default_factory=list, alias="containers")
    connections: List[Connection] = Field(default_factory=list)
    settings: DiagramSettings = Field(default_factory=DiagramSettings)

    @field_validator("settings", mode="before")
    @classmethod
    def missing_settings_are_default(cls, value: object) -> object:
        return value or {}

    def node_by_id(self, node_id: str) -> Optional[ServiceNode]:
        return next((node for node in self.nodes if node.id == node_id), None)

    def group_by_id(self, group_id: Optional[str]) -> Optional[ContainerGroup]:
        if not group_id:
            return None
        return next((group for group in self.groups if group.id == group_id), None)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
