from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, ClassVar
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, Field, HttpUrl, TypeAdapter, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.sharing.lz_codec import DEFAULT_MAX_SIZE_KB, DEFAULT_MAX_URL_LENGTH
from domain.models import DEFAULT_ZOOM_LEVEL
from domain.services.hierarchy import DEFAULT_GRID_SIZE, DEFAULT_ITEM_SIZE

DEFAULT_CONFIG_PATH = Path("config/archboard.yaml")
CONFIG_PATH_ENV = "ARCHBOARD_CONFIG_PATH"

_HTTP_URL_ADAPTER = TypeAdapter(HttpUrl)


def _validate_base_url(value: str) -> str:
    normalized = str(value or "").strip()
    _HTTP_URL_ADAPTER.validate_python(normalized)
    return normalized.split("?", 1)[0].split("#", 1)[0]


BaseUrl = Annotated[str, AfterValidator(_validate_base_url)]


class ShareSettings(BaseModel):
    base_url: BaseUrl = "http://localhost:5173/"
    max_url_length: int = Field(default=DEFAULT_MAX_URL_LENGTH, gt=0)
    max_size_kb: float = Field(default=DEFAULT_MAX_SIZE_KB, gt=0)


class CanvasSettings(BaseModel):
    grid_size: int = Field(default=DEFAULT_GRID_SIZE, gt=0)
    item_size: int = Field(default=DEFAULT_ITEM_SIZE, gt=0)
    snap_to_grid: bool = True
    default_zoom_level: int = DEFAULT_ZOOM_LEVEL

    @field_validator("default_zoom_level", mode="after")
    @classmethod
    def ensure_positive_zoom(cls, value: int) -> int:
        if value <= 0:
            msg = "canvas.default_zoom_level must be positive"
            raise ValueError(msg)
        return value


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ARCHBOARD_", env_nested_delimiter="__")

    share: ShareSettings = ShareSettings()
    canvas: CanvasSettings = CanvasSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def resolve_config_path(config_path: Path | None = None) -> Path | None:
    if config_path is not None:
        return config_path
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None


def load_settings(config_path: Path | None = None) -> AppSettings:
    yaml_path = resolve_config_path(config_path)
    if yaml_path is not None and not yaml_path.is_file():
        msg = f"Config file not found: {yaml_path}"
        raise FileNotFoundError(msg)

    # The YAML source is chosen per call; restore the class default afterwards.
    previous, AppSettings._yaml_path = AppSettings._yaml_path, yaml_path
    try:
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous


def is_absolute_url(value: str) -> bool:
    raw = str(value or "").strip()
    if not raw:
        return False
    parsed = urlparse(raw)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)
