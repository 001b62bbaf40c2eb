"""Placeholder configuration: defaults, schema and file loading."""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .colors import NAMED_COLORS, resolve_color
from .formats import SUPPORTED_FORMATS

logger = logging.getLogger(__name__)

DEFAULT_FONTS: dict[str, str] = {
    "lato": "Lato-Bold.ttf",
    "lora": "Lora-Bold.ttf",
    "montserrat": "Montserrat-Bold.ttf",
    "open-sans": "OpenSans-Bold.ttf",
    "oswald": "Oswald-Bold.ttf",
    "playfair-display": "PlayfairDisplay-Bold.ttf",
    "pt-sans": "PTSans-Bold.ttf",
    "raleway": "Raleway-Bold.ttf",
    "roboto": "Roboto-Bold.ttf",
    "source-sans-3": "SourceSans3-Bold.ttf",
}


class ConfigError(Exception):
    """Raised when the placeholder configuration cannot be loaded."""


class Configuration(BaseModel):
    """Read-only snapshot of allow-lists, bounds and defaults.

    Field names are snake_case in Python and camelCase in config files.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    colors: Mapping[str, str] = Field(
        default_factory=lambda: MappingProxyType(dict(NAMED_COLORS)),
        description="Color name to hex table",
    )
    formats: frozenset[str] = Field(
        default=frozenset(SUPPORTED_FORMATS), description="Allowed output formats"
    )
    fonts: Mapping[str, str] = Field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_FONTS)),
        description="Font key to font file (relative to fonts_dir)",
    )
    fonts_dir: Path = Field(default=Path("fonts"), description="Font directory")
    default_format: str = "svg"
    default_background: str = "#dddddd"
    default_foreground: str = "#999999"
    default_scale: float = Field(default=1, gt=0)
    min_scale: float = Field(default=1, gt=0)
    max_scale: float = Field(default=3, gt=0)
    min_size: int = Field(default=10, gt=0)
    max_size: int = Field(default=4000, gt=0)
    default_font: str = "lato"

    @field_validator("colors", "fonts")
    @classmethod
    def _read_only(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_validator("formats")
    @classmethod
    def _check_formats(cls, value: frozenset[str]) -> frozenset[str]:
        unsupported = sorted(value - set(SUPPORTED_FORMATS))
        if unsupported:
            raise ValueError(f"Unsupported formats: {', '.join(unsupported)}")
        return value

    @field_validator("default_format")
    @classmethod
    def _check_default_format(cls, value: str) -> str:
        if value not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported format: {value!r}")
        return value

    @field_validator("default_background", "default_foreground")
    @classmethod
    def _normalize_color(cls, value: str, info: ValidationInfo) -> str:
        color = resolve_color(value, info.data.get("colors", NAMED_COLORS))
        if color is None:
            raise ValueError(f"Invalid color: {value!r}")
        return color

    @model_validator(mode="after")
    def _check_bounds(self) -> "Configuration":
        if self.min_size > self.max_size:
            raise ValueError("minSize must not exceed maxSize")
        if self.min_scale > self.max_scale:
            raise ValueError("minScale must not exceed maxScale")
        return self

    def font_path(self, key: str) -> Path | None:
        filename = self.fonts.get(key)
        if filename is None:
            return None
        return self.fonts_dir / filename


def _check_fonts(config: Configuration, data: dict[str, Any]) -> None:
    font_keys = {"defaultFont", "default_font", "fonts"}
    if font_keys & data.keys() and config.default_font not in config.fonts:
        raise ConfigError(
            f"Font '{config.default_font}' is not defined in the 'fonts' option"
        )

    if "fonts" not in data:
        return

    for key in config.fonts:
        path = config.font_path(key)
        if path is not None and not path.exists():
            raise ConfigError(f"Font '{key}' file '{path}' does not exist")


def load_config(path: Path | None = None) -> Configuration:
    """Load the configuration, merging an optional YAML/JSON file over defaults.

    Args:
        path: Config file path, or None for the built-in defaults

    Returns:
        Validated configuration snapshot

    Raises:
        ConfigError: If the file is missing, malformed or fails validation
    """
    if path is None:
        logger.debug("No config file given, using defaults")
        return Configuration()

    if not path.exists():
        raise ConfigError(f"Config file not found at {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file format: {path}")

    colors = data.get("colors")
    if isinstance(colors, dict):
        data = {**data, "colors": {**NAMED_COLORS, **colors}}

    try:
        config = Configuration.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file options in {path}: {exc}") from exc

    _check_fonts(config, data)

    logger.info(f"Loaded configuration from {path}")
    return config
