"""Per-request models produced by the parsers and the option resolver."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PathTokens(BaseModel):
    """Raw values read from the request path."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0, description="Requested width")
    height: int | None = Field(default=None, description="Requested height")
    scale: int | None = Field(default=None, description="Retina scale from @Nx")
    background: str | None = Field(default=None, description="Background as #rrggbb")
    foreground: str | None = Field(default=None, description="Foreground as #rrggbb")
    format: str | None = Field(default=None, description="Output format token")


class QueryTokens(BaseModel):
    """Optional overrides read from the query string."""

    model_config = ConfigDict(frozen=True)

    font: str | None = None
    fontsize: int | None = None
    text: str | None = None


class RenderSpec(BaseModel):
    """Fully resolved parameters for one placeholder image."""

    model_config = ConfigDict(frozen=True)

    format: str
    background: str
    foreground: str
    real_width: int = Field(..., description="Clamped width before scaling")
    real_height: int = Field(..., description="Clamped height before scaling")
    width: int = Field(..., description="Output width in pixels")
    height: int = Field(..., description="Output height in pixels")
    scale: float
    text: str
    font: str
    fontsize: int
