"""Placeholder rendering: SVG documents and raster encoding."""

from __future__ import annotations

import io
import logging
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from markupsafe import Markup
from PIL import Image, ImageDraw, ImageFont

from ..colors import hex_to_rgb
from ..formats import PIL_FORMATS
from ..models import RenderSpec
from .fonts import FontRegistry

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

FALLBACK_FONT_FAMILY = "Arial"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        undefined=StrictUndefined,
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_glyphs(spec: RenderSpec, fonts: FontRegistry) -> Markup:
    """Render ``spec.text`` as an SVG path, or as escaped ``<text>`` fallback.

    Args:
        spec: Resolved render specification
        fonts: Preloaded fonts

    Returns:
        SVG fragment safe to embed in the document
    """
    path = fonts.text_path(spec)
    if path is None:
        logger.debug(f"Font {spec.font!r} not loaded, using text fallback")

    template = _environment().get_template("glyphs.svg.j2")
    return Markup(
        template.render(
            path=path,
            foreground=spec.foreground,
            family=FALLBACK_FONT_FAMILY,
            fontsize=spec.fontsize,
            text=spec.text,
        ).strip()
    )


def render_svg(spec: RenderSpec, fonts: FontRegistry) -> str:
    template = _environment().get_template("document.svg.j2")
    return template.render(
        width=spec.width,
        height=spec.height,
        background=spec.background,
        glyphs=render_glyphs(spec, fonts),
    )


def _raster_font(
    spec: RenderSpec, fonts: FontRegistry
) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    # FreeType rejects huge pixel sizes
    size = max(min(spec.fontsize, max(spec.width, spec.height)), 1)
    path = fonts.path_for(spec.font)
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size)
        except OSError as exc:
            logger.warning(f"Cannot open {path} for rasterizing: {exc}")
    try:
        return ImageFont.load_default(size=size)
    except OSError as exc:
        logger.warning(f"Cannot size default font to {size}px: {exc}")
        return ImageFont.load_default()


def render_raster(spec: RenderSpec, fonts: FontRegistry) -> bytes:
    """Draw the placeholder with Pillow and encode it in ``spec.format``."""
    image = Image.new("RGB", (spec.width, spec.height), hex_to_rgb(spec.background))
    draw = ImageDraw.Draw(image)
    font = _raster_font(spec, fonts)

    left, top, right, bottom = draw.textbbox((0, 0), spec.text, font=font)
    position = (
        (spec.width - (right - left)) / 2 - left,
        (spec.height - (bottom - top)) / 2 - top,
    )
    draw.text(position, spec.text, fill=hex_to_rgb(spec.foreground), font=font)

    buffer = io.BytesIO()
    image.save(buffer, format=PIL_FORMATS[spec.format])
    return buffer.getvalue()


def render(spec: RenderSpec, fonts: FontRegistry) -> bytes:
    """Render a placeholder; SVG markup is returned without encoding.

    Args:
        spec: Resolved render specification
        fonts: Preloaded fonts

    Returns:
        Encoded image bytes
    """
    if spec.format == "svg":
        return render_svg(spec, fonts).encode("utf-8")
    return render_raster(spec, fonts)
