"""Glyph rendering and image encoding for resolved placeholders."""

from .engine import render, render_glyphs, render_raster, render_svg
from .fonts import FontRegistry

__all__ = ["FontRegistry", "render", "render_glyphs", "render_raster", "render_svg"]
