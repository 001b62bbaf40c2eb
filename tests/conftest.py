"""Shared pytest fixtures for the placeholder_api test suite.

Fixtures:
    config: Small synthetic Configuration with a handful of colors and fonts
    font_file: Tiny TrueType font built with fontTools (box-shaped glyphs)
    client: FastAPI test client wired to the default configuration without fonts
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from placeholder_api.app import app, get_configuration, get_fonts
from placeholder_api.config import Configuration
from placeholder_api.rendering import FontRegistry

FONT_CHARS = "0123456789 xHi"


@pytest.fixture
def config():
    return Configuration(
        colors={"red": "#ff0000", "green": "#00ff00", "blue": "#0000ff"},
        formats={"png", "jpg"},
        fonts={"arial": "Arial.ttf", "verdana": "Verdana.ttf"},
        default_format="svg",
        default_background="#ffffff",
        default_foreground="#000000",
        default_scale=1,
        min_scale=0.5,
        max_scale=2,
        min_size=10,
        max_size=1000,
        default_font="arial",
    )


def _box_glyph(advance):
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((advance - 50, 700))
    pen.lineTo((advance - 50, 0))
    pen.closePath()
    return pen.glyph()


@pytest.fixture
def font_file(tmp_path) -> Path:
    """Build a minimal TrueType font where every glyph is a filled box."""
    names = {ch: f"uni{ord(ch):04X}" for ch in FONT_CHARS}
    glyph_order = [".notdef", *names.values()]

    glyphs = {name: _box_glyph(600) for name in glyph_order}
    glyphs[names[" "]] = TTGlyphPen(None).glyph()

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap({ord(ch): name for ch, name in names.items()})
    builder.setupGlyf(glyphs)
    builder.setupHorizontalMetrics({name: (600, 50) for name in glyph_order})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "Boxes", "styleName": "Bold"})
    builder.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    builder.setupPost()

    path = tmp_path / "Boxes-Bold.ttf"
    builder.save(str(path))
    return path


@pytest.fixture
def client(tmp_path):
    configuration = Configuration(fonts_dir=tmp_path / "missing-fonts")
    app.dependency_overrides[get_configuration] = lambda: configuration
    app.dependency_overrides[get_fonts] = lambda: FontRegistry()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
