"""Tests for color token resolution and contrast selection."""

import pytest

from placeholder_api.colors import NAMED_COLORS, contrast_color, hex_to_rgb, resolve_color

COLORS = {"red": "#ff0000", "blue": "00f"}


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("abc", "#aabbcc"),
        ("#abc", "#aabbcc"),
        ("ff8800", "#ff8800"),
        ("#ff8800", "#ff8800"),
        ("000", "#000000"),
    ],
)
def test_hex_tokens_are_normalized(token, expected):
    assert resolve_color(token, COLORS) == expected


def test_color_names_resolve_through_table():
    assert resolve_color("red", COLORS) == "#ff0000"
    assert resolve_color("blue", COLORS) == "#0000ff"


def test_named_color_table_stores_short_hex():
    assert resolve_color("aqua", NAMED_COLORS) == "#00ffff"
    assert resolve_color("rebeccapurple", NAMED_COLORS) == "#663399"


@pytest.mark.parametrize("token", ["invalid", "abcd", "abcde", "ggg", "", "purple"])
def test_unresolved_tokens_return_none(token):
    assert resolve_color(token, COLORS) is None


def test_names_are_case_sensitive():
    assert resolve_color("Red", COLORS) is None


@pytest.mark.parametrize(
    ("background", "expected"),
    [
        ("#000000", "#ffffff"),
        ("#ffffff", "#000000"),
        ("#ff0000", "#ffffff"),
        ("#00ff00", "#000000"),
        ("#0000ff", "#ffffff"),
        ("#818181", "#000000"),
        ("#7e7e7e", "#ffffff"),
        ("#dddddd", "#000000"),
    ],
)
def test_contrast_color_uses_luminance_threshold(background, expected):
    assert contrast_color(background) == expected


def test_hex_to_rgb():
    assert hex_to_rgb("#ff8000") == (255, 128, 0)
    assert hex_to_rgb("#abc") == (170, 187, 204)
