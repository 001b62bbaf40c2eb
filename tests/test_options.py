"""Tests for merging parsed tokens and configuration into a RenderSpec."""

import math
import re

import pytest

from placeholder_api.config import Configuration
from placeholder_api.models import PathTokens, QueryTokens
from placeholder_api.options import build_spec, parse_url, resolve
from placeholder_api.parser import PathSyntaxError

HEX = re.compile(r"^#[0-9a-fA-F]{6}$")


class TestSize:
    def test_height_defaults_to_width(self, config):
        spec = resolve("300", "", config)
        assert spec.real_width == spec.real_height == 300

    @pytest.mark.parametrize(
        ("path", "expected"),
        [("300x200", (300, 200)), ("2000", (1000, 1000)), ("300x2000", (300, 1000)),
         ("5", (10, 10)), ("300x5", (300, 10)), ("1000x10", (1000, 10))],
    )
    def test_real_size_is_clamped(self, config, path, expected):
        spec = resolve(path, "", config)
        assert (spec.real_width, spec.real_height) == expected

    def test_scale_multiplies_size(self, config):
        spec = resolve("300x200@2x", "", config)
        assert (spec.width, spec.height) == (600, 400)
        assert (spec.real_width, spec.real_height) == (300, 200)

    def test_scale_is_clamped(self, config):
        assert resolve("300x200@3x", "", config).scale == config.max_scale

    def test_scaled_size_is_capped_at_max_size(self, config):
        spec = resolve("600x400@2x", "", config)
        assert spec.width == config.max_size
        assert spec.height == 800

    def test_min_size_is_not_reapplied_after_scaling(self, config):
        shrinking = config.model_copy(update={"default_scale": 0.5})
        spec = resolve("10", "", shrinking)
        assert spec.real_width == 10
        assert spec.width == 5

    def test_default_bounds(self):
        spec = resolve("5000x5", "", Configuration())
        assert (spec.real_width, spec.real_height) == (4000, 10)

    def test_oversized_numbers_are_clamped(self, config):
        huge = "9" * 5000
        spec = resolve(f"{huge}x{huge}@{huge}x", "", config)
        assert (spec.real_width, spec.real_height) == (1000, 1000)
        assert spec.scale == config.max_scale
        assert (spec.width, spec.height) == (1000, 1000)


class TestColors:
    def test_defaults_without_colors(self, config):
        spec = resolve("300x200", "", config)
        assert spec.background == config.default_background
        assert spec.foreground == config.default_foreground

    def test_contrast_foreground_for_explicit_background(self, config):
        assert resolve("300x200/red", "", config).foreground == "#ffffff"
        assert resolve("300x200/eee", "", config).foreground == "#000000"

    def test_explicit_foreground_wins(self, config):
        spec = resolve("300x200/red/blue", "", config)
        assert (spec.background, spec.foreground) == ("#ff0000", "#0000ff")

    @pytest.mark.parametrize(
        "path", ["300", "300x200/abc", "300x200/red/def.png", "300/000/fff/png", "300x200@2x"]
    )
    def test_colors_are_always_six_digit_hex(self, config, path):
        spec = resolve(path, "", config)
        assert HEX.match(spec.background)
        assert HEX.match(spec.foreground)


class TestFormat:
    def test_default_format(self, config):
        assert resolve("300x200", "", config).format == "svg"

    def test_path_format(self, config):
        assert resolve("300x200.png", "", config).format == "png"

    def test_unlisted_slash_format_falls_back_to_default(self, config):
        assert resolve("300x200/red/blue/bmp", "", config).format == config.default_format


class TestQuery:
    def test_default_text(self, config):
        assert resolve("200x200", "", config).text == "200 x 200"

    def test_default_text_uses_clamped_size(self, config):
        assert resolve("5x2000", "", config).text == "10 x 1000"

    def test_query_overrides(self, config):
        spec = resolve("300x200", "text=Hello%20World&font=verdana&fontsize=24", config)
        assert spec.text == "Hello World"
        assert spec.font == "verdana"
        assert spec.fontsize == 24

    def test_empty_text_is_kept(self, config):
        assert resolve("300x200", "text=", config).text == ""

    def test_unknown_font_uses_default(self, config):
        assert resolve("300x200", "font=invalidfont", config).font == config.default_font

    def test_invalid_fontsize_uses_derived_default(self, config):
        spec = resolve("300x200", "fontsize=abc", config)
        assert spec.fontsize == math.floor(max(spec.width, spec.height) * 0.1)

    def test_default_fontsize_uses_scaled_size(self):
        spec = resolve("100x100@2x", "", Configuration())
        assert spec.fontsize == 20


def test_example_a(config):
    spec = resolve("300x400@2x/000/fff.png", "", config)
    assert spec.background == "#000000"
    assert spec.foreground == "#ffffff"
    assert spec.scale == 2
    assert spec.format == "png"
    assert spec.width == min(600, config.max_size)
    assert spec.height == min(800, config.max_size)


def test_example_b(config):
    spec = resolve("200x200", "", config)
    assert spec.text == "200 x 200"
    assert spec.font == config.default_font
    assert spec.fontsize == math.floor(max(spec.width, spec.height) * 0.1)


def test_example_c(config):
    spec = resolve("200x200", "?fontsize=abc", config)
    assert spec.fontsize == 20


def test_example_d(config):
    with pytest.raises(PathSyntaxError):
        resolve("300x200/png/red", "", config)


def test_resolution_is_deterministic(config):
    first = resolve("300x200@2x/red.png", "text=Hi", config)
    second = resolve("300x200@2x/red.png", "text=Hi", config)
    assert first == second


def test_build_spec_from_tokens(config):
    spec = build_spec(PathTokens(width=50, background="#000000"), QueryTokens(), config)
    assert spec.foreground == "#ffffff"
    assert (spec.width, spec.height) == (50, 50)


class TestParseURL:
    def test_relative_url_with_query(self, config):
        spec = parse_url("/300x200?font=verdana", config)
        assert spec.font == "verdana"

    def test_absolute_url(self, config):
        spec = parse_url("https://example.com/300x200.png?text=Hi", config)
        assert (spec.format, spec.text) == ("png", "Hi")

    def test_fragment_is_ignored(self, config):
        spec = parse_url("300x200/#ggg", config)
        assert spec.background == config.default_background
        assert spec.foreground == config.default_foreground

    def test_invalid_path(self, config):
        with pytest.raises(PathSyntaxError):
            parse_url("/invalidx100.png", config)
