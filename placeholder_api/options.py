"""Merge path tokens, query tokens and configuration into a RenderSpec."""

from __future__ import annotations

import logging
import math
from urllib.parse import urlsplit

from .colors import contrast_color
from .config import Configuration
from .models import PathTokens, QueryTokens, RenderSpec
from .parser import parse_path, parse_query

logger = logging.getLogger(__name__)


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(min(upper, value), lower)


def build_spec(path: PathTokens, query: QueryTokens, config: Configuration) -> RenderSpec:
    """Apply the derivation rules to already parsed tokens.

    Post-scale dimensions are capped at ``max_size`` only; ``min_size`` is not
    re-applied after scaling.
    """
    fmt = path.format if path.format is not None else config.default_format
    if fmt not in config.formats and fmt != config.default_format:
        logger.debug(f"Format {fmt!r} is not allowed, using {config.default_format!r}")
        fmt = config.default_format

    background = path.background if path.background is not None else config.default_background
    if path.foreground is not None:
        foreground = path.foreground
    elif path.background is None:
        foreground = config.default_foreground
    else:
        foreground = contrast_color(background)

    scale = _clamp(
        path.scale if path.scale is not None else config.default_scale,
        config.min_scale,
        config.max_scale,
    )
    real_width = int(_clamp(path.width, config.min_size, config.max_size))
    real_height = int(
        _clamp(
            path.height if path.height is not None else path.width,
            config.min_size,
            config.max_size,
        )
    )
    width = int(min(real_width * scale, config.max_size))
    height = int(min(real_height * scale, config.max_size))

    text = query.text if query.text is not None else f"{real_width} x {real_height}"
    font = query.font if query.font is not None else config.default_font
    fontsize = (
        query.fontsize
        if query.fontsize is not None
        else math.floor(max(width, height) * 0.1)
    )

    return RenderSpec(
        format=fmt,
        background=background,
        foreground=foreground,
        real_width=real_width,
        real_height=real_height,
        width=width,
        height=height,
        scale=scale,
        text=text,
        font=font,
        fontsize=fontsize,
    )


def resolve(path: str, query: str, config: Configuration) -> RenderSpec:
    """Resolve a request path and query string into a RenderSpec.

    Args:
        path: Request pathname
        query: Raw query string (leading ``?`` optional)
        config: Configuration snapshot

    Returns:
        Resolved render specification

    Raises:
        PathSyntaxError: If the path is malformed; nothing is resolved then
    """
    path_tokens = parse_path(path, config)
    query_tokens = parse_query(query, config)
    spec = build_spec(path_tokens, query_tokens, config)
    logger.debug(f"Resolved {path!r} to {spec.width}x{spec.height} {spec.format}")
    return spec


def parse_url(url: str, config: Configuration) -> RenderSpec:
    """Resolve a relative or absolute URL; the fragment is ignored."""
    parts = urlsplit(url)
    return resolve(parts.path, parts.query, config)
