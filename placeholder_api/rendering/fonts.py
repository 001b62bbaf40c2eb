"""Font preloading and text-to-path conversion."""

from __future__ import annotations

import logging
from pathlib import Path

from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont, TTLibError

from ..config import Configuration
from ..models import RenderSpec

logger = logging.getLogger(__name__)


class FontRegistry:
    """Fonts preloaded at startup, keyed by their configured font key.

    The registry is read-only once built so it can be shared by request
    workers.
    """

    def __init__(self, fonts: dict[str, tuple[Path, TTFont]] | None = None) -> None:
        self._fonts = dict(fonts or {})

    @classmethod
    def load(cls, config: Configuration) -> "FontRegistry":
        """Load every configured font, skipping the ones that fail.

        Args:
            config: Configuration with the font table and font directory

        Returns:
            Registry holding the fonts that could be loaded
        """
        fonts: dict[str, tuple[Path, TTFont]] = {}
        for key in config.fonts:
            path = config.font_path(key)
            if path is None:
                continue
            try:
                font = TTFont(path)
                font.ensureDecompiled()
            except (OSError, TTLibError) as exc:
                logger.warning(f"Failed to load font {key!r} from {path}: {exc}")
                continue
            fonts[key] = (path, font)

        logger.info(f"Loaded {len(fonts)} of {len(config.fonts)} font(s)")
        return cls(fonts)

    def __contains__(self, key: object) -> bool:
        return key in self._fonts

    def __len__(self) -> int:
        return len(self._fonts)

    def path_for(self, key: str) -> Path | None:
        entry = self._fonts.get(key)
        return entry[0] if entry else None

    def text_path(self, spec: RenderSpec) -> str | None:
        """Convert ``spec.text`` to SVG path data centered on the canvas.

        Returns None when ``spec.font`` is not loaded.
        """
        entry = self._fonts.get(spec.font)
        if entry is None:
            return None
        font = entry[1]

        cmap = font.getBestCmap() or {}
        glyph_set = font.getGlyphSet()
        metrics = font["hmtx"]
        units = font["head"].unitsPerEm
        hhea = font["hhea"]

        factor = spec.fontsize / units
        names = [cmap.get(ord(ch), ".notdef") for ch in spec.text]
        advance = sum(metrics[name][0] for name in names) * factor

        x = spec.width // 2 - advance / 2
        # middle anchor: center the ascent/descent box on the canvas center
        baseline = spec.height // 2 + (hhea.ascent + hhea.descent) * factor / 2

        pen = SVGPathPen(glyph_set)
        for name in names:
            glyph_set[name].draw(TransformPen(pen, (factor, 0, 0, -factor, x, baseline)))
            x += metrics[name][0] * factor

        return pen.getCommands()
