"""Output format allow-list handling."""

from __future__ import annotations

from typing import AbstractSet

SUPPORTED_FORMATS: tuple[str, ...] = ("svg", "png", "jpg", "jpeg", "gif", "webp")

MEDIA_TYPES: dict[str, str] = {
    "svg": "image/svg+xml",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
}

# Pillow encoder names for the raster formats
PIL_FORMATS: dict[str, str] = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "gif": "GIF",
    "webp": "WEBP",
}


class UnknownFormatError(ValueError):
    """Raised when a format token is not in the configured allow-list."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown format: {token!r}")
        self.token = token


def validate_format(token: str, formats: AbstractSet[str]) -> str:
    if token not in formats:
        raise UnknownFormatError(token)
    return token


def media_type(fmt: str) -> str:
    return MEDIA_TYPES.get(fmt, "application/octet-stream")
