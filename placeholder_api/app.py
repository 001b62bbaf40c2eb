from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.responses import PlainTextResponse

from .config import Configuration, load_config
from .formats import media_type
from .options import resolve
from .parser import PathSyntaxError
from .rendering import FontRegistry, render
from .settings import Settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


@lru_cache(maxsize=4)
def get_configuration(settings: Settings = Depends(get_settings)) -> Configuration:
    return load_config(settings.config_path)


@lru_cache(maxsize=4)
def get_fonts(settings: Settings = Depends(get_settings)) -> FontRegistry:
    return FontRegistry.load(get_configuration(settings=settings))


app = FastAPI(title="Placeholder API", version="0.1.0")


@app.get("/", response_class=PlainTextResponse)
async def health() -> str:
    return "OK"


@app.get("/favicon.ico", response_class=PlainTextResponse)
async def favicon() -> PlainTextResponse:
    return PlainTextResponse("No favicon", status_code=status.HTTP_404_NOT_FOUND)


@app.get("/{spec_path:path}")
def placeholder(
    spec_path: str,
    request: Request,
    settings: Settings = Depends(get_settings),
    config: Configuration = Depends(get_configuration),
    fonts: FontRegistry = Depends(get_fonts),
) -> Response:
    """
    Render the placeholder described by the request path and query string.
    """
    # parse the path as sent so an encoded "/" is not taken for a separator
    raw_path = request.scope.get("raw_path")
    pathname = raw_path.decode("latin-1") if raw_path else spec_path
    try:
        spec = resolve(pathname, request.url.query, config)
    except PathSyntaxError as exc:
        logger.debug(f"Rejected {spec_path!r}: {exc}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid URL") from exc

    try:
        body = render(spec, fonts)
    except (OSError, ValueError, KeyError) as exc:
        logger.exception(f"Error rendering image for {spec_path!r}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from exc

    return Response(
        content=body,
        media_type=media_type(spec.format),
        headers={"Cache-Control": f"public, max-age={settings.cache_max_age}, immutable"},
    )


__all__ = ["app", "get_configuration", "get_fonts", "get_settings"]
