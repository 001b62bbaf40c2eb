"""Command-line interface: run the service or render a single placeholder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from typing_extensions import Annotated

from .app import app as web_app
from .app import get_fonts, get_settings
from .config import ConfigError, Configuration, load_config
from .options import parse_url
from .parser import PathSyntaxError
from .rendering import FontRegistry, engine
from .rendering.io import atomic_write_bytes

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="placeholder-api",
    help="Placeholder images from human-readable paths such as 300x200@2x/ff0000/fff.png.",
)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="YAML or JSON config file merged over the built-in defaults.",
        metavar="FILE",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose logging."),
]


def _configure_logging(verbose: bool, level: str = "INFO") -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level.upper(),
        format="[%(levelname)s] %(message)s",
    )


def _load_config(path: Path | None) -> Configuration:
    try:
        return load_config(path)
    except ConfigError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc


@app.command()
def serve(
    config: ConfigOption = None,
    host: Annotated[
        Optional[str],
        typer.Option("--host", help="Bind address (default: PLACEHOLDER_BIND_HOST or 0.0.0.0)."),
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option("--port", "-p", help="Bind port (default: PLACEHOLDER_BIND_PORT or 3000)."),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Serve placeholder images over HTTP."""
    updates: dict[str, object] = {}
    if config is not None:
        updates["config_path"] = config
    if host is not None:
        updates["bind_host"] = host
    if port is not None:
        updates["bind_port"] = port
    settings = get_settings().model_copy(update=updates)

    _configure_logging(verbose, settings.log_level)

    # Fail fast on a bad config file instead of on the first request
    try:
        get_fonts(settings=settings)
    except ConfigError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc

    web_app.dependency_overrides[get_settings] = lambda: settings
    logger.info(f"Serving placeholders on http://{settings.bind_host}:{settings.bind_port}")
    uvicorn.run(
        web_app,
        host=settings.bind_host,
        port=settings.bind_port,
        log_level="debug" if verbose else settings.log_level.lower(),
        workers=1,
    )


@app.command()
def render(
    path: Annotated[
        str,
        typer.Argument(help="Placeholder path with optional query, e.g. '300x200/red.png?text=Hi'."),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file (default: placeholder.<format>).",
            metavar="FILE",
        ),
    ] = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Render a single placeholder image to a file."""
    _configure_logging(verbose)

    configuration = _load_config(config)
    try:
        spec = parse_url(path, configuration)
    except PathSyntaxError as exc:
        raise typer.BadParameter(str(exc), param_hint="PATH") from exc

    fonts = FontRegistry.load(configuration)
    body = engine.render(spec, fonts)

    destination = output or Path(f"placeholder.{spec.format}")
    atomic_write_bytes(destination, body)
    logger.info(f"Rendered {spec.width}x{spec.height} {spec.format} → {destination}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
