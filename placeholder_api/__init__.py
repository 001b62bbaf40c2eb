"""Placeholder API - placeholder images from human-readable request paths.

Parses paths such as ``300x200@2x/ff0000/fff.png?text=Hi`` into a resolved
render specification and serves the rendered image.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .config import ConfigError, Configuration, load_config
from .formats import UnknownFormatError
from .models import PathTokens, QueryTokens, RenderSpec
from .options import parse_url, resolve
from .parser import PathSyntaxError, parse_path, parse_query

__all__ = [
    "ConfigError",
    "Configuration",
    "PathSyntaxError",
    "PathTokens",
    "QueryTokens",
    "RenderSpec",
    "UnknownFormatError",
    "load_config",
    "parse_path",
    "parse_query",
    "parse_url",
    "resolve",
]
