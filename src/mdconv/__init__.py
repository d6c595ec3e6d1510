"""Detect the format of a byte stream and convert it to Markdown."""

from .dispatcher import Dispatcher
from .errors import (
    ConversionError,
    ConversionFailed,
    FormatNotDetected,
    SourceReadError,
    UnknownFormat,
    UnsupportedFormat,
)
from .formats import FormatTag
from .registry import FormatRegistry, NotCompiled, build_registry

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "ConversionFailed",
    "Dispatcher",
    "FormatNotDetected",
    "FormatRegistry",
    "FormatTag",
    "NotCompiled",
    "SourceReadError",
    "UnknownFormat",
    "UnsupportedFormat",
    "build_registry",
]
