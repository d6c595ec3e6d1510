"""Error taxonomy for detection, lookup and conversion failures."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mdconv.formats import FormatTag


class ConversionError(Exception):
    """Base class for every failure surfaced by the dispatcher."""


@dataclass(slots=True, eq=False)
class UnknownFormat(ConversionError):
    """An explicit format value does not name any known format."""

    name: str
    expected: tuple[str, ...] = ()

    def __str__(self) -> str:
        message = f"Unknown format: {self.name!r}"
        if self.expected:
            message = f"{message} (expected one of: {', '.join(self.expected)})"
        return message


@dataclass(slots=True, eq=False)
class FormatNotDetected(ConversionError):
    """Neither magic bytes nor the file extension identified the input."""

    path: str | None = None

    def __str__(self) -> str:
        source = f" for {self.path}" if self.path else ""
        return f"Could not detect file format{source}. Use --format to specify."


@dataclass(slots=True, eq=False)
class UnsupportedFormat(ConversionError):
    """The format is valid but its converter is not part of this build."""

    tag: FormatTag
    hint: str | None = None

    def __str__(self) -> str:
        message = f"Format not enabled in this build: {self.tag}"
        if self.hint:
            message = f"{message} ({self.hint})"
        return message


@dataclass(slots=True, eq=False)
class ConversionFailed(ConversionError):
    """The selected converter raised while producing Markdown."""

    tag: FormatTag
    cause: BaseException

    def __str__(self) -> str:
        return f"Conversion error ({self.tag}): {self.cause}"


@dataclass(slots=True, eq=False)
class SourceReadError(ConversionError):
    """The source file could not be read."""

    path: Path
    cause: OSError

    def __str__(self) -> str:
        return f"Failed to read source file: {self.cause} (path={self.path})"
