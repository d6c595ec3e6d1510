"""Shared converter contract for per-format Markdown renderers."""

from __future__ import annotations

from typing import ClassVar, Protocol, runtime_checkable

from mdconv.formats import FormatTag


@runtime_checkable
class Converter(Protocol):
    """Protocol that every format converter must implement."""

    tag: ClassVar[FormatTag]

    def convert(self, data: bytes) -> str:
        """Render the complete payload as Markdown text."""
