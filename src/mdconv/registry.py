"""Immutable mapping from format tags to the converters compiled into a build."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable
import logging

from mdconv.converters import CONVERTER_CLASSES
from mdconv.converters.base import Converter
from mdconv.config import DEFAULT_SQLITE_PREVIEW_ROWS
from mdconv.formats import FormatTag

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NotCompiled:
    """Lookup result for a known tag whose converter is not registered."""

    tag: FormatTag


class FormatRegistry:
    """Read-only tag to converter map, fixed at construction."""

    def __init__(self, converters: Iterable[Converter]) -> None:
        entries: dict[FormatTag, Converter] = {}
        for converter in converters:
            tag = getattr(converter, "tag", None)
            if not isinstance(tag, FormatTag):
                raise TypeError(f"Converter {converter!r} has no FormatTag 'tag' attribute")
            if tag in entries:
                raise ValueError(f"Duplicate converter for format: {tag}")
            entries[tag] = converter
        self._entries = MappingProxyType(entries)

    def lookup(self, tag: FormatTag) -> Converter | NotCompiled:
        converter = self._entries.get(tag)
        if converter is None:
            return NotCompiled(tag)
        return converter

    @property
    def tags(self) -> frozenset[FormatTag]:
        return frozenset(self._entries)

    def __contains__(self, tag: object) -> bool:
        return tag in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        names = ", ".join(sorted(str(tag) for tag in self._entries))
        return f"FormatRegistry([{names}])"


def build_registry(
    enabled: Iterable[FormatTag] | None = None,
    *,
    sqlite_preview_rows: int = DEFAULT_SQLITE_PREVIEW_ROWS,
) -> FormatRegistry:
    """Instantiate every available converter whose tag is in ``enabled`` (all when ``None``)."""

    wanted = set(FormatTag) if enabled is None else set(enabled)
    converters: list[Converter] = []
    for tag, converter_class in CONVERTER_CLASSES.items():
        if tag not in wanted:
            continue
        if converter_class is None:
            logger.debug("Skipping %s: parser not installed", tag)
            continue
        if tag is FormatTag.SQLITE:
            converters.append(converter_class(preview_rows=sqlite_preview_rows))
        else:
            converters.append(converter_class())
    return FormatRegistry(converters)
