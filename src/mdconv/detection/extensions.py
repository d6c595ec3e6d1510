"""File-suffix lookup table."""

from __future__ import annotations

import os
from pathlib import PurePath
from types import MappingProxyType
from typing import Mapping

from mdconv.formats import FormatTag

_EXTENSIONS_BY_TAG: dict[FormatTag, tuple[str, ...]] = {
    FormatTag.EXCEL: ("xlsx", "xls", "xlsb", "ods"),
    FormatTag.PDF: ("pdf",),
    FormatTag.POWERPOINT: ("pptx",),
    FormatTag.WORD: ("docx",),
    FormatTag.IMAGE: ("png", "jpg", "jpeg", "gif", "webp", "svg", "bmp", "tiff", "tif"),
    FormatTag.ZIP: ("zip",),
    FormatTag.EPUB: ("epub",),
    FormatTag.AUDIO: ("mp3", "wav", "flac", "ogg", "m4a", "aac", "wma"),
    FormatTag.CSV: ("csv", "tsv"),
    FormatTag.HTML: ("html", "htm"),
    FormatTag.JSON: ("json",),
    FormatTag.YAML: ("yaml", "yml"),
    FormatTag.TOML: ("toml",),
    FormatTag.XML: ("xml",),
    FormatTag.SQLITE: ("sqlite", "sqlite3", "db"),
    FormatTag.TAR: ("tar", "tgz", "gz"),
    FormatTag.VIDEO: ("mp4", "mkv", "avi", "mov", "webm", "m4v", "wmv", "flv"),
}


def _build_table() -> Mapping[str, FormatTag]:
    table: dict[str, FormatTag] = {}
    for tag, extensions in _EXTENSIONS_BY_TAG.items():
        for extension in extensions:
            if extension in table:
                raise ValueError(f"Extension {extension!r} mapped twice")
            table[extension] = tag
    return MappingProxyType(table)


EXTENSION_TABLE: Mapping[str, FormatTag] = _build_table()


def extension_of(path: str | os.PathLike[str] | None) -> str | None:
    """Return the lowercased suffix after the last dot, without the dot."""

    if path is None:
        return None
    name = PurePath(os.fspath(path)).name
    if "." not in name.strip("."):
        return None
    suffix = name.rsplit(".", 1)[1].lower()
    return suffix or None


def resolve_extension(path: str | os.PathLike[str] | None) -> FormatTag | None:
    """Map a path's suffix to a format tag; unknown or missing suffixes give None."""

    suffix = extension_of(path)
    if suffix is None:
        return None
    return EXTENSION_TABLE.get(suffix)


def extensions_for(tag: FormatTag) -> tuple[str, ...]:
    """Suffixes that resolve to ``tag``, in table order."""

    return _EXTENSIONS_BY_TAG.get(tag, ())
