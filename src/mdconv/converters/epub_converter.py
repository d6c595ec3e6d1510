"""EPUB converter emitting book metadata and spine-ordered chapters."""

from __future__ import annotations

import os
import tempfile

import ebooklib
from ebooklib import epub

from mdconv.converters.html_converter import html_to_markdown
from mdconv.formats import FormatTag
from mdconv.markdown import collapse_blank_lines, normalize_whitespace

_METADATA_FIELDS = (
    ("creator", "Author"),
    ("language", "Language"),
    ("publisher", "Publisher"),
    ("date", "Date"),
)


def _first_non_empty(values: list[tuple[str, dict[str, str]]] | None) -> str | None:
    if not values:
        return None
    for value, _attrs in values:
        cleaned = normalize_whitespace(value or "")
        if cleaned:
            return cleaned
    return None


def _read_book(data: bytes) -> epub.EpubBook:
    # EbookLib opens books by path.
    with tempfile.NamedTemporaryFile(suffix=".epub", delete=False) as tmp:
        tmp.write(data)
        tmp_path = tmp.name
    try:
        return epub.read_epub(tmp_path, options={"ignore_ncx": True})
    finally:
        os.unlink(tmp_path)


class EPUBConverter:
    """Render title, author details and every spine document as Markdown."""

    tag = FormatTag.EPUB

    def convert(self, data: bytes) -> str:
        book = _read_book(data)
        parts = [self._front_matter(book)]
        chapters = self._chapters(book)
        parts.append("\n\n---\n\n".join(chapters) if chapters else "*No readable chapters*")
        return collapse_blank_lines("\n\n".join(parts))

    def _front_matter(self, book: epub.EpubBook) -> str:
        title = _first_non_empty(book.get_metadata("DC", "title")) or "EPUB"
        lines = [f"# {title}", ""]
        for field, label in _METADATA_FIELDS:
            value = _first_non_empty(book.get_metadata("DC", field))
            if value:
                lines.append(f"**{label}**: {value}")

        description = _first_non_empty(book.get_metadata("DC", "description"))
        if description:
            lines.extend(["", f"> {description}"])
        lines.extend(["", "---"])
        return "\n".join(lines)

    def _chapters(self, book: epub.EpubBook) -> list[str]:
        chapters: list[str] = []
        for spine_entry in book.spine:
            item_id = spine_entry[0] if isinstance(spine_entry, tuple) else spine_entry
            item = book.get_item_with_id(item_id)
            if item is None or item.get_type() != ebooklib.ITEM_DOCUMENT:
                continue
            _title, text = html_to_markdown(item.get_content())
            if text:
                chapters.append(text)
        return chapters
