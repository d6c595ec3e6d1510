"""PDF converter producing one Markdown section per page."""

from __future__ import annotations

import re

import pymupdf

from mdconv.formats import FormatTag
from mdconv.markdown import normalize_whitespace

_BULLET_PREFIXES = ("•", "●", "○", "-", "–", "*")
_NUMBERED_RE = re.compile(r"^\d+[.)]\s+(.*)$")

# (pymupdf metadata key, label) in output order; the title becomes the heading.
_METADATA_FIELDS = (
    ("author", "Author"),
    ("subject", "Subject"),
    ("creator", "Creator"),
    ("producer", "Producer"),
    ("creationDate", "Created"),
    ("modDate", "Modified"),
)


def _first_non_empty(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = normalize_whitespace(value)
    return cleaned or None


def _list_item(line: str) -> str | None:
    if line.startswith(_BULLET_PREFIXES):
        return line[1:].strip()
    numbered = _NUMBERED_RE.match(line)
    if numbered:
        return numbered.group(1)
    return None


def structure_page_text(text: str) -> list[str]:
    """Turn raw page text into Markdown blocks: list items and joined paragraphs."""

    lines = [line.strip() for line in text.splitlines()]
    blocks: list[str] = []
    index = 0

    while index < len(lines):
        line = lines[index]
        if not line:
            index += 1
            continue

        item = _list_item(line)
        if item is not None:
            blocks.append(f"- {item}")
            index += 1
            continue

        paragraph = [line]
        index += 1
        while index < len(lines) and lines[index] and _list_item(lines[index]) is None:
            paragraph.append(lines[index])
            index += 1
        blocks.append(" ".join(paragraph))
        blocks.append("")

    return blocks


class PDFConverter:
    """Render document metadata followed by the text of every page in order."""

    tag = FormatTag.PDF

    def convert(self, data: bytes) -> str:
        with pymupdf.open(stream=data, filetype="pdf") as doc:
            lines = self._metadata_lines(doc)
            pages = [page.get_text("text") for page in doc]

        if not any(page.strip() for page in pages):
            lines.append("*PDF contains no extractable text (may be scanned/image-based)*")
            return "\n".join(lines) + "\n"

        for page_index, page_text in enumerate(pages, start=1):
            if page_index > 1:
                lines.extend(["", "---", ""])
            lines.extend([f"## Page {page_index}", ""])
            if page_text.strip():
                lines.extend(structure_page_text(page_text))
            else:
                lines.append("*Empty page*")

        return "\n".join(lines).rstrip() + "\n"

    def _metadata_lines(self, doc: pymupdf.Document) -> list[str]:
        metadata = doc.metadata or {}
        fields = [
            (label, value)
            for key, label in _METADATA_FIELDS
            if (value := _first_non_empty(metadata.get(key)))
        ]
        title = _first_non_empty(metadata.get("title"))
        if not title and not fields:
            return []

        lines = [f"# {title or 'PDF Document'}", ""]
        if fields:
            lines.extend(f"- **{label}**: {value}" for label, value in fields)
            lines.append("")
        lines.extend(["---", ""])
        return lines
