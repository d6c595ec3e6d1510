"""Text decoding and Markdown building blocks shared by the converters."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from charset_normalizer import from_bytes

_WHITESPACE_RE = re.compile(r"\s+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")

_SIZE_UNITS = (("GB", 1024**3), ("MB", 1024**2), ("KB", 1024))


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace and trim boundaries."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def collapse_blank_lines(text: str) -> str:
    """Keep at most one empty line between blocks and end with a newline."""

    return _BLANK_RUN_RE.sub("\n\n", text).strip() + "\n"


def decode_text(raw: bytes) -> str:
    """Decode a text payload, trying UTF-8 before charset detection."""

    if raw.startswith(b"\xef\xbb\xbf"):
        return raw[3:].decode("utf-8")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass

    best = from_bytes(raw).best()
    if best and best.encoding:
        return raw.decode(best.encoding)
    raise ValueError("Could not detect text encoding")


def escape_pipe(text: str) -> str:
    return text.replace("|", "\\|")


def table_cell(value: object) -> str:
    """Render one value for a single-line table cell."""

    text = "" if value is None else str(value)
    return escape_pipe(text.replace("\r\n", " ").replace("\n", " "))


def markdown_table(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    """Build a pipe table; short rows are padded, long rows are cut to the header width."""

    width = len(headers)
    lines = [
        "| " + " | ".join(table_cell(header) for header in headers) + " |",
        "|" + "---|" * width,
    ]
    for row in rows:
        cells = [table_cell(cell) for cell in row[:width]]
        cells.extend([""] * (width - len(cells)))
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines) + "\n"


def property_table(rows: Iterable[tuple[str, object]], *, headers: tuple[str, str] = ("Property", "Value")) -> str:
    return markdown_table(list(headers), [(key, value) for key, value in rows])


def heading(text: str, level: int) -> str:
    """ATX heading, level capped at 6."""

    return f"{'#' * max(1, min(level, 6))} {text}"


def format_size(size: int) -> str:
    for unit, threshold in _SIZE_UNITS:
        if size >= threshold:
            return f"{size / threshold:.1f} {unit}"
    return f"{size} B"


def format_duration(seconds: float) -> str:
    """``m:ss`` below an hour, ``h:mm:ss`` above."""

    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
