"""Markdown rendering for parsed JSON, YAML and TOML documents.

The parsers hand over plain Python values (dict, list, str, int, float,
bool, None, dates). Objects become key/value tables and headings, arrays of
flat objects become tables, arrays of primitives become bullet lists.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Mapping

from mdconv.markdown import heading, markdown_table

_PRIMITIVES = (str, int, float, bool, date, datetime, time, type(None))


def is_primitive(value: Any) -> bool:
    return isinstance(value, _PRIMITIVES)


def display_primitive(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    return str(value)


def render_value(value: Any) -> str:
    """Render a parsed document as Markdown."""

    lines: list[str] = []
    _write_value(lines, value, 1)
    return "\n".join(lines) + "\n"


def _write_value(lines: list[str], value: Any, depth: int) -> None:
    if isinstance(value, Mapping):
        _write_object(lines, list(value.items()), depth)
    elif isinstance(value, list | tuple):
        _write_array(lines, list(value), depth)
    else:
        lines.append(display_primitive(value))


def _write_object(lines: list[str], entries: list[tuple[Any, Any]], depth: int) -> None:
    index = 0
    while index < len(entries):
        if is_primitive(entries[index][1]):
            start = index
            while index < len(entries) and is_primitive(entries[index][1]):
                index += 1
            rows = [(str(key), display_primitive(val)) for key, val in entries[start:index]]
            lines.append(markdown_table(["Key", "Value"], rows))
            continue

        key, val = entries[index]
        lines.append(heading(str(key), depth))
        lines.append("")
        _write_value(lines, val, depth + 1)
        index += 1


def _table_from_objects(items: list[Any]) -> tuple[list[str], list[list[str]]] | None:
    if not items or not all(isinstance(item, Mapping) for item in items):
        return None
    if not all(is_primitive(val) for item in items for val in item.values()):
        return None

    headers: list[str] = []
    for item in items:
        for key in item:
            if str(key) not in headers:
                headers.append(str(key))

    rows = []
    for item in items:
        by_name = {str(key): val for key, val in item.items()}
        rows.append([display_primitive(by_name.get(name)) for name in headers])
    return headers, rows


def _write_array(lines: list[str], items: list[Any], depth: int) -> None:
    if not items:
        lines.append("*empty*")
        return

    table = _table_from_objects(items)
    if table is not None:
        headers, rows = table
        lines.append(markdown_table(headers, rows))
        return

    if all(is_primitive(item) for item in items):
        lines.extend(f"- {display_primitive(item)}" for item in items)
        lines.append("")
        return

    for position, item in enumerate(items, start=1):
        if is_primitive(item):
            lines.append(f"- {display_primitive(item)}")
        else:
            lines.append(heading(str(position), depth))
            lines.append("")
            _write_value(lines, item, depth + 1)
