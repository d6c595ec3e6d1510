"""SQLite database converter: schema, row counts and a preview of each table."""

from __future__ import annotations

import logging
import os
import sqlite3
import tempfile
from contextlib import closing
from pathlib import Path

from mdconv.config import DEFAULT_SQLITE_PREVIEW_ROWS
from mdconv.formats import FormatTag
from mdconv.markdown import markdown_table

logger = logging.getLogger(__name__)


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _format_value(value: object) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bytes):
        return f"[BLOB {len(value)} bytes]"
    return str(value)


class SQLiteConverter:
    """Render tables in name order; ``preview_rows`` caps the sample shown per table."""

    tag = FormatTag.SQLITE

    def __init__(self, preview_rows: int = DEFAULT_SQLITE_PREVIEW_ROWS) -> None:
        if preview_rows < 0:
            raise ValueError("preview_rows must be >= 0")
        self.preview_rows = preview_rows

    def convert(self, data: bytes) -> str:
        # sqlite3 only opens databases from a path.
        with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as tmp:
            tmp.write(data)
            tmp_path = Path(tmp.name)
        try:
            uri = f"{tmp_path.as_uri()}?mode=ro"
            with closing(sqlite3.connect(uri, uri=True)) as connection:
                return self._render(connection)
        finally:
            os.unlink(tmp_path)

    def _render(self, connection: sqlite3.Connection) -> str:
        tables = [
            row[0]
            for row in connection.execute("SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name")
        ]
        sections = [f"# Database\n\n**Tables**: {len(tables)}\n"]
        sections.extend(self._table_section(connection, table) for table in tables)
        return "\n".join(sections)

    def _table_section(self, connection: sqlite3.Connection, table: str) -> str:
        quoted = _quote_identifier(table)
        columns = [
            (row[1], row[2] or "", "yes" if row[5] else "")
            for row in connection.execute(f"PRAGMA table_info({quoted})")
        ]
        count = connection.execute(f"SELECT COUNT(*) FROM {quoted}").fetchone()[0]
        logger.debug("Table %s: %d columns, %d rows", table, len(columns), count)

        output = f"## {table}\n\n" + markdown_table(["Column", "Type", "PK"], columns)
        output += f"\n**Rows**: {count}\n"

        if count and columns and self.preview_rows:
            rows = connection.execute(f"SELECT * FROM {quoted} LIMIT ?", (self.preview_rows,)).fetchall()
            names = [name for name, _type, _pk in columns]
            output += "\n" + markdown_table(names, [[_format_value(value) for value in row] for row in rows])
            if count > self.preview_rows:
                output += f"\n*Showing {self.preview_rows} of {count} rows*\n"
        return output
