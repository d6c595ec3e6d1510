"""CSV and TSV tables rendered as a single Markdown table."""

from __future__ import annotations

import csv
import io

from mdconv.formats import FormatTag
from mdconv.markdown import decode_text, markdown_table

_SNIFF_CHARS = 4096
_DELIMITERS = ",;\t|"


def _dialect_for(sample: str) -> type[csv.Dialect] | csv.Dialect:
    try:
        return csv.Sniffer().sniff(sample, delimiters=_DELIMITERS)
    except csv.Error:
        first_line = sample.splitlines()[0] if sample else ""
        return csv.excel_tab if "\t" in first_line else csv.excel


class CSVConverter:
    """First row is the header; every other row is padded or cut to its width."""

    tag = FormatTag.CSV

    def convert(self, data: bytes) -> str:
        text = decode_text(data)
        reader = csv.reader(io.StringIO(text, newline=""), _dialect_for(text[:_SNIFF_CHARS]))
        rows = [row for row in reader if row]

        if not rows or not any(cell.strip() for cell in rows[0]):
            return "*Empty CSV*\n"

        header, body = rows[0], rows[1:]
        return markdown_table(header, body)
