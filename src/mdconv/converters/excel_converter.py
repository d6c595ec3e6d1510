"""Excel workbook converter: one heading and table per worksheet."""

from __future__ import annotations

from datetime import date, datetime, time
from io import BytesIO

from openpyxl import load_workbook

from mdconv.formats import FormatTag
from mdconv.markdown import markdown_table


def _format_cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


class ExcelConverter:
    """Render every worksheet as ``# <sheet>`` followed by a pipe table."""

    tag = FormatTag.EXCEL

    def convert(self, data: bytes) -> str:
        workbook = load_workbook(BytesIO(data), read_only=True, data_only=True)
        try:
            sections = [self._sheet_section(workbook[name], name) for name in workbook.sheetnames]
        finally:
            workbook.close()
        return "\n".join(sections)

    def _sheet_section(self, worksheet, name: str) -> str:
        rows = [
            [_format_cell(cell) for cell in row]
            for row in worksheet.iter_rows(values_only=True)
            if any(cell is not None for cell in row)
        ]
        width = max((len(row) for row in rows), default=0)
        if not rows or width == 0:
            return f"# {name}\n\n*Empty sheet*\n"

        header = rows[0] + [""] * (width - len(rows[0]))
        return f"# {name}\n\n" + markdown_table(header, rows[1:])
