"""Word (.docx) converter preserving headings, lists, quotes and tables."""

from __future__ import annotations

from io import BytesIO

from docx import Document
from docx.table import Table
from docx.text.paragraph import Paragraph

from mdconv.formats import FormatTag
from mdconv.markdown import markdown_table


def _format_run(text: str, bold: bool, italic: bool) -> str:
    stripped = text.strip()
    if not stripped or not (bold or italic):
        return text
    marker = "***" if bold and italic else "**" if bold else "*"
    leading = text[: len(text) - len(text.lstrip())]
    trailing = text[len(text.rstrip()) :]
    return f"{leading}{marker}{stripped}{marker}{trailing}"


def _paragraph_text(paragraph: Paragraph) -> str:
    runs = [_format_run(run.text, bool(run.bold), bool(run.italic)) for run in paragraph.runs]
    text = "".join(runs).strip()
    # Hyperlinks and fields keep their text outside plain runs.
    return text or paragraph.text.strip()


def _heading_level(style_name: str) -> int | None:
    if style_name == "Title":
        return 1
    if not style_name.startswith("Heading"):
        return None
    try:
        return min(int(style_name.replace("Heading", "").strip()), 6)
    except ValueError:
        return 2


def _is_list_item(paragraph: Paragraph, style_name: str) -> bool:
    if style_name.startswith("List"):
        return True
    properties = paragraph._p.pPr
    return properties is not None and properties.numPr is not None


def _table_to_markdown(table: Table) -> str:
    rows = [[cell.text.strip() for cell in row.cells] for row in table.rows]
    if not rows:
        return ""
    width = max(len(row) for row in rows)
    header = rows[0] + [""] * (width - len(rows[0]))
    return markdown_table(header, rows[1:])


class WordConverter:
    """Walk the document body in order, emitting one Markdown block per paragraph or table."""

    tag = FormatTag.WORD

    def convert(self, data: bytes) -> str:
        document = Document(BytesIO(data))
        blocks: list[str] = []
        in_list = False

        for item in document.iter_inner_content():
            if isinstance(item, Table):
                markdown = _table_to_markdown(item)
                if markdown:
                    blocks.append(markdown.rstrip("\n"))
                in_list = False
                continue

            text = _paragraph_text(item)
            if not text:
                continue
            style_name = item.style.name if item.style is not None else ""

            level = _heading_level(style_name)
            if level is not None:
                blocks.append(f"{'#' * level} {item.text.strip()}")
                in_list = False
            elif _is_list_item(item, style_name):
                entry = f"- {text}"
                if in_list:
                    blocks[-1] = f"{blocks[-1]}\n{entry}"
                else:
                    blocks.append(entry)
                in_list = True
            elif style_name in {"Quote", "Intense Quote"}:
                blocks.append(f"> {text}")
                in_list = False
            else:
                blocks.append(text)
                in_list = False

        if not blocks:
            return "*Empty document*\n"
        return "\n\n".join(blocks) + "\n"
