"""PowerPoint (.pptx) converter: one section per slide, separated by rules."""

from __future__ import annotations

from io import BytesIO

from pptx import Presentation
from pptx.enum.shapes import PP_PLACEHOLDER

from mdconv.formats import FormatTag
from mdconv.markdown import markdown_table, normalize_whitespace

_BULLET_PLACEHOLDERS = {PP_PLACEHOLDER.BODY, PP_PLACEHOLDER.OBJECT}


def _placeholder_type(shape):
    if not shape.is_placeholder:
        return None
    return shape.placeholder_format.type


def _paragraph_text(paragraph) -> str:
    parts = []
    for run in paragraph.runs:
        text = run.text
        if not text.strip():
            parts.append(text)
            continue
        bold, italic = bool(run.font.bold), bool(run.font.italic)
        marker = "***" if bold and italic else "**" if bold else "*" if italic else ""
        parts.append(f"{marker}{text.strip()}{marker}" if marker else text)
    return normalize_whitespace("".join(parts))


def _table_markdown(table) -> str:
    rows = [[cell.text.strip() for cell in row.cells] for row in table.rows]
    if not rows:
        return ""
    return markdown_table(rows[0], rows[1:])


class PowerPointConverter:
    """Slide title as heading, body placeholders as bullets, speaker notes as a quote."""

    tag = FormatTag.POWERPOINT

    def convert(self, data: bytes) -> str:
        presentation = Presentation(BytesIO(data))
        sections = [self._slide_section(slide, number) for number, slide in enumerate(presentation.slides, start=1)]
        if not sections:
            return "*Empty presentation*\n"
        return "\n---\n\n".join(sections)

    def _slide_section(self, slide, number: int) -> str:
        lines: list[str] = []
        title_shape = slide.shapes.title
        title = normalize_whitespace(title_shape.text_frame.text) if title_shape is not None else ""
        lines.extend([f"# {title or f'Slide {number}'}", ""])

        body: list[str] = []
        for shape in slide.shapes:
            if title_shape is not None and shape.shape_id == title_shape.shape_id:
                continue
            if shape.has_table:
                body.extend([_table_markdown(shape.table).rstrip("\n"), ""])
                continue
            if not shape.has_text_frame:
                continue

            kind = _placeholder_type(shape)
            paragraphs = [text for text in (_paragraph_text(p) for p in shape.text_frame.paragraphs) if text]
            if not paragraphs:
                continue
            if kind == PP_PLACEHOLDER.SUBTITLE:
                body.extend([f"## {' '.join(paragraphs)}", ""])
            elif kind in _BULLET_PLACEHOLDERS:
                body.extend(f"- {text}" for text in paragraphs)
                body.append("")
            else:
                for text in paragraphs:
                    body.extend([text, ""])

        if not body and not title:
            body = ["*Empty slide*", ""]
        lines.extend(body)

        if slide.has_notes_slide and slide.notes_slide.notes_text_frame is not None:
            notes = normalize_whitespace(slide.notes_slide.notes_text_frame.text)
            if notes:
                lines.extend([f"> **Notes**: {notes}", ""])

        return "\n".join(lines).rstrip() + "\n"
