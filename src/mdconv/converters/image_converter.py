"""Image metadata converter: format, dimensions, colour mode and EXIF tags."""

from __future__ import annotations

import logging
from io import BytesIO

from PIL import ExifTags, Image

from mdconv.formats import FormatTag
from mdconv.markdown import format_size, property_table

logger = logging.getLogger(__name__)

_MAX_EXIF_VALUE = 120


def _looks_like_svg(data: bytes) -> bool:
    head = data[:1024].lstrip()
    return head.startswith(b"<?xml") or b"<svg" in head


def _exif_value(value: object) -> str | None:
    if isinstance(value, bytes):
        return None
    text = str(value).strip().strip("\x00")
    if not text:
        return None
    if len(text) > _MAX_EXIF_VALUE:
        text = text[: _MAX_EXIF_VALUE - 3] + "..."
    return text


class ImageConverter:
    """Describe an image; pixel content is never transcribed."""

    tag = FormatTag.IMAGE

    def convert(self, data: bytes) -> str:
        if _looks_like_svg(data):
            return "# Image\n\n" + property_table([("Format", "SVG"), ("Size", format_size(len(data)))])

        with Image.open(BytesIO(data)) as image:
            width, height = image.size
            rows = [
                ("Format", image.format or "unknown"),
                ("Size", format_size(len(data))),
                ("Dimensions", f"{width} x {height}"),
                ("Mode", image.mode),
            ]
            exif_rows = self._exif_rows(image)

        output = "# Image\n\n" + property_table(rows)
        if exif_rows:
            output += "\n## EXIF Metadata\n\n" + property_table(exif_rows, headers=("Tag", "Value"))
        return output

    def _exif_rows(self, image: Image.Image) -> list[tuple[str, str]]:
        try:
            exif = image.getexif()
        except (AttributeError, OSError, ValueError) as exc:
            logger.debug("Skipping unreadable EXIF block: %s", exc)
            return []

        rows = []
        for tag_id, raw in sorted(exif.items()):
            value = _exif_value(raw)
            if value is not None:
                rows.append((ExifTags.TAGS.get(tag_id, f"Tag {tag_id}"), value))
        return rows
