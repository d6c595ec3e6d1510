"""JSON documents rendered through the structured-value renderer."""

from __future__ import annotations

import json

from mdconv.converters.structured import render_value
from mdconv.formats import FormatTag
from mdconv.markdown import decode_text


class JSONConverter:
    """Render a JSON document as tables, headings and lists."""

    tag = FormatTag.JSON

    def convert(self, data: bytes) -> str:
        return render_value(json.loads(decode_text(data)))
