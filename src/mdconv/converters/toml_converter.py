"""TOML documents rendered through the structured-value renderer."""

from __future__ import annotations

import tomllib

from mdconv.converters.structured import render_value
from mdconv.formats import FormatTag
from mdconv.markdown import decode_text


class TOMLConverter:
    tag = FormatTag.TOML

    def convert(self, data: bytes) -> str:
        return render_value(tomllib.loads(decode_text(data)))
