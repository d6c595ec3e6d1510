"""YAML documents rendered through the structured-value renderer."""

from __future__ import annotations

import yaml

from mdconv.converters.structured import render_value
from mdconv.formats import FormatTag
from mdconv.markdown import decode_text


class YAMLConverter:
    """Render a YAML document; multi-document streams become a list of documents."""

    tag = FormatTag.YAML

    def convert(self, data: bytes) -> str:
        documents = list(yaml.safe_load_all(decode_text(data)))
        if len(documents) == 1:
            return render_value(documents[0])
        return render_value(documents)
