"""Audio converter: stream properties and common tags via mutagen."""

from __future__ import annotations

from mdconv.converters.media import load_media, render_media, stream_rows, tag_rows
from mdconv.formats import FormatTag


class AudioConverter:
    tag = FormatTag.AUDIO

    def convert(self, data: bytes) -> str:
        media = load_media(data)
        if media is None:
            raise ValueError("Unrecognized audio format")
        return render_media("Audio", stream_rows(media, len(data)), tag_rows(media))
