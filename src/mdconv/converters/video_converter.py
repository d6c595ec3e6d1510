"""Video converter.

mutagen understands the MP4 and ASF families. Other containers (Matroska,
AVI, FLV) are still described by their signature and size, with a warning
that stream details were not available.
"""

from __future__ import annotations

import logging

from mutagen import MutagenError

from mdconv.converters.media import TAG_FIELDS, load_media, render_media, stream_rows, tag_rows
from mdconv.detection.signatures import describe_container
from mdconv.formats import FormatTag
from mdconv.markdown import format_size

logger = logging.getLogger(__name__)

_VIDEO_TAG_FIELDS = tuple(field for field in TAG_FIELDS if field[0] != "tracknumber")


class VideoConverter:
    tag = FormatTag.VIDEO

    def convert(self, data: bytes) -> str:
        container = describe_container(data)
        try:
            media = load_media(data)
        except MutagenError as exc:
            if container is None:
                raise
            logger.debug("mutagen rejected %s data: %s", container, exc)
            media = None

        if media is not None:
            rows = stream_rows(media, len(data), prefix="Audio ")
            if container is not None:
                rows.insert(1, ("Container", container))
            return render_media("Video", rows, tag_rows(media, _VIDEO_TAG_FIELDS))

        if container is None:
            raise ValueError("Unrecognized video container")
        logger.warning("No stream info available for %s container", container)
        rows = [("Container", container), ("Size", format_size(len(data)))]
        return render_media("Video", rows, [])
