"""Shared mutagen helpers for the audio and video converters."""

from __future__ import annotations

from io import BytesIO
from typing import Any

import mutagen

from mdconv.markdown import format_duration, format_size, property_table

# (mutagen easy-tag key, label) in output order.
TAG_FIELDS = (
    ("title", "Title"),
    ("artist", "Artist"),
    ("album", "Album"),
    ("date", "Year"),
    ("tracknumber", "Track"),
    ("genre", "Genre"),
    ("comment", "Comment"),
)

_CHANNEL_LABELS = {1: "Mono", 2: "Stereo", 6: "5.1 Surround", 8: "7.1 Surround"}


def load_media(data: bytes) -> mutagen.FileType | None:
    """Parse ``data`` with mutagen; ``None`` when no mutagen format claims it."""

    return mutagen.File(BytesIO(data), easy=True)


def media_format_name(media: mutagen.FileType) -> str:
    mime = getattr(media, "mime", None) or []
    return type(media).__name__ if not mime else f"{type(media).__name__} ({mime[0]})"


def channel_label(channels: int) -> str:
    return f"{channels} ({_CHANNEL_LABELS.get(channels, 'Multi-channel')})"


def stream_rows(media: mutagen.FileType, size: int, *, prefix: str = "") -> list[tuple[str, Any]]:
    """Property rows for a parsed file; audio stream fields get ``prefix`` on their labels."""

    info = media.info
    rows: list[tuple[str, Any]] = [("Format", media_format_name(media)), ("Size", format_size(size))]

    length = getattr(info, "length", 0) or 0
    if length > 0:
        rows.append(("Duration", format_duration(length)))
    bitrate = getattr(info, "bitrate", 0) or 0
    if bitrate > 0:
        rows.append(("Bitrate", f"{bitrate // 1000} kbps"))
    sample_rate = getattr(info, "sample_rate", 0) or 0
    if sample_rate > 0:
        rows.append((f"{prefix}Sample Rate", f"{sample_rate} Hz"))
    channels = getattr(info, "channels", 0) or 0
    if channels > 0:
        rows.append((f"{prefix}Channels", channel_label(channels)))
    return rows


def tag_rows(media: mutagen.FileType, fields: tuple[tuple[str, str], ...] = TAG_FIELDS) -> list[tuple[str, str]]:
    tags = media.tags
    if not tags:
        return []

    rows = []
    for key, label in fields:
        try:
            values = tags[key]
        except (KeyError, ValueError):
            continue
        if isinstance(values, (list, tuple)):
            text = ", ".join(str(value) for value in values if str(value).strip())
        else:
            text = str(values)
        if text.strip():
            rows.append((label, text.strip()))
    return rows


def render_media(title: str, info_rows: list[tuple[str, Any]], tags: list[tuple[str, str]]) -> str:
    output = f"# {title}\n\n## File Info\n\n" + property_table(info_rows)
    if tags:
        output += "\n## Tags\n\n" + property_table(tags, headers=("Tag", "Value"))
    return output
