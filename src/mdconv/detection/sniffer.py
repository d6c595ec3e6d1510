"""Combine explicit overrides, magic bytes and file extensions into one verdict."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import json
import logging
import os

from mdconv.detection.containers import classify_zip
from mdconv.detection.extensions import resolve_extension
from mdconv.detection.signatures import SNIFF_LENGTH, match_signature
from mdconv.formats import FormatTag

logger = logging.getLogger(__name__)

# How many leading bytes the text heuristics look at.
_TEXT_PROBE_BYTES = 1024


class DetectionSource(Enum):
    EXPLICIT = "explicit"
    MAGIC = "magic"
    EXTENSION = "extension"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of format detection for one request."""

    tag: FormatTag | None
    source: DetectionSource

    @property
    def resolved(self) -> bool:
        return self.tag is not None


UNRESOLVED = Resolution(tag=None, source=DetectionSource.UNRESOLVED)


def _guess_text_format(data: bytes) -> FormatTag | None:
    """Weak content guess for text payloads that carry no binary signature."""

    head = data[:_TEXT_PROBE_BYTES].lstrip(b"\xef\xbb\xbf \t\r\n").lower()
    if not head:
        return None
    if head.startswith((b"<!doctype html", b"<html")):
        return FormatTag.HTML
    if head.startswith(b"<svg") or (head.startswith(b"<?xml") and b"<svg" in head):
        return FormatTag.IMAGE
    if head.startswith(b"<?xml"):
        return FormatTag.XML
    if head.startswith((b"{", b"[")):
        try:
            json.loads(data)
        except (UnicodeDecodeError, ValueError):
            return None
        return FormatTag.JSON
    return None


class Sniffer:
    """Resolve the effective format of a payload.

    Precedence: explicit format, then magic bytes, then the file extension.
    ZIP payloads are classified by their members before the generic ZIP tag
    is returned.
    """

    def __init__(self, *, content_sniffing: bool = False) -> None:
        self._content_sniffing = content_sniffing

    def resolve(
        self,
        data: bytes,
        path: str | os.PathLike[str] | None = None,
        explicit_format: FormatTag | str | None = None,
    ) -> Resolution:
        if explicit_format is not None:
            tag = explicit_format if isinstance(explicit_format, FormatTag) else FormatTag.parse(explicit_format)
            return Resolution(tag=tag, source=DetectionSource.EXPLICIT)

        magic = self.from_magic(data)
        if magic is not None:
            return Resolution(tag=magic, source=DetectionSource.MAGIC)

        by_extension = resolve_extension(path)
        if by_extension is not None:
            return Resolution(tag=by_extension, source=DetectionSource.EXTENSION)

        if self._content_sniffing:
            guessed = _guess_text_format(data)
            if guessed is not None:
                return Resolution(tag=guessed, source=DetectionSource.MAGIC)

        return UNRESOLVED

    def from_magic(self, data: bytes) -> FormatTag | None:
        """Identify ``data`` by content alone."""

        signature = match_signature(data[:SNIFF_LENGTH])
        if signature is None:
            return None
        if signature.tag is FormatTag.ZIP:
            # The member check needs the whole archive: the central directory sits at the end.
            return classify_zip(data)
        logger.debug("Matched %s signature", signature.label)
        return signature.tag
