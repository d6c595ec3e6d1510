"""Binary signature table and prefix matcher.

Entries are tried in table order and the first match wins, so longer or
compound signatures sit ahead of short ones that could match the same
prefix (``RIFF`` containers, ``ftyp`` brands). ``BM`` alone also starts
ordinary text, so the BMP entry checks the zeroed header fields as well.
"""

from __future__ import annotations

from dataclasses import dataclass

from mdconv.formats import FormatTag

ZIP_LOCAL_HEADER = b"PK\x03\x04"
ZIP_EMPTY_ARCHIVE = b"PK\x05\x06"


@dataclass(frozen=True, slots=True)
class Signature:
    """Byte pattern expected at ``offset``, plus optional extra fixed-offset parts."""

    pattern: bytes
    tag: FormatTag
    label: str
    offset: int = 0
    also: tuple[tuple[int, bytes], ...] = ()

    @property
    def length(self) -> int:
        """Bytes needed before this signature can be tested."""

        ends = [self.offset + len(self.pattern)]
        ends.extend(offset + len(part) for offset, part in self.also)
        return max(ends)

    def matches(self, prefix: bytes) -> bool:
        if len(prefix) < self.length:
            return False
        if prefix[self.offset : self.offset + len(self.pattern)] != self.pattern:
            return False
        return all(prefix[offset : offset + len(part)] == part for offset, part in self.also)


SIGNATURE_TABLE: tuple[Signature, ...] = (
    Signature(b"ustar", FormatTag.TAR, "tar", offset=257),
    Signature(b"SQLite format 3\x00", FormatTag.SQLITE, "SQLite"),
    Signature(b"%PDF", FormatTag.PDF, "PDF"),
    Signature(b"\x89PNG\r\n\x1a\n", FormatTag.IMAGE, "PNG"),
    Signature(b"\xff\xd8\xff", FormatTag.IMAGE, "JPEG"),
    Signature(b"GIF87a", FormatTag.IMAGE, "GIF"),
    Signature(b"GIF89a", FormatTag.IMAGE, "GIF"),
    Signature(b"RIFF", FormatTag.AUDIO, "WAV", also=((8, b"WAVE"),)),
    Signature(b"RIFF", FormatTag.IMAGE, "WEBP", also=((8, b"WEBP"),)),
    Signature(b"RIFF", FormatTag.VIDEO, "AVI", also=((8, b"AVI "),)),
    Signature(b"fLaC", FormatTag.AUDIO, "FLAC"),
    Signature(b"OggS", FormatTag.AUDIO, "Ogg"),
    Signature(b"ID3", FormatTag.AUDIO, "MP3"),
    Signature(b"ftyp", FormatTag.AUDIO, "MPEG-4 Audio", offset=4, also=((8, b"M4A "),)),
    Signature(b"ftyp", FormatTag.VIDEO, "MPEG-4", offset=4),
    Signature(b"\x1a\x45\xdf\xa3", FormatTag.VIDEO, "Matroska/WebM"),
    Signature(b"FLV\x01", FormatTag.VIDEO, "FLV"),
    Signature(b"\x30\x26\xb2\x75\x8e\x66\xcf\x11", FormatTag.VIDEO, "ASF/WMV"),
    Signature(b"II*\x00", FormatTag.IMAGE, "TIFF"),
    Signature(b"MM\x00*", FormatTag.IMAGE, "TIFF"),
    Signature(b"\x1f\x8b", FormatTag.TAR, "gzip"),
    Signature(b"\xff\xfb", FormatTag.AUDIO, "MP3"),
    Signature(b"\xff\xf3", FormatTag.AUDIO, "MP3"),
    Signature(b"\xff\xf2", FormatTag.AUDIO, "MP3"),
    # Reserved header words are zero and the DIB header size fits in one byte.
    Signature(b"BM", FormatTag.IMAGE, "BMP", also=((6, b"\x00\x00\x00\x00"), (15, b"\x00\x00\x00"))),
    Signature(ZIP_LOCAL_HEADER, FormatTag.ZIP, "ZIP"),
    Signature(ZIP_EMPTY_ARCHIVE, FormatTag.ZIP, "ZIP"),
)

SNIFF_LENGTH = max(signature.length for signature in SIGNATURE_TABLE)


def match_signature(prefix: bytes) -> Signature | None:
    """Return the first table entry matching ``prefix``.

    Entries longer than the available bytes are skipped.
    """

    for signature in SIGNATURE_TABLE:
        if signature.matches(prefix):
            return signature
    return None


def describe_container(data: bytes) -> str | None:
    """Human-readable container name for ``data``, if any signature matches."""

    signature = match_signature(data[:SNIFF_LENGTH])
    return signature.label if signature else None
