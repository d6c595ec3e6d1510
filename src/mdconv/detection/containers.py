"""Secondary markers for formats that live inside a ZIP container.

Office Open XML documents and EPUB books are ZIP archives. The outer
signature only says "ZIP"; the member names decide which family it is.
"""

from __future__ import annotations

from io import BytesIO
import logging
from zipfile import BadZipFile, ZipFile
import zlib

from mdconv.formats import FormatTag

logger = logging.getLogger(__name__)

EPUB_MIMETYPE = b"application/epub+zip"

# Member-name prefixes of the Office Open XML part directories.
_OOXML_PREFIXES: tuple[tuple[str, FormatTag], ...] = (
    ("word/", FormatTag.WORD),
    ("ppt/", FormatTag.POWERPOINT),
    ("xl/", FormatTag.EXCEL),
)


def _is_epub_marker(archive: ZipFile, name: str) -> bool:
    if name == "META-INF/container.xml":
        return True
    if name != "mimetype":
        return False
    return archive.read(name).strip() == EPUB_MIMETYPE


def classify_zip(data: bytes) -> FormatTag:
    """Return the family of a ZIP payload, or ``FormatTag.ZIP`` when no marker is found.

    Members are inspected in central-directory order and the first marker wins.
    A payload whose directory cannot be read stays a generic ZIP.
    """

    try:
        with ZipFile(BytesIO(data)) as archive:
            for name in archive.namelist():
                if _is_epub_marker(archive, name):
                    return FormatTag.EPUB
                for prefix, tag in _OOXML_PREFIXES:
                    if name.startswith(prefix):
                        return tag
    except (BadZipFile, OSError, EOFError, KeyError, RuntimeError, NotImplementedError, zlib.error) as exc:
        # Unreadable member streams still count as a ZIP.
        logger.debug("ZIP container not inspectable, keeping generic tag: %s", exc)
    return FormatTag.ZIP
