from __future__ import annotations

import io
import zipfile

from mdconv.detection.containers import classify_zip
from mdconv.detection.sniffer import DetectionSource, Resolution, Sniffer
from mdconv.formats import FormatTag


def _zip_bytes(members: dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in members.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def test_office_part_directories_select_the_family() -> None:
    word = _zip_bytes({"[Content_Types].xml": b"<Types/>", "word/document.xml": b"<w:document/>"})
    slides = _zip_bytes({"[Content_Types].xml": b"<Types/>", "ppt/presentation.xml": b"<p/>"})
    sheets = _zip_bytes({"[Content_Types].xml": b"<Types/>", "xl/workbook.xml": b"<x/>"})

    assert classify_zip(word) is FormatTag.WORD
    assert classify_zip(slides) is FormatTag.POWERPOINT
    assert classify_zip(sheets) is FormatTag.EXCEL


def test_epub_markers() -> None:
    by_mimetype = _zip_bytes({"mimetype": b"application/epub+zip", "OEBPS/content.opf": b"<package/>"})
    by_container = _zip_bytes({"META-INF/container.xml": b"<container/>"})

    assert classify_zip(by_mimetype) is FormatTag.EPUB
    assert classify_zip(by_container) is FormatTag.EPUB


def test_other_mimetype_content_is_not_epub() -> None:
    data = _zip_bytes({"mimetype": b"application/vnd.oasis.opendocument.text", "content.xml": b"<x/>"})
    assert classify_zip(data) is FormatTag.ZIP


def test_plain_archive_and_content_types_alone_stay_zip() -> None:
    assert classify_zip(_zip_bytes({"notes/readme.txt": b"hello"})) is FormatTag.ZIP
    assert classify_zip(_zip_bytes({"[Content_Types].xml": b"<Types/>"})) is FormatTag.ZIP


def test_first_marker_in_archive_order_wins() -> None:
    data = _zip_bytes({"xl/workbook.xml": b"<x/>", "word/document.xml": b"<w/>"})
    assert classify_zip(data) is FormatTag.EXCEL


def test_truncated_container_is_generic_zip() -> None:
    data = _zip_bytes({"word/document.xml": b"<w:document/>" * 50})
    assert classify_zip(data[:40]) is FormatTag.ZIP
    assert classify_zip(b"PK\x03\x04") is FormatTag.ZIP


def _corrupt_deflated_mimetype() -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("mimetype", b"application/epub+zip", compress_type=zipfile.ZIP_DEFLATED)
        archive.writestr("OEBPS/content.opf", b"<package/>")
    data = bytearray(buffer.getvalue())

    with zipfile.ZipFile(io.BytesIO(bytes(data))) as archive:
        info = archive.getinfo("mimetype")
    name_length = int.from_bytes(data[info.header_offset + 26 : info.header_offset + 28], "little")
    extra_length = int.from_bytes(data[info.header_offset + 28 : info.header_offset + 30], "little")
    start = info.header_offset + 30 + name_length + extra_length
    data[start : start + info.compress_size] = b"\xff" * info.compress_size
    return bytes(data)


def test_corrupt_member_stream_is_generic_zip() -> None:
    assert classify_zip(_corrupt_deflated_mimetype()) is FormatTag.ZIP


def test_corrupt_member_stream_does_not_break_sniffing() -> None:
    resolution = Sniffer().resolve(_corrupt_deflated_mimetype(), path="book.zip")
    assert resolution == Resolution(FormatTag.ZIP, DetectionSource.MAGIC)
