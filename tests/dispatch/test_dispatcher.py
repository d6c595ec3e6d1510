from __future__ import annotations

import io
from pathlib import Path
import sqlite3
import tarfile
import wave
import zipfile

from docx import Document
from ebooklib import epub
from openpyxl import Workbook
from PIL import Image
from pptx import Presentation
import pymupdf
import pytest

from mdconv.detection.sniffer import DetectionSource, Sniffer
from mdconv.dispatcher import Dispatcher
from mdconv.errors import (
    ConversionError,
    ConversionFailed,
    FormatNotDetected,
    SourceReadError,
    UnknownFormat,
    UnsupportedFormat,
)
from mdconv.formats import FormatTag
from mdconv.registry import FormatRegistry, build_registry


class _BytesConverter:
    tag = FormatTag.JSON

    def convert(self, data: bytes) -> str:
        return data  # type: ignore[return-value]


def _zip_bytes(members: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in members.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def test_explicit_format_overrides_detection() -> None:
    dispatcher = Dispatcher(build_registry())

    output = dispatcher.convert(b'{"a": 1}', path="report.pdf", explicit_format="json")

    assert "| a | 1 |" in output


def test_magic_bytes_win_over_extension() -> None:
    resolution = Dispatcher(build_registry()).resolve(b"%PDF-1.4\n", path="data.json")

    assert resolution.tag is FormatTag.PDF
    assert resolution.source is DetectionSource.MAGIC


def test_zip_family_resolution() -> None:
    dispatcher = Dispatcher(build_registry())

    assert dispatcher.resolve(_zip_bytes({"word/document.xml": "<w/>"})).tag is FormatTag.WORD
    plain = _zip_bytes({"notes.txt": "hello"})
    assert dispatcher.resolve(plain).tag is FormatTag.ZIP
    assert dispatcher.convert(plain).startswith("# Archive\n")


def test_empty_input_is_not_detected() -> None:
    with pytest.raises(FormatNotDetected) as exc_info:
        Dispatcher(build_registry()).convert(b"")
    assert "--format" in str(exc_info.value)


def test_unknown_explicit_format_names_the_value() -> None:
    with pytest.raises(UnknownFormat) as exc_info:
        Dispatcher(build_registry()).convert(b"data", explicit_format="frobnicate")

    assert exc_info.value.name == "frobnicate"
    assert "frobnicate" in str(exc_info.value)
    assert "pdf" in str(exc_info.value)


def test_excluded_converter_is_unsupported() -> None:
    dispatcher = Dispatcher(build_registry([FormatTag.JSON]))

    with pytest.raises(UnsupportedFormat) as exc_info:
        dispatcher.convert(b"%PDF-1.4\n")

    assert exc_info.value.tag is FormatTag.PDF
    assert "MDCONV_FORMATS" in str(exc_info.value)


def test_converter_failure_is_wrapped_with_cause() -> None:
    with pytest.raises(ConversionFailed) as exc_info:
        Dispatcher(build_registry()).convert(b"{not json", explicit_format=FormatTag.JSON)

    error = exc_info.value
    assert error.tag is FormatTag.JSON
    assert isinstance(error.cause, ValueError)
    assert error.__cause__ is error.cause
    assert str(error).startswith("Conversion error (json): ")


def test_non_string_result_is_a_conversion_failure() -> None:
    dispatcher = Dispatcher(FormatRegistry([_BytesConverter()]))

    with pytest.raises(ConversionFailed) as exc_info:
        dispatcher.convert(b"{}", explicit_format="json")

    assert isinstance(exc_info.value.cause, TypeError)


def test_conversion_is_idempotent() -> None:
    dispatcher = Dispatcher(build_registry())
    data = b"name,age\nAlice,30\nBob,25\n"

    assert dispatcher.convert(data, path="people.csv") == dispatcher.convert(data, path="people.csv")


def test_content_sniffing_is_opt_in() -> None:
    data = b'{"key": "value"}'

    with pytest.raises(FormatNotDetected):
        Dispatcher(build_registry()).convert(data)
    sniffing = Dispatcher(build_registry(), Sniffer(content_sniffing=True))
    assert "| key | value |" in sniffing.convert(data)


def test_convert_file_uses_the_file_extension(tmp_path: Path) -> None:
    source = tmp_path / "config.yaml"
    source.write_text("name: demo\n", encoding="utf-8")

    assert "| name | demo |" in Dispatcher(build_registry()).convert_file(source)


def test_convert_file_reports_unreadable_source(tmp_path: Path) -> None:
    missing = tmp_path / "missing.pdf"

    with pytest.raises(SourceReadError) as exc_info:
        Dispatcher(build_registry()).convert_file(missing)

    assert exc_info.value.path == missing
    assert isinstance(exc_info.value, ConversionError)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def _pdf(_tmp_path: Path) -> bytes:
    doc = pymupdf.open()
    doc.new_page().insert_text((72, 72), "Routed through the dispatcher.")
    data = doc.tobytes()
    doc.close()
    return data


def _png(_tmp_path: Path) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (2, 2), "green").save(buffer, "PNG")
    return buffer.getvalue()


def _wav(_tmp_path: Path) -> bytes:
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as writer:
        writer.setnchannels(1)
        writer.setsampwidth(2)
        writer.setframerate(8000)
        writer.writeframes(b"\x00\x00" * 8000)
    return buffer.getvalue()


def _avi(_tmp_path: Path) -> bytes:
    return b"RIFF" + (1024).to_bytes(4, "little") + b"AVI LIST" + b"\x00" * 64


def _plain_zip(_tmp_path: Path) -> bytes:
    return _zip_bytes({"notes.txt": "hello"})


def _tar(_tmp_path: Path) -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w") as archive:
        payload = b"hello"
        member = tarfile.TarInfo("notes.txt")
        member.size = len(payload)
        archive.addfile(member, io.BytesIO(payload))
    return buffer.getvalue()


def _sqlite(tmp_path: Path) -> bytes:
    db_path = tmp_path / "sample.db"
    connection = sqlite3.connect(db_path)
    connection.execute("CREATE TABLE people (name TEXT)")
    connection.execute("INSERT INTO people (name) VALUES ('Alice')")
    connection.commit()
    connection.close()
    return db_path.read_bytes()


def _docx(_tmp_path: Path) -> bytes:
    document = Document()
    document.add_paragraph("Routed through the dispatcher.")
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _xlsx(_tmp_path: Path) -> bytes:
    workbook = Workbook()
    workbook.active["A1"] = "name"
    workbook.active["A2"] = "Alice"
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _pptx(_tmp_path: Path) -> bytes:
    presentation = Presentation()
    slide = presentation.slides.add_slide(presentation.slide_layouts[0])
    slide.shapes.title.text = "Routed through the dispatcher"
    buffer = io.BytesIO()
    presentation.save(buffer)
    return buffer.getvalue()


def _epub(tmp_path: Path) -> bytes:
    book = epub.EpubBook()
    book.set_identifier("dispatch-id")
    book.set_title("Dispatch Sample")
    chapter = epub.EpubHtml(title="One", file_name="one.xhtml", lang="en")
    chapter.content = "<html><body><p>Routed through the dispatcher.</p></body></html>"
    book.add_item(chapter)
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.toc = (chapter,)
    book.spine = [chapter]
    path = tmp_path / "sample.epub"
    epub.write_epub(str(path), book)
    return path.read_bytes()


def _text(content: bytes):
    return lambda _tmp_path: content


# Binary samples are recognised by content alone; text formats carry no
# signature and are named by their extension.
_SAMPLES = {
    FormatTag.PDF: (_pdf, None),
    FormatTag.IMAGE: (_png, None),
    FormatTag.AUDIO: (_wav, None),
    FormatTag.VIDEO: (_avi, None),
    FormatTag.ZIP: (_plain_zip, None),
    FormatTag.TAR: (_tar, None),
    FormatTag.SQLITE: (_sqlite, None),
    FormatTag.WORD: (_docx, None),
    FormatTag.EXCEL: (_xlsx, None),
    FormatTag.POWERPOINT: (_pptx, None),
    FormatTag.EPUB: (_epub, None),
    FormatTag.CSV: (_text(b"name,age\nAlice,30\n"), "sample.csv"),
    FormatTag.JSON: (_text(b'{"name": "Alice"}'), "sample.json"),
    FormatTag.YAML: (_text(b"name: Alice\n"), "sample.yaml"),
    FormatTag.TOML: (_text(b'name = "Alice"\n'), "sample.toml"),
    FormatTag.HTML: (_text(b"<html><body><p>Alice</p></body></html>"), "sample.html"),
    FormatTag.XML: (_text(b"<people><name>Alice</name></people>"), "sample.xml"),
}


def test_samples_cover_every_format() -> None:
    assert set(_SAMPLES) == set(FormatTag)


@pytest.mark.parametrize("tag", sorted(FormatTag, key=str), ids=str)
def test_every_format_converts_end_to_end(tag: FormatTag, tmp_path: Path) -> None:
    build, path = _SAMPLES[tag]
    data = build(tmp_path)
    dispatcher = Dispatcher(build_registry())

    resolution = dispatcher.resolve(data, path=path)
    detected = dispatcher.convert(data, path=path)
    overridden = dispatcher.convert(data, path="sample.bin", explicit_format=tag)

    assert resolution.tag is tag
    expected_source = DetectionSource.EXTENSION if path else DetectionSource.MAGIC
    assert resolution.source is expected_source
    assert detected.strip()
    assert overridden == detected
