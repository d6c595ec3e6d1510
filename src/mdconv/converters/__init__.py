"""Converter implementations and the converter contract.

Each converter family imports its parser at module load; a family whose
parser is missing is left out of ``CONVERTER_CLASSES`` with a warning.
"""

import logging

from mdconv.formats import FormatTag

from .base import Converter

logger = logging.getLogger(__name__)

# Distribution to install when a family is unavailable.
INSTALL_HINTS: dict[FormatTag, str] = {
    FormatTag.PDF: "pymupdf",
    FormatTag.EPUB: "EbookLib",
    FormatTag.HTML: "beautifulsoup4",
    FormatTag.XML: "lxml",
    FormatTag.WORD: "python-docx",
    FormatTag.EXCEL: "openpyxl",
    FormatTag.POWERPOINT: "python-pptx",
    FormatTag.YAML: "PyYAML",
    FormatTag.IMAGE: "Pillow",
    FormatTag.AUDIO: "mutagen",
    FormatTag.VIDEO: "mutagen",
    FormatTag.CSV: "charset-normalizer",
    FormatTag.JSON: "charset-normalizer",
    FormatTag.TOML: "charset-normalizer",
    FormatTag.ZIP: "charset-normalizer",
    FormatTag.TAR: "charset-normalizer",
    FormatTag.SQLITE: "charset-normalizer",
}

try:
    from .pdf_converter import PDFConverter
except ImportError:
    PDFConverter = None
    logger.warning("PDF support unavailable: install 'pymupdf'")

try:
    from .epub_converter import EPUBConverter
except ImportError:
    EPUBConverter = None
    logger.warning("EPUB support unavailable: install 'EbookLib', 'beautifulsoup4' and 'markdownify'")

try:
    from .html_converter import HTMLConverter
except ImportError:
    HTMLConverter = None
    logger.warning("HTML support unavailable: install 'beautifulsoup4' and 'markdownify'")

try:
    from .xml_converter import XMLConverter
except ImportError:
    XMLConverter = None
    logger.warning("XML support unavailable: install 'lxml'")

try:
    from .word_converter import WordConverter
except ImportError:
    WordConverter = None
    logger.warning("Word support unavailable: install 'python-docx'")

try:
    from .excel_converter import ExcelConverter
except ImportError:
    ExcelConverter = None
    logger.warning("Excel support unavailable: install 'openpyxl'")

try:
    from .powerpoint_converter import PowerPointConverter
except ImportError:
    PowerPointConverter = None
    logger.warning("PowerPoint support unavailable: install 'python-pptx'")

try:
    from .yaml_converter import YAMLConverter
except ImportError:
    YAMLConverter = None
    logger.warning("YAML support unavailable: install 'PyYAML'")

try:
    from .image_converter import ImageConverter
except ImportError:
    ImageConverter = None
    logger.warning("Image support unavailable: install 'Pillow'")

try:
    from .audio_converter import AudioConverter
    from .video_converter import VideoConverter
except ImportError:
    AudioConverter = None
    VideoConverter = None
    logger.warning("Audio and video support unavailable: install 'mutagen'")

try:
    from .csv_converter import CSVConverter
    from .json_converter import JSONConverter
    from .toml_converter import TOMLConverter
    from .zip_converter import ZIPConverter
    from .tar_converter import TarConverter
    from .sqlite_converter import SQLiteConverter
except ImportError:
    CSVConverter = JSONConverter = TOMLConverter = None
    ZIPConverter = TarConverter = SQLiteConverter = None
    logger.warning("Text and archive support unavailable: install 'charset-normalizer'")


CONVERTER_CLASSES: dict[FormatTag, type | None] = {
    FormatTag.EXCEL: ExcelConverter,
    FormatTag.PDF: PDFConverter,
    FormatTag.POWERPOINT: PowerPointConverter,
    FormatTag.WORD: WordConverter,
    FormatTag.IMAGE: ImageConverter,
    FormatTag.ZIP: ZIPConverter,
    FormatTag.EPUB: EPUBConverter,
    FormatTag.AUDIO: AudioConverter,
    FormatTag.CSV: CSVConverter,
    FormatTag.HTML: HTMLConverter,
    FormatTag.JSON: JSONConverter,
    FormatTag.YAML: YAMLConverter,
    FormatTag.TOML: TOMLConverter,
    FormatTag.XML: XMLConverter,
    FormatTag.SQLITE: SQLiteConverter,
    FormatTag.TAR: TarConverter,
    FormatTag.VIDEO: VideoConverter,
}


__all__ = [
    "CONVERTER_CLASSES",
    "INSTALL_HINTS",
    "AudioConverter",
    "CSVConverter",
    "Converter",
    "EPUBConverter",
    "ExcelConverter",
    "HTMLConverter",
    "ImageConverter",
    "JSONConverter",
    "PDFConverter",
    "PowerPointConverter",
    "SQLiteConverter",
    "TOMLConverter",
    "TarConverter",
    "VideoConverter",
    "WordConverter",
    "XMLConverter",
    "YAMLConverter",
    "ZIPConverter",
]
