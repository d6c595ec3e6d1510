"""Route a payload to the converter registered for its resolved format."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from mdconv.converters import CONVERTER_CLASSES, INSTALL_HINTS
from mdconv.detection.sniffer import Resolution, Sniffer
from mdconv.errors import ConversionFailed, FormatNotDetected, SourceReadError, UnsupportedFormat
from mdconv.formats import FormatTag
from mdconv.registry import FormatRegistry, NotCompiled

logger = logging.getLogger(__name__)


def unsupported_hint(tag: FormatTag) -> str:
    """Say how to get a missing converter: install its parser or enable the format."""

    if CONVERTER_CLASSES.get(tag) is None:
        return f"install '{INSTALL_HINTS[tag]}'"
    return "enable it with MDCONV_FORMATS or remove it from MDCONV_DISABLED_FORMATS"


class Dispatcher:
    """Resolve, look up and run exactly one converter per request."""

    def __init__(self, registry: FormatRegistry, sniffer: Sniffer | None = None) -> None:
        self._registry = registry
        self._sniffer = sniffer or Sniffer()

    @property
    def registry(self) -> FormatRegistry:
        return self._registry

    def resolve(
        self,
        data: bytes,
        path: str | os.PathLike[str] | None = None,
        explicit_format: FormatTag | str | None = None,
    ) -> Resolution:
        return self._sniffer.resolve(data, path=path, explicit_format=explicit_format)

    def convert(
        self,
        data: bytes,
        path: str | os.PathLike[str] | None = None,
        explicit_format: FormatTag | str | None = None,
    ) -> str:
        resolution = self.resolve(data, path=path, explicit_format=explicit_format)
        if resolution.tag is None:
            raise FormatNotDetected(str(path) if path is not None else None)
        tag = resolution.tag
        logger.debug("Resolved %s as %s via %s", path or "<stream>", tag, resolution.source.value)

        converter = self._registry.lookup(tag)
        if isinstance(converter, NotCompiled):
            raise UnsupportedFormat(tag, unsupported_hint(tag))

        try:
            markdown = converter.convert(data)
        except Exception as exc:
            logger.warning("%s conversion failed for %s: %s", tag, path or "<stream>", exc)
            raise ConversionFailed(tag, exc) from exc

        if not isinstance(markdown, str):
            cause = TypeError(f"converter returned {type(markdown).__name__}, expected str")
            raise ConversionFailed(tag, cause) from cause
        return markdown

    def convert_file(self, path: str | os.PathLike[str], explicit_format: FormatTag | str | None = None) -> str:
        source = Path(path)
        try:
            data = source.read_bytes()
        except OSError as exc:
            raise SourceReadError(source, exc) from exc
        return self.convert(data, path=source, explicit_format=explicit_format)
