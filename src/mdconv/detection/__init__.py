"""Format detection from overrides, magic bytes and file extensions."""

from .extensions import EXTENSION_TABLE, resolve_extension
from .signatures import SIGNATURE_TABLE, SNIFF_LENGTH, Signature, match_signature
from .sniffer import DetectionSource, Resolution, Sniffer

__all__ = [
    "EXTENSION_TABLE",
    "SIGNATURE_TABLE",
    "SNIFF_LENGTH",
    "DetectionSource",
    "Resolution",
    "Signature",
    "Sniffer",
    "match_signature",
    "resolve_extension",
]
