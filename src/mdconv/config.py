"""Runtime configuration for format selection and converter options."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Mapping

from mdconv.formats import FormatTag


DEFAULT_SQLITE_PREVIEW_ROWS = 10
DEFAULT_LOG_LEVEL = "WARNING"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _parse_flag(*, name: str, raw_value: str) -> bool:
    lowered = raw_value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of: 1, true, yes, on, 0, false, no, off")


def _parse_formats(raw_value: str) -> frozenset[FormatTag]:
    return frozenset(FormatTag.parse(name) for name in raw_value.split(",") if name.strip())


def _parse_log_level(raw_value: str) -> str:
    level = raw_value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"MDCONV_LOG_LEVEL is not a logging level: {raw_value!r}")
    return level


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated converter settings."""

    enabled_formats: frozenset[FormatTag] = frozenset(FormatTag)
    content_sniffing: bool = False
    sqlite_preview_rows: int = DEFAULT_SQLITE_PREVIEW_ROWS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        formats_raw = source.get("MDCONV_FORMATS", "").strip()
        enabled = _parse_formats(formats_raw) if formats_raw else frozenset(FormatTag)
        disabled = _parse_formats(source.get("MDCONV_DISABLED_FORMATS", ""))

        content_sniffing = _parse_flag(
            name="MDCONV_CONTENT_SNIFFING",
            raw_value=source.get("MDCONV_CONTENT_SNIFFING", ""),
        )

        preview_raw = source.get("MDCONV_SQLITE_PREVIEW_ROWS", str(DEFAULT_SQLITE_PREVIEW_ROWS)).strip()
        if not preview_raw:
            raise ValueError("MDCONV_SQLITE_PREVIEW_ROWS cannot be empty")
        sqlite_preview_rows = _parse_positive_int(name="MDCONV_SQLITE_PREVIEW_ROWS", raw_value=preview_raw)

        log_level = _parse_log_level(source.get("MDCONV_LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL)

        return cls(
            enabled_formats=enabled - disabled,
            content_sniffing=content_sniffing,
            sqlite_preview_rows=sqlite_preview_rows,
            log_level=log_level,
        )
