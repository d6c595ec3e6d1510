"""Format family identifiers shared by detection, registry and dispatch."""

from __future__ import annotations

from enum import Enum

from mdconv.errors import UnknownFormat

# Names accepted by ``FormatTag.parse`` in addition to the canonical values.
_ALIASES: dict[str, str] = {
    "toml_conv": "toml",
}


class FormatTag(Enum):
    """One member per supported format family."""

    EXCEL = "excel"
    PDF = "pdf"
    POWERPOINT = "powerpoint"
    WORD = "word"
    IMAGE = "image"
    ZIP = "zip"
    EPUB = "epub"
    AUDIO = "audio"
    CSV = "csv"
    HTML = "html"
    JSON = "json"
    YAML = "yaml"
    TOML = "toml"
    XML = "xml"
    SQLITE = "sqlite"
    TAR = "tar"
    VIDEO = "video"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def names(cls) -> list[str]:
        """Canonical format names in display order."""

        return sorted(tag.value for tag in cls)

    @classmethod
    def parse(cls, name: str) -> "FormatTag":
        """Map a user-supplied format name to its tag.

        Raises ``UnknownFormat`` for anything that is not a format name.
        """

        key = name.strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownFormat(name, tuple(cls.names())) from None
