from __future__ import annotations

import pytest

from mdconv.config import DEFAULT_SQLITE_PREVIEW_ROWS, Settings
from mdconv.errors import UnknownFormat
from mdconv.formats import FormatTag


def test_defaults_enable_everything() -> None:
    settings = Settings.from_env({})

    assert settings.enabled_formats == frozenset(FormatTag)
    assert settings.content_sniffing is False
    assert settings.sqlite_preview_rows == DEFAULT_SQLITE_PREVIEW_ROWS
    assert settings.log_level == "WARNING"


def test_format_selection_and_exclusion() -> None:
    settings = Settings.from_env(
        {
            "MDCONV_FORMATS": "pdf, JSON,csv",
            "MDCONV_DISABLED_FORMATS": "csv",
        }
    )
    assert settings.enabled_formats == frozenset({FormatTag.PDF, FormatTag.JSON})

    only_disabled = Settings.from_env({"MDCONV_DISABLED_FORMATS": "video,audio"})
    assert FormatTag.VIDEO not in only_disabled.enabled_formats
    assert FormatTag.AUDIO not in only_disabled.enabled_formats
    assert FormatTag.PDF in only_disabled.enabled_formats


def test_unknown_format_name_is_rejected() -> None:
    with pytest.raises(UnknownFormat):
        Settings.from_env({"MDCONV_FORMATS": "pdf,frobnicate"})


def test_flags_levels_and_limits() -> None:
    settings = Settings.from_env(
        {
            "MDCONV_CONTENT_SNIFFING": "Yes",
            "MDCONV_SQLITE_PREVIEW_ROWS": "25",
            "MDCONV_LOG_LEVEL": "debug",
        }
    )

    assert settings.content_sniffing is True
    assert settings.sqlite_preview_rows == 25
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("MDCONV_CONTENT_SNIFFING", "maybe"),
        ("MDCONV_SQLITE_PREVIEW_ROWS", "0"),
        ("MDCONV_SQLITE_PREVIEW_ROWS", "ten"),
        ("MDCONV_SQLITE_PREVIEW_ROWS", " "),
        ("MDCONV_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_name_the_variable(name: str, value: str) -> None:
    with pytest.raises(ValueError, match=name):
        Settings.from_env({name: value})


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MDCONV_FORMATS", "toml")

    assert Settings.from_env().enabled_formats == frozenset({FormatTag.TOML})
