"""CLI command converting files or stdin to Markdown."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

load_dotenv()

from mdconv.config import Settings
from mdconv.detection.extensions import extensions_for
from mdconv.detection.sniffer import Sniffer
from mdconv.dispatcher import Dispatcher
from mdconv.errors import ConversionError
from mdconv.formats import FormatTag
from mdconv.registry import build_registry

logger = logging.getLogger(__name__)

OUTPUT_SEPARATOR = "\n---\n\n"


def _error(message: object) -> None:
    print(f"mdconv: {message}", file=sys.stderr)


def _build_dispatcher(settings: Settings) -> Dispatcher:
    registry = build_registry(settings.enabled_formats, sqlite_preview_rows=settings.sqlite_preview_rows)
    return Dispatcher(registry, Sniffer(content_sniffing=settings.content_sniffing))


def _list_formats(dispatcher: Dispatcher) -> None:
    for name in FormatTag.names():
        tag = FormatTag(name)
        status = "enabled" if tag in dispatcher.registry else "unavailable"
        print(f"{name:<12} {status:<12} {', '.join(extensions_for(tag))}")


def _convert_stdin(dispatcher: Dispatcher, explicit_format: FormatTag | None) -> int:
    if sys.stdin.isatty():
        _error("no input file specified and stdin is a terminal")
        print("Usage: mdconv FILE... or pipe data to stdin with --format", file=sys.stderr)
        return 2

    data = sys.stdin.buffer.read()
    try:
        markdown = dispatcher.convert(data, explicit_format=explicit_format)
    except ConversionError as exc:
        _error(exc)
        return 1
    sys.stdout.write(markdown)
    return 0


def _convert_to_directory(
    dispatcher: Dispatcher,
    files: list[Path],
    output_dir: Path,
    explicit_format: FormatTag | None,
) -> int:
    output_dir.mkdir(parents=True, exist_ok=True)
    failures = 0
    for path in files:
        try:
            markdown = dispatcher.convert_file(path, explicit_format=explicit_format)
        except ConversionError as exc:
            _error(exc)
            failures += 1
            continue
        target = output_dir / f"{path.stem or 'output'}.md"
        target.write_text(markdown, encoding="utf-8")
        logger.info("Wrote %s", target)
    return 0 if not failures else 1


def _convert_to_stdout(dispatcher: Dispatcher, files: list[Path], explicit_format: FormatTag | None) -> int:
    outputs: list[str] = []
    failures = 0
    for path in files:
        try:
            outputs.append(dispatcher.convert_file(path, explicit_format=explicit_format))
        except ConversionError as exc:
            _error(exc)
            failures += 1
    if outputs:
        sys.stdout.write(OUTPUT_SEPARATOR.join(outputs))
    return 0 if not failures else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="mdconv", description="Convert various file formats to Markdown")
    parser.add_argument("files", nargs="*", type=Path, help="Input files (reads stdin when omitted)")
    parser.add_argument("-f", "--format", dest="format_name", help="Force a format instead of auto-detecting")
    parser.add_argument("-o", "--output-dir", type=Path, help="Write one <name>.md per input file into this directory")
    parser.add_argument("--list-formats", action="store_true", help="Show every format and whether it is available")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
        explicit_format = FormatTag.parse(args.format_name) if args.format_name else None
    except (ConversionError, ValueError) as exc:
        _error(exc)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    dispatcher = _build_dispatcher(settings)

    if args.list_formats:
        _list_formats(dispatcher)
        return 0
    if not args.files:
        return _convert_stdin(dispatcher, explicit_format)
    if args.output_dir is not None:
        return _convert_to_directory(dispatcher, args.files, args.output_dir, explicit_format)
    return _convert_to_stdout(dispatcher, args.files, explicit_format)


if __name__ == "__main__":
    raise SystemExit(main())
