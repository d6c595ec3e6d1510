"""ZIP archive listing."""

from __future__ import annotations

import zipfile
from io import BytesIO

from mdconv.formats import FormatTag
from mdconv.markdown import format_size, markdown_table

_METHOD_NAMES = {
    zipfile.ZIP_STORED: "Stored",
    zipfile.ZIP_DEFLATED: "Deflated",
    zipfile.ZIP_BZIP2: "Bzip2",
    zipfile.ZIP_LZMA: "Lzma",
}


class ZIPConverter:
    """List every member with sizes, compression method and overall ratio."""

    tag = FormatTag.ZIP

    def convert(self, data: bytes) -> str:
        with zipfile.ZipFile(BytesIO(data)) as archive:
            members = archive.infolist()

        total_size = 0
        total_compressed = 0
        rows = []
        for index, info in enumerate(members, start=1):
            total_size += info.file_size
            total_compressed += info.compress_size
            if info.is_dir():
                size, compressed = "-", "-"
            else:
                size, compressed = format_size(info.file_size), format_size(info.compress_size)
            method = _METHOD_NAMES.get(info.compress_type, f"Method {info.compress_type}")
            rows.append((index, info.filename, size, compressed, method))

        if total_size > 0:
            ratio = f"{(1 - total_compressed / total_size) * 100:.1f}%"
        else:
            ratio = "N/A"

        return (
            f"# Archive\n\n**Total entries**: {len(members)}\n\n"
            + markdown_table(["#", "Name", "Size", "Compressed", "Method"], rows)
            + f"\n**Total size**: {format_size(total_size)}"
            f" (compressed: {format_size(total_compressed)}, ratio: {ratio})\n"
        )
