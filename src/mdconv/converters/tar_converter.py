"""Tar archive listing, plain or compressed."""

from __future__ import annotations

import tarfile
from io import BytesIO

from mdconv.formats import FormatTag
from mdconv.markdown import format_size, markdown_table


def _member_kind(member: tarfile.TarInfo) -> str:
    if member.isfile():
        return "file"
    if member.isdir():
        return "dir"
    if member.issym():
        return "symlink"
    if member.islnk():
        return "hardlink"
    return "other"


class TarConverter:
    """``r:*`` lets tarfile pick gzip, bz2, xz or no compression."""

    tag = FormatTag.TAR

    def convert(self, data: bytes) -> str:
        with tarfile.open(fileobj=BytesIO(data), mode="r:*") as archive:
            members = archive.getmembers()

        total_size = sum(member.size for member in members if member.isfile())
        rows = [
            (index, member.name, format_size(member.size) if member.isfile() else "-", _member_kind(member))
            for index, member in enumerate(members, start=1)
        ]
        return (
            f"# Archive\n\n**Total entries**: {len(members)}\n\n"
            + markdown_table(["#", "Name", "Size", "Type"], rows)
            + f"\n**Total size**: {format_size(total_size)}\n"
        )
