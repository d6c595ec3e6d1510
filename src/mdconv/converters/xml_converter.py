"""XML element trees rendered as nested headings and tables."""

from __future__ import annotations

from io import StringIO

from lxml import etree

from mdconv.formats import FormatTag
from mdconv.markdown import heading, markdown_table, normalize_whitespace


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _child_elements(element: etree._Element) -> list[etree._Element]:
    return [child for child in element if isinstance(child.tag, str)]


def _text_parts(element: etree._Element) -> list[str]:
    """Direct text of ``element``: its own text plus the tails of its children."""

    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return [cleaned for cleaned in (normalize_whitespace(part) for part in parts) if cleaned]


def _attributes(element: etree._Element) -> list[tuple[str, str]]:
    return [(etree.QName(key).localname, value) for key, value in element.attrib.items()]


class XMLConverter:
    """Elements become headings, attributes become tables, runs of leaf siblings become one table."""

    tag = FormatTag.XML

    def convert(self, data: bytes) -> str:
        parser = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False, huge_tree=False)
        if not data.strip():
            raise ValueError("Empty XML document")
        root = etree.fromstring(data, parser=parser)

        out = StringIO()
        self._write_element(out, root, 1)
        return out.getvalue()

    def _write_element(self, out: StringIO, element: etree._Element, depth: int) -> None:
        out.write(heading(_local_name(element), depth) + "\n\n")

        attributes = _attributes(element)
        if attributes:
            out.write(markdown_table(["Attribute", "Value"], attributes))
            out.write("\n")

        texts = _text_parts(element)
        if texts:
            out.write("\n".join(texts) + "\n\n")

        children = _child_elements(element)
        index = 0
        while index < len(children):
            name = _local_name(children[index])
            end = index + 1
            while end < len(children) and _local_name(children[end]) == name:
                end += 1

            run = children[index:end]
            if len(run) > 1 and all(not _child_elements(child) for child in run):
                self._write_run_as_table(out, run, depth)
            else:
                for child in run:
                    self._write_element(out, child, depth + 1)
            index = end

    def _write_run_as_table(self, out: StringIO, run: list[etree._Element], depth: int) -> None:
        out.write(heading(_local_name(run[0]), depth + 1) + "\n\n")

        headers: list[str] = []
        for element in run:
            for key, _value in _attributes(element):
                if key not in headers:
                    headers.append(key)
        has_text = any(_text_parts(element) for element in run)
        if has_text:
            headers.append("text")
        if not headers:
            return

        rows = []
        for element in run:
            values = dict(_attributes(element))
            values["text"] = " ".join(_text_parts(element))
            rows.append([values.get(header, "") for header in headers])
        out.write(markdown_table(headers, rows))
        out.write("\n")
