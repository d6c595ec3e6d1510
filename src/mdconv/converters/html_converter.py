"""HTML pages rendered to Markdown with markdownify."""

from __future__ import annotations

from bs4 import BeautifulSoup
from markdownify import markdownify as md

from mdconv.formats import FormatTag
from mdconv.markdown import collapse_blank_lines, decode_text, normalize_whitespace

# Elements that never carry document content.
_STRIP_TAGS = ["script", "style", "noscript", "iframe", "template"]


def html_to_markdown(html: str | bytes) -> tuple[str, str]:
    """Return ``(title, markdown_body)`` for an HTML document or fragment."""

    soup = BeautifulSoup(html, "lxml")
    for node in soup.find_all(_STRIP_TAGS):
        node.decompose()

    title = ""
    if soup.title and soup.title.string:
        title = normalize_whitespace(soup.title.string)
        soup.title.decompose()

    body = soup.body or soup
    text = md(str(body), heading_style="ATX", bullets="-")
    return title, text.strip()


class HTMLConverter:
    """Use the page title as the top heading unless the body already starts with it."""

    tag = FormatTag.HTML

    def convert(self, data: bytes) -> str:
        title, body = html_to_markdown(decode_text(data))

        if title and not body.startswith(f"# {title}"):
            body = f"# {title}\n\n{body}"
        if not body.strip():
            return "*Empty HTML document*\n"
        return collapse_blank_lines(body)
