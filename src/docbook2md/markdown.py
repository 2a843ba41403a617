"""Convert normalized DocBook HTML to Markdown with a custom serializer."""

from __future__ import annotations

import re
from typing import Callable, Mapping

from docbook2md.html_utils import HEADING_RE, normalize_text, parse_fragment

try:
    from bs4 import BeautifulSoup
    from bs4.element import Comment, NavigableString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


HrefResolver = Callable[[str], str]

_CONTAINER_TAGS = {"section", "article", "div", "header", "footer", "main", "aside"}
_INLINE_TAGS = {
    "a", "abbr", "b", "br", "cite", "code", "em", "i", "img", "kbd",
    "q", "samp", "small", "span", "strong", "sub", "sup", "tt", "var",
}


def convert_fragment_to_markdown(
    html: str, *, resolve_href: HrefResolver | None = None
) -> str:
    """Convert an HTML fragment into Markdown.

    Parameters
    ----------
    html : str
        The HTML fragment to convert.
    resolve_href : callable, optional
        Called with every link target; its return value is used in the
        Markdown output. Used to point ``#id`` links at other chapter files.
    """
    soup = parse_fragment(html)
    _strip_unwanted_elements(soup)
    blocks = _serialize_children(soup, resolve_href=resolve_href)
    return "\n\n".join(block for block in blocks if block).strip()


def make_href_resolver(
    anchor_targets: Mapping[str, str], current_filename: str | None
) -> HrefResolver:
    """Return a resolver sending ``#id`` links to the file that holds ``id``."""

    def resolve(href: str) -> str:
        if not href.startswith("#"):
            return href
        target = anchor_targets.get(href[1:])
        if target is None or target == current_filename:
            return href
        return f"{target}{href}"

    return resolve


def _strip_unwanted_elements(soup: BeautifulSoup) -> None:
    for tag in soup.find_all(["script", "style", "noscript", "link", "meta"]):
        tag.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    # Page navigation emitted by the stylesheet.
    for tag in soup.select("div.navheader, div.navfooter"):
        tag.decompose()


def _serialize_children(
    container: Tag, *, resolve_href: HrefResolver | None = None
) -> list[str]:
    blocks: list[str] = []
    # Consecutive text and inline elements form one paragraph.
    inline_run: list[str] = []

    def flush() -> None:
        text = _cleanup_inline_text("".join(inline_run))
        if text:
            blocks.append(text)
        inline_run.clear()

    for child in container.children:
        if isinstance(child, Tag) and child.name not in _INLINE_TAGS:
            flush()
            blocks.extend(_serialize_block(child, resolve_href=resolve_href))
        elif isinstance(child, (Tag, NavigableString)):
            inline_run.append(_serialize_inline(child, resolve_href=resolve_href))
    flush()
    return blocks


def _serialize_block(tag: Tag, *, resolve_href: HrefResolver | None = None) -> list[str]:
    if tag.name in _CONTAINER_TAGS:
        return _serialize_children(tag, resolve_href=resolve_href)

    if HEADING_RE.match(tag.name):
        return [_serialize_heading(tag, resolve_href=resolve_href)] if tag.get_text(strip=True) else []

    if tag.name == "p":
        paragraph = _serialize_paragraph(tag, resolve_href=resolve_href)
        return [paragraph] if paragraph else []

    if tag.name == "pre":
        return [_serialize_pre(tag)]

    if tag.name in {"ul", "ol"}:
        lines = _serialize_list(tag, resolve_href=resolve_href)
        return ["\n".join(lines)] if lines else []

    if tag.name == "dl":
        return _serialize_definition_list(tag, resolve_href=resolve_href)

    if tag.name == "figure":
        figure = _serialize_figure(tag, resolve_href=resolve_href)
        return [figure] if figure else []

    if tag.name == "table":
        table_md = _serialize_table(tag, resolve_href=resolve_href)
        return [table_md] if table_md else []

    if tag.name == "blockquote":
        inner = "\n\n".join(_serialize_children(tag, resolve_href=resolve_href))
        if not inner:
            return []
        return ["\n".join("> " + line if line else ">" for line in inner.splitlines())]

    if tag.name == "hr":
        return ["---"]

    return _serialize_children(tag, resolve_href=resolve_href)


def _serialize_heading(tag: Tag, *, resolve_href: HrefResolver | None = None) -> str:
    level = int(tag.name[1])
    heading = normalize_text(_serialize_children_inline(tag, resolve_href=resolve_href))
    anchor = tag.get("id")
    if anchor:
        return f"{'#' * level} {heading} {{#{anchor}}}"
    return f"{'#' * level} {heading}"


def _serialize_paragraph(tag: Tag, *, resolve_href: HrefResolver | None = None) -> str:
    content = _serialize_inline(tag, resolve_href=resolve_href)
    content = _cleanup_inline_text(content)
    return content


def _serialize_pre(tag: Tag) -> str:
    code = tag.find("code", recursive=False)
    text = (code or tag).get_text()
    text = text.strip("\n")
    fence = "```"
    while fence in text:
        fence += "`"
    return f"{fence}\n{text}\n{fence}"


def _serialize_inline(
    node: Tag | NavigableString, *, resolve_href: HrefResolver | None = None
) -> str:
    if isinstance(node, Comment):
        return ""

    if isinstance(node, NavigableString):
        return str(node)

    if node.name == "br":
        return "\n"

    if node.name in {"em", "i"}:
        text = _serialize_children_inline(node, resolve_href=resolve_href)
        return f"*{text.strip()}*" if text.strip() else text

    if node.name in {"strong", "b"}:
        text = _serialize_children_inline(node, resolve_href=resolve_href)
        return f"**{text.strip()}**" if text.strip() else text

    if node.name == "code":
        text = node.get_text()
        return f"`{text}`" if text else ""

    if node.name == "a":
        return _serialize_link(node, resolve_href=resolve_href)

    if node.name == "sup":
        return _serialize_sup(node, resolve_href=resolve_href)

    if node.name == "img":
        return _serialize_image(node)

    return _serialize_children_inline(node, resolve_href=resolve_href)


def _serialize_link(node: Tag, *, resolve_href: HrefResolver | None = None) -> str:
    text = _serialize_children_inline(node, resolve_href=resolve_href).strip()
    href = node.get("href")
    if not href:
        return text
    if resolve_href is not None:
        href = resolve_href(href)
    return f"[{text or href}]({href})"


def _serialize_sup(node: Tag, *, resolve_href: HrefResolver | None = None) -> str:
    links = node.find_all("a", recursive=False)
    # Footnote reference: the marker text followed by an empty link.
    if len(links) == 1 and not links[0].get_text(strip=True) and links[0].get("href"):
        label = "".join(
            _serialize_inline(child, resolve_href=resolve_href)
            for child in node.children
            if child is not links[0]
        ).strip()
        href = links[0]["href"]
        if resolve_href is not None:
            href = resolve_href(href)
        return f"[^{label}]({href})" if label else f"[^]({href})"

    text = _serialize_children_inline(node, resolve_href=resolve_href).strip()
    anchor = node.get("id")
    if anchor:
        return f'<sup id="{anchor}">{text}</sup>'
    return f"^{text}" if text else ""


def _serialize_image(node: Tag) -> str:
    src = node.get("src")
    if not src:
        return ""
    return f"![{node.get('alt', '')}]({src})"


def _serialize_children_inline(
    tag: Tag, *, resolve_href: HrefResolver | None = None
) -> str:
    return "".join(
        _serialize_inline(child, resolve_href=resolve_href) for child in tag.children
    )


def _cleanup_inline_text(text: str) -> str:
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\s*\n\s*", "\n", text)
    return text.strip()


def _serialize_list(
    list_tag: Tag, indent: int = 0, *, resolve_href: HrefResolver | None = None
) -> list[str]:
    lines: list[str] = []
    ordered = list_tag.name == "ol"
    for index, item in enumerate(list_tag.find_all("li", recursive=False), start=1):
        item_text_parts: list[str] = []
        nested_lists: list[Tag] = []
        for child in item.children:
            if isinstance(child, Tag) and child.name in {"ul", "ol"}:
                nested_lists.append(child)
            else:
                item_text_parts.append(_serialize_inline(child, resolve_href=resolve_href))
        item_text = normalize_text(_cleanup_inline_text("".join(item_text_parts)))
        marker = f"{index}. " if ordered else "- "
        prefix = "  " * indent + marker
        lines.append(prefix + item_text if item_text else prefix.rstrip())
        for nested in nested_lists:
            lines.extend(_serialize_list(nested, indent + 1, resolve_href=resolve_href))
    return lines


def _serialize_definition_list(
    dl: Tag, *, resolve_href: HrefResolver | None = None
) -> list[str]:
    lines: list[str] = []
    for child in dl.find_all(["dt", "dd"], recursive=False):
        text = normalize_text(_serialize_inline(child, resolve_href=resolve_href))
        if not text:
            continue
        lines.append(f"**{text}**" if child.name == "dt" else f": {text}")
    return ["\n".join(lines)] if lines else []


def _serialize_table(table: Tag, *, resolve_href: HrefResolver | None = None) -> str:
    rows = []
    for row in table.find_all("tr"):
        cells = row.find_all(["th", "td"], recursive=False)
        if not cells:
            continue
        values = []
        for cell in cells:
            cell_text = _cleanup_inline_text(
                _serialize_inline(cell, resolve_href=resolve_href)
            ).replace("\n", "<br>").replace("|", "\\|")
            values.append(cell_text)
        rows.append(values)

    if not rows:
        return ""

    max_cols = max(len(row) for row in rows)
    normalized = [row + [""] * (max_cols - len(row)) for row in rows]
    header = normalized[0]
    lines = [
        "| " + " | ".join(header) + " |",
        "| " + " | ".join("---" for _ in header) + " |",
    ]
    for row in normalized[1:]:
        lines.append("| " + " | ".join(row) + " |")

    caption = table.find("caption")
    if caption and caption.get_text(strip=True):
        lines.insert(0, f"*{normalize_text(caption.get_text())}*\n")
    return "\n".join(lines)


def _serialize_figure(figure: Tag, *, resolve_href: HrefResolver | None = None) -> str:
    caption_tag = figure.find("figcaption")
    caption = (
        normalize_text(_serialize_inline(caption_tag, resolve_href=resolve_href))
        if caption_tag
        else ""
    )
    lines = [_serialize_image(img) for img in figure.find_all("img")]
    lines = [line for line in lines if line]
    if caption:
        lines.append(f"*{caption}*")
    return "\n\n".join(lines).strip()
