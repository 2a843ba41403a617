"""Inspect DocBook HTML: class usage and the outline read from its TOC."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from bs4 import BeautifulSoup

from docbook2md.html_parser import parse_docbook_html

# Classes rewritten by docbook2md.normalizer.
NORMALIZED_CLASSES = (
    "literallayout",
    "programlisting",
    "screen",
    "example",
    "example-title",
    "footnote",
    "footnoteref",
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect DocBook HTML classes and outline.")
    parser.add_argument("file", help="HTML file produced by the DocBook xhtml5 stylesheet")
    parser.add_argument("--all-classes", action="store_true", help="List every class, not only the rewritten ones")
    args = parser.parse_args()

    path = Path(args.file)
    if not path.is_file():
        raise FileNotFoundError(f"HTML file not found: {path}")
    html = path.read_text(encoding="utf-8")

    classes = collect_classes(BeautifulSoup(html, "html.parser"))
    print("Classes:")
    for name, count in classes.most_common():
        if not args.all_classes and name not in NORMALIZED_CLASSES:
            continue
        print(f"{name}: {count}")

    parsed = parse_docbook_html(html, default_title=path.stem)
    print(f"\nOutline of {parsed.title!r}:")
    for chapter in parsed.chapters:
        marker = "" if chapter.content else "  (no content)"
        print(f"{'  ' * chapter.level}{chapter.num}. [{chapter.type}] {chapter.title} #{chapter.id}{marker}")
    print(f"\nFront matter: {len(parsed.front_matter.content)} chars")


def collect_classes(soup: BeautifulSoup) -> Counter:
    classes = Counter()
    for tag in soup.find_all(True):
        for cls in tag.get("class", []):
            classes[cls] += 1
    return classes


if __name__ == "__main__":
    main()
