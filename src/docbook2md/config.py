"""Local configuration for docbook2md."""

from __future__ import annotations

import os


DEFAULT_XSLTPROC = "xsltproc"
# Resolved by xsltproc through the system XML catalog (docbook-xsl-ns).
DEFAULT_STYLESHEET = "http://docbook.sourceforge.net/release/xsl-ns/current/xhtml5/docbook.xsl"
DEFAULT_MARKDOWN_EXTENSION = "md"

DOCBOOK2MD_XSLTPROC = os.getenv("DOCBOOK2MD_XSLTPROC", DEFAULT_XSLTPROC)
DOCBOOK2MD_STYLESHEET = os.getenv("DOCBOOK2MD_STYLESHEET", DEFAULT_STYLESHEET)
DOCBOOK2MD_KEEP_INTERMEDIATE = os.getenv("DOCBOOK2MD_KEEP_INTERMEDIATE", "false").lower() == "true"
DOCBOOK2MD_MARKDOWN_EXTENSION = os.getenv("DOCBOOK2MD_MARKDOWN_EXTENSION", DEFAULT_MARKDOWN_EXTENSION)
