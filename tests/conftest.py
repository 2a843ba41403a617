"""Test setup for docbook2md."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running integration tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests that need xsltproc and the DocBook stylesheets",
    )


@pytest.fixture
def book_html() -> str:
    """A small book as written by the DocBook xhtml5 stylesheet."""
    return """<!DOCTYPE html>
<html>
  <head><title>User Guide</title></head>
  <body>
    <div class="book">
      <div class="titlepage"><h1 class="title">User Guide</h1></div>
      <div class="toc">
        <p><strong>Table of Contents</strong></p>
        <ul class="toc">
          <li><span class="preface"><a href="#pref">Preface</a></span></li>
          <li><span class="chapter"><a href="#ch-install">1. Installing</a></span>
            <ul>
              <li><span class="section"><a href="#sec-req">1.1. Requirements</a></span></li>
              <li><span class="section"><a href="#sec-steps">1.2. Steps</a></span></li>
            </ul>
          </li>
          <li><span class="appendix"><a href="#app-a">A. Reference</a></span></li>
        </ul>
      </div>
      <p>Welcome to the guide.</p>
      <div class="preface" id="pref"><h2>Preface</h2><p>Read <a href="#sec-steps">the steps</a>.</p></div>
      <section class="chapter" id="ch-install">
        <h2>1. Installing</h2>
        <p>Before you start.</p>
        <section class="section" id="sec-req">
          <h3>1.1. Requirements</h3>
          <div class="literallayout"><p>
  python
  xsltproc
</p></div>
        </section>
        <section class="section" id="sec-steps">
          <h3>1.2. Steps</h3>
          <pre class="programlisting">make install</pre>
          <p>Done<a class="footnote" href="#ftn.f1" id="f1"><sup class="footnote">[1]</sup></a>.</p>
          <div class="footnotes">
            <div class="footnote" id="ftn.f1"><p><a class="para" href="#f1"><sup class="para">[1] </sup></a>Root needed.</p></div>
          </div>
        </section>
      </section>
      <section class="appendix" id="app-a">
        <h2>A. Reference</h2>
        <div class="example" id="ex-conf"><div class="example-title">Example A.1. Config</div><pre class="screen">key=value</pre></div>
      </section>
    </div>
  </body>
</html>
"""
