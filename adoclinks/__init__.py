"""adoc-links: cross-reference graphs for AsciiDoc corpora."""

__version__ = "0.1.0"
