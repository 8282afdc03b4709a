"""
Reference extraction for AsciiDoc documents.

Extracts raw reference targets from document content:
- xref:file.adoc[label]            -> link
- <<file.adoc>> / <<file.adoc,label>> -> link
- link:file.adoc[label]            -> link
- include::file.adoc[]             -> include
- include::file.adoc[tag=x]        -> include-partial (also tags=, lines=)
"""
import re
from typing import Iterator, List, Tuple

from .protocols import ReferenceExtractor, Reference, EdgeType, LINK, INCLUDE, INCLUDE_PARTIAL

EXTERNAL_PREFIXES = ('http://', 'https://')

# Attributes that restrict an include to part of the target document
PARTIAL_INCLUDE_PATTERNS = [
    re.compile(r'\btag='),
    re.compile(r'\btags='),
    re.compile(r'\blines='),
]


def is_external_url(target: str) -> bool:
    """Check if a target points outside the corpus (http/https)."""
    return target.startswith(EXTERNAL_PREFIXES)


def is_partial_include(attributes: str) -> bool:
    """
    Check if an include attribute list selects only part of the document.

    Examples:
        >>> is_partial_include("tag=intro")
        True
        >>> is_partial_include("leveloffset=+1")
        False
    """
    if not attributes:
        return False
    return any(pattern.search(attributes) for pattern in PARTIAL_INCLUDE_PATTERNS)


class AsciidocReferenceExtractor(ReferenceExtractor):
    """
    Extracts typed cross-references from AsciiDoc text.

    Each pattern is scanned independently with its own ``finditer``, so a
    span matched by two patterns yields two references. Results are
    concatenated in pattern order: xref, inline anchor, link macro, include.
    Malformed syntax (e.g. an unterminated attribute list) simply does not
    match.
    """

    # xref:path/to/file.adoc[] or xref:path/to/file.adoc[label]
    XREF_PATTERN = re.compile(r'xref:([^\[]+\.adoc)\[[^\]]*\]')

    # <<file.adoc>> or <<file.adoc,label>>
    ANCHOR_PATTERN = re.compile(r'<<([^,>]+\.adoc)(?:,[^>]*)?>>?')

    # link:file.adoc[label], but not e.g. "xlink:" or "hyperlink:"
    LINK_PATTERN = re.compile(r'(?<!\w)link:([^\[]+\.adoc)\[[^\]]*\]')

    # include::path/to/file.adoc[attributes]
    INCLUDE_PATTERN = re.compile(r'include::([^\[]+\.adoc)\[([^\]]*)\]')

    def iter_references(self, content: str) -> Iterator[Reference]:
        """
        Lazily yield references found in ``content``.

        Args:
            content: Raw document text

        Yields:
            Reference records, external URLs excluded
        """
        for target, edge_type in self._iter_matches(content):
            target = target.strip()
            if is_external_url(target):
                continue
            yield Reference(target=target, type=edge_type)

    def extract_references(self, content: str) -> List[Reference]:
        """Return all references in ``content`` as a list."""
        return list(self.iter_references(content))

    def _iter_matches(self, content: str) -> Iterator[Tuple[str, EdgeType]]:
        for match in self.XREF_PATTERN.finditer(content):
            yield match.group(1), LINK

        for match in self.ANCHOR_PATTERN.finditer(content):
            # Anchors may also name in-document sections; only documents count
            if match.group(1).strip().endswith('.adoc'):
                yield match.group(1), LINK

        for match in self.LINK_PATTERN.finditer(content):
            yield match.group(1), LINK

        for match in self.INCLUDE_PATTERN.finditer(content):
            attributes = match.group(2).strip()
            yield match.group(1), INCLUDE_PARTIAL if is_partial_include(attributes) else INCLUDE


_default_extractor = AsciidocReferenceExtractor()


def extract_references(content: str) -> List[Reference]:
    """Extract references with the default AsciiDoc extractor."""
    return _default_extractor.extract_references(content)
