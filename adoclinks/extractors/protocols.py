"""
Core protocols and records for cross-reference graph extraction.
"""
from dataclasses import dataclass
from typing import Protocol, Iterator, List, Literal


EdgeType = Literal['link', 'include', 'include-partial']

LINK: EdgeType = 'link'
INCLUDE: EdgeType = 'include'
INCLUDE_PARTIAL: EdgeType = 'include-partial'

EDGE_TYPES = (LINK, INCLUDE, INCLUDE_PARTIAL)


@dataclass
class Document:
    """A document read from the corpus."""
    path: str                # Normalized absolute path
    content: str


@dataclass(frozen=True)
class Reference:
    """One reference declaration found in a document."""
    target: str              # Raw target as written, e.g. "../b.adoc"
    type: EdgeType


@dataclass(frozen=True)
class Node:
    """A graph vertex: one document that has a title. Relabeling replaces the record."""
    id: str
    path: str
    label: str


@dataclass(frozen=True)
class Edge:
    """A directed, typed reference from one document to another."""
    source: str
    target: str
    type: EdgeType


class ReferenceExtractor(Protocol):
    """Extract reference declarations from document content."""

    def extract_references(self, content: str) -> List[Reference]:
        """Returns references in pattern order; never touches the filesystem."""
        ...


class ContentSource(Protocol):
    """Enumerates the documents of a corpus."""

    def iter_files(self) -> Iterator[str]:
        """Yields normalized paths of eligible documents."""
        ...
