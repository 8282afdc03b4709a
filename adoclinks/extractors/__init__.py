"""
Cross-reference graph extraction with pluggable components.

This package turns a directory of AsciiDoc documents into a directed graph
of typed references and keeps it current one file at a time.
"""

from .protocols import (
    Document, Reference, Node, Edge, EdgeType,
    ReferenceExtractor, ContentSource,
    LINK, INCLUDE, INCLUDE_PARTIAL, EDGE_TYPES,
)
from .normalization import node_id, normalize_path, resolve_target, strip_extension
from .titles import extract_title, truncate_title
from .link_extractors import AsciidocReferenceExtractor, extract_references, is_external_url, is_partial_include
from .resolver import BareNameResolver
from .graph_store import GraphStore, GraphSnapshot
from .sources import DirectoryWalker, ScanResult, read_document
from .graph_builder import GraphBuilder

__all__ = [
    # Records and protocols
    "Document",
    "Reference",
    "Node",
    "Edge",
    "EdgeType",
    "ReferenceExtractor",
    "ContentSource",
    "LINK",
    "INCLUDE",
    "INCLUDE_PARTIAL",
    "EDGE_TYPES",
    # Identifiers
    "node_id",
    "normalize_path",
    "resolve_target",
    "strip_extension",
    # Extractors
    "extract_title",
    "truncate_title",
    "AsciidocReferenceExtractor",
    "extract_references",
    "is_external_url",
    "is_partial_include",
    # Graph
    "BareNameResolver",
    "GraphStore",
    "GraphSnapshot",
    # Corpus
    "DirectoryWalker",
    "ScanResult",
    "read_document",
    "GraphBuilder",
]
