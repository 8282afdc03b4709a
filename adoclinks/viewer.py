"""
State kept by the graph viewer between messages.

The viewer receives full snapshots after every change and "file opened"
notifications from the editor. Re-running the layout is expensive, so a
snapshot that changes nothing visible is detected and skipped.
"""
import logging
import os
import re
from collections import Counter
from typing import Iterable, Optional, Tuple

from adoclinks.extractors.graph_store import GraphSnapshot
from adoclinks.extractors.protocols import Edge, Node

logger = logging.getLogger(__name__)

VCS_SUFFIX = '.git'
WINDOWS_DRIVE_PATTERN = re.compile(r'^\w:\\')


def _node_key(node: Node) -> Tuple[str, str]:
    return (node.id, node.label)


def _edge_key(edge: Edge) -> Tuple[str, str, str]:
    return (edge.source, edge.target, edge.type)


def same_nodes(previous: Iterable[Node], current: Iterable[Node]) -> bool:
    """True if both sequences hold the same (id, label) pairs, in any order."""
    return Counter(map(_node_key, previous)) == Counter(map(_node_key, current))


def same_edges(previous: Iterable[Edge], current: Iterable[Edge]) -> bool:
    """True if both sequences hold the same (source, target, type) triples, in any order."""
    return Counter(map(_edge_key, previous)) == Counter(map(_edge_key, current))


def same_snapshot(previous: Optional[GraphSnapshot], current: GraphSnapshot) -> bool:
    """True if re-rendering ``current`` after ``previous`` would change nothing."""
    if previous is None:
        return False
    return same_nodes(previous.nodes, current.nodes) and same_edges(previous.edges, current.edges)


def normalize_navigation_path(path: str) -> str:
    """Strip a trailing version-control suffix from an opened path."""
    if path.endswith(VCS_SUFFIX):
        return path[:-len(VCS_SUFFIX)]
    return path


def fix_slashes(path: str, windows: bool = os.name == 'nt') -> str:
    """
    Convert forward slashes in a Windows drive path to backslashes.

    Node paths built under one separator convention are compared against
    editor paths produced under another; only local Windows paths
    (``C:\\...``) are rewritten.
    """
    if windows and WINDOWS_DRIVE_PATTERN.match(path):
        return path.replace('/', '\\')
    return path


class ViewerState:
    """Last rendered snapshot and active node of one graph view."""

    def __init__(self, windows: bool = os.name == 'nt'):
        self.snapshot: Optional[GraphSnapshot] = None
        self.active_id: Optional[str] = None
        self.windows = windows

    def refresh(self, snapshot: GraphSnapshot) -> bool:
        """
        Accept a new snapshot.

        Returns:
            True if the layout must be recomputed, False for a no-op snapshot
        """
        if same_snapshot(self.snapshot, snapshot):
            return False
        self.snapshot = snapshot
        if self.active_id is not None and all(node.id != self.active_id for node in snapshot.nodes):
            self.active_id = None
        logger.debug(f"Re-layout: {len(snapshot.nodes)} nodes, {len(snapshot.edges)} edges")
        return True

    def open_file(self, path: str) -> Optional[str]:
        """
        Mark the node for an opened file as active.

        Returns:
            The active node id, or None if no node matches
        """
        path = normalize_navigation_path(path)
        self.active_id = None
        if self.snapshot is None:
            return None

        for node in self.snapshot.nodes:
            if fix_slashes(node.path, self.windows) == path:
                self.active_id = node.id
                break
        return self.active_id
