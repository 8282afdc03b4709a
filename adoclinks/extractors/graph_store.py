"""
In-memory cross-reference graph with path-scoped updates.

Every document contributes exactly the edges whose source is its own node
id. Re-parsing a document replaces that contribution and nothing else, so
the graph can be kept current one file at a time without a full rebuild.
"""
import json
import logging
import threading
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Any

from .normalization import node_id, resolve_target
from .protocols import Edge, Node, Reference

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ('dot', 'json')


def _dot_escape(text: str) -> str:
    return text.replace('\\', '\\\\').replace('"', '\\"')


@dataclass(frozen=True)
class GraphSnapshot:
    """
    Immutable copy of the graph handed to read-only consumers (export,
    visualization). Nodes and edges are frozen records; the store replaces
    rather than mutates them, so a snapshot never sees later parses.
    """
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """Graph snapshot message: {"nodes": [...], "edges": [...]}."""
        return {
            'nodes': [
                {'id': node.id, 'path': node.path, 'label': node.label}
                for node in self.nodes
            ],
            'edges': [
                {'source': edge.source, 'target': edge.target, 'type': edge.type}
                for edge in self.edges
            ],
        }

    def to_dot(self) -> str:
        """
        Render the graph in Graphviz DOT syntax.

        Node ids are quoted since a hex digest may start with a digit. Edge
        types are omitted; styling by type is left to the viewer.
        """
        lines = ['digraph g {']
        for node in self.nodes:
            lines.append(f'  "{node.id}" [label="{_dot_escape(node.label)}"];')
        for edge in self.edges:
            lines.append(f'  "{edge.source}" -> "{edge.target}";')
        lines.append('}')
        return '\n'.join(lines) + '\n'

    def write(self, output_path: Path, fmt: str = 'json') -> None:
        """
        Write the snapshot to ``output_path`` as JSON or DOT.

        Args:
            output_path: Output file path (parent directories are created)
            fmt: 'json' or 'dot'
        """
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format: {fmt}. Available formats: {list(EXPORT_FORMATS)}")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            if fmt == 'dot':
                f.write(self.to_dot())
            else:
                json.dump(self.to_dict(), f, indent=2)
                f.write('\n')

        logger.info(f"Graph written to {output_path}")


class GraphStore:
    """
    Mutable directed graph of documents and typed references.

    Nodes and edges are kept as ordered lists. A path -> node index is
    derived from the node list and rebuilt whenever a node is removed.

    All mutation and snapshotting happens under one re-entrant lock, so the
    "drop this source's edges, append its new edges" step of a re-parse is
    atomic relative to every other writer and reader.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self._by_path: Dict[str, Node] = {}
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self):
        return f"GraphStore(nodes={len(self.nodes)}, edges={len(self.edges)})"

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def find_node(self, path: str) -> Optional[Node]:
        """Return the node for ``path``, or None."""
        with self.lock:
            return self._by_path.get(path)

    def edges_from(self, path: str) -> List[Edge]:
        """Return the edges contributed by the document at ``path``."""
        source = node_id(path)
        with self.lock:
            return [edge for edge in self.edges if edge.source == source]

    def apply_parse(
        self,
        path: str,
        title: Optional[str],
        references: Iterable[Reference],
    ) -> None:
        """
        Replace the graph contribution of one document.

        1. Look up the existing node for ``path``.
        2. Without a title the document no longer qualifies: drop its node
           (its edges are left to dangle until filter_dangling_edges).
        3. Otherwise swap in a relabeled node, or append a new one.
        4. Drop every edge whose source is this document.
        5. Append one edge per reference, resolved relative to ``path``.

        Args:
            path: Normalized absolute path of the parsed document
            title: Extracted title, or None
            references: References extracted from the document
        """
        source = node_id(path)
        # Resolve outside the lock; it is pure
        new_edges = [
            Edge(source=source, target=node_id(resolve_target(path, ref.target)), type=ref.type)
            for ref in references
        ]

        with self.lock:
            existing = self._by_path.get(path)

            if title is None:
                if existing is not None:
                    self._remove_node(existing)
                    logger.debug(f"Removed node for untitled document {path}")
                return

            if existing is not None:
                node = replace(existing, label=title)
                self.nodes[self.nodes.index(existing)] = node
            else:
                node = Node(id=source, path=path, label=title)
                self.nodes.append(node)
            self._by_path[path] = node

            self.edges = [edge for edge in self.edges if edge.source != source]
            self.edges.extend(new_edges)

        logger.debug(f"Parsed {path}: {len(new_edges)} references")

    def remove_path(self, path: str) -> bool:
        """
        Forget a deleted document.

        Drops its node and the edges it contributed. Edges from other
        documents that point at it remain until filter_dangling_edges.

        Returns:
            True if a node or any edges were removed
        """
        source = node_id(path)
        with self.lock:
            existing = self._by_path.get(path)
            if existing is not None:
                self._remove_node(existing)
            edge_count = len(self.edges)
            self.edges = [edge for edge in self.edges if edge.source != source]
            removed_edges = edge_count - len(self.edges)

        if existing is not None or removed_edges:
            logger.debug(f"Removed {path} ({removed_edges} outgoing edges)")
            return True
        return False

    def filter_dangling_edges(self) -> int:
        """
        Drop every edge whose source or target has no node.

        Returns:
            Number of edges removed
        """
        with self.lock:
            ids = {node.id for node in self.nodes}
            edge_count = len(self.edges)
            self.edges = [
                edge for edge in self.edges
                if edge.source in ids and edge.target in ids
            ]
            removed = edge_count - len(self.edges)

        if removed:
            logger.debug(f"Filtered {removed} dangling edges")
        return removed

    def snapshot(self) -> GraphSnapshot:
        """Copy the current graph for a read-only consumer."""
        with self.lock:
            return GraphSnapshot(
                nodes=tuple(self.nodes),
                edges=tuple(self.edges),
            )

    def _remove_node(self, node: Node) -> None:
        """Caller must hold lock."""
        self.nodes = [n for n in self.nodes if n is not node]
        self._by_path = {n.path: n for n in self.nodes}
