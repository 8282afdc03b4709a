"""
Graph building for one corpus session using the pluggable components.
"""
import logging
from pathlib import Path
from typing import Optional

from adoclinks.config import GraphConfig, DEFAULT_CONFIG

from .graph_store import GraphStore, GraphSnapshot
from .link_extractors import AsciidocReferenceExtractor
from .normalization import normalize_path
from .protocols import ReferenceExtractor
from .resolver import BareNameResolver
from .sources import DirectoryWalker, ScanResult, read_document
from .titles import extract_title

logger = logging.getLogger(__name__)


class GraphBuilder:
    """
    Builds and maintains the cross-reference graph of a corpus.

    The builder owns everything that lives for one session:
    - GraphStore: the live graph
    - BareNameResolver: short-name lookup, filled by the learn pass
    - DirectoryWalker: which files belong to the corpus

    A full build runs two scans (learn names, then parse) and drops
    dangling edges. Afterwards a file watcher keeps the graph current via
    refresh_file and remove_file, each touching one document's
    contribution only.
    """

    def __init__(
        self,
        root: Path,
        config: Optional[GraphConfig] = None,
        reference_extractor: Optional[ReferenceExtractor] = None,
        max_workers: Optional[int] = None,
        show_progress: bool = False,
    ):
        """
        Args:
            root: Corpus root directory
            config: File types and title length (DEFAULT_CONFIG if None)
            reference_extractor: Extracts references (AsciiDoc if None)
            max_workers: Thread pool size for scans
            show_progress: Show progress bars via tqdm
        """
        self.config = config if config is not None else DEFAULT_CONFIG
        self.walker = DirectoryWalker(root, self.config.file_types)
        self.reference_extractor = reference_extractor or AsciidocReferenceExtractor()
        self.store = GraphStore()
        self.resolver = BareNameResolver()
        self.max_workers = max_workers
        self.show_progress = show_progress

    def parse_file(self, store: GraphStore, path: str) -> None:
        """
        Re-parse one document into ``store``.

        The file is read before the store is touched, so a read failure
        leaves the previous node and edges for ``path`` in place.
        """
        path = normalize_path(path)
        document = read_document(path)

        title = extract_title(document.content, self.config.title_max_length)
        references = self.reference_extractor.extract_references(document.content)
        store.apply_parse(path, title, references)

    def learn_file(self, store: GraphStore, path: str) -> None:
        """Record ``path`` in the bare-name resolver."""
        self.resolver.learn(normalize_path(path))

    def build(self) -> ScanResult:
        """
        Scan the whole corpus and build the graph.

        Returns:
            Result of the parse scan (per-file failures included)
        """
        logger.info(f"Building graph for {self.walker.root}...")

        self.walker.scan(
            self.store,
            self.learn_file,
            max_workers=self.max_workers,
            show_progress=self.show_progress,
            desc="Learning names",
        )
        result = self.walker.scan(
            self.store,
            self.parse_file,
            max_workers=self.max_workers,
            show_progress=self.show_progress,
            desc="Parsing",
        )
        self.store.filter_dangling_edges()

        logger.info(
            f"Graph complete: {self.store.node_count} nodes, {self.store.edge_count} edges"
        )
        return result

    def refresh_file(self, path: str) -> None:
        """
        Bring one created or changed document up to date.

        Raises:
            OSError: If the file cannot be read (graph left unchanged)
        """
        self.parse_file(self.store, path)
        self.learn_file(self.store, path)

    def remove_file(self, path: str) -> None:
        """Forget a deleted document."""
        path = normalize_path(path)
        self.store.remove_path(path)
        self.resolver.forget(path)

    def resolve(self, name: str) -> Optional[str]:
        """Look up a document path by bare file name, with or without extension."""
        return self.resolver.resolve(name)

    def snapshot(self, filter_dangling: bool = True) -> GraphSnapshot:
        """Return a consistent read-only copy of the graph."""
        if filter_dangling:
            self.store.filter_dangling_edges()
        return self.store.snapshot()
