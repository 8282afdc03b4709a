"""
Corpus enumeration and concurrent per-file processing.

Provides:
- read_document: Read one UTF-8 document from disk
- DirectoryWalker: List eligible files under a root and run a callback on
  each of them concurrently
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from tqdm import tqdm

from .graph_store import GraphStore
from .normalization import normalize_path
from .protocols import ContentSource, Document

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = '.'

FileCallback = Callable[[GraphStore, str], None]


def read_document(path: str) -> Document:
    """
    Read a document as UTF-8 text.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()
    return Document(path=path, content=content)


@dataclass
class ScanResult:
    """Outcome of one directory scan: which files settled how."""
    succeeded: List[str] = field(default_factory=list)
    failures: Dict[str, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def __len__(self) -> int:
        return len(self.succeeded) + len(self.failures)


class DirectoryWalker(ContentSource):
    """
    Enumerates documents under a corpus root.

    A file is eligible when its extension (without the dot, case as given)
    is in ``file_types`` and its name does not start with a dot.
    """

    def __init__(self, root: Path, file_types: Sequence[str] = ('adoc', 'asciidoc')):
        """
        Args:
            root: Corpus root directory
            file_types: Extensions to include, with or without leading dot
        """
        self.root = Path(root)
        self.file_types = {ext.lstrip('.') for ext in file_types}

        if not self.root.is_dir():
            raise ValueError(f"Input directory does not exist: {self.root}")

    def is_eligible(self, path: Path) -> bool:
        """Check extension allow-list and hidden-file marker."""
        if path.name.startswith(HIDDEN_PREFIX):
            return False
        return path.suffix[1:] in self.file_types

    def iter_files(self) -> Iterator[str]:
        """
        Yield the normalized path of every eligible file, sorted.
        """
        paths = sorted(
            normalize_path(str(path))
            for path in self.root.rglob('*')
            if path.is_file() and self.is_eligible(path)
        )
        yield from paths

    def scan(
        self,
        store: GraphStore,
        on_file: FileCallback,
        max_workers: Optional[int] = None,
        show_progress: bool = False,
        desc: str = "Scanning",
    ) -> ScanResult:
        """
        Run ``on_file(store, path)`` for every eligible file.

        All calls are submitted up front and the scan returns once every one
        of them has settled. A failing call is logged and recorded; it never
        stops the others.

        Args:
            store: Graph store passed through to the callback
            on_file: Per-file callback
            max_workers: Thread pool size (executor default when None)
            show_progress: Show a tqdm progress bar
            desc: Progress bar label

        Returns:
            ScanResult listing succeeded and failed paths
        """
        files = list(self.iter_files())
        logger.info(f"{desc} {len(files)} files under {self.root}...")

        result = ScanResult()
        if not files:
            return result

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {executor.submit(on_file, store, path): path for path in files}

            for future in tqdm(
                as_completed(futures),
                total=len(futures),
                disable=not show_progress,
                desc=desc,
                unit="files",
            ):
                path = futures[future]
                error = future.exception()
                if error is None:
                    result.succeeded.append(path)
                elif isinstance(error, Exception):
                    logger.warning(f"Failed to process {path}: {error}")
                    result.failures[path] = error
                else:
                    raise error

        result.succeeded.sort()
        if result.failures:
            logger.warning(f"{desc}: {len(result.failures)} of {len(files)} files failed")
        return result
