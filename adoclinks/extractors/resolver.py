"""
Bare-name lookup: resolve "guide" or "guide.adoc" to the full path of a
document seen during a corpus scan.
"""
import logging
import os
import threading
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class BareNameResolver:
    """
    Maps bare file names to the last-seen absolute path.

    Each learned path registers two keys: the file name with its extension
    and the file name with its final extension segment removed. Later
    registrations overwrite earlier ones.

    One resolver belongs to one corpus session (see GraphBuilder); it is not
    process-global.
    """

    def __init__(self):
        self._paths: Dict[str, str] = {}
        self._lock = threading.Lock()

    def learn(self, path: str) -> None:
        """
        Register ``path`` under its bare names.

        Args:
            path: Normalized absolute document path
        """
        file_name = os.path.basename(path)
        stem = '.'.join(file_name.split('.')[:-1])
        with self._lock:
            self._paths[file_name] = path
            if stem:
                self._paths[stem] = path
        logger.debug(f"Learned {file_name!r} -> {path}")

    def resolve(self, key: str) -> Optional[str]:
        """Return the path last learned for ``key``, or None."""
        with self._lock:
            return self._paths.get(key)

    def forget(self, path: str) -> int:
        """
        Drop every key that still maps to ``path``.

        Keys that were since overwritten by another file are kept.

        Returns:
            Number of keys removed
        """
        with self._lock:
            stale = [key for key, value in self._paths.items() if value == path]
            for key in stale:
                del self._paths[key]
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._paths
