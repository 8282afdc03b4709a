"""
Path normalization and node identifiers.

Core Purpose:
    Map any document path to a node key that is:
    - Deterministic (same input always produces same output, across processes)
    - Extension-agnostic (``guide.adoc`` and ``guide.asciidoc`` share a key)
    - Collision-resistant (MD5 over the full stem path)

Reference targets are resolved against the directory of the referencing
document, purely lexically. Nothing here touches the filesystem.
"""
import hashlib
import os


def strip_extension(path: str) -> str:
    """
    Remove the final extension segment from a path.

    Examples:
        >>> strip_extension("/docs/guide.adoc")
        '/docs/guide'
        >>> strip_extension("/docs/archive.tar.adoc")
        '/docs/archive.tar'
    """
    return os.path.splitext(path)[0]


def node_id(path: str) -> str:
    """
    Compute the node key for a document path.

    The key is the MD5 hex digest of the path with its extension removed,
    so edges computed in one run stay valid against nodes built in another.

    Args:
        path: Normalized document path

    Returns:
        32-character hex digest
    """
    return hashlib.md5(strip_extension(path).encode('utf-8')).hexdigest()


def normalize_path(path: str) -> str:
    """Return the absolute, normalized form of ``path``."""
    return os.path.normpath(os.path.abspath(path))


def resolve_target(source_path: str, target: str) -> str:
    """
    Resolve a raw reference target to a normalized path.

    Absolute targets are normalized as-is. Relative targets are joined onto
    the directory containing ``source_path`` and then normalized, which
    collapses ``.`` and ``..`` segments and canonicalizes separators.

    Args:
        source_path: Normalized path of the referencing document
        target: Target string exactly as extracted

    Returns:
        Normalized path of the referenced document (which may not exist)
    """
    if os.path.isabs(target):
        return os.path.normpath(target)
    parent_directory = os.path.dirname(source_path)
    return os.path.normpath(os.path.join(parent_directory, target))
