"""
Document title extraction.

An AsciiDoc document title is a level-0 heading: a line starting with a
single ``=`` followed by at least one space.
"""
import re
from typing import Optional

# First match wins; "== Section" does not match because the second
# character must be a space.
TITLE_PATTERN = re.compile(r'^= +(.+)$', re.MULTILINE)

ELLIPSIS = '...'


def truncate_title(title: str, max_length: int) -> str:
    """
    Shorten a title to ``max_length`` characters plus an ellipsis.

    A ``max_length`` of zero or less disables truncation. A title that is
    exactly ``max_length`` long is returned unchanged.

    Examples:
        >>> truncate_title("Hello World", 5)
        'Hello...'
        >>> truncate_title("Hello", 5)
        'Hello'
    """
    if max_length > 0 and len(title) > max_length:
        return title[:max_length] + ELLIPSIS
    return title


def extract_title(content: str, max_length: int = 0) -> Optional[str]:
    """
    Find the document title.

    Args:
        content: Raw document text
        max_length: Truncation limit, disabled when <= 0

    Returns:
        The stripped (and possibly truncated) title, or None if the
        document has no title line
    """
    match = TITLE_PATTERN.search(content)
    if match is None:
        return None
    title = match.group(1).strip()
    # A heading marker followed only by whitespace is not a title
    if not title:
        return None
    return truncate_title(title, max_length)
