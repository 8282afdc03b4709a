"""
Configuration consumed by the graph builder.

The host editor owns these settings; this module only describes them,
validates them, and round-trips them through JSON so the CLI can read the
same values.
"""
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path
from typing import List
import json
import logging

logger = logging.getLogger(__name__)

DEFAULT_FILE_TYPES = ['adoc', 'asciidoc']


@dataclass
class GraphConfig:
    """
    Settings that shape which files join the graph and how they are labeled.

    Attributes:
        file_types: Extensions of documents to scan (leading dots are stripped)
        title_max_length: Truncate longer titles to this many characters plus
                          an ellipsis; 0 or less disables truncation
    """

    file_types: List[str] = field(default_factory=lambda: list(DEFAULT_FILE_TYPES))
    title_max_length: int = 0

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.file_types, str) or not self.file_types:
            raise ValueError(f"file_types must be a non-empty list of extensions, got {self.file_types!r}")

        for ext in self.file_types:
            if not isinstance(ext, str) or not ext.lstrip('.'):
                raise ValueError(f"Invalid file type: {ext!r}")
        self.file_types = [ext.lstrip('.') for ext in self.file_types]

        # bool is an int subclass; reject it explicitly
        if isinstance(self.title_max_length, bool) or not isinstance(self.title_max_length, int):
            raise ValueError(f"title_max_length must be an integer, got {self.title_max_length!r}")

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'GraphConfig':
        """Create from dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(
                f"Unknown configuration keys: {sorted(unknown)}. "
                f"Available keys: {sorted(known)}"
            )
        return cls(**data)

    def save(self, path: Path) -> None:
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> 'GraphConfig':
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)
        logger.debug(f"Loaded configuration from {path}")
        return cls.from_dict(data)


DEFAULT_CONFIG = GraphConfig()
