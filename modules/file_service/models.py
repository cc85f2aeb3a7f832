"""
Data records returned by the file service.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class FileEntry:
    """One immediate child of a listed directory."""
    name: str
    path: str
    is_dir: bool
    size: int  # 0 for directories
    modified: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DirectoryListing:
    """Ordered children of one directory: directories first, then files."""
    files: Tuple[FileEntry, ...]
    path: str

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self):
        return iter(self.files)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the shape the front-end expects."""
        return {
            "files": [entry.to_dict() for entry in self.files],
            "path": self.path,
        }
