"""
Directory-related domain models.
"""

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Self

# Share identifier the service uses for "no share context".
NIL_SHARE_ID = "00000000-0000-0000-0000-000000000000"


def is_nil_share(share_id: str | None) -> bool:
    """Check whether a share identifier means "no share context"."""
    return share_id is None or share_id == NIL_SHARE_ID


@dataclass(frozen=True, kw_only=True)
class FileEntry:
    """
    A file as listed in a directory.

    Read-only snapshot taken from a listing response.
    """

    file_id: str
    name: str
    size: int = 0


@dataclass(frozen=True, kw_only=True)
class DirectoryNode:
    """
    A remote directory with its sub-directories and files.

    ``children`` is None when the listing that produced the node did not
    descend into it; an empty tuple means the directory has no sub-directory.
    """

    directory_id: str
    name: str
    share_id: str = NIL_SHARE_ID
    children: tuple["DirectoryNode", ...] | None = None
    files: tuple[FileEntry, ...] = ()

    @property
    def children_loaded(self) -> bool:
        """Check if the sub-directory list is known."""
        return self.children is not None

    def get_child(self, name: str) -> Self | None:
        """Get a sub-directory by name."""
        for child in self.children or ():
            if child.name == name:
                return child
        return None

    def get_file(self, name: str) -> FileEntry | None:
        """Get a file by name."""
        return next((f for f in self.files if f.name == name), None)

    def match_files(self, pattern: str = "*") -> list[FileEntry]:
        """
        Files whose name matches a shell-style pattern.

        Matching is case-sensitive and keeps the server order.

        Args:
            pattern: Glob pattern, e.g. ``"*.txt"``.
        """
        return [f for f in self.files if fnmatchcase(f.name, pattern)]

    def walk(self) -> list[Self]:
        """Return this node and every loaded descendant, depth first."""
        nodes = [self]
        for child in self.children or ():
            nodes.extend(child.walk())
        return nodes
