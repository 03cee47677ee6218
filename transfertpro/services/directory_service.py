"""
Directory resolution service for TransfertPro.

Turns slash-delimited paths into remote directories, keeping every fetched
directory in a per-session cache.
"""

import structlog

from transfertpro.api.endpoints.directory import get_directory, get_directory_tree, get_root
from transfertpro.api.http_client import HttpClient
from transfertpro.api.protocol import SessionProvider
from transfertpro.core.cache import NodeCache
from transfertpro.exceptions import NotFoundError, ValidationError
from transfertpro.models.directory import DirectoryNode

logger = structlog.get_logger(__name__)


def split_path(path: str) -> list[str]:
    return [p for p in path.split("/") if p]


class DirectoryService:
    """
    Resolves paths to directories.

    The first path segment names a root (private files, the shared
    workspace, ...); the remaining segments are walked level by level.
    Unknown levels are fetched with a single listing bounded by the
    remaining depth rather than one call per level.
    """

    def __init__(self, http: HttpClient, session: SessionProvider) -> None:
        """
        Args:
            http: HTTP client.
            session: Session used to sign listing calls.
        """
        self._http = http
        self._session = session
        self._roots: list[DirectoryNode] | None = None
        self._nodes: NodeCache[DirectoryNode] = NodeCache()
        # Directories whose children come from a single-level listing.
        self._listed: set[str] = set()

    def refresh(self) -> None:
        """Drop the cached roots and directories."""
        self._roots = None
        self._nodes.clear()
        self._listed.clear()
        logger.debug("Directory cache cleared")

    def invalidate(self, directory_id: str) -> None:
        """
        Forget the cached listing of one directory.

        Call after adding or removing files in it; the next resolution
        lists it again.
        """
        self._nodes.remove(directory_id)
        self._listed.discard(directory_id)
        logger.debug("Directory invalidated", directory_id=directory_id)

    def roots(self) -> list[DirectoryNode]:
        """Top-level directories, fetched once per session."""
        if self._roots is None:
            self._roots = get_root(self._http, self._session)
            logger.debug("Roots loaded", names=[r.name for r in self._roots])
        return self._roots

    def resolve_path(self, path: str) -> DirectoryNode:
        """
        Resolve a path such as ``":Share/project/text"``.

        Args:
            path: Slash-delimited path; empty segments are ignored.

        Returns:
            The directory, with its files and sub-directories.

        Raises:
            ValidationError: If the path has no segment.
            NotFoundError: If the root or an intermediate directory is missing.
        """
        names = split_path(path)
        if not names:
            msg = "path should be set"
            raise ValidationError(msg, path=path)

        root_name, *remaining = names
        current = self._find_root(root_name)
        current_path = f"/{root_name}"

        for index, name in enumerate(remaining):
            current_path += f"/{name}"
            parent = self._expand(current, depth=len(remaining) - index)
            child = parent.get_child(name)
            if child is None and parent.directory_id not in self._listed:
                # A depth-bounded listing may stop short; ask this level directly.
                child = self._list(parent.directory_id).get_child(name)
            if child is None:
                msg = f"Directory {current_path} does not exist on TransfertPro"
                raise NotFoundError(msg, path=current_path)
            current = child

        return self._contents(current)

    def get_directory(self, directory_id: str) -> DirectoryNode:
        """
        Get a directory by identifier, from cache when possible.

        Args:
            directory_id: Directory identifier.
        """
        return self._nodes.get(directory_id) or self._list(directory_id)

    def _find_root(self, name: str) -> DirectoryNode:
        root = next((r for r in self.roots() if r.name == name), None)
        if root is None:
            msg = f"Directory {name} does not exist on TransfertPro"
            raise NotFoundError(msg, path=f"/{name}")
        return root

    def _expand(self, node: DirectoryNode, *, depth: int) -> DirectoryNode:
        """Return ``node`` with its children loaded, fetching ``depth`` levels if needed."""
        cached = self._nodes.get(node.directory_id)
        if cached is not None and cached.children_loaded:
            return cached

        if depth <= 1:
            return self._list(node.directory_id)

        tree = get_directory_tree(self._http, self._session, node.directory_id, depth)
        self._store_tree(tree)
        logger.debug("Directory tree loaded", directory_id=node.directory_id, depth=depth)
        return self._nodes.get(node.directory_id) or tree

    def _contents(self, node: DirectoryNode) -> DirectoryNode:
        cached = self._nodes.get(node.directory_id)
        if cached is not None:
            return cached
        return self._list(node.directory_id)

    def _list(self, directory_id: str) -> DirectoryNode:
        node = get_directory(self._http, self._session, directory_id)
        self._nodes.put(directory_id, node)
        self._listed.add(directory_id)
        logger.debug("Directory listed", directory_id=directory_id, name=node.name)
        return node

    def _store_tree(self, tree: DirectoryNode) -> None:
        for node in tree.walk():
            cached = self._nodes.get(node.directory_id)
            # Never replace a complete listing with a shallower view of it.
            if cached is not None and cached.children_loaded and not node.children_loaded:
                continue
            self._nodes.put(node.directory_id, node)
            self._listed.discard(node.directory_id)
