"""Directory listing endpoints."""

from typing import Any

from transfertpro.api.http_client import HttpClient, check_response, read_json
from transfertpro.api.protocol import SessionProvider
from transfertpro.exceptions import TransferError
from transfertpro.models.directory import NIL_SHARE_ID, DirectoryNode, FileEntry

VALUES_KEY = "$values"


def get_root(http: HttpClient, session: SessionProvider) -> list[DirectoryNode]:
    """Get the top-level directories (private files, shared workspace, ...)."""
    payload = _get(http, session, "/api/v5/Directory/Root")
    return [parse_directory(d, depth=0) for d in _values(payload.get("Directories"))]


def get_directory(http: HttpClient, session: SessionProvider, directory_id: str) -> DirectoryNode:
    """
    List a directory one level deep.

    Args:
        http: Configured HTTP client.
        session: Session used to sign the call.
        directory_id: Directory to list.

    Returns:
        The directory with its files and its immediate sub-directories.
    """
    payload = _get(http, session, f"/api/v5/Directory/{directory_id}")
    return parse_directory(payload, depth=1)


def get_directory_tree(
    http: HttpClient, session: SessionProvider, directory_id: str, depth: int
) -> DirectoryNode:
    """
    List a directory and its descendants down to ``depth`` levels.

    Args:
        http: Configured HTTP client.
        session: Session used to sign the call.
        directory_id: Directory to list.
        depth: Number of levels to descend.

    Returns:
        The directory as root of the returned subtree.
    """
    payload = _get(http, session, f"/api/v5/Directory/{directory_id}/{depth}")
    return parse_directory(payload, depth=depth)


def parse_directory(data: dict[str, Any], *, depth: int) -> DirectoryNode:
    """
    Build a DirectoryNode from a listing payload.

    Args:
        data: Directory object from the API.
        depth: Levels of sub-directories the listing is known to include.
            Nodes at the boundary get ``children=None``.
    """
    children = None
    if depth > 0:
        children = tuple(
            parse_directory(d, depth=depth - 1) for d in _values(data.get("Directories"))
        )

    return DirectoryNode(
        directory_id=str(data["DirectoryId"]),
        name=data.get("DirectoryName", ""),
        share_id=data.get("CurrentSharedDirectoryId") or NIL_SHARE_ID,
        children=children,
        files=tuple(
            FileEntry(
                file_id=str(f["Id"]),
                name=f["FileName"],
                size=f.get("FileSize", 0),
            )
            for f in _values(data.get("Files"))
        ),
    )


def _get(http: HttpClient, session: SessionProvider, endpoint: str) -> dict[str, Any]:
    response = http.request("GET", endpoint, session=session)
    check_response(response, operation=f"get {endpoint}")
    payload = read_json(response, operation=endpoint)
    if not isinstance(payload, dict):
        msg = f"Unexpected listing response from {endpoint}"
        raise TransferError(msg, response=response)
    return payload


def _values(container: dict[str, Any] | list | None) -> list[dict[str, Any]]:
    """Unwrap the ``$values`` envelope the API puts around arrays."""
    if container is None:
        return []
    if isinstance(container, list):
        return container
    return container.get(VALUES_KEY, [])
