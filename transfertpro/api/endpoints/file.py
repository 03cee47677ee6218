"""File-related API endpoints (registration, chunks, download, delete)."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from transfertpro.api.http_client import HttpClient, check_response
from transfertpro.api.protocol import SessionProvider
from transfertpro.exceptions import TransferError
from transfertpro.models.directory import NIL_SHARE_ID, is_nil_share
from transfertpro.models.transfer import Chunk, FileDescriptor


def register_file(
    http: HttpClient,
    session: SessionProvider,
    descriptor: FileDescriptor,
    share_id: str | None,
) -> None:
    """
    Register file metadata before its content is sent.

    The share segment is left out of the endpoint when there is no share
    context.

    Raises:
        TransferError: If the server rejects the registration.
    """
    endpoint = "/api/v5/File"
    if not is_nil_share(share_id):
        endpoint += f"/share/{share_id}"

    response = http.request("POST", endpoint, session=session, data=descriptor.to_form())
    check_response(response, operation="register file", file_name=descriptor.file_name)


def upload_chunk(
    http: HttpClient,
    session: SessionProvider,
    upload_url: str,
    descriptor: FileDescriptor,
    chunk: Chunk,
    share_id: str | None,
) -> None:
    """
    Send one chunk of a registered file.

    Every call is signed with fresh parameters.

    Args:
        http: Configured HTTP client.
        session: Session used to sign the call.
        upload_url: Base URL of the upload host.
        descriptor: Registered file metadata.
        chunk: Chunk to send.
        share_id: Share context of the target directory.

    Raises:
        TransferError: On a non-success status or a network failure.
    """
    params = {
        "uid": descriptor.upload_id,
        "name": descriptor.file_name,
        "chunk": chunk.index,
        "chunks": chunk.count,
        "share": share_id or NIL_SHARE_ID,
        "offset": chunk.offset,
        "o": "true",
        "sender": session.user or "",
    }
    response = http.request(
        "POST",
        f"{upload_url}/Chunk",
        session=session,
        params=params,
        files={"file": (descriptor.file_name, chunk.data, "application/octet-stream")},
    )
    if not response.is_success:
        msg = f"Exception during upload {response.status_code} {response.text}"
        raise TransferError(
            msg, file_name=descriptor.file_name, response=response, chunk_index=chunk.index
        )


@contextmanager
def open_download(
    http: HttpClient,
    session: SessionProvider,
    download_url: str,
    file_id: str,
    file_name: str,
    share_id: str | None,
) -> Iterator[httpx.Response]:
    """
    Open a streamed download of a file.

    The status is checked as soon as the headers arrive, so a failed
    download is reported before any of the body is consumed.

    Yields:
        Response whose body is the raw file content.

    Raises:
        TransferError: If the server answers with a non-success status.
    """
    params = {"i": file_id, "n": file_name}
    if not is_nil_share(share_id):
        params["s"] = share_id

    with http.stream(
        "GET", f"{download_url}/download/myfile", session=session, params=params
    ) as response:
        if not response.is_success:
            msg = f"File {file_name} does not exist on TransfertPro"
            raise TransferError(msg, file_name=file_name, response=response)
        yield response


def delete_file(
    http: HttpClient, session: SessionProvider, file_id: str, share_id: str | None
) -> None:
    """
    Delete a remote file.

    Raises:
        TransferError: If the server refuses the deletion.
    """
    endpoint = f"/api/v5/File/{file_id}"
    if not is_nil_share(share_id):
        endpoint += f"/share/{share_id}"

    response = http.request("DELETE", endpoint, session=session)
    check_response(response, operation="delete file", file_id=file_id)
