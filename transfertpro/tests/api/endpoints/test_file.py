from unittest.mock import Mock

import pytest

from transfertpro.api.endpoints.file import (
    delete_file,
    open_download,
    register_file,
    upload_chunk,
)
from transfertpro.api.http_client import HttpClient
from transfertpro.config import TransfertProConfig
from transfertpro.exceptions import TransferError
from transfertpro.models.directory import NIL_SHARE_ID
from transfertpro.models.transfer import Chunk, FileDescriptor
from transfertpro.tests.constants import SHARE_ID, TEXT_ID, USER
from transfertpro.tests.utils.mock_transport import MockTransport


@pytest.fixture
def descriptor() -> FileDescriptor:
    return FileDescriptor(
        file_name="report.txt", file_size=11, directory_id=TEXT_ID, upload_id="up_1"
    )


@pytest.fixture
def http(config: TransfertProConfig, mock_transport: MockTransport) -> HttpClient:
    return HttpClient(config, transport=mock_transport)


# Registration


def test_register_file_posts_to_share_endpoint(
    http: HttpClient,
    mock_transport: MockTransport,
    mock_session: Mock,
    descriptor: FileDescriptor,
) -> None:
    mock_transport.add_response("POST", f"/api/v5/File/share/{SHARE_ID}")

    register_file(http, mock_session, descriptor, SHARE_ID)

    request = mock_transport.requests[0]
    assert request.url.path == f"/api/v5/File/share/{SHARE_ID}"
    assert b"UploadId=up_1" in request.content
    assert b"FileName=report.txt" in request.content
    assert b"FileSize=11" in request.content
    assert f"DirectoryId={TEXT_ID}".encode() in request.content


@pytest.mark.parametrize("share_id", [None, NIL_SHARE_ID])
def test_register_file_omits_share_segment_without_share(
    http: HttpClient,
    mock_transport: MockTransport,
    mock_session: Mock,
    descriptor: FileDescriptor,
    share_id: str | None,
) -> None:
    mock_transport.add_response("POST", "/api/v5/File")

    register_file(http, mock_session, descriptor, share_id)

    assert mock_transport.requests[0].url.path == "/api/v5/File"


def test_register_file_raises_on_failure(
    http: HttpClient,
    mock_transport: MockTransport,
    mock_session: Mock,
    descriptor: FileDescriptor,
) -> None:
    mock_transport.add_response("POST", "/api/v5/File", status_code=500)

    with pytest.raises(TransferError) as exc_info:
        register_file(http, mock_session, descriptor, None)

    assert exc_info.value.context["file_name"] == "report.txt"


# Chunks


def test_upload_chunk_sends_params_and_body(
    http: HttpClient,
    config: TransfertProConfig,
    mock_transport: MockTransport,
    mock_session: Mock,
    descriptor: FileDescriptor,
) -> None:
    mock_transport.add_response("POST", "/Chunk")
    chunk = Chunk(index=1, count=3, offset=10, data=b"chunk-bytes")

    upload_chunk(http, mock_session, config.upload_url, descriptor, chunk, SHARE_ID)

    request = mock_transport.requests[0]
    assert request.url.host == "up.transfertpro.com"
    assert dict(request.url.params) == {
        "uid": "up_1",
        "name": "report.txt",
        "chunk": "1",
        "chunks": "3",
        "share": SHARE_ID,
        "offset": "10",
        "o": "true",
        "sender": USER,
        "apiKeyName": "key",
        "nonce": "1",
        "hashkey": "hash",
    }
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="file"' in request.content
    assert b"chunk-bytes" in request.content
    assert request.headers["authorization"] == "Bearer token"


def test_upload_chunk_sends_nil_share_when_no_share(
    http: HttpClient,
    config: TransfertProConfig,
    mock_transport: MockTransport,
    mock_session: Mock,
    descriptor: FileDescriptor,
) -> None:
    mock_transport.add_response("POST", "/Chunk")
    chunk = Chunk(index=0, count=1, offset=0, data=b"x")

    upload_chunk(http, mock_session, config.upload_url, descriptor, chunk, None)

    assert mock_transport.requests[0].url.params["share"] == NIL_SHARE_ID


def test_upload_chunk_raises_with_status_and_body(
    http: HttpClient,
    config: TransfertProConfig,
    mock_transport: MockTransport,
    mock_session: Mock,
    descriptor: FileDescriptor,
) -> None:
    mock_transport.add_response("POST", "/Chunk", status_code=502, content=b"bad gateway")
    chunk = Chunk(index=2, count=3, offset=20, data=b"x")

    with pytest.raises(TransferError, match="502 bad gateway") as exc_info:
        upload_chunk(http, mock_session, config.upload_url, descriptor, chunk, SHARE_ID)

    assert exc_info.value.status_code == 502
    assert exc_info.value.context["chunk_index"] == 2


# Download


def test_open_download_streams_body(
    http: HttpClient,
    config: TransfertProConfig,
    mock_transport: MockTransport,
    mock_session: Mock,
) -> None:
    mock_transport.add_response("GET", "/download/myfile", content=b"payload")

    with open_download(
        http, mock_session, config.download_url, "f1", "a.txt", SHARE_ID
    ) as response:
        body = b"".join(response.iter_bytes())

    assert body == b"payload"
    params = mock_transport.requests[0].url.params
    assert (params["i"], params["n"], params["s"]) == ("f1", "a.txt", SHARE_ID)
    assert mock_transport.requests[0].url.host == "dl.transfertpro.com"


def test_open_download_omits_nil_share(
    http: HttpClient,
    config: TransfertProConfig,
    mock_transport: MockTransport,
    mock_session: Mock,
) -> None:
    mock_transport.add_response("GET", "/download/myfile", content=b"payload")

    with open_download(http, mock_session, config.download_url, "f1", "a.txt", NIL_SHARE_ID):
        pass

    assert "s" not in mock_transport.requests[0].url.params


def test_open_download_raises_before_body_on_error_status(
    http: HttpClient,
    config: TransfertProConfig,
    mock_transport: MockTransport,
    mock_session: Mock,
) -> None:
    mock_transport.add_response("GET", "/download/myfile", status_code=404)
    entered = False

    with pytest.raises(TransferError, match="does not exist") as exc_info:
        with open_download(http, mock_session, config.download_url, "f1", "a.txt", None):
            entered = True

    assert entered is False
    assert exc_info.value.file_name == "a.txt"


# Delete


def test_delete_file_with_share(
    http: HttpClient, mock_transport: MockTransport, mock_session: Mock
) -> None:
    mock_transport.add_response("DELETE", f"/api/v5/File/f1/share/{SHARE_ID}")

    delete_file(http, mock_session, "f1", SHARE_ID)

    assert mock_transport.requests[0].url.path == f"/api/v5/File/f1/share/{SHARE_ID}"


def test_delete_file_without_share(
    http: HttpClient, mock_transport: MockTransport, mock_session: Mock
) -> None:
    mock_transport.add_response("DELETE", "/api/v5/File/f1")

    delete_file(http, mock_session, "f1", NIL_SHARE_ID)

    assert mock_transport.requests[0].url.path == "/api/v5/File/f1"


def test_delete_file_raises_on_failure(
    http: HttpClient, mock_transport: MockTransport, mock_session: Mock
) -> None:
    mock_transport.add_response("DELETE", "/api/v5/File/f1", status_code=500)

    with pytest.raises(TransferError):
        delete_file(http, mock_session, "f1", None)
