import itertools
from unittest.mock import Mock

import pytest

from transfertpro.config import TransfertProConfig
from transfertpro.tests.constants import USER
from transfertpro.tests.utils.mock_transport import MockTransport


@pytest.fixture
def config() -> TransfertProConfig:
    return TransfertProConfig(chunk_retry_delay=0)


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def mock_http() -> Mock:
    return Mock()


@pytest.fixture
def mock_session() -> Mock:
    nonces = itertools.count(1)
    session = Mock()
    session.user = USER
    session.sign_request.side_effect = lambda: {
        "apiKeyName": "key",
        "nonce": next(nonces),
        "hashkey": "hash",
    }
    session.auth_headers.return_value = {"Authorization": "Bearer token"}
    return session
