import pytest

from transfertpro.config import CHUNK_SIZE, Tenant, TransfertProConfig


def test_default_config_targets_default_tenant() -> None:
    config = TransfertProConfig()

    assert config.tenant == Tenant.DEFAULT
    assert config.api_url == "https://ext.transfertpro.com"
    assert config.download_url == "https://dl.transfertpro.com"
    assert config.upload_url == "https://up.transfertpro.com"
    assert config.connect_timeout == 30.0
    assert config.chunk_size == CHUNK_SIZE == 8 * 1024 * 1024
    assert config.max_chunk_attempts == 10


def test_for_tenant_uses_tenant_hosts() -> None:
    config = TransfertProConfig.for_tenant("hds")

    assert config.tenant == Tenant.HDS
    assert config.api_url == "https://ext-sante.transfertpro.com"
    assert config.download_url == "https://dl-sante.transfertpro.com"
    assert config.upload_url == "https://up-sante.transfertpro.com"


def test_for_tenant_accepts_overrides() -> None:
    config = TransfertProConfig.for_tenant(Tenant.DEFAULT, chunk_size=1024)

    assert config.chunk_size == 1024
    assert config.api_url == "https://ext.transfertpro.com"


def test_for_tenant_rejects_unknown_tenant() -> None:
    with pytest.raises(ValueError, match="tenant must be one of default,hds"):
        TransfertProConfig.for_tenant("mars")


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("connect_timeout", 0),
        ("chunk_size", 0),
        ("max_chunk_attempts", 0),
        ("chunk_retry_delay", -1),
        ("token_refresh_margin", -1),
    ],
)
def test_config_rejects_invalid_values(field: str, value: float) -> None:
    with pytest.raises(ValueError, match=field):
        TransfertProConfig(**{field: value})
