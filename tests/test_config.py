from __future__ import annotations

import pytest

from pylisso import LiSsoClient
from pylisso.config import LiSsoConfig
from pylisso.exceptions import ConfigErrorReason, LiSsoConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "LITHIUM_SSO_CLIENT_ID",
        "LITHIUM_SSO_CLIENT_DOMAIN",
        "LITHIUM_SSO_KEY",
        "LITHIUM_SSO_SERVER_ID",
        "LITHIUM_SSO_PG_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LITHIUM_SSO_CLIENT_ID", "example")
    monkeypatch.setenv("LITHIUM_SSO_CLIENT_DOMAIN", ".example.com")
    monkeypatch.setenv("LITHIUM_SSO_KEY", "d41d8cd98f00b204e9800998ecf8427e")
    monkeypatch.setenv("LITHIUM_SSO_SERVER_ID", "web01")

    config = LiSsoConfig.from_env()
    assert config.client_id == "example"
    assert config.client_domain == ".example.com"
    assert config.sso_key == "d41d8cd98f00b204e9800998ecf8427e"
    assert config.server_id == "web01"
    assert config.privacy_guard_key is None


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LITHIUM_SSO_CLIENT_ID", "example")
    config = LiSsoConfig.from_env(client_id="other", client_domain="d", sso_key="00" * 16)
    assert config.client_id == "other"


def test_from_env_ignores_empty_pg_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LITHIUM_SSO_PG_KEY", "")
    assert LiSsoConfig.from_env().privacy_guard_key is None


def test_from_env_missing_values_surface_on_client() -> None:
    config = LiSsoConfig.from_env(client_id="example")
    with pytest.raises(LiSsoConfigurationError) as excinfo:
        LiSsoClient.from_config(config)
    assert excinfo.value.reason is ConfigErrorReason.CLIENT_DOMAIN_REQUIRED


def test_repr_hides_keys() -> None:
    config = LiSsoConfig(client_id="c", client_domain="d", sso_key="secret-hex", privacy_guard_key="pg-hex")
    assert "secret-hex" not in repr(config)
    assert "pg-hex" not in repr(config)
