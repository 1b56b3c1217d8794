from __future__ import annotations

import pytest
from aiohttp.test_utils import TestClient, TestServer

from pylisso.config import LiSsoConfig
from pylisso.exceptions import LiSsoConfigurationError
from pylisso.web import CLIENT_KEY, create_app

KEY_HEX = "d41d8cd98f00b204e9800998ecf8427e"


def _config(**overrides: object) -> LiSsoConfig:
    params: dict[str, object] = {"client_id": "example", "client_domain": ".example.com", "sso_key": KEY_HEX}
    params.update(overrides)
    return LiSsoConfig(**params)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_issue_token_endpoint(decode_token, token_re) -> None:
    async with TestClient(TestServer(create_app(_config()))) as client:
        resp = await client.post(
            "/token",
            json={
                "unique_id": "167865",
                "login": "janmon04",
                "email": "jane.monet@mycompany.com",
                "settings": {"profile.name_first": "Jane", "profile.name_last": "Monet"},
            },
            headers={"User-Agent": "pytest-agent", "Referer": "https://portal.example.com/"},
        )
        assert resp.status == 200
        body = await resp.json()

    token = body["sso_token"]
    assert token_re.match(token)
    fields = decode_token(token, bytes.fromhex(KEY_HEX)).split("|")
    assert fields[5] == "pytest-agent"
    assert fields[6] == "https://portal.example.com/"
    assert fields[7] == "127.0.0.1"
    assert fields[8:13] == [".example.com", "example", "167865", "janmon04", "jane.monet@mycompany.com"]
    assert fields[13:] == ["profile.name_first=Jane", "profile.name_last=MonetiL"]


@pytest.mark.asyncio
async def test_issue_token_endpoint_missing_claim() -> None:
    async with TestClient(TestServer(create_app(_config()))) as client:
        resp = await client.post("/token", json={"unique_id": "1", "login": "", "email": "a@b.c"})
        assert resp.status == 400
        body = await resp.json()
    assert "login" in body["error"]


@pytest.mark.asyncio
async def test_issue_token_endpoint_rejects_non_json() -> None:
    async with TestClient(TestServer(create_app(_config()))) as client:
        resp = await client.post("/token", data="not json")
        assert resp.status == 400
        resp = await client.post("/token", json=["a", "b"])
        assert resp.status == 400


@pytest.mark.asyncio
async def test_issue_token_endpoint_rejects_non_utf8_body() -> None:
    async with TestClient(TestServer(create_app(_config()))) as client:
        resp = await client.post("/token", data=b"\xff\xfe{")
        assert resp.status == 400
        body = await resp.json()
    assert "error" in body


@pytest.mark.asyncio
async def test_issue_token_endpoint_unexpected_failure_is_json_500(monkeypatch: pytest.MonkeyPatch) -> None:
    app = create_app(_config())

    def _boom(*args: object, **kwargs: object) -> str:
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(app[CLIENT_KEY], "issue", _boom)
    async with TestClient(TestServer(app)) as client:
        resp = await client.post("/token", json={"unique_id": "1", "login": "bob", "email": "b@x.com"})
        assert resp.status == 500
        body = await resp.json()
    assert body == {"error": "internal error: RuntimeError"}


@pytest.mark.asyncio
async def test_health_endpoint() -> None:
    async with TestClient(TestServer(create_app(_config()))) as client:
        resp = await client.get("/health")
        assert resp.status == 200
        assert await resp.json() == {"status": "ok"}


def test_create_app_validates_config() -> None:
    with pytest.raises(LiSsoConfigurationError):
        create_app(_config(sso_key="00" * 20))
