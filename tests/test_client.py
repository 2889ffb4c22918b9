"""Tests for the application-facing session client."""

from typing import Optional

import pytest

import oidc_session.__main__ as cli

from oidc_session.client import OIDCSessionClient
from oidc_session.exceptions import (
    InvalidSessionIdError,
    InvalidSubjectError,
    MissingIdentifierError,
    SessionNotFoundError,
)
from oidc_session.models import TokenBundle
from oidc_session.oauth.engine import ProtocolEngine
from oidc_session.session_id import derive_session_id
from oidc_session.session_storage.memory import InMemorySessionStore


pytestmark = pytest.mark.anyio("asyncio")


class FakeEngine(ProtocolEngine):
    def __init__(self, tokens: Optional[TokenBundle] = None) -> None:
        self.tokens = tokens or TokenBundle(access_token="AT1", id_token="IT1", subject="user-42")
        self.exchanged: list[tuple[str, Optional[str], Optional[str]]] = []
        self.sign_out_hints: list[Optional[str]] = []

    async def get_authorization_url(self, state: Optional[str] = None) -> str:
        return f"https://idp.example/oauth2/authorize?state={state}"

    async def request_access_token(self, code, session_state=None, state=None) -> TokenBundle:
        self.exchanged.append((code, session_state, state))
        return self.tokens

    async def get_sign_out_url(self, id_token: Optional[str] = None) -> str:
        self.sign_out_hints.append(id_token)
        return "https://idp.example/oidc/logout"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def default_namespace(monkeypatch):
    monkeypatch.delenv("OIDC_SESSION_ID_NAMESPACE", raising=False)


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def client(engine: FakeEngine, store: InMemorySessionStore) -> OIDCSessionClient:
    return OIDCSessionClient(engine, store)


@pytest.mark.anyio
async def test_sign_in_without_code_hands_url_to_callback(client: OIDCSessionClient, store: InMemorySessionStore):
    urls = []

    result = await client.sign_in(urls.append, state="s-1")

    assert result is None
    assert urls == ["https://idp.example/oauth2/authorize?state=s-1"]
    assert len(store) == 0


@pytest.mark.anyio
async def test_sign_in_accepts_async_callback(client: OIDCSessionClient):
    urls = []

    async def redirect(url: str) -> None:
        urls.append(url)

    await client.sign_in(redirect)
    assert len(urls) == 1


@pytest.mark.anyio
async def test_sign_in_with_code_creates_session(client: OIDCSessionClient, engine: FakeEngine):
    result = await client.sign_in(lambda url: None, authorization_code="code-1", session_state="ss", state="st")

    assert result is not None
    assert result.session_id == derive_session_id("user-42")
    assert result.tokens.access_token == "AT1"
    assert engine.exchanged == [("code-1", "ss", "st")]
    assert await client.is_authenticated(result.session_id) is True
    assert await client.get_id_token(result.session_id) == "IT1"


@pytest.mark.anyio
async def test_sign_in_without_subject_fails(store: InMemorySessionStore):
    client = OIDCSessionClient(FakeEngine(TokenBundle(access_token="AT1")), store)

    with pytest.raises(InvalidSubjectError):
        await client.sign_in(lambda url: None, authorization_code="code-1")
    assert len(store) == 0


@pytest.mark.anyio
async def test_sign_out_destroys_session_and_passes_id_token_hint(
    client: OIDCSessionClient, engine: FakeEngine
):
    result = await client.sign_in(lambda url: None, authorization_code="code-1")

    url = await client.sign_out(result.session_id)

    assert url == "https://idp.example/oidc/logout"
    assert engine.sign_out_hints == ["IT1"]
    assert await client.is_authenticated(result.session_id) is False
    with pytest.raises(SessionNotFoundError):
        await client.get_id_token(result.session_id)


@pytest.mark.anyio
async def test_sign_out_of_stale_session_is_safe(client: OIDCSessionClient, engine: FakeEngine):
    url = await client.sign_out(derive_session_id("gone"))

    assert url == "https://idp.example/oidc/logout"
    assert engine.sign_out_hints == [None]


@pytest.mark.anyio
async def test_sign_out_rejects_bad_ids(client: OIDCSessionClient, engine: FakeEngine):
    with pytest.raises(MissingIdentifierError):
        await client.sign_out("")
    with pytest.raises(InvalidSessionIdError):
        await client.sign_out("not-a-real-id-shape")
    assert engine.sign_out_hints == []


@pytest.mark.anyio
async def test_expired_session_is_not_authenticated(client: OIDCSessionClient):
    session_id = await client.create_user_session(
        "user-42", TokenBundle(access_token="AT1", expires_in=60, created_at=1000)
    )
    assert await client.is_authenticated(session_id) is False


@pytest.mark.anyio
async def test_malformed_id_is_not_authenticated(client: OIDCSessionClient):
    assert await client.is_authenticated("not-a-real-id-shape") is False
    assert await client.is_authenticated("") is False


@pytest.mark.anyio
async def test_pass_through_operations(client: OIDCSessionClient):
    session_id = await client.create_user_session("user-7", {"access_token": "AT7"})

    assert await client.get_uuid("user-7") == session_id
    assert (await client.get_user_session(session_id)).access_token == "AT7"
    assert await client.destroy_user_session(session_id) is True
    assert await client.sessions.lookup_user_session(session_id) is None


@pytest.mark.anyio
async def test_sign_out_removes_corrupt_session(client: OIDCSessionClient, store: InMemorySessionStore, engine: FakeEngine):
    session_id = derive_session_id("user-42")
    await store.set_data(session_id, "{not json")

    await client.sign_out(session_id)

    assert session_id not in store
    assert engine.sign_out_hints == [None]


@pytest.mark.anyio
async def test_cli_and_client_agree_on_configured_namespace(monkeypatch, capsys, engine: FakeEngine):
    monkeypatch.setenv("OIDC_SESSION_ID_NAMESPACE", "0b5d1f7e-3c2a-4e61-8d9b-6a7c5e4f3d21")
    client = OIDCSessionClient(engine, InMemorySessionStore())

    assert cli.main(["derive", "user-42"]) == 0
    printed = capsys.readouterr().out.strip()

    assert printed == await client.get_uuid("user-42")
    assert printed != derive_session_id("user-42")
    result = await client.sign_in(lambda url: None, authorization_code="code-1")
    assert result.session_id == printed
