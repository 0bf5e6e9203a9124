"""Tests for practice-table sessions."""

import time
from unittest.mock import patch

import pytest
import pytest_asyncio
from redis.exceptions import ConnectionError as RedisConnectionError

import api.session as session_module
from api.session import (
    InMemorySessionStore,
    SessionSigner,
    create_session,
    extract_session_id,
    get_session,
    get_session_store,
    update_session,
)


@pytest.fixture
def fresh_store():
    """Make the next get_session_store() call connect from scratch."""
    saved = session_module._session_store
    session_module._session_store = None
    yield
    session_module._session_store = saved


class _UnreachableRedis:
    """Stands in for a client whose server refuses connections."""

    def __init__(self):
        self.closed = False

    async def ping(self):
        raise RedisConnectionError("connection refused")

    async def aclose(self):
        self.closed = True


class TestSessionSigner:
    """Tests for signed session tokens."""

    def test_token_round_trips(self):
        signer = SessionSigner(secret_key="table-secret")
        token = signer.sign("abc-123")

        assert token != "abc-123"
        assert signer.unsign(token) == "abc-123"

    def test_tampered_token_rejected(self):
        signer = SessionSigner(secret_key="table-secret")
        token = signer.sign("abc-123")

        assert signer.unsign(token[:-2] + "xx") is None

    def test_other_secret_rejected(self):
        token = SessionSigner(secret_key="one").sign("abc-123")
        assert SessionSigner(secret_key="two").unsign(token) is None

    def test_old_token_rejected(self):
        """Test that a token older than max_age no longer opens the session."""
        signer = SessionSigner(secret_key="table-secret")
        token = signer.sign("abc-123")

        later = time.time() + 7200
        with patch("time.time", return_value=later):
            assert signer.unsign(token, max_age=3600) is None


class TestInMemorySessionStore:
    """Tests for the fallback store."""

    @pytest_asyncio.fixture
    async def store(self):
        return InMemorySessionStore()

    @pytest.mark.asyncio
    async def test_unknown_session(self, store):
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_set_replaces_data(self, store):
        await store.set("s1", {"table": 1})
        await store.set("s1", {"table": 2})
        assert await store.get("s1") == {"table": 2}

    @pytest.mark.asyncio
    async def test_session_expires_after_ttl(self, store):
        """Test that data is gone once its time to live has passed."""
        await store.set("s1", {"table": 1}, ttl=60)

        later = time.time() + 61
        with patch("api.session.time.time", return_value=later):
            assert await store.get("s1") is None

        assert await store.get("s1") is None


class TestSessionLifecycle:
    """Tests for the helpers the round routes use."""

    @pytest.mark.asyncio
    async def test_create_session_hands_out_signed_token(self, fresh_store):
        """Test that the store is keyed by the raw id behind the token."""
        token = await create_session()
        session_id = extract_session_id(token)

        assert session_id is not None
        assert session_id != token
        assert await get_session(session_id) == {}
        assert await get_session(token) is None

    @pytest.mark.asyncio
    async def test_update_then_get(self, fresh_store):
        session_id = extract_session_id(await create_session())
        await update_session(session_id, {"table": {"level": 3}})

        assert await get_session(session_id) == {"table": {"level": 3}}

    def test_forged_token_not_extracted(self):
        assert extract_session_id("not-a-token") is None


class TestStoreSelection:
    """Tests for choosing between Redis and memory."""

    @pytest.mark.asyncio
    async def test_unreachable_redis_falls_back_and_closes_client(self, fresh_store, caplog):
        """Test that a failed ping leaves an in-memory store and no open client."""
        client = _UnreachableRedis()
        with patch("api.session.redis.from_url", return_value=client):
            with caplog.at_level("WARNING", logger="api.session"):
                store = await get_session_store()

        assert isinstance(store, InMemorySessionStore)
        assert client.closed
        assert "falling back to in-memory sessions" in caplog.text

    @pytest.mark.asyncio
    async def test_malformed_redis_url_falls_back(self, fresh_store):
        """Test that a bad REDIS_* setting does not take the API down."""
        with patch("api.session.redis.from_url", side_effect=ValueError("bad url")):
            store = await get_session_store()

        assert isinstance(store, InMemorySessionStore)

    @pytest.mark.asyncio
    async def test_store_chosen_once(self, fresh_store):
        with patch("api.session.redis.from_url", side_effect=ValueError("bad url")) as from_url:
            first = await get_session_store()
            second = await get_session_store()

        assert first is second
        from_url.assert_called_once()
