import pytest
from httpx import AsyncClient

from src.client import AuthStore, FileTokenStorage


@pytest.mark.asyncio
async def test_full_session_lifecycle(client: AsyncClient, mailer):
    store = AuthStore("http://test/api", http_client=client)
    states = []
    store.subscribe(states.append)

    state = await store.initialize()
    assert state.user is None
    assert state.loading is False

    assert await store.register("Ann", "ann@example.com", "secret1")
    assert store.get_state().user.name == "Ann"

    assert await store.logout()
    assert store.get_state().user is None
    assert store.token_storage.get() is None

    assert not await store.login("ann@example.com", "wrong")
    assert store.get_state().error == "The email or password you entered is incorrect"

    store.clear_error()
    assert await store.login("ann@example.com", "secret1")
    assert store.get_state().user.email == "ann@example.com"
    assert store.get_state().error is None

    assert await store.forgot_password("ann@example.com")
    assert await store.reset_password(mailer.last_reset_token(), "newpass1")
    assert store.get_state().user.email == "ann@example.com"

    # Every operation passed through loading before settling
    assert any(s.loading for s in states)
    assert states[-1].loading is False


@pytest.mark.asyncio
async def test_forgot_password_error_surfaced(client: AsyncClient):
    store = AuthStore("http://test/api", http_client=client)

    assert not await store.forgot_password("nobody@example.com")

    assert store.get_state().error == "No user with that email"


@pytest.mark.asyncio
async def test_stored_token_restores_session(client: AsyncClient, tmp_path):
    storage = FileTokenStorage(tmp_path / "session.json")
    first = AuthStore("http://test/api", http_client=client, token_storage=storage)
    assert await first.register("Ann", "ann@example.com", "secret1")
    client.cookies.clear()

    second = AuthStore(
        "http://test/api",
        http_client=client,
        token_storage=FileTokenStorage(tmp_path / "session.json"),
    )
    state = await second.initialize()

    assert state.user is not None
    assert state.user.name == "Ann"
