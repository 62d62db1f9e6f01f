"""
Auth Session Store

Observable auth state for a client of the auth API: one store per
client process, exposing get_state/subscribe/dispatch. Every operation
sets loading, makes one HTTP call, then records either the user or an
error message.
"""

import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from .token_storage import TokenStorage

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Unable to reach the server. Check your connection and try again."


class ClientUser(BaseModel):
    """User as seen by the client"""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    email: str


class AuthState(BaseModel):
    """Snapshot of the client auth state"""

    model_config = ConfigDict(frozen=True)

    user: Optional[ClientUser] = None
    loading: bool = True
    error: Optional[str] = None
    initialized: bool = False


class ActionType(str, Enum):
    REQUEST_STARTED = "request_started"
    USER_LOADED = "user_loaded"
    USER_CLEARED = "user_cleared"
    REQUEST_SUCCEEDED = "request_succeeded"
    REQUEST_FAILED = "request_failed"
    ERROR_CLEARED = "error_cleared"


class Action(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ActionType
    user: Optional[ClientUser] = None
    error: Optional[str] = None


def reduce(state: AuthState, action: Action) -> AuthState:
    """Derive the next state from an action"""
    if action.type == ActionType.REQUEST_STARTED:
        return state.model_copy(update={"loading": True})
    if action.type == ActionType.USER_LOADED:
        return state.model_copy(
            update={"user": action.user, "loading": False, "error": None, "initialized": True}
        )
    if action.type == ActionType.USER_CLEARED:
        return state.model_copy(update={"user": None, "loading": False, "initialized": True})
    if action.type == ActionType.REQUEST_SUCCEEDED:
        return state.model_copy(update={"loading": False, "error": None})
    if action.type == ActionType.REQUEST_FAILED:
        return state.model_copy(update={"loading": False, "error": action.error})
    if action.type == ActionType.ERROR_CLEARED:
        return state.model_copy(update={"error": None})
    return state


Listener = Callable[[AuthState], None]


class AuthStore:
    """
    Client session store.

    Usage:
        async with AuthStore("http://localhost:5000/api") as store:
            store.subscribe(render)
            await store.initialize()
            await store.login("ann@example.com", "secret1")

    Operations return True on success and False on failure or when
    another request is still in flight.
    """

    def __init__(
        self,
        api_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        token_storage: Optional[TokenStorage] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.token_storage = token_storage if token_storage is not None else TokenStorage()
        self._client = http_client if http_client is not None else httpx.AsyncClient()
        self._owns_client = http_client is None
        self._state = AuthState()
        self._listeners: List[Listener] = []
        self._in_flight = False
        self._initialize_called = False
        self._session_changes = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    def get_state(self) -> AuthState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> AuthState:
        next_state = reduce(self._state, action)
        if next_state != self._state:
            self._state = next_state
            for listener in list(self._listeners):
                listener(next_state)
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> dict:
        headers = {}
        token = self.token_storage.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        response = await self._client.request(
            method, f"{self.api_url}{path}", json=json, headers=headers
        )
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _error_message(exc: Exception, fallback: str) -> str:
        if isinstance(exc, httpx.HTTPStatusError):
            try:
                message = exc.response.json().get("message")
            except (ValueError, AttributeError):
                message = None
            return message or fallback
        if isinstance(exc, httpx.RequestError):
            return NETWORK_ERROR_MESSAGE
        return fallback

    async def _run(
        self,
        name: str,
        call: Callable[[], Awaitable[None]],
        fallback: str,
        changes_session: bool = True,
    ) -> bool:
        if self._in_flight:
            logger.debug(f"Ignoring {name}: another request is in flight")
            return False

        self._in_flight = True
        if changes_session:
            self._session_changes += 1
        self.dispatch(Action(type=ActionType.REQUEST_STARTED))
        try:
            await call()
        except (httpx.HTTPError, ValueError, KeyError) as exc:
            message = self._error_message(exc, fallback)
            logger.info(f"{name} failed: {message}")
            self.dispatch(Action(type=ActionType.REQUEST_FAILED, error=message))
            return False
        finally:
            self._in_flight = False
        return True

    def _signed_in(self, data: dict) -> None:
        self.token_storage.set(data["token"])
        self.dispatch(
            Action(type=ActionType.USER_LOADED, user=ClientUser.model_validate(data["user"]))
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def initialize(self) -> AuthState:
        """
        Resolve the current session once; later calls are no-ops.

        The result is dropped if register/login/logout/reset started while
        the session check was pending: those calls own the state from then on.
        """
        if self._initialize_called:
            return self._state
        self._initialize_called = True
        session_changes_before = self._session_changes

        try:
            data = await self._request("GET", "/auth/me")
            user = ClientUser.model_validate(data["data"])
        except (httpx.HTTPError, ValueError, KeyError) as exc:
            user = None
            failure = exc
        else:
            failure = None

        if self._session_changes != session_changes_before:
            logger.debug("Discarding session check superseded by another operation")
            if not self._in_flight and not self._state.initialized:
                # The superseding call failed without signing anyone in
                self.dispatch(Action(type=ActionType.USER_CLEARED))
            return self._state

        if failure is None:
            self.dispatch(Action(type=ActionType.USER_LOADED, user=user))
        else:
            if isinstance(failure, httpx.HTTPStatusError) and failure.response.status_code == 401:
                self.token_storage.clear()
            else:
                logger.info(f"Session check failed: {failure}")
            self.dispatch(Action(type=ActionType.USER_CLEARED))
        return self._state

    async def register(self, name: str, email: str, password: str) -> bool:
        async def call():
            data = await self._request(
                "POST", "/auth/register", {"name": name, "email": email, "password": password}
            )
            self._signed_in(data)

        return await self._run("register", call, "Something went wrong")

    async def login(self, email: str, password: str) -> bool:
        async def call():
            data = await self._request(
                "POST", "/auth/login", {"email": email, "password": password}
            )
            self._signed_in(data)

        return await self._run("login", call, "Invalid credentials")

    async def logout(self) -> bool:
        async def call():
            await self._request("GET", "/auth/logout")
            self.token_storage.clear()
            self.dispatch(Action(type=ActionType.USER_CLEARED))

        return await self._run("logout", call, "Error logging out")

    async def forgot_password(self, email: str) -> bool:
        async def call():
            await self._request("POST", "/auth/forgotpassword", {"email": email})
            self.dispatch(Action(type=ActionType.REQUEST_SUCCEEDED))

        return await self._run(
            "forgot_password", call, "Error processing request", changes_session=False
        )

    async def reset_password(self, token: str, password: str) -> bool:
        async def call():
            data = await self._request(
                "PUT", f"/auth/resetpassword/{token}", {"password": password}
            )
            self._signed_in(data)

        return await self._run("reset_password", call, "Error resetting password")

    def clear_error(self) -> None:
        self.dispatch(Action(type=ActionType.ERROR_CLEARED))
