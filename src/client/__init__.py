"""
Client session store for applications talking to the auth API.
"""

from .session_store import Action, ActionType, AuthState, AuthStore, ClientUser, reduce
from .token_storage import FileTokenStorage, TokenStorage

__all__ = [
    "Action",
    "ActionType",
    "AuthState",
    "AuthStore",
    "ClientUser",
    "reduce",
    "TokenStorage",
    "FileTokenStorage",
]
