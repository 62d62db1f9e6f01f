"""
Client-side persistence of the session token.

The cookie set by the API is the primary credential; the stored token is
sent as ``Authorization: Bearer`` when the cookie is not available.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class TokenStorage:
    """In-memory token storage"""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStorage(TokenStorage):
    """Token storage backed by a small JSON file"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(self._read())

    def _read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text()).get("token")
        except (OSError, ValueError, AttributeError) as exc:
            logger.warning(f"Ignoring unreadable token file {self.path}: {exc}")
            return None

    def set(self, token: str) -> None:
        super().set(token)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token}))

    def clear(self) -> None:
        super().clear()
        self.path.unlink(missing_ok=True)
