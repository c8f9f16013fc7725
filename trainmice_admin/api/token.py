from pathlib import Path
from typing import Optional

from trainmice_admin.utils.logging_utils import log


class TokenStore:
    """Holds the bearer token, optionally persisted to a file between runs."""

    def __init__(self, token: Optional[str] = None, token_file: Optional[str] = None):
        self._token = token
        self._path = Path(token_file).expanduser() if token_file else None

    def get(self) -> Optional[str]:
        if self._token is not None:
            return self._token
        if self._path is not None and self._path.is_file():
            stored = self._path.read_text().strip()
            return stored or None
        return None

    def set(self, token: Optional[str]) -> None:
        self._token = token
        if self._path is None:
            return
        if token is None:
            if self._path.exists():
                self._path.unlink()
                log.debug(f"Removed stored token at '{self._path}'")
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(token)

    def clear(self) -> None:
        self.set(None)
