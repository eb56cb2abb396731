"""Bearer credential providers for the invitation gateway.

A provider owns the credential lifecycle:

1. ``load()`` reads a cached credential (if any)
2. ``get_token()`` is called by the gateway for every request
3. ``invalidate()`` is called by the gateway when the backend answers 401

Invalidation listeners let the embedding application react (for example by
sending the user back to sign-in).
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from prohelper.core.logging import get_logger

logger = get_logger(__name__)

InvalidationListener = Callable[[], None]


class CredentialProvider(ABC):
    """Abstract base class for bearer credential providers."""

    def __init__(self) -> None:
        self._listeners: list[InvalidationListener] = []

    @abstractmethod
    def load(self) -> str | None:
        """Load the cached credential.

        Returns:
            The loaded token, or None if nothing is cached.
        """
        pass

    @abstractmethod
    def get_token(self) -> str | None:
        """Return the token to attach to the next request, if any."""
        pass

    @abstractmethod
    def _clear(self) -> None:
        """Forget the current credential."""
        pass

    def add_invalidation_listener(self, listener: InvalidationListener) -> None:
        """Register a callback run after the credential is invalidated."""
        self._listeners.append(listener)

    def invalidate(self) -> None:
        """Drop the credential and notify listeners."""
        self._clear()
        logger.info("Credential invalidated", provider=type(self).__name__)
        for listener in list(self._listeners):
            listener()


class StaticCredentialProvider(CredentialProvider):
    """In-memory credential, mainly for scripts and tests."""

    def __init__(self, token: str | None = None) -> None:
        super().__init__()
        self._token = token or None

    def load(self) -> str | None:
        return self._token

    def get_token(self) -> str | None:
        return self._token

    def _clear(self) -> None:
        self._token = None


class FileCredentialProvider(CredentialProvider):
    """Credential cached in a file on disk.

    The token is read lazily on first use and kept in memory afterwards.
    Invalidation removes the file so the next session starts signed out.
    """

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path).expanduser()
        self._token: str | None = None
        self._loaded = False

    def load(self) -> str | None:
        self._loaded = True
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            self._token = None
            return None
        self._token = token or None
        return self._token

    def get_token(self) -> str | None:
        if not self._loaded:
            self.load()
        return self._token

    def store(self, token: str) -> None:
        """Persist a new credential."""
        token = token.strip()
        if not token:
            raise ValueError("Token must not be empty")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")
        self.path.chmod(0o600)
        self._token = token
        self._loaded = True
        logger.info("Credential stored", path=str(self.path))

    def _clear(self) -> None:
        self._token = None
        self._loaded = True
        self.path.unlink(missing_ok=True)
