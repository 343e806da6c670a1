from abc import ABC, abstractmethod

from docsync.config.settings import Settings


class BaseAuthProvider(ABC):
    """Contract for the authentication collaborator."""

    @abstractmethod
    def current_user_id(self) -> str | None:
        """Identifier of the signed-in user, or None when signed out."""


class StaticAuthProvider(BaseAuthProvider):
    """Holds one fixed identity that can be signed in and out."""

    def __init__(self, user_id: str | None = None) -> None:
        self._user_id = user_id or None

    def current_user_id(self) -> str | None:
        return self._user_id

    def sign_in(self, user_id: str) -> None:
        self._user_id = user_id

    def sign_out(self) -> None:
        self._user_id = None


def build_auth_provider(settings: Settings) -> StaticAuthProvider:
    return StaticAuthProvider(settings.user_id.strip() or None)
