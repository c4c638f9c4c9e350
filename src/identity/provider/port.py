"""Identity provider port (abstract interface).

Authentication is owned by an external identity provider. The storefront
only needs to sign identities up, in and out, resolve a session token to a
user, and hear about sign-outs so open sessions can drop to Anonymous.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthUser:
    user_id: str
    email: str
    display_name: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """A signed-in session: an opaque bearer token and the user it belongs to."""

    token: str
    user: AuthUser


# Called with the session token and the user now attached to it (None after sign-out)
AuthStateListener = Callable[[str, AuthUser | None], None]


class IdentityProvider(ABC):
    """Abstract identity provider interface."""

    @abstractmethod
    def sign_up(self, email: str, password: str, display_name: str | None = None) -> AuthSession:
        """Create a credential and return a signed-in session for it."""
        ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthSession: ...

    @abstractmethod
    def sign_out(self, token: str) -> None: ...

    @abstractmethod
    def current_user(self, token: str) -> AuthUser | None:
        """Resolve a session token, or ``None`` when it is unknown or signed out."""
        ...

    @abstractmethod
    def on_auth_state_changed(self, callback: AuthStateListener) -> Callable[[], None]:
        """Register ``callback`` for sign-in and sign-out notifications. Returns an unsubscribe callable."""
        ...
