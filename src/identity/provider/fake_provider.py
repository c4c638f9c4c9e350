"""In-memory identity provider for development and testing.

Passwords are stored as salted PBKDF2 hashes and sessions as opaque random
tokens, so the flows behave like a hosted provider without any network.
"""

import hashlib
import hmac
import secrets
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError

from identity.provider.port import AuthSession, AuthStateListener, AuthUser, IdentityProvider
from shared.errors import Unauthenticated

logger = structlog.get_logger(__name__)

_ITERATIONS = 120_000
MIN_PASSWORD_LENGTH = 6


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _ITERATIONS)


class FakeIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self._credentials: dict[str, tuple[bytes, bytes]] = {}  # email -> (salt, hash)
        self._users: dict[str, AuthUser] = {}  # email -> user
        self._sessions: dict[str, AuthUser] = {}  # token -> user
        self._listeners: list[AuthStateListener] = []
        self.calls: list[dict] = []

    def sign_up(self, email: str, password: str, display_name: str | None = None) -> AuthSession:
        self.calls.append({"method": "sign_up", "email": email})
        email = email.strip().lower()

        if "@" not in email or any(c.isspace() or not c.isprintable() for c in email):
            raise ValidationError({"email": ["Enter a valid email address"]})
        if email in self._users:
            raise ValidationError({"email": ["An account already exists for this email"]})
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})

        salt = secrets.token_bytes(16)
        self._credentials[email] = (salt, _hash_password(password, salt))
        user = AuthUser(user_id=str(uuid4()), email=email, display_name=display_name)
        self._users[email] = user

        logger.info("Identity signed up", user_id=user.user_id)
        return self._open_session(user)

    def sign_in(self, email: str, password: str) -> AuthSession:
        self.calls.append({"method": "sign_in", "email": email})
        email = email.strip().lower()

        stored = self._credentials.get(email)
        if stored is None:
            raise Unauthenticated("Invalid email or password")

        salt, expected = stored
        if not hmac.compare_digest(expected, _hash_password(password, salt)):
            raise Unauthenticated("Invalid email or password")

        return self._open_session(self._users[email])

    def sign_out(self, token: str) -> None:
        self.calls.append({"method": "sign_out"})
        user = self._sessions.pop(token, None)
        if user is not None:
            logger.info("Identity signed out", user_id=user.user_id)
            self._notify(token, None)

    def current_user(self, token: str) -> AuthUser | None:
        return self._sessions.get(token)

    def on_auth_state_changed(self, callback: AuthStateListener):
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def reset(self) -> None:
        self._credentials.clear()
        self._users.clear()
        self._sessions.clear()
        self._listeners.clear()
        self.calls.clear()

    def _open_session(self, user: AuthUser) -> AuthSession:
        token = secrets.token_urlsafe(32)
        self._sessions[token] = user
        self._notify(token, user)
        return AuthSession(token=token, user=user)

    def _notify(self, token: str, user: AuthUser | None) -> None:
        for listener in list(self._listeners):
            listener(token, user)
