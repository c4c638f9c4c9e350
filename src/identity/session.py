"""Session/Auth Gate — who is shopping, and may they do this?

A gate starts ``Unknown`` and resolves exactly once, on ``attach``, to
``Authenticated`` or ``Anonymous``. An authenticated gate drops to
``Anonymous`` when the identity provider reports a sign-out for its token.

Gated calls made while the gate is still ``Unknown`` wait for resolution
up to the session-resolve timeout and then raise ``SessionPending``; they
never assume the shopper is anonymous.
"""

import threading
from dataclasses import dataclass
from enum import Enum

import structlog

from identity.provider.port import AuthUser, IdentityProvider
from shared.errors import Forbidden, RemoteCallTimeout, SessionPending, Unauthenticated
from shared.settings import get_settings
from shared.store.port import DocumentStore, DocumentStoreError
from shared.store.records import Role
from shared.utils.remote import call_with_timeout

logger = structlog.get_logger(__name__)


class SessionState(Enum):
    UNKNOWN = "Unknown"
    AUTHENTICATED = "Authenticated"
    ANONYMOUS = "Anonymous"


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: str
    role: Role = Role.CUSTOMER
    display_name: str | None = None


def has_role(identity: Identity | None, role: Role) -> bool:
    return identity is not None and identity.role == role


class SessionGate:
    def __init__(
        self,
        provider: IdentityProvider,
        store: DocumentStore,
        resolve_timeout: float | None = None,
        call_timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.provider = provider
        self.store = store
        self.resolve_timeout = settings.session_resolve_timeout if resolve_timeout is None else resolve_timeout
        self.call_timeout = settings.remote_call_timeout if call_timeout is None else call_timeout

        self._state = SessionState.UNKNOWN
        self._identity: Identity | None = None
        self._token: str | None = None
        self._resolved = threading.Event()
        self._lock = threading.Lock()
        self._unsubscribe = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def token(self) -> str | None:
        return self._token

    # -------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------
    def attach(self, token: str | None) -> SessionState:
        """Resolve the gate from a bearer token. Only the first successful resolution counts."""
        with self._lock:
            if self._state != SessionState.UNKNOWN:
                return self._state

            user = self.provider.current_user(token) if token else None
            if user is None:
                self._resolve(SessionState.ANONYMOUS, None)
                return self._state

            try:
                role = self._lookup_role(user)
            except (DocumentStoreError, RemoteCallTimeout) as exc:
                logger.warning("Profile lookup failed; session left unresolved", user_id=user.user_id, error=str(exc))
                return self._state

            self._token = token
            self._unsubscribe = self.provider.on_auth_state_changed(self._on_auth_state_changed)
            self._resolve(
                SessionState.AUTHENTICATED,
                Identity(user_id=user.user_id, email=user.email, role=role, display_name=user.display_name),
            )
            return self._state

    def _lookup_role(self, user: AuthUser) -> Role:
        profile = call_with_timeout("get_profile", self.store.get_profile, user.user_id, timeout=self.call_timeout)
        if profile is None:
            return Role.CUSTOMER
        return profile.role

    def _resolve(self, state: SessionState, identity: Identity | None) -> None:
        self._state = state
        self._identity = identity
        self._resolved.set()
        logger.debug("Session resolved", state=state.value, user_id=identity.user_id if identity else None)

    def _on_auth_state_changed(self, token: str, user: AuthUser | None) -> None:
        if token != self._token or user is not None:
            return
        with self._lock:
            self._state = SessionState.ANONYMOUS
            self._identity = None
            self._token = None
        self.close()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # -------------------------------------------------------------------
    # Gate
    # -------------------------------------------------------------------
    def current_identity(self) -> Identity | None:
        """The authenticated identity, or ``None``. Never blocks."""
        return self._identity

    def require_authenticated(self) -> Identity:
        if not self._resolved.wait(self.resolve_timeout):
            raise SessionPending("Session is still being resolved; try again shortly")

        if self._state != SessionState.AUTHENTICATED or self._identity is None:
            raise Unauthenticated("Sign in to continue")
        return self._identity

    def has_role(self, role: Role) -> bool:
        return has_role(self._identity, role)

    def require_role(self, role: Role) -> Identity:
        identity = self.require_authenticated()
        if not has_role(identity, role):
            logger.warning("Role check failed", user_id=identity.user_id, required=role.value)
            raise Forbidden(f"This action requires the {role.value} role")
        return identity
