"""FastAPI dependencies that put the Session/Auth Gate in front of routes."""

from collections.abc import Iterator

from fastapi import Depends, Header

from identity.provider import get_identity_provider
from identity.session import Identity, SessionGate
from shared.store import get_document_store
from shared.store.records import Role


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def get_session(token: str | None = Depends(bearer_token)) -> Iterator[SessionGate]:
    """One gate per request; its provider subscription ends with the request."""
    gate = SessionGate(get_identity_provider(), get_document_store())
    gate.attach(token)
    try:
        yield gate
    finally:
        gate.close()


def current_user(gate: SessionGate = Depends(get_session)) -> Identity:
    return gate.require_authenticated()


def admin_user(gate: SessionGate = Depends(get_session)) -> Identity:
    return gate.require_role(Role.ADMIN)
