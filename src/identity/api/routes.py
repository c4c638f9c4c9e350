"""FastAPI endpoints for the Identity domain — auth, wishlist and admin roles."""

import structlog
from fastapi import APIRouter, Depends

from identity.api.deps import admin_user, bearer_token, current_user
from identity.api.schemas import (
    ChangeRoleRequest,
    IdentityResponse,
    ProfileResponse,
    ReconcileWishlistRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    StatusResponse,
    ToggleWishlistResponse,
    WishlistResponse,
)
from identity.provider import get_identity_provider
from identity.session import Identity
from identity.wishlist import WishlistStore
from shared.errors import Unauthenticated
from shared.store import get_document_store
from shared.store.records import Role

logger = structlog.get_logger(__name__)


def _identity_response(identity: Identity) -> IdentityResponse:
    return IdentityResponse(
        user_id=identity.user_id,
        email=identity.email,
        role=identity.role.value,
        display_name=identity.display_name,
    )


def _session_response(session, role: Role) -> SessionResponse:
    user = session.user
    return SessionResponse(
        token=session.token,
        user=IdentityResponse(user_id=user.user_id, email=user.email, role=role.value, display_name=user.display_name),
    )


def _attached_wishlist(identity: Identity, items=()) -> WishlistStore:
    wishlist = WishlistStore(get_document_store(), items=items)
    wishlist.attach(identity)
    return wishlist


# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/sign-up", status_code=201, response_model=SessionResponse)
def sign_up(body: SignUpRequest) -> SessionResponse:
    session = get_identity_provider().sign_up(body.email, body.password, display_name=body.display_name)
    profile = get_document_store().update_profile(
        session.user.user_id,
        {"email": session.user.email, "display_name": body.display_name},
    )
    return _session_response(session, profile.role)


@auth_router.post("/sign-in", response_model=SessionResponse)
def sign_in(body: SignInRequest) -> SessionResponse:
    session = get_identity_provider().sign_in(body.email, body.password)
    profile = get_document_store().get_profile(session.user.user_id)
    return _session_response(session, profile.role if profile else Role.CUSTOMER)


@auth_router.post("/sign-out", response_model=StatusResponse)
def sign_out(token: str | None = Depends(bearer_token)) -> StatusResponse:
    if token is None:
        raise Unauthenticated("Sign in to continue")
    get_identity_provider().sign_out(token)
    return StatusResponse()


@auth_router.get("/me", response_model=IdentityResponse)
async def me(identity: Identity = Depends(current_user)) -> IdentityResponse:
    return _identity_response(identity)


# ---------------------------------------------------------------------------
# Wishlist Router
# ---------------------------------------------------------------------------
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@wishlist_router.get("", response_model=WishlistResponse)
def get_wishlist(identity: Identity = Depends(current_user)) -> WishlistResponse:
    return WishlistResponse(items=sorted(_attached_wishlist(identity).items))


@wishlist_router.post("/reconcile", response_model=WishlistResponse)
def reconcile_wishlist(
    body: ReconcileWishlistRequest, identity: Identity = Depends(current_user)
) -> WishlistResponse:
    """Merge a device-local wishlist into the stored one."""
    wishlist = _attached_wishlist(identity, items=body.items)
    return WishlistResponse(items=sorted(wishlist.items))


@wishlist_router.put("/{product_id}", response_model=WishlistResponse)
def add_to_wishlist(product_id: str, identity: Identity = Depends(current_user)) -> WishlistResponse:
    wishlist = _attached_wishlist(identity)
    wishlist.add(product_id)
    return WishlistResponse(items=sorted(wishlist.items))


@wishlist_router.delete("/{product_id}", response_model=WishlistResponse)
def remove_from_wishlist(product_id: str, identity: Identity = Depends(current_user)) -> WishlistResponse:
    wishlist = _attached_wishlist(identity)
    wishlist.remove(product_id)
    return WishlistResponse(items=sorted(wishlist.items))


@wishlist_router.post("/{product_id}/toggle", response_model=ToggleWishlistResponse)
def toggle_wishlist(product_id: str, identity: Identity = Depends(current_user)) -> ToggleWishlistResponse:
    wishlist = _attached_wishlist(identity)
    wishlisted = wishlist.toggle(product_id)
    return ToggleWishlistResponse(product_id=product_id, wishlisted=wishlisted, items=sorted(wishlist.items))


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.put("/users/{user_id}/role", response_model=ProfileResponse)
def change_user_role(
    user_id: str, body: ChangeRoleRequest, admin: Identity = Depends(admin_user)
) -> ProfileResponse:
    profile = get_document_store().update_profile(user_id, {"role": body.role})
    logger.info("User role changed", user_id=user_id, role=body.role, changed_by=admin.user_id)
    return ProfileResponse(
        user_id=profile.identity_id,
        email=profile.email,
        display_name=profile.display_name,
        role=profile.role.value,
        wishlist=list(profile.wishlist),
    )
