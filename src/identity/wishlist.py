"""Wishlist Store — a set of product ids kept in sync with the profile.

Local mutations always apply. When an identity is attached, every change
writes the full list back to the profile; a failed write is logged and the
local set is kept as-is.

The full list is only written once the stored wishlist has been merged in.
If loading it failed on attach, the next write first retries the load and
unions the stored ids (minus any removed locally since), and skips the
write when the load fails again.
"""

from collections.abc import Iterable

import structlog

from identity.session import Identity
from shared.errors import RemoteCallTimeout
from shared.settings import get_settings
from shared.store.port import DocumentStore, DocumentStoreError
from shared.utils.remote import call_with_timeout

logger = structlog.get_logger(__name__)


class WishlistStore:
    def __init__(self, store: DocumentStore, items: Iterable[str] = (), call_timeout: float | None = None):
        self.store = store
        self.call_timeout = get_settings().remote_call_timeout if call_timeout is None else call_timeout
        self._items: set[str] = set(items)
        self._identity_id: str | None = None
        self._synced = False
        self._removed: set[str] = set()

    @property
    def items(self) -> frozenset[str]:
        return frozenset(self._items)

    @property
    def identity_id(self) -> str | None:
        return self._identity_id

    @property
    def synced(self) -> bool:
        """Whether the stored wishlist has been merged into the local set."""
        return self._synced

    def contains(self, product_id: str) -> bool:
        return product_id in self._items

    def add(self, product_id: str) -> None:
        if product_id in self._items:
            return
        self._items.add(product_id)
        self._removed.discard(product_id)
        self._write_back()

    def remove(self, product_id: str) -> None:
        if product_id not in self._items:
            return
        self._items.discard(product_id)
        if not self._synced:
            self._removed.add(product_id)
        self._write_back()

    def toggle(self, product_id: str) -> bool:
        """Flip membership of ``product_id``. Returns whether it is now wishlisted."""
        if product_id in self._items:
            self.remove(product_id)
            return False
        self.add(product_id)
        return True

    def reconcile(self, local: Iterable[str], remote: Iterable[str]) -> frozenset[str]:
        """Union ``local`` and ``remote``; write back when the merge adds to ``remote``."""
        remote = set(remote)
        merged = set(local) | remote
        self._items = merged
        self._synced = True
        self._removed.clear()

        if merged != remote:
            self._write_back()
        return self.items

    def attach(self, identity: Identity) -> frozenset[str]:
        """Bind to ``identity`` and merge its stored wishlist into the local set."""
        self._identity_id = identity.user_id
        self._synced = False
        self._removed.clear()

        remote = self._load()
        if remote is None:
            return self.items
        return self.reconcile(self._items, remote)

    def _load(self) -> set[str] | None:
        try:
            profile = call_with_timeout(
                "get_profile", self.store.get_profile, self._identity_id, timeout=self.call_timeout
            )
        except (DocumentStoreError, RemoteCallTimeout) as exc:
            logger.warning("Wishlist load failed; keeping local items", user_id=self._identity_id, error=str(exc))
            return None
        return set(profile.wishlist) if profile is not None else set()

    def _catch_up(self) -> bool:
        remote = self._load()
        if remote is None:
            return False
        self._items |= remote - self._removed
        self._removed.clear()
        self._synced = True
        return True

    def _write_back(self) -> None:
        if self._identity_id is None:
            return
        if not self._synced and not self._catch_up():
            logger.warning("Wishlist not written; stored list could not be loaded", user_id=self._identity_id)
            return
        try:
            call_with_timeout(
                "update_profile",
                self.store.update_profile,
                self._identity_id,
                {"wishlist": sorted(self._items)},
                timeout=self.call_timeout,
            )
        except (DocumentStoreError, RemoteCallTimeout) as exc:
            logger.warning("Wishlist sync failed", user_id=self._identity_id, error=str(exc))
