"""Document store abstraction — pluggable backing store for products, orders and profiles."""

from shared.settings import get_settings
from shared.store.port import DocumentStore, DocumentStoreError

__all__ = ["DocumentStore", "DocumentStoreError", "get_document_store", "set_document_store", "reset_document_store"]

_store_instance = None


def get_document_store() -> DocumentStore:
    """Return the configured document store (singleton).

    Uses the Protean-backed store by default. Configure via the
    STORE_ADAPTER environment variable (``protean`` or ``fake``).
    """
    global _store_instance
    if _store_instance is None:
        adapter = get_settings().store_adapter
        if adapter == "protean":
            from shared.store.protean_store import ProteanDocumentStore

            _store_instance = ProteanDocumentStore()
        elif adapter == "fake":
            from shared.store.fake_store import FakeDocumentStore

            _store_instance = FakeDocumentStore()
        else:
            raise ValueError(f"Unknown document store adapter: {adapter}")
    return _store_instance


def set_document_store(store: DocumentStore) -> None:
    """Install a specific store instance (tests and scripts)."""
    global _store_instance
    _store_instance = store


def reset_document_store():
    """Reset the document store singleton (useful for testing)."""
    global _store_instance
    _store_instance = None
