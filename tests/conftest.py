import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize every storefront domain once. Each context's conftest pushes
    its own domain context around its tests.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("EMAIL_ADAPTER", "fake")
    os.environ.setdefault("IDENTITY_ADAPTER", "fake")

    for domain in _domains():
        domain.init()


def _domains():
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    return (catalogue, identity, ordering)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from identity.provider import reset_identity_provider
    from notifications.channel import reset_email_channel
    from shared.settings import reset_settings
    from shared.store import reset_document_store

    # Clear all databases of every domain; the document store writes across them
    for domain in _domains():
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()
            for _, broker in domain.brokers.items():
                broker._data_reset()
            domain.event_store.store._data_reset()

    reset_document_store()
    reset_identity_provider()
    reset_email_channel()
    reset_settings()


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------
@pytest.fixture()
def fake_store():
    from shared.store import set_document_store
    from shared.store.fake_store import FakeDocumentStore

    store = FakeDocumentStore()
    set_document_store(store)
    return store


@pytest.fixture()
def fake_email():
    from notifications.channel import set_email_channel
    from notifications.channel.fake_email import FakeEmailAdapter

    channel = FakeEmailAdapter()
    set_email_channel(channel)
    return channel


@pytest.fixture()
def address():
    return {
        "full_name": "Jane Doe",
        "street": "12 Market Street",
        "city": "Springfield",
        "state": "IL",
        "postal_code": "62701",
        "country": "USA",
    }


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def api_app():
    """Bare FastAPI app with the storefront error handlers; tests add the routers they exercise."""
    from fastapi import FastAPI
    from shared.api.errors import register_error_handlers

    app = FastAPI()
    register_error_handlers(app)
    return app


@pytest.fixture()
def sign_up():
    """Register an identity with the fake provider and return ``(session, headers)``."""
    from identity.provider import get_identity_provider

    def _sign_up(email="jane@example.com", password="s3cret-pass", display_name="Jane Doe"):
        session = get_identity_provider().sign_up(email, password, display_name=display_name)
        return session, {"Authorization": f"Bearer {session.token}"}

    return _sign_up


@pytest.fixture()
def sign_up_admin(sign_up, fake_store):
    from shared.store.records import ProfileRecord, Role

    def _sign_up_admin(email="admin@example.com"):
        session, headers = sign_up(email=email, display_name="Store Admin")
        fake_store.seed_profile(ProfileRecord(identity_id=session.user.user_id, email=email, role=Role.ADMIN))
        return session, headers

    return _sign_up_admin
