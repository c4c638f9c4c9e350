import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Push the catalogue domain context around each test."""
    from catalogue.domain import catalogue

    ctx = catalogue.domain_context()
    ctx.push()

    yield

    ctx.pop()
