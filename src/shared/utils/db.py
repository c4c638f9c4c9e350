"""Schema management for SQL-backed Protean providers.

Only providers configured as ``sqlite`` or ``postgresql`` get a schema;
the default in-memory provider needs nothing.
"""

from collections.abc import Iterable

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield name, provider


def _register_models(domain: Domain, provider_name: str) -> None:
    """Touch each repository's DAO so its SQLAlchemy model lands in the provider metadata."""
    registry = domain.registry
    for records in (registry.aggregates, registry.entities, registry.projections):
        for _, record in records.items():
            if record.cls.meta_.provider == provider_name:
                domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domains: Iterable[Domain]) -> None:
    """Create tables for every SQL provider of the given domains."""
    for domain in domains:
        with domain.domain_context():
            for name, provider in _sql_providers(domain):
                _register_models(domain, name)
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.create_all(engine)
                logger.info("Schema created", domain=domain.name, provider=name)


def drop_db(domains: Iterable[Domain]) -> None:
    """Drop tables for every SQL provider of the given domains."""
    for domain in domains:
        with domain.domain_context():
            for name, provider in _sql_providers(domain):
                _register_models(domain, name)
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)
                logger.info("Schema dropped", domain=domain.name, provider=name)
