"""Storefront management CLI.

Creates and drops database schemas for the storefront domains and loads
the seed catalogue.

Usage:
    python src/manage.py setup-db                    # Create all tables
    python src/manage.py drop-db                     # Drop all tables
    python src/manage.py sync-products [--if-empty]  # Replace the catalogue with the seed list
"""

import argparse
import sys

DOMAIN_NAMES = ["identity", "catalogue", "ordering"]


def _domains(names=None):
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    all_domains = {"identity": identity, "catalogue": catalogue, "ordering": ordering}
    targets = [all_domains[name] for name in (names or DOMAIN_NAMES)]
    for domain in targets:
        domain.init()
    return targets


def setup_databases(names=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.utils.db import setup_db

    setup_db(_domains(names))
    print("Done.")


def drop_databases(names=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.utils.db import drop_db

    drop_db(_domains(names))
    print("Done.")


def sync_products(only_if_empty=False):
    """Replace the catalogue with the seed product list."""
    from catalogue.product.sync import SyncProducts

    (catalogue,) = _domains(["catalogue"])
    with catalogue.domain_context():
        count = catalogue.process(SyncProducts(only_if_empty=only_if_empty), asynchronous=False)
    print(f"Successfully synced {count} products")


def main():
    from shared.utils.logging import configure_logging

    configure_logging()

    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    sync_parser = subparsers.add_parser("sync-products", help="Replace the catalogue with the seed products")
    sync_parser.add_argument("--if-empty", action="store_true", help="Only seed when the catalogue is empty")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "sync-products":
        sync_products(args.if_empty)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
