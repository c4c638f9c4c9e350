"""Bulk catalogue sync — destructive replacement of every product.

``SyncProducts`` reloads the static seed list; ``ReplaceCatalogue`` loads
an arbitrary product list. Both delete all existing products first, inside
the handler's unit of work.
"""

import json

import structlog
from protean import handle
from protean.fields import Boolean, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.product.seed import SEED_PRODUCTS

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class SyncProducts:
    """Replace the catalogue with the static seed list."""

    only_if_empty: Boolean(default=False)


@catalogue.command(part_of="Product")
class ReplaceCatalogue:
    products: Text(required=True)  # JSON: list of product dicts


def _replace(products) -> int:
    repo = current_domain.repository_for(Product)

    existing = repo._dao.query.all().items
    for product in existing:
        repo._dao.delete(product)

    added = 0
    for data in products:
        repo.add(Product.create(**data))
        added += 1

    logger.info("Catalogue replaced", removed=len(existing), added=added)
    return added


@catalogue.command_handler(part_of=Product)
class SyncProductsHandler:
    @handle(SyncProducts)
    def sync_products(self, command):
        if command.only_if_empty and current_domain.repository_for(Product)._dao.query.all().items:
            logger.info("Catalogue already populated; seed skipped")
            return 0
        return _replace(SEED_PRODUCTS)

    @handle(ReplaceCatalogue)
    def replace_catalogue(self, command):
        return _replace(json.loads(command.products))
