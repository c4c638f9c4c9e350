"""Application tests for the bulk catalogue sync commands."""

import json

from catalogue.product.product import Product
from catalogue.product.seed import SEED_PRODUCTS
from catalogue.product.sync import ReplaceCatalogue, SyncProducts
from protean import current_domain


def _products():
    return current_domain.repository_for(Product)._dao.query.all().items


class TestSyncProducts:
    def test_sync_loads_seed_list(self):
        count = current_domain.process(SyncProducts(), asynchronous=False)

        assert count == len(SEED_PRODUCTS)
        assert {p.name for p in _products()} == {p["name"] for p in SEED_PRODUCTS}

    def test_sync_replaces_existing_products(self):
        current_domain.repository_for(Product).add(Product.create(name="Stale", price=1.0, category="Old"))

        current_domain.process(SyncProducts(), asynchronous=False)

        names = {p.name for p in _products()}
        assert "Stale" not in names
        assert len(names) == len(SEED_PRODUCTS)

    def test_sync_twice_does_not_duplicate(self):
        current_domain.process(SyncProducts(), asynchronous=False)
        current_domain.process(SyncProducts(), asynchronous=False)

        assert len(_products()) == len(SEED_PRODUCTS)

    def test_only_if_empty_skips_populated_catalogue(self):
        current_domain.repository_for(Product).add(Product.create(name="Keep", price=1.0, category="Home"))

        count = current_domain.process(SyncProducts(only_if_empty=True), asynchronous=False)

        assert count == 0
        assert [p.name for p in _products()] == ["Keep"]


class TestReplaceCatalogue:
    def test_replace_with_given_list(self):
        products = [
            {"name": "Basket", "price": 10.0, "category": "Home"},
            {"name": "Mat", "price": 5.5, "category": "Home", "featured": True},
        ]

        count = current_domain.process(ReplaceCatalogue(products=json.dumps(products)), asynchronous=False)

        assert count == 2
        assert sorted(p.name for p in _products()) == ["Basket", "Mat"]

    def test_replace_with_empty_list_clears_catalogue(self):
        current_domain.process(SyncProducts(), asynchronous=False)

        current_domain.process(ReplaceCatalogue(products="[]"), asynchronous=False)

        assert _products() == []
