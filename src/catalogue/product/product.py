"""Product aggregate — an item for sale in the storefront catalogue."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from catalogue.domain import catalogue


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=100)
    description: Text()
    image: String(max_length=500)
    stock: Integer(min_value=0, default=0)
    discount: Float(min_value=0.0, max_value=100.0, default=0.0)
    rating: Float(min_value=0.0, max_value=5.0)
    featured: Boolean(default=False)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name, price, category, **details):
        """Create a product ready to be shown in the storefront."""
        from catalogue.product.events import ProductListed

        now = datetime.now(UTC)
        product = cls(name=name, price=price, category=category, created_at=now, updated_at=now, **details)
        product.raise_(
            ProductListed(
                product_id=str(product.id),
                name=product.name,
                category=product.category,
                price=product.price,
                discount=product.discount or 0.0,
                listed_at=now,
            )
        )
        return product

    @property
    def in_stock(self) -> bool:
        return (self.stock or 0) > 0
