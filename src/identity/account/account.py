"""Account aggregate — the profile document owned by each identity."""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text, ValueObject

from identity.account.events import (
    AccountRegistered,
    AccountRoleChanged,
    ShippingAddressSaved,
    WishlistChanged,
)
from identity.domain import identity
from shared.store.records import Role

_ADDRESS_FIELDS = ("full_name", "street", "city", "state", "postal_code", "country")


@identity.value_object(part_of="Account")
class SavedAddress:
    """The shipping address last used at checkout, kept for prefilling the form."""

    full_name: String(required=True, max_length=200)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)

    def to_dict(self):
        return {name: getattr(self, name) for name in _ADDRESS_FIELDS}


@identity.aggregate
class Account:
    user_id: Identifier(identifier=True, required=True)
    email: String(max_length=254)
    display_name: String(max_length=200)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    address: ValueObject(SavedAddress)
    wishlist: Text()  # JSON array of product ids
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def register(cls, user_id, email=None, display_name=None):
        now = datetime.now(UTC)
        account = cls(
            user_id=user_id,
            email=email,
            display_name=display_name,
            role=Role.CUSTOMER.value,
            wishlist=json.dumps([]),
            created_at=now,
            updated_at=now,
        )
        account.raise_(
            AccountRegistered(
                user_id=user_id,
                email=email,
                display_name=display_name,
                registered_at=now,
            )
        )
        return account

    @property
    def wishlist_ids(self) -> list[str]:
        return json.loads(self.wishlist) if self.wishlist else []

    def rename(self, display_name, email=None):
        self.display_name = display_name
        if email is not None:
            self.email = email
        self.updated_at = datetime.now(UTC)

    def change_role(self, role):
        try:
            new_role = Role(role)
        except ValueError:
            raise ValidationError({"role": [f"Unknown role: {role}"]}) from None

        if new_role.value == self.role:
            return

        previous = self.role
        self.role = new_role.value
        self.updated_at = datetime.now(UTC)
        self.raise_(
            AccountRoleChanged(
                user_id=str(self.user_id),
                previous_role=previous,
                new_role=new_role.value,
            )
        )

    def save_address(self, **fields):
        self.address = SavedAddress(**{name: fields.get(name) for name in _ADDRESS_FIELDS})
        self.updated_at = datetime.now(UTC)
        self.raise_(ShippingAddressSaved(user_id=str(self.user_id), city=fields.get("city")))

    def replace_wishlist(self, product_ids):
        ids = sorted(set(product_ids))
        if ids == sorted(self.wishlist_ids):
            return

        self.wishlist = json.dumps(ids)
        self.updated_at = datetime.now(UTC)
        self.raise_(WishlistChanged(user_id=str(self.user_id), item_count=len(ids)))
