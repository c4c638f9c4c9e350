"""Domain events for the Account aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from identity.domain import identity


@identity.event(part_of="Account")
class AccountRegistered:
    """A profile document was created for a newly signed-up identity."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String()
    display_name: String()
    registered_at: DateTime(required=True)


@identity.event(part_of="Account")
class AccountRoleChanged:
    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String(required=True)
    new_role: String(required=True)


@identity.event(part_of="Account")
class ShippingAddressSaved:
    __version__ = 1

    user_id: Identifier(required=True)
    city: String()


@identity.event(part_of="Account")
class WishlistChanged:
    __version__ = 1

    user_id: Identifier(required=True)
    item_count: Integer(required=True)
