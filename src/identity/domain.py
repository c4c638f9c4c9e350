"""Identity bounded context — accounts, sessions and wishlists.

The Account aggregate is the profile document behind every identity: its
role, its saved shipping address and its wishlist. Authentication itself is
delegated to an external identity provider reached through a port.
"""

import structlog
from protean.domain import Domain

identity = Domain(name="identity")

logger = structlog.get_logger(__name__)
