"""Catalogue bounded context — products shown in the storefront.

Products are loaded from a static seed list by the bulk sync operation and
read by the cart and the product pages.
"""

import structlog
from protean.domain import Domain

catalogue = Domain(name="catalogue")

logger = structlog.get_logger(__name__)
