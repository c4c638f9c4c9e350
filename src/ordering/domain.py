"""Ordering bounded context — shopping carts, checkout runs and orders.

One cart per identity; checkout runs turn a cart into a persisted order
and notify the operator and the customer along the way.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
