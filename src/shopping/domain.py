"""Shopping bounded context: user carts and wallet checkout.

Carts, the product catalogue they reference, and the user wallets that
checkout debits live in one domain so that a checkout can change a user and
a cart inside a single unit of work.
"""

from protean.domain import Domain

from shopping.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
shopping = Domain(name="shopping")
