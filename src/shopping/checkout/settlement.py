"""Checkout settlement: pay for a cart from the user's wallet and empty it.

Checks run in a fixed order and the first failure wins:

1. the user has a cart (``ObjectNotFoundError`` otherwise)
2. the cart has items
3. the user has set a real delivery address
4. the wallet covers the total

Only then is the wallet debited, by the cart total rounded to cents, and the
cart emptied. Both aggregates are written in the unit of work Protean opens
around the handler. If either write fails the unit of work is rolled back,
so a failed checkout never leaves money taken from a full cart.
"""

from decimal import Decimal

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from shopping.account.user import User
from shopping.cart.cart import EMPTY_CART, Cart
from shopping.config import ShoppingSettings, get_settings
from shopping.domain import logger, shopping
from shopping.shared.dispatch import process_for_user
from shopping.shared.errors import InfrastructureError
from shopping.shared.money import to_amount
from shopping.shared.persistence import persist

ADDRESS_NOT_SET = "Address not set"
INSUFFICIENT_BALANCE = "Insufficient wallet balance"


@shopping.command(part_of="Cart")
class CheckoutCart:
    user_email = String(required=True, max_length=255)


def settle(cart: Cart, user: User, settings: ShoppingSettings) -> Decimal:
    """Apply a checkout to ``cart`` and ``user`` in memory and return the amount charged.

    Nothing is persisted here. On any validation failure neither aggregate
    has been changed.
    """
    if cart.is_empty:
        raise ValidationError({"cart": [EMPTY_CART]})

    # Address gate comes before any pricing
    if not user.has_set_non_default_address(settings):
        raise ValidationError({"address": [ADDRESS_NOT_SET]})

    total = cart.total_cost()
    if not user.can_afford(total):
        raise ValidationError({"wallet_money": [INSUFFICIENT_BALANCE]})

    user.debit_wallet(total)
    cart.check_out()
    return total


@shopping.command_handler(part_of=Cart)
class CheckoutHandler:
    @handle(CheckoutCart)
    def checkout(self, command):
        cart_repo = current_domain.repository_for(Cart)
        user_repo = current_domain.repository_for(User)

        cart = cart_repo.get_for_user(command.user_email)
        user = user_repo.get_by_email(command.user_email)

        try:
            total = settle(cart, user, get_settings())
        except ValidationError as exc:
            logger.info("checkout_rejected", user_email=command.user_email, reason=exc.messages)
            raise

        persist(user_repo, user)
        try:
            persist(cart_repo, cart)
        except InfrastructureError:
            logger.error(
                "checkout_cart_write_failed",
                user_email=command.user_email,
                amount=to_amount(total),
            )
            raise

        logger.info(
            "checkout_completed",
            user_email=command.user_email,
            amount=to_amount(total),
            balance=user.wallet_money,
        )


def checkout(user_email: str) -> None:
    """Settle the user's cart against their wallet."""
    process_for_user(user_email, CheckoutCart(user_email=user_email))
