"""Cart operations exposed to callers that hold an authenticated user's email.

Mutations go through the command handlers in ``shopping.cart.items`` under the
user's lock; reads go straight to the repository.
"""

from protean.utils.globals import current_domain

from shopping.cart.cart import Cart
from shopping.cart.items import AddToCart, RemoveFromCart, UpdateCartItem
from shopping.shared.dispatch import process_for_user


def get_cart(user_email: str) -> Cart:
    """The user's cart. Raises ``ObjectNotFoundError`` when they have none yet."""
    return current_domain.repository_for(Cart).get_for_user(user_email)


def add_item(user_email: str, product_id: str, quantity: int) -> Cart:
    return process_for_user(
        user_email,
        AddToCart(user_email=user_email, product_id=product_id, quantity=quantity),
    )


def update_item(user_email: str, product_id: str, quantity: int) -> Cart:
    return process_for_user(
        user_email,
        UpdateCartItem(user_email=user_email, product_id=product_id, quantity=quantity),
    )


def remove_item(user_email: str, product_id: str) -> None:
    process_for_user(
        user_email,
        RemoveFromCart(user_email=user_email, product_id=product_id),
    )
