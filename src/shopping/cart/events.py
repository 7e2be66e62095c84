"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer, String, Text

from shopping.domain import shopping


@shopping.event(part_of="Cart")
class CartItemAdded:
    """A product was added to a user's cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_email = String(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@shopping.event(part_of="Cart")
class CartItemQuantityUpdated:
    """The quantity of a cart line was overwritten."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@shopping.event(part_of="Cart")
class CartItemRemoved:
    """A product was removed from a user's cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shopping.event(part_of="Cart")
class CartCheckedOut:
    """A cart was paid for from the user's wallet and emptied."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_email = String(required=True)
    total = Float(required=True)
    payment_option = String(max_length=100)
    items = Text(required=True)  # JSON: list of {product_id, quantity, cost}
