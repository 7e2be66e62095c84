"""Cart aggregate: one per user, holding at most one line per product.

A cart is found by its owner's email and created lazily on the first add.
It is never deleted: checkout empties it and it is reused for the next
purchase. Each line copies the product's name and cost so the cart can price
itself without going back to the catalogue.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from shopping.cart.events import CartCheckedOut, CartItemAdded, CartItemQuantityUpdated, CartItemRemoved
from shopping.domain import shopping
from shopping.shared.errors import ConflictError
from shopping.config import get_settings
from shopping.shared.money import line_total, to_amount, to_cents
from shopping.shared.persistence import storage_errors

PRODUCT_ALREADY_IN_CART = "Product already in cart. Use the cart sidebar to update or remove product from cart"
PRODUCT_NOT_IN_CART = "Product not in cart"
EMPTY_CART = "Cart doesn't have any product"
NO_CART = "User does not have a cart"


@shopping.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    cost = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def subtotal(self) -> Decimal:
        return line_total(self.cost, self.quantity)


@shopping.aggregate
class Cart:
    user_email = String(required=True, max_length=255)
    payment_option = String(max_length=100)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def each_product_appears_at_most_once(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_email, payment_option=None):
        now = datetime.now(UTC)
        return cls(
            user_email=user_email,
            payment_option=payment_option or get_settings().default_payment_option,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------
    def find_item(self, product_id):
        """First line for ``product_id`` by exact identifier match, or ``None``."""
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def total_cost(self) -> Decimal:
        """Sum of the line subtotals, rounded to cents."""
        return to_cents(sum((item.subtotal for item in self.items), Decimal("0")))

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity):
        """Append a new line for ``product``. Quantities are never merged into an existing line."""
        if self.find_item(product.id) is not None:
            raise ConflictError({"product_id": [PRODUCT_ALREADY_IN_CART]})

        now = datetime.now(UTC)
        self.add_items(
            CartItem(
                product_id=str(product.id),
                product_name=product.name,
                cost=product.cost,
                quantity=quantity,
                added_at=now,
            )
        )
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_email=self.user_email,
                product_id=str(product.id),
                quantity=quantity,
            )
        )

    def update_item_quantity(self, product_id, quantity):
        """Overwrite the quantity of the line for ``product_id``."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self.find_item(product_id)
        if item is None:
            raise ValidationError({"product_id": [PRODUCT_NOT_IN_CART]})

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.find_item(product_id)
        if item is None:
            raise ValidationError({"product_id": [PRODUCT_NOT_IN_CART]})

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def check_out(self) -> Decimal:
        """Empty the cart after payment and return the total that was charged."""
        if self.is_empty:
            raise ValidationError({"cart": [EMPTY_CART]})

        total = self.total_cost()
        snapshot = [
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "cost": item.cost,
            }
            for item in self.items
        ]

        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                user_email=self.user_email,
                total=to_amount(total),
                payment_option=self.payment_option,
                items=json.dumps(snapshot),
            )
        )
        return total


@shopping.repository(part_of=Cart)
class CartRepository:
    def find_for_user(self, user_email) -> Cart | None:
        """The user's cart, or ``None``. If a race ever left two carts, the oldest wins."""
        with storage_errors("find cart for user"):
            carts = self._dao.query.filter(user_email=user_email).order_by("created_at").all().items
        return carts[0] if carts else None

    def get_for_user(self, user_email) -> Cart:
        cart = self.find_for_user(user_email)
        if cart is None:
            raise ObjectNotFoundError(NO_CART)
        return cart

    def create_for_user(self, user_email) -> Cart:
        """A new, unsaved cart. It is stored together with the change that needed it."""
        return Cart.create(user_email)
