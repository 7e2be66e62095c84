"""Cart item management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from shopping.cart.cart import PRODUCT_ALREADY_IN_CART, Cart
from shopping.catalogue.product import Product
from shopping.domain import logger, shopping
from shopping.shared.errors import ConflictError
from shopping.shared.persistence import persist

UNKNOWN_PRODUCT = "Product doesn't exist in database"
NO_CART_FOR_UPDATE = "User does not have a cart. Use POST to create cart and add a product"


@shopping.command(part_of="Cart")
class AddToCart:
    user_email = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@shopping.command(part_of="Cart")
class UpdateCartItem:
    user_email = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@shopping.command(part_of="Cart")
class RemoveFromCart:
    user_email = String(required=True, max_length=255)
    product_id = Identifier(required=True)


def _resolve_product(product_id):
    product = current_domain.repository_for(Product).find_by_id(product_id)
    if product is None:
        raise ValidationError({"product_id": [UNKNOWN_PRODUCT]})
    return product


def _existing_cart(repo, user_email):
    cart = repo.find_for_user(user_email)
    if cart is None:
        raise ValidationError({"cart": [NO_CART_FOR_UPDATE]})
    return cart


@shopping.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_email)
        if cart is None:
            cart = repo.create_for_user(command.user_email)
            logger.info("cart_created", user_email=command.user_email, cart_id=str(cart.id))

        # Duplicates are rejected before the catalogue is consulted
        if cart.find_item(command.product_id) is not None:
            raise ConflictError({"product_id": [PRODUCT_ALREADY_IN_CART]})

        product = _resolve_product(command.product_id)
        cart.add_item(product, command.quantity)
        persist(repo, cart)

        logger.info(
            "cart_item_added",
            user_email=command.user_email,
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return cart

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.user_email)
        _resolve_product(command.product_id)

        cart.update_item_quantity(command.product_id, command.quantity)
        persist(repo, cart)

        logger.info(
            "cart_item_updated",
            user_email=command.user_email,
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return cart

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.user_email)

        cart.remove_item(command.product_id)
        persist(repo, cart)

        logger.info("cart_item_removed", user_email=command.user_email, product_id=str(command.product_id))
