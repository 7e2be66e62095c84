"""Pydantic request/response schemas for the Shopping API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands and aggregates.
"""

from pydantic import BaseModel, Field

from shopping.shared.money import to_amount


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)


class UpdateAddressRequest(BaseModel):
    address: str = Field(min_length=1, max_length=500)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartItemResponse(BaseModel):
    product_id: str
    product_name: str | None = None
    cost: float
    quantity: int


class CartResponse(BaseModel):
    cart_id: str
    user_email: str
    payment_option: str | None = None
    items: list[CartItemResponse]
    total: float

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        return cls(
            cart_id=str(cart.id),
            user_email=cart.user_email,
            payment_option=cart.payment_option,
            items=[
                CartItemResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    cost=item.cost,
                    quantity=item.quantity,
                )
                for item in cart.items
            ],
            total=to_amount(cart.total_cost()),
        )


class ProductResponse(BaseModel):
    product_id: str
    name: str
    category: str | None = None
    cost: float
    rating: float | None = None
    image: str | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            product_id=str(product.id),
            name=product.name,
            category=product.category,
            cost=product.cost,
            rating=product.rating,
            image=product.image,
        )


class StatusResponse(BaseModel):
    status: str = "ok"
