"""FastAPI routes for the Shopping domain: cart, checkout, products and address.

The caller's identity arrives in the ``X-User-Email`` header, set by the
authentication layer in front of this service.
"""

from fastapi import APIRouter, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from protean.utils.globals import current_domain

from shopping.account.address import update_address
from shopping.api.schemas import (
    AddToCartRequest,
    CartResponse,
    ProductResponse,
    StatusResponse,
    UpdateAddressRequest,
    UpdateCartItemRequest,
)
from shopping.cart.manager import add_item, get_cart, remove_item, update_item
from shopping.catalogue.product import Product
from shopping.checkout.settlement import checkout
from shopping.domain import logger
from shopping.shared.errors import ConflictError, InfrastructureError

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def read_cart(x_user_email: str = Header()) -> CartResponse:
    return CartResponse.from_cart(get_cart(x_user_email))


@cart_router.post("", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, x_user_email: str = Header()) -> CartResponse:
    cart = add_item(x_user_email, body.product_id, body.quantity)
    return CartResponse.from_cart(cart)


@cart_router.put("", response_model=CartResponse)
async def update_cart_item(body: UpdateCartItemRequest, x_user_email: str = Header()) -> CartResponse:
    cart = update_item(x_user_email, body.product_id, body.quantity)
    return CartResponse.from_cart(cart)


@cart_router.delete("/items/{product_id}", response_model=StatusResponse)
async def remove_cart_item(product_id: str, x_user_email: str = Header()) -> StatusResponse:
    remove_item(x_user_email, product_id)
    return StatusResponse(status="removed")


@cart_router.put("/checkout", response_model=StatusResponse)
async def checkout_cart(x_user_email: str = Header()) -> StatusResponse:
    checkout(x_user_email)
    return StatusResponse(status="checked_out")


# ---------------------------------------------------------------------------
# Account Router
# ---------------------------------------------------------------------------
account_router = APIRouter(prefix="/account", tags=["account"])


@account_router.put("/address", response_model=StatusResponse)
async def set_address(body: UpdateAddressRequest, x_user_email: str = Header()) -> StatusResponse:
    update_address(x_user_email, body.address)
    return StatusResponse(status="address_updated")


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    products = current_domain.repository_for(Product).list_all()
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def read_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).find_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductResponse.from_product(product)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.messages})


async def _infrastructure(request: Request, exc: InfrastructureError) -> JSONResponse:
    logger.error("infrastructure_error", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def register_error_handlers(app: FastAPI) -> None:
    """Protean's handlers (validation 400, not found 404) plus the shopping domain's own error kinds."""
    register_exception_handlers(app)
    app.add_exception_handler(ConflictError, _conflict)
    app.add_exception_handler(InfrastructureError, _infrastructure)
