"""Kartflow FastAPI application.

Web server that processes cart and checkout commands synchronously via HTTP.
Each request is wrapped in the shopping domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → in-memory database
#   - "production" → PostgreSQL at DATABASE_URL
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from shopping.domain import shopping  # noqa: E402
from shopping.utils.logging import add_context, clear_context  # noqa: E402

shopping.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Kartflow API",
    description="Shopping cart and wallet checkout",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the shopping domain context for each request and tag its logs with the caller."""
    if request.url.path == "/health":
        return await call_next(request)
    add_context(user_email=request.headers.get("x-user-email"), path=request.url.path)
    try:
        with shopping.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from shopping.api.routes import (  # noqa: E402
    account_router,
    cart_router,
    product_router,
    register_error_handlers,
)

app.include_router(cart_router)
app.include_router(account_router)
app.include_router(product_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": shopping.name}})
