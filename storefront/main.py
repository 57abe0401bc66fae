# storefront/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.api.routers import (
    analytics,
    auth,
    banners,
    brands,
    bundles,
    cart,
    categories,
    discounts,
    health,
    orders,
    products,
    users,
    wishlist,
)
from storefront.data.database import init_db
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database")
    init_db()
    logger.info("Database ready")
    yield


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # malformed input is a plain 400 across the API
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app(init_database: bool = True) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        version="1.0.0",
        lifespan=lifespan if init_database else None,
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(categories.router)
    app.include_router(products.router)
    app.include_router(brands.router)
    app.include_router(bundles.router)
    app.include_router(banners.router)
    app.include_router(cart.router)
    app.include_router(wishlist.router)
    app.include_router(orders.router)
    app.include_router(discounts.router)
    app.include_router(analytics.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
