# storefront/main.py
from fastapi import FastAPI
import uvicorn

from storefront.api.routers import admin, carts, catalog, checkout, health, orders
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# tabele tworzy tylko `python -m storefront.data.migrations` przy deployu, nie aplikacja


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    app.include_router(orders.router)
    app.include_router(admin.router)

    logger.info("Storefront API ready")
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
