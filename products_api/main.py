import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from products_api.api.router import api_router
from products_api.config import Settings
from products_api.database.mongo import connect, get_collection
from products_api.errors import register_exception_handlers
from products_api.middleware import setup_middleware
from products_api.services.product_service import ProductStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(settings: Settings, store: ProductStore | None = None) -> FastAPI:
    """
    Build the API around an explicit settings object.

    When `store` is omitted the MongoDB client is opened on startup and closed
    on shutdown; passing a store skips the connection entirely.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if app.state.store is None:
            client = connect(settings)
            app.state.store = ProductStore(get_collection(client, settings))
        yield
        if client is not None:
            client.close()
            logger.info("MongoDB client closed")

    app = FastAPI(title="Products API", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    setup_middleware(app)
    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Hello World"

    return app


def run():
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)
    app = create_app(settings)
    logger.info("Server running on http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, access_log=False)


if __name__ == "__main__":
    run()
