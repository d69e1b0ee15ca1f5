import hmac
import logging
import time

from fastapi import FastAPI, Request

from products_api.errors import UnauthorizedError, error_response

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("products_api.access")

API_KEY_HEADER = "x-api-key"


def is_authorized(provided: str | None, expected: str) -> bool:
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def setup_middleware(app: FastAPI):
    # Registered last runs first: request logging wraps the API key guard.

    @app.middleware("http")
    async def require_api_key(request: Request, call_next):
        settings = request.app.state.settings
        if not is_authorized(request.headers.get(API_KEY_HEADER), settings.API_KEY):
            logger.warning("Rejected %s %s: missing or invalid API key", request.method, request.url.path)
            error = UnauthorizedError()
            return error_response(error.status_code, error.message)
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            access_logger.info("%s %s %s %.1f ms", request.method, request.url.path, status_code, elapsed_ms)
