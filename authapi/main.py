"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from authapi.api import auth, users
from authapi.config import get_settings
from authapi.database import Database
from authapi.errors import AuthAPIError, IdentityProviderError
from authapi.services.google_oauth import GoogleIdentityProvider

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    database = Database(settings.database_url)
    database.init_db()
    http_client = httpx.Client(timeout=10.0)

    app.state.database = database
    app.state.identity_provider = GoogleIdentityProvider.from_settings(settings, http_client)
    if not app.state.identity_provider.is_configured():
        logger.warning("GOOGLE_CLIENT_ID/GOOGLE_CLIENT_SECRET not set, Google login will fail")

    try:
        yield
    finally:
        http_client.close()
        database.dispose()


app = FastAPI(
    title="User Auth API",
    description="User registration, password and Google login, and user management",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(AuthAPIError)
async def auth_api_error_handler(request: Request, exc: AuthAPIError):
    if isinstance(exc, IdentityProviderError):
        logger.warning(f"Identity provider failure: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request"}
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# Register routers
app.include_router(auth.router)
app.include_router(users.router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}


if __name__ == "__main__":
    uvicorn.run(
        "authapi.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
    )
