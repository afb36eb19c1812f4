import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import OperationalError

import config
from db import create_db_and_tables, engine
from middleware.security_headers import SecurityHeadersMiddleware
from services.session_store import SessionStore
from web.api_router import api_router
from web.schemas import ApiResponse

SERVICE_UNAVAILABLE_MESSAGE = "Service temporarily unavailable. Please try again later."
SERVER_ERROR_MESSAGE = "A server error occurred. Please try again later."


def build_redis() -> Redis:
    return Redis(
        host=config.REDIS_HOST,
        port=config.REDIS_PORT,
        password=config.REDIS_PASSWORD,
        db=config.REDIS_DB,
        decode_responses=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    # Startup
    await create_db_and_tables()

    redis = build_redis()
    app.state.session_store = SessionStore(redis, ttl_seconds=config.SESSION_TTL_SECONDS)
    logging.info(f"[Startup] Storefront API ready ({config.RUNTIME_ENVIRONMENT.value})")

    yield

    # Shutdown
    logging.warning('Shutting down..')
    await redis.aclose()
    await engine.dispose()
    logging.warning('Bye!')


app = FastAPI(lifespan=lifespan, title="Storefront API")

if config.SECURITY_HEADERS_ENABLED:
    app.add_middleware(SecurityHeadersMiddleware)
    logging.info("[Startup] Security headers middleware enabled")

if config.CORS_ALLOWED_ORIGINS:
    # Credentials are needed for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    logging.info(f"[Startup] CORS middleware enabled for origins: {config.CORS_ALLOWED_ORIGINS}")
else:
    logging.debug("[Startup] CORS middleware disabled (no allowed origins configured)")

app.include_router(api_router)


# Health check endpoint (for Docker container monitoring)
@app.get("/health")
async def health_check():
    """Health check endpoint for Docker healthcheck."""
    return {"status": "healthy"}


@app.exception_handler(OperationalError)
@app.exception_handler(RedisConnectionError)
async def unavailable_handler(request: Request, exc: Exception):
    # Database or session store unreachable
    logging.error(f"Backing store unavailable on {request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ApiResponse.fail(SERVICE_UNAVAILABLE_MESSAGE).model_dump(),
    )


@app.exception_handler(Exception)
async def exception_handler(request: Request, exc: Exception):
    logging.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ApiResponse.fail(SERVER_ERROR_MESSAGE).model_dump(),
    )
