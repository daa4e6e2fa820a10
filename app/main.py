"""Main FastAPI application for Blazing Paddles reservations."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import VERSION
from app.errors import BookingError
from app.models import Error
from app.rate_limit import limiter
from app.routers import auth, availability, blocks, bookings, credits, events, health
from app.services.store import default_users, store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not store.state.users:
        store.seed(default_users())
    logger.info("Blazing Paddles API %s ready", VERSION)
    yield
    logger.info("Blazing Paddles API shutting down")


app = FastAPI(
    title="Blazing Paddles API",
    description="Court, practice bay and group training reservations",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=Error(error=exc.code, message=exc.message, details=exc.details).model_dump(),
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded for %s on %s", request.client, request.url.path)
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


for module in (health, auth, availability, bookings, blocks, events, credits):
    app.include_router(module.router)
