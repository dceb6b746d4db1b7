from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError, OperationalError, TimeoutError as PoolTimeoutError
from app.config import settings
from app.database.connection import close_db, engine
from app.utils.errors import MarketplaceError, StoreUnavailable, UpstreamError
from app.controllers.auth_controller import router as auth_router
from app.controllers.user_controller import router as user_router
from app.controllers.property_controller import router as property_router
from app.controllers.admin_controller import router as admin_router
from app.controllers.offer_controller import router as offer_router
from app.controllers.agent_controller import router as agent_router
from app.controllers.wishlist_controller import router as wishlist_router
from app.controllers.review_controller import router as review_router
from app.controllers.payment_controller import router as payment_router
from app.controllers.dashboard_controller import router as dashboard_router
import asyncio
import logging
import time

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all incoming requests"""
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        # Never log a full bearer token
        authorization = request.headers.get("authorization")
        if authorization and len(authorization) > 20:
            authorization = authorization[:20] + "..."

        logger.info(
            f"Request: {request.method} {request.url.path} from {client_ip}"
            + (f" (authorization: {authorization})" if authorization else "")
        )

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(f"Response: {response.status_code} for {request.method} {request.url.path} ({process_time:.3f}s)")

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup DB check is informational, the app starts either way
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        logger.warning(f"Database connection failed on startup: {str(e)}")

    yield

    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title="Real Estate Marketplace API",
    description="Listings, offers, wishlists and reviews for buyers, agents and admins",
    version="1.0.0",
    lifespan=lifespan
)

# Add request logging middleware first (runs before CORS)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(exc: MarketplaceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(MarketplaceError)
async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}")
    return _error_response(exc)


@app.exception_handler(OperationalError)
@app.exception_handler(PoolTimeoutError)
@app.exception_handler(asyncio.TimeoutError)
async def store_unavailable_handler(request: Request, exc: Exception):
    logger.error(f"Store unavailable on {request.method} {request.url.path}: {str(exc)}")
    return _error_response(StoreUnavailable())


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {str(exc)}")
    return _error_response(UpstreamError("Database error"))


app.include_router(auth_router)
app.include_router(user_router)
app.include_router(property_router)
app.include_router(admin_router)
app.include_router(offer_router)
app.include_router(agent_router)
app.include_router(wishlist_router)
app.include_router(review_router)
app.include_router(payment_router)
app.include_router(dashboard_router)


@app.get("/")
async def root():
    return {"message": "Real Estate Marketplace API", "status": "running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
