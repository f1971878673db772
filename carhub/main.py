"""FastAPI application entry point."""

import asyncio
import logging
import os
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from carhub.api import auth, cars
from carhub.config import get_settings
from carhub.exceptions import AuthenticationFailure, InternalFailure, ServiceError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def _exit_on_fatal(message: str, exc: BaseException | None) -> None:
    """Log an error nothing else handled and stop the process."""
    logger.critical(message, exc_info=exc)
    logging.shutdown()
    os._exit(1)


def _loop_exception_handler(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    _exit_on_fatal(f"Unhandled error in event loop: {context.get('message')}", context.get("exception"))


def _thread_exception_handler(args: threading.ExceptHookArgs) -> None:
    thread_name = args.thread.name if args.thread else "unknown"
    _exit_on_fatal(f"Unhandled error in thread {thread_name}", args.exc_value)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    previous_excepthook = threading.excepthook
    if settings.exit_on_unhandled_error:
        asyncio.get_running_loop().set_exception_handler(_loop_exception_handler)
        threading.excepthook = _thread_exception_handler
    logger.info(f"Car catalog API starting ({settings.environment})")
    yield
    threading.excepthook = previous_excepthook
    logger.info("Car catalog API shutting down")


app = FastAPI(
    title="Car Management API",
    description="Manage cars with tags and images, behind user authentication",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth.router)
app.include_router(cars.router)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Map domain errors to their HTTP status."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationFailure) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 with the field errors when a request fails validation."""
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": "Invalid input", "errors": errors})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Unexpected store errors become a generic 500; details stay in the log."""
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": InternalFailure.default_detail})


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": InternalFailure.default_detail})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
