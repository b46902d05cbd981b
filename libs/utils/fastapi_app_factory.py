"""FastAPI application factory with common configurations."""

from typing import Awaitable, Callable, Dict, List, Optional
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from libs.contracts.error import MAX_FIELD_LENGTH, MAX_MESSAGE_LENGTH, ValidationErrorDetail, truncate
from .exceptions import APIException, ValidationError
from .logging_config import get_logger
from .middleware import RequestLoggingMiddleware
from .responses import error_response

logger = get_logger(__name__)

HealthCheck = Callable[[], Awaitable[bool]]


def create_lifespan_manager(
    service_name: str,
    startup_hook: Optional[Callable[[], Awaitable[None]]] = None,
    shutdown_hook: Optional[Callable[[], Awaitable[None]]] = None
):
    """Create a standardized lifespan manager for FastAPI apps."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Service starting", service=service_name)
        if startup_hook:
            await startup_hook()
        try:
            yield
        finally:
            logger.info("Service shutting down", service=service_name)
            if shutdown_hook:
                await shutdown_hook()

    return lifespan


def _validation_details(exc: RequestValidationError) -> List[ValidationErrorDetail]:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        details.append(
            ValidationErrorDetail(
                field=truncate(".".join(loc) or "body", MAX_FIELD_LENGTH),
                message=truncate(err.get("msg") or "invalid value", MAX_MESSAGE_LENGTH),
                value=err.get("input") if isinstance(err.get("input"), (str, int, float, bool)) else None,
            )
        )
    return details


def add_exception_handlers(app: FastAPI, service_name: str) -> None:
    """Render API exceptions and request validation failures as error envelopes."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc, service_name, getattr(request.state, "request_id", None)),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = ValidationError("Request validation failed", validation_errors=_validation_details(exc))
        return JSONResponse(
            status_code=wrapped.status_code,
            content=error_response(wrapped, service_name, getattr(request.state, "request_id", None)),
        )


def create_fastapi_app(
    title: str,
    description: str,
    version: str,
    service_name: str,
    startup_hook: Optional[Callable[[], Awaitable[None]]] = None,
    shutdown_hook: Optional[Callable[[], Awaitable[None]]] = None,
    cors_origins: Optional[list] = None,
    health_checks: Optional[Dict[str, HealthCheck]] = None,
) -> FastAPI:
    """Create a FastAPI application with standard configuration."""

    lifespan_manager = create_lifespan_manager(
        service_name=service_name,
        startup_hook=startup_hook,
        shutdown_hook=shutdown_hook
    )

    app = FastAPI(
        title=title,
        description=description,
        version=version,
        lifespan=lifespan_manager
    )

    if cors_origins is None:
        cors_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    add_exception_handlers(app, service_name)

    checks = health_checks or {}

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        results = {name: await check() for name, check in checks.items()}
        status = "healthy" if all(results.values()) else "degraded"
        return {"status": status, "service": service_name, "checks": results}

    return app
