"""
API root for the assessment service.

Feature routers are mounted on ``main_router`` through ``register_module``;
``install_exception_handlers`` turns engine errors into the error envelope
``{"status": "error", "message": ..., "details"?: ..., "code"?: ...}``.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from skillassess.common.exceptions import BaseError, ValidationError
from skillassess.common.logger import app_logger

logger = app_logger.getChild("api")

main_router = APIRouter()

registered_modules: Dict[str, APIRouter] = {}


def register_module(name: str, router: APIRouter, prefix: str) -> None:
    """
    Mount a feature router below the API root.

    Args:
        name: Module name, also used as the OpenAPI tag
        router: The module's router
        prefix: Path below the API root, e.g. ``/assessments``
    """
    if name in registered_modules:
        logger.debug(f"Module '{name}' is already mounted")
        return

    main_router.include_router(router, prefix=prefix, tags=[name])
    registered_modules[name] = router
    logger.info(f"Registered module '{name}' at {prefix} ({len(router.routes)} routes)")


class APIResponse:
    """Envelopes for responses that are not described by a response model."""

    @staticmethod
    def success(data: Any = None, message: str = "Success") -> Dict[str, Any]:
        return {"status": "success", "message": message, "data": data}

    @staticmethod
    def error(message: str, details: Optional[Any] = None,
              code: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"status": "error", "message": message}
        if details:
            body["details"] = details
        if code:
            body["code"] = code
        return body


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request bodies that do not even parse into the request model."""
    details = [
        {
            "location": list(err.get("loc", [])),
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=APIResponse.error("Request validation failed", details, "request_validation_error"),
    )


async def domain_exception_handler(request: Request, exc: BaseError) -> JSONResponse:
    """Errors raised by the engine, the stores or the auth layer."""
    level = logger.error if exc.status_code >= 500 else logger.info
    level(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")

    details = exc.errors if isinstance(exc, ValidationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=APIResponse.error(exc.message, details, exc.code),
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(BaseError, domain_exception_handler)
