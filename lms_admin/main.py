"""
LMS Admin Moderation API: FastAPI Application.

This is the entry point for the application.
All routers and error handlers are registered here.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from lms_admin.config import get_settings
from lms_admin.logging_setup import get_logger, setup_logging
from lms_admin.api.health import router as health_router
from lms_admin.api.moderation import router as moderation_router
from lms_admin.api.audit_trail import router as audit_trail_router
from lms_admin.api.dashboard import router as dashboard_router

settings = get_settings()
setup_logging(settings)

logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Forum moderation and audit trail for the LMS admin dashboard",
)


# Every error leaves as {"success": false, "message": ...}

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": f"{location}: {message}" if location else message,
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "unhandled_error",
        method=request.method,
        path=request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Server Error"},
    )


# Register routers
app.include_router(health_router)
app.include_router(moderation_router)
app.include_router(audit_trail_router)
app.include_router(dashboard_router)
