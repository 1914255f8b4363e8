"""FastAPI application entry point for the festival workflow."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from festival import __version__
from festival.api.middleware.logging_middleware import LoggingMiddleware
from festival.api.models.common import ErrorResponse
from festival.api.routes.audit import router as audit_router
from festival.api.routes.auth import router as auth_router
from festival.api.routes.health import router as health_router
from festival.api.routes.programs import router as programs_router
from festival.api.routes.screenings import router as screenings_router
from festival.api.routes.users import router as users_router
from festival.bootstrap.festival import get_festival_config
from festival.bootstrap.logging import configure_structlog
from festival.domain.exceptions import FestivalError


def festival_error_handler(request: Request, exc: FestivalError) -> JSONResponse:
    """Render any domain error as an RFC 7807 body with its HTTP status."""
    body = ErrorResponse(**exc.to_dict(), instance=str(request.url))
    return JSONResponse(status_code=exc.HTTP_STATUS, content=body.model_dump())


def create_app() -> FastAPI:
    """Build the application with logging, middleware and routers."""
    configure_structlog(environment=get_festival_config().environment)

    application = FastAPI(
        title="Festival Programme API",
        description="Program and screening lifecycle management",
        version=__version__,
    )
    application.add_middleware(LoggingMiddleware)
    application.add_exception_handler(FestivalError, festival_error_handler)

    application.include_router(health_router)
    application.include_router(auth_router)
    application.include_router(users_router)
    application.include_router(programs_router)
    application.include_router(screenings_router)
    application.include_router(audit_router)
    return application


app = create_app()
