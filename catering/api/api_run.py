from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catering.api.dependencies import Services, build_services
from catering.api.routes import admin, auth, plans, subscriptions, testimonials
from catering.domain.errors import CateringError, SecurityTokenError, ValidationError
from catering.utilities.validators import field_errors_from

# Logging
logger = logging.getLogger("catering_app")


def create_app(services: Optional[Services] = None) -> FastAPI:
    app = FastAPI(title="SEA Catering Subscriptions API")
    app.state.services = services or build_services()

    # Routers
    app.include_router(plans.router)
    app.include_router(auth.router)
    app.include_router(subscriptions.router)
    app.include_router(testimonials.router)
    app.include_router(admin.router)

    @app.exception_handler(CateringError)
    async def _catering_error(request: Request, exc: CateringError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s rejected: %s (%s)", request.method, request.url.path, exc.error_code, exc.status_code)
        headers = None
        if isinstance(exc, SecurityTokenError) and exc.context.get("retry_after"):
            headers = {"Retry-After": str(exc.context["retry_after"])}
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        err = ValidationError("Please correct the highlighted fields", field_errors_from(exc.errors()))
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
