# shoeshop/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shoeshop.api.v1 import health, shoes, variations
from shoeshop.core.config import Settings
from shoeshop.core.exceptions import BusinessRuleError, NotFoundError, ValidationFailed
from shoeshop.core.logging_config import setup_logging
from shoeshop.repositories.factory import Storage, build_storage
from shoeshop.seed import seed_catalog

logger = logging.getLogger(__name__)


def _field_errors(exc: RequestValidationError) -> dict:
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors[".".join(loc) or "request"] = error.get("msg", "Invalid value")
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Traducir errores de dominio a respuestas HTTP"""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"success": False, "detail": "Invalid input", "errors": _field_errors(exc)},
        )

    @app.exception_handler(ValidationFailed)
    async def validation_failed_handler(request: Request, exc: ValidationFailed):
        return JSONResponse(
            status_code=422,
            content={"success": False, "detail": exc.message, "errors": exc.errors},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "detail": exc.message},
        )

    @app.exception_handler(BusinessRuleError)
    async def business_rule_handler(request: Request, exc: BusinessRuleError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "detail": exc.message},
        )

    @app.exception_handler(Exception)
    async def unexpected_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Unexpected error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "detail": "An unexpected error occurred"},
        )


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """Construir la aplicación con una configuración explícita"""
    settings = settings or Settings.from_env()
    setup_logging(settings.LOG_LEVEL, service_name="shoeshop")
    storage = storage or build_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        storage.init()
        if settings.SEED_DATA:
            with storage.session_scope() as repository:
                seed_catalog(repository)
        logger.info(f"🚀 {settings.PROJECT_NAME} ready ({settings.ENVIRONMENT})")
        yield
        storage.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        docs_url="/docs",
        description="Inventory backend for shoes and their color variations",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(shoes.router, prefix=f"{settings.API_V1_STR}/shoes", tags=["shoes"])
    app.include_router(variations.shoe_variations_router, prefix=f"{settings.API_V1_STR}/shoes", tags=["variations"])
    app.include_router(variations.router, prefix=f"{settings.API_V1_STR}/variations", tags=["variations"])

    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.PORT)
