import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings
from core.errors import InternalError, SweetShopError
from core.logging_config import configure_logging
from core.tokens import TokenService
from db.database import Database
from db.seed import seed_sweets
from routers.auth import router as auth_router
from routers.inventory import router as inventory_router
from routers.sweets import router as sweets_router

logger = logging.getLogger(__name__)


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SweetShopError)
    async def sweet_shop_error_handler(request: Request, exc: SweetShopError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation failed", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = InternalError("Something went wrong!")
        return JSONResponse(status_code=error.status_code, content=error.to_payload())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(settings.database_url, echo=settings.database_echo)
        # Storage failures here abort startup
        await db.create_all()
        if settings.seed_on_startup:
            async with db.session() as session:
                await seed_sweets(session)

        app.state.db = db
        app.state.tokens = TokenService(settings.jwt_secret, settings.jwt_lifetime_seconds)
        logger.info("Sweet Shop API ready (database=%s)", db.engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            await db.dispose()

    app = FastAPI(
        title="Sweet Shop API",
        description="API for managing a sweet shop inventory",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    @app.get("/")
    async def root():
        return {"message": "Sweet Shop Management System API"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "version": "0.1.0"}

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(sweets_router, prefix="/api/sweets", tags=["sweets"])
    app.include_router(inventory_router, prefix="/api/sweets", tags=["inventory"])

    return app


if __name__ == "__main__":
    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
