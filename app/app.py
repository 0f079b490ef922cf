import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api import routes_health, routes_product
from app.core.config import settings
from app.core.exceptions import ProductError
from app.core.logging import configure_logging
from app.db import core

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENV})")
    if settings.INIT_DB:
        await core.init_db(core.engine)
    yield
    await core.engine.dispose()
    logger.info("Shut down")


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=settings.APP_DESCRIPTION,
        lifespan=lifespan
    )

    # the catalog front end is served from a different origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        routes_health.router,
        prefix=settings.API_PREFIX
    )

    app.include_router(
        routes_product.router,
        prefix=settings.API_PREFIX
    )

    @app.exception_handler(ProductError)
    async def product_error_handler(request, ex: ProductError):
        if ex.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {ex.message}")
        return JSONResponse(status_code=ex.status_code, content={"error": ex.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request, ex: RequestValidationError):
        message = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in ex.errors())
        return JSONResponse(status_code=422, content={"error": message})

    @app.get("/")
    async def root():
        return {"message": f"{settings.APP_NAME} is running"}

    return app


app = create_app()
