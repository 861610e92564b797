import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from sheets.core import settings, NotFoundError, FormulaError
from sheets.core.logging_config import configure_logging
from sheets.api import api_router
from sheets.schemas import FormulaErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle manager."""
    logger.info("Starting %s...", settings.APP_TITLE)

    if settings.DYNAMODB_ENABLED:
        logger.info("DynamoDB storage enabled: %s (%s)", settings.DYNAMODB_TABLE_NAME, settings.AWS_REGION)
    else:
        logger.info("Using file-based storage (local dev): %s", settings.SHEET_STORAGE_DIR)

    yield
    logger.info("Shutting down...")


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def formula_error_handler(request: Request, exc: FormulaError) -> JSONResponse:
    body = FormulaErrorResponse(value=exc.value if exc.value is not None else "")
    return JSONResponse(status_code=422, content=body.model_dump())


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_TITLE,
        lifespan=lifespan,
        debug=settings.DEBUG
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(FormulaError, formula_error_handler)

    # Include API router with /api/v1 prefix
    app.include_router(api_router, prefix="/api/v1")

    # Health check endpoint
    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
