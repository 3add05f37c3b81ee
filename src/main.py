import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.ai.ask.exceptions import AskError, ConfigurationError
from src.ai.ask.router import router as ask_router
from src.ai.providers.factory import close_answer_provider
from src.config import get_app_settings
from src.db.database import close_db
from src.db.exceptions import DatabaseConfigurationError
from src.utils.logger import logger


def get_version():
    """Get version from pyproject.toml"""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    return data["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_app_settings()
    logger.info(
        "Ask Anything API starting",
        environment=settings.environment.value,
        answer_provider=settings.answer_provider,
    )
    yield
    await close_answer_provider()
    await close_db()


app = FastAPI(
    title="Ask Anything API",
    description="Question answering over the Re:cinq knowledge base",
    version=get_version(),
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

_settings = get_app_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_allow_origins,
    allow_credentials="*" not in _settings.cors_allow_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=_settings.cors_allow_headers,
)

app.include_router(ask_router, prefix="/api")


@app.exception_handler(AskError)
async def ask_error_handler(request: Request, exc: AskError) -> JSONResponse:
    """Render ask flow errors as ``{"error": message}``."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(DatabaseConfigurationError)
async def database_configuration_error_handler(
    request: Request, exc: DatabaseConfigurationError
) -> JSONResponse:
    """Render a missing database configuration like any other configuration error."""
    error = ConfigurationError()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning("Rejected malformed request", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error", path=request.url.path, error_type=type(exc).__name__
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/")
async def root():
    """Root endpoint."""
    return {"status": "ok", "message": "Ask Anything API is running"}


@app.get("/healthcheck")
async def healthcheck():
    """Health check endpoint."""
    return {"status": "ok", "message": "Ask Anything API is running"}
