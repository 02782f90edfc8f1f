"""
Trailblazer API - Main FastAPI application
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from trailblazer.db import Database
from trailblazer.routes import (
    auth_router,
    destinations_router,
    trips_router,
    users_router,
    weather_router,
)
from trailblazer.tools import CountriesClient, ItineraryGenerator, WeatherClient
from trailblazer.utils.config import Settings
from trailblazer.utils.exceptions import TrailblazerError
from trailblazer.utils.logger import configure_logging, mask_secret
from trailblazer.utils.security import PasswordHasher, TokenManager

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def error_response(message, status: int) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": {"message": message, "status": status}})


def log_configuration(settings: Settings) -> None:
    logger.info("Trailblazer Config:")
    logger.info(f"  ENVIRONMENT: {settings.environment}")
    logger.info(f"  SECRET_KEY: {mask_secret(settings.secret_key)}")
    logger.info(f"  PORT: {settings.port}")
    logger.info(f"  BCRYPT_WORK_FACTOR: {settings.password_rounds}")
    logger.info(f"  WEATHER_API_KEY: {mask_secret(settings.weather_api_key or '')}")
    logger.info(f"  OPENAI_API_KEY: {mask_secret(settings.openai_api_key or '')}")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Database and API clients are created by the lifespan hook and live on
    ``app.state`` until shutdown.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level, json_logs=settings.environment == "production")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_configuration(settings)

        database = Database.from_settings(settings)
        await database.connect()
        await database.create_schema()

        app.state.settings = settings
        app.state.database = database
        app.state.hasher = PasswordHasher(settings.password_rounds)
        app.state.tokens = TokenManager.from_settings(settings)
        app.state.countries = CountriesClient(
            settings.countries_api_url, timeout=settings.request_timeout
        )
        app.state.weather = WeatherClient(
            settings.weather_api_url, settings.weather_api_key, timeout=settings.request_timeout
        )
        app.state.itinerary = ItineraryGenerator(
            settings.openai_api_key, model=settings.openai_model, timeout=settings.request_timeout
        )
        try:
            yield
        finally:
            app.state.countries.close()
            app.state.weather.close()
            await app.state.itinerary.close()
            await database.close()

    app = FastAPI(
        title="Trailblazer API",
        description="Trip planning with destination facts, forecasts and AI itineraries",
        version=VERSION,
        lifespan=lifespan,
    )

    # CORS middleware - allow frontend to call our API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["*"],
    )

    @app.exception_handler(TrailblazerError)
    async def trailblazer_error_handler(request: Request, exc: TrailblazerError):
        if exc.status >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return error_response(exc.message, exc.status)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        return error_response(messages, 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.detail, exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return error_response("Internal Server Error", 500)

    @app.get("/")
    async def root():
        """Health check endpoint"""
        return {
            "service": "Trailblazer API",
            "status": "running",
            "version": VERSION,
        }

    @app.get("/health")
    async def health_check():
        """Detailed health check"""
        return {
            "status": "healthy",
            "api": "ok",
            "weather_api": "configured" if settings.weather_api_key else "missing credentials",
            "itinerary_api": "configured" if settings.openai_api_key else "missing credentials",
        }

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(trips_router)
    app.include_router(destinations_router)
    app.include_router(weather_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("trailblazer.main:app", host="0.0.0.0", port=Settings().port)
