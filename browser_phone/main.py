"""
Browser Phone Gateway - Main Application Entry Point

Issues Twilio access tokens to the browser phone page, answers Twilio
voice webhooks with TwiML and proxies the account call log.
"""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, FileResponse
from fastapi.staticfiles import StaticFiles

from browser_phone.core.config import Settings, get_settings
from browser_phone.core.logging import setup_logging, get_logger
from browser_phone.core.exceptions import (
    BrowserPhoneError,
    AuthenticationError,
    GENERIC_ERROR_MESSAGE
)
from browser_phone.api.middleware.auth import Authorizer, ApiKeyAuthorizer
from browser_phone.api.routes import token, voice, callbacks, history, health
from browser_phone.services.call_events import CallEventSink, LoggingCallEventSink
from browser_phone.services.directory import ClientDirectory, StaticClientDirectory
from browser_phone.services.telephony.twilio_service import TwilioService

VERSION = "1.0.0"

ENDPOINTS = {
    "token": "POST /api/token",
    "voice": "POST /api/voice",
    "incoming": "POST /api/incoming",
    "call_status": "POST /api/call-status",
    "recording_status": "POST /api/recording-status",
    "call_history": "GET /api/call-history",
    "health": "GET /api/health"
}

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events
    """
    config: Settings = app.state.settings

    logger.info("=" * 60)
    logger.info("Starting Browser Phone Gateway")
    logger.info(f"Version: {VERSION}")
    logger.info(f"Environment: {config.environment}")
    logger.info(f"Port: {config.server_port}")
    logger.info(f"Twilio configured: {config.twilio_configured}")
    logger.info("Endpoints:")
    for route in ENDPOINTS.values():
        logger.info(f"  {route}")
    if not app.state.authorizer.enabled:
        logger.warning("API authentication is disabled; set API_KEYS to protect /api/token and /api/call-history")
    logger.info("=" * 60)

    yield

    logger.info("Shutdown complete")


def create_app(
    config: Optional[Settings] = None,
    twilio_service: Optional[TwilioService] = None,
    client_directory: Optional[ClientDirectory] = None,
    event_sink: Optional[CallEventSink] = None,
    authorizer: Optional[Authorizer] = None
) -> FastAPI:
    """
    Build the application with its collaborators

    Anything not supplied is constructed from the settings.
    """
    config = config or get_settings()

    app = FastAPI(
        title="Browser Phone Gateway",
        description="""
        ## Browser Phone Gateway

        Backend for a browser phone built on the Twilio Voice JS SDK.

        ### Features

        - **Access Tokens**: Scoped, short-lived tokens for the browser client
        - **Outgoing Calls**: TwiML that dials the requested number, with recording
        - **Incoming Calls**: TwiML that rings the browser client
        - **Status Callbacks**: Call and recording notifications
        - **Call History**: Recent calls from the Twilio account

        ### Authentication

        When API keys are configured, /api/token and /api/call-history require one:
        - Header: `X-API-Key: your-api-key`
        - Bearer Token: `Authorization: Bearer your-api-key`
        - Query Parameter: `?api_key=your-api-key`
        """,
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    app.state.settings = config
    app.state.twilio_service = twilio_service or TwilioService(config)
    app.state.client_directory = client_directory or StaticClientDirectory(config.incoming_client_identity)
    app.state.event_sink = event_sink or LoggingCallEventSink()
    app.state.authorizer = authorizer or ApiKeyAuthorizer(config.api_key_list)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AuthenticationError)
    async def auth_exception_handler(request: Request, exc: AuthenticationError):
        """Handle authentication errors"""
        logger.warning(f"AuthenticationError: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers={"WWW-Authenticate": "Bearer"}
        )

    @app.exception_handler(BrowserPhoneError)
    async def browser_phone_exception_handler(request: Request, exc: BrowserPhoneError):
        """Handle gateway exceptions; detail is hidden in production"""
        logger.warning(f"{type(exc).__name__}: {exc.error} - {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(include_detail=not config.is_production)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": GENERIC_ERROR_MESSAGE if config.is_production else str(exc)
            }
        )

    # Include routers
    app.include_router(token.router, prefix="/api")
    app.include_router(voice.router, prefix="/api")
    app.include_router(callbacks.router, prefix="/api")
    app.include_router(history.router, prefix="/api")
    app.include_router(health.router, prefix="/api")

    @app.get("/api")
    async def api_info():
        """API information endpoint"""
        return {
            "service": "Browser Phone Gateway",
            "version": VERSION,
            "docs": "/docs",
            "endpoints": ENDPOINTS
        }

    frontend_dir = config.frontend_dir

    # Mount static files for frontend
    if (frontend_dir / "static").is_dir():
        app.mount("/static", StaticFiles(directory=frontend_dir / "static"), name="static")

    @app.get("/", include_in_schema=False)
    async def root():
        """Serve the browser phone page"""
        index_file = frontend_dir / "index.html"
        if index_file.exists():
            return FileResponse(index_file)
        return JSONResponse({
            "service": "Browser Phone Gateway",
            "version": VERSION,
            "docs": "/docs",
            "health": "/api/health"
        })

    return app


app = create_app()


def run():
    """Serve the gateway with uvicorn on SERVER_HOST:SERVER_PORT"""
    import uvicorn

    config = get_settings()
    uvicorn.run(
        "browser_phone.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=not config.is_production,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    run()
