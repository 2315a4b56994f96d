import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from google.auth.exceptions import GoogleAuthError
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from zoneinfo import ZoneInfo

from calbridge.config import CalendarBridgeConfig
from calbridge.dependencies import get_calendar_service, get_config, get_timezone
from calbridge.errors import (
    BadGatewayError,
    CalendarBackendError,
    CalendarBridgeError,
    DecodeError,
    ErrorCodes,
    ErrorResponse,
    ForbiddenError,
    MethodNotAllowedError,
    NotFoundError,
)
from calbridge.lib.shared.models.calendar import DisplayEvent, NewEventRequest
from calbridge.logging_config import setup_logging
from calbridge.mocks.calendar import DummyCalendarService
from calbridge.mocks.store import MockDataStore
from calbridge.services.calendar.auth import GoogleCalendarAuth
from calbridge.services.calendar.mapper import assemble_event, palette_backgrounds, to_display_event
from calbridge.services.calendar.service import CalendarService
from calbridge.services.calendar.window import month_window

logger = logging.getLogger(__name__)

# --- Pydantic Models ---
class HealthStatus(BaseModel):
    status: str
    env: str
    use_mock_data: bool
    authenticated: bool
    timezone: str

class CreatedEvent(BaseModel):
    id: str

# --- Helper Functions ---
def build_calendar_service(config: CalendarBridgeConfig, tz: ZoneInfo):
    """Backend for the configured environment: demo store or authenticated Google client."""
    if config.use_mock_data:
        logger.info("🎭 STARTING IN DEMO MODE (Mock Data)")
        return DummyCalendarService(MockDataStore(config.mock_data_path), tz)

    calendar_service = CalendarService(config)
    auth = GoogleCalendarAuth(config)
    try:
        if auth.authenticate() and calendar_service.authenticate(auth.creds):
            logger.info("Calendar authenticated.")
    except (GoogleAuthError, OSError, ValueError) as e:
        logger.warning("Startup authentication warning: %s", e)
    return calendar_service

def require_path_value(value: Optional[str], name: str) -> str:
    if value is None or not value.strip():
        raise ForbiddenError(f"invalid request, missing {name}")
    return value.strip()

def error_json(status_code: int, error: ErrorResponse, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error.model_dump(), headers=headers)

def register_exception_handlers(app: FastAPI):
    @app.exception_handler(CalendarBridgeError)
    async def bridge_error_handler(request: Request, exc: CalendarBridgeError):
        return error_json(exc.status_code, exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def decode_error_handler(request: Request, exc: RequestValidationError):
        details = [f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()]
        logger.warning("Could not decode %s %s body: %s", request.method, request.url.path, details)
        return error_json(400, DecodeError("invalid request body", details=details).to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        headers = getattr(exc, "headers", None)
        if exc.status_code == 405:
            error = MethodNotAllowedError(f"invalid method: {request.method}")
            return error_json(405, error.to_response(), headers)
        if isinstance(exc.detail, dict):
            return error_json(exc.status_code, ErrorResponse(**exc.detail), headers)
        code = ErrorCodes.NOT_FOUND if exc.status_code == 404 else ErrorCodes.INVALID_REQUEST
        return error_json(exc.status_code, ErrorResponse(error=str(exc.detail), code=code), headers)

    # Global exception handler for unexpected errors
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_json(500, ErrorResponse(error="Internal server error", code=ErrorCodes.INTERNAL_ERROR))

# --- Endpoints ---
def register_routes(app: FastAPI):
    @app.get("/health", response_model=HealthStatus)
    def health(request: Request, config: CalendarBridgeConfig = Depends(get_config)):
        calendar_service = request.app.state.calendar_service
        authenticated = bool(calendar_service and calendar_service.is_authenticated)
        return HealthStatus(
            status="healthy" if authenticated else "unauthenticated",
            env=config.env.value,
            use_mock_data=config.use_mock_data,
            authenticated=authenticated,
            timezone=config.timezone_name,
        )

    @app.get("/calendar/month")
    def month_events_missing_date():
        raise ForbiddenError("invalid request, missing date")

    @app.get("/calendar/month/{date}", response_model=List[DisplayEvent])
    def month_events(
        date: str,
        config: CalendarBridgeConfig = Depends(get_config),
        tz: ZoneInfo = Depends(get_timezone),
        calendar_service: CalendarService = Depends(get_calendar_service),
    ):
        """Events for a month, padded a week before and two weeks after."""
        token = require_path_value(date, "date")
        time_min, time_max = month_window(token, tz)

        try:
            palette = palette_backgrounds(calendar_service.get_colors())
            events = calendar_service.list_events(time_min, time_max)
            return [to_display_event(event, palette, tz, config.default_event_color) for event in events]
        except CalendarBackendError as e:
            logger.error("Unable to retrieve user's events for %s: %s", token, e.message)
            raise BadGatewayError("Unable to retrieve user's events") from e

    @app.api_route("/calendar/event", methods=["GET", "PATCH", "DELETE"])
    def event_missing_id():
        raise ForbiddenError("invalid request, missing event id")

    @app.get("/calendar/event/{event_id}")
    def fetch_event(event_id: str, calendar_service: CalendarService = Depends(get_calendar_service)) -> Dict[str, Any]:
        event_id = require_path_value(event_id, "event id")
        try:
            return calendar_service.get_event(event_id)
        except CalendarBackendError as e:
            logger.error("Unable to retrieve event %s: %s", event_id, e.message)
            raise NotFoundError("Not Found") from e

    @app.post("/calendar/event", status_code=201, response_model=CreatedEvent)
    def create_event(event: NewEventRequest, calendar_service: CalendarService = Depends(get_calendar_service)):
        return calendar_service.insert_event(assemble_event(event), fields="id")

    @app.patch("/calendar/event/{event_id}", response_model=CreatedEvent)
    def update_event(
        event_id: str,
        event: NewEventRequest,
        calendar_service: CalendarService = Depends(get_calendar_service),
    ):
        event_id = require_path_value(event_id, "event id")
        return calendar_service.patch_event(event_id, assemble_event(event), fields="id")

    @app.delete("/calendar/event/{event_id}")
    def delete_event(event_id: str, calendar_service: CalendarService = Depends(get_calendar_service)) -> bool:
        event_id = require_path_value(event_id, "event id")
        calendar_service.delete_event(event_id)
        return True

# --- Application ---
def create_app(
    config: Optional[CalendarBridgeConfig] = None,
    calendar_service: Optional[Any] = None,
) -> FastAPI:
    """
    Build the API. ``config`` and ``calendar_service`` are created at startup
    when not supplied and live on ``app.state`` for the lifetime of the app.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config is None:
            load_dotenv()
        app.state.config = config or CalendarBridgeConfig()
        setup_logging(app.state.config.log_level)
        app.state.timezone = app.state.config.get_timezone()
        if calendar_service is not None:
            app.state.calendar_service = calendar_service
        else:
            app.state.calendar_service = build_calendar_service(app.state.config, app.state.timezone)
        try:
            yield
        finally:
            app.state.calendar_service = None
            logger.info("Calendar bridge shutting down...")

    app = FastAPI(
        title="Calendar Bridge API",
        description="Month view and event CRUD over Google Calendar",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    register_routes(app)
    return app

app = create_app()

if __name__ == "__main__":
    load_dotenv()
    settings = CalendarBridgeConfig()
    uvicorn.run("calbridge.api:app", host=settings.api_host, port=settings.api_port)
