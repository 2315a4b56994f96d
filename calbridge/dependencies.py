from zoneinfo import ZoneInfo
from fastapi import HTTPException, Request
from calbridge.config import CalendarBridgeConfig
from calbridge.errors import ErrorCodes
from calbridge.services.calendar.service import CalendarService

def get_config(request: Request) -> CalendarBridgeConfig:
    return request.app.state.config

def get_timezone(request: Request) -> ZoneInfo:
    return request.app.state.timezone

def get_calendar_service(request: Request) -> CalendarService:
    calendar_service = request.app.state.calendar_service
    if calendar_service is None or not calendar_service.is_authenticated:
        raise HTTPException(
            status_code=401,
            detail={"error": "Calendar not authenticated", "code": ErrorCodes.UNAUTHORIZED, "details": []},
        )
    return calendar_service
