from datetime import date, datetime, tzinfo
from typing import Any, Dict, Optional

from calbridge.errors import CalendarBackendError
from calbridge.lib.shared.models.calendar import DisplayEvent, NewEventRequest
from calbridge.services.calendar.window import format_timestamp


def palette_backgrounds(colors: Dict[str, Any]) -> Dict[str, str]:
    """Reduce a colors resource to {event color id: background color}."""
    return {
        color_id: definition.get("background", "")
        for color_id, definition in colors.get("event", {}).items()
    }


def resolve_background(color_id: Optional[str], palette: Dict[str, str], default: str) -> str:
    if color_id and palette.get(color_id):
        return palette[color_id]
    return default


def normalize_start(start: Dict[str, Any], tz: tzinfo) -> tuple[str, bool]:
    """
    Returns (timestamp, is_all_day) for an event's start.

    Timed events keep their own offset. All-day events only carry a date, which
    is placed at local midnight so both kinds read the same on the client.
    """
    try:
        if start.get("dateTime"):
            ts = datetime.fromisoformat(start["dateTime"].replace("Z", "+00:00"))
            return format_timestamp(ts), False
        day = date.fromisoformat(start["date"])
    except (KeyError, ValueError) as e:
        raise CalendarBackendError(f"unreadable event start: {start!r}") from e

    ts = datetime(day.year, day.month, day.day, tzinfo=tz)
    return format_timestamp(ts), True


def to_display_event(
    event: Dict[str, Any], palette: Dict[str, str], tz: tzinfo, default_color: str
) -> DisplayEvent:
    """Flatten a provider event for the month listing."""
    timestamp, all_day = normalize_start(event.get("start", {}), tz)
    return DisplayEvent(
        id=event["id"],
        attendees=event.get("attendees", []),
        is_all_day=all_day,
        background_color=resolve_background(event.get("colorId"), palette, default_color),
        date=timestamp,
        description=event.get("description", ""),
        location=event.get("location", ""),
        summary=event.get("summary", ""),
    )


def assemble_event(request: NewEventRequest) -> Dict[str, Any]:
    """
    Build the provider body for create and update.

    Only non-empty fields are copied, so a patch never clears a value. A date
    makes a single-day event: start and end carry the same date.
    """
    body: Dict[str, Any] = {}
    if request.date:
        body["start"] = {"date": request.date}
        body["end"] = {"date": request.date}
    if request.color:
        body["colorId"] = request.color
    if request.description:
        body["description"] = request.description
    if request.location:
        body["location"] = request.location
    if request.summary:
        body["summary"] = request.summary
    return body
