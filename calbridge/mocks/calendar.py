import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from calbridge.errors import CalendarBackendError
from calbridge.mocks.store import MockDataStore

logger = logging.getLogger(__name__)

def _project(event: Dict[str, Any], fields: Optional[str]) -> Dict[str, Any]:
    if not fields:
        return event
    wanted = [f.strip() for f in fields.split(",")]
    return {k: v for k, v in event.items() if k in wanted}

class DummyCalendarService:
    """Calendar backend served from an in-memory store, for demo and test runs."""
    def __init__(self, store: Optional[MockDataStore] = None, tz: Optional[tzinfo] = None):
        self.store = store or MockDataStore()
        self.tz = tz or ZoneInfo("UTC")
        logger.info("📅 DummyCalendarService Initialized (Mock Data)")

    @property
    def is_authenticated(self) -> bool:
        return True

    def authenticate(self, creds=None) -> bool:
        return True

    def _bounds(self, event: Dict[str, Any]):
        start = event.get("start", {})
        end = event.get("end", start)
        if start.get("dateTime"):
            begin = datetime.fromisoformat(start["dateTime"].replace("Z", "+00:00"))
            finish = datetime.fromisoformat(end.get("dateTime", start["dateTime"]).replace("Z", "+00:00"))
        else:
            day = date.fromisoformat(start["date"])
            begin = datetime(day.year, day.month, day.day, tzinfo=self.tz)
            last = date.fromisoformat(end.get("date", start["date"]))
            finish = datetime(last.year, last.month, last.day, tzinfo=self.tz)
            if finish <= begin:
                finish = begin + timedelta(days=1)
        return begin, finish

    def get_colors(self) -> Dict[str, Any]:
        return self.store.get_colors()

    def list_events(self, time_min: str, time_max: str) -> List[Dict[str, Any]]:
        lower = datetime.fromisoformat(time_min)
        upper = datetime.fromisoformat(time_max)

        matched = []
        for event in self.store.get_events():
            if event.get("status") == "cancelled":
                continue
            begin, finish = self._bounds(event)
            if finish > lower and begin < upper:
                matched.append((begin, event))

        matched.sort(key=lambda x: x[0])
        return [event for _, event in matched]

    def get_event(self, event_id: str) -> Dict[str, Any]:
        event = self.store.get(event_id)
        if event is None:
            raise CalendarBackendError("Not Found", upstream_status=404)
        return event

    def insert_event(self, body: Dict[str, Any], fields: str = "id") -> Dict[str, Any]:
        if "start" not in body:
            raise CalendarBackendError("Missing start time.", upstream_status=400)
        return _project(self.store.put(body), fields)

    def patch_event(self, event_id: str, body: Dict[str, Any], fields: str = "id") -> Dict[str, Any]:
        event = self.get_event(event_id)
        event.update(body)
        return _project(self.store.put(event), fields)

    def delete_event(self, event_id: str) -> None:
        if not self.store.remove(event_id):
            raise CalendarBackendError("Not Found", upstream_status=404)
