import pytest
from typing import Any, Dict, List, Optional

from fastapi.testclient import TestClient

from calbridge.api import create_app
from calbridge.config import CalendarBridgeConfig
from calbridge.errors import CalendarBackendError
from tests.factories import get_colors, get_month_events

class RecordingCalendarService:
    """Stands in for the Google backend and records every call it receives."""
    def __init__(self, events: Optional[List[Dict[str, Any]]] = None):
        self.events = events if events is not None else get_month_events()
        self.calls: List[tuple] = []
        self.fail_with: Optional[CalendarBackendError] = None
        self.is_authenticated = True

    def _record(self, name: str, *args):
        self.calls.append((name, *args))
        if self.fail_with is not None:
            raise self.fail_with

    def get_colors(self) -> Dict[str, Any]:
        self._record("get_colors")
        return get_colors()

    def list_events(self, time_min: str, time_max: str) -> List[Dict[str, Any]]:
        self._record("list_events", time_min, time_max)
        return self.events

    def get_event(self, event_id: str) -> Dict[str, Any]:
        self._record("get_event", event_id)
        for event in self.events:
            if event["id"] == event_id:
                return event
        raise CalendarBackendError("Not Found", upstream_status=404)

    def insert_event(self, body: Dict[str, Any], fields: str = "id") -> Dict[str, Any]:
        self._record("insert_event", body, fields)
        return {"id": "created_1"}

    def patch_event(self, event_id: str, body: Dict[str, Any], fields: str = "id") -> Dict[str, Any]:
        self._record("patch_event", event_id, body, fields)
        return {"id": event_id}

    def delete_event(self, event_id: str) -> None:
        self._record("delete_event", event_id)

@pytest.fixture
def test_config(monkeypatch):
    """Test configuration pinned to a DST-observing zone."""
    monkeypatch.setenv("GCAL_ENV", "test")
    monkeypatch.setenv("CALENDAR_TIMEZONE", "America/New_York")
    monkeypatch.setenv("DEFAULT_EVENT_COLOR", "#039be5")
    monkeypatch.delenv("MOCK_DATA_PATH", raising=False)
    return CalendarBridgeConfig()

@pytest.fixture
def calendar_backend():
    return RecordingCalendarService()

@pytest.fixture
def client(test_config, calendar_backend):
    with TestClient(create_app(test_config, calendar_backend)) as client:
        yield client
