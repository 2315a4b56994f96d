import json
import pytest
from zoneinfo import ZoneInfo
from fastapi.testclient import TestClient

from calbridge.api import create_app
from calbridge.errors import CalendarBackendError
from calbridge.mocks.calendar import DummyCalendarService
from calbridge.mocks.store import MockDataStore
from tests.factories import all_day_event, get_month_events, timed_event

pytestmark = pytest.mark.offline

NEW_YORK = ZoneInfo("America/New_York")

@pytest.fixture
def mock_data_file(tmp_path):
    path = tmp_path / "mock_store.json"
    events = get_month_events() + [
        all_day_event("evt_cancelled", "2024-03-20", status="cancelled"),
        timed_event("evt_may", "2024-05-20T10:00:00-04:00", "2024-05-20T11:00:00-04:00"),
    ]
    path.write_text(json.dumps({"events": events}), encoding="utf-8")
    return path

def test_store_seeds_from_json(mock_data_file):
    store = MockDataStore(str(mock_data_file))

    assert store.get("evt_timed")["summary"] == "Standup"
    assert "11" in store.get_colors()["event"]

def test_store_missing_file_starts_empty(tmp_path):
    store = MockDataStore(str(tmp_path / "nope.json"))

    assert store.get_events() == []
    assert len(store.get_colors()["event"]) == 11

def test_dummy_service_lists_window_in_start_order(mock_data_file):
    service = DummyCalendarService(MockDataStore(str(mock_data_file)), NEW_YORK)
    events = service.list_events("2024-02-23T00:00:00-05:00", "2024-04-15T00:00:00-04:00")

    # cancelled and out-of-window events are dropped
    assert [e["id"] for e in events] == ["evt_all_day", "evt_timed", "evt_review"]

def test_dummy_service_unknown_event(mock_data_file):
    service = DummyCalendarService(MockDataStore(str(mock_data_file)), NEW_YORK)

    with pytest.raises(CalendarBackendError) as exc:
        service.get_event("nope")
    assert exc.value.upstream_status == 404

    with pytest.raises(CalendarBackendError):
        service.delete_event("nope")

def test_dummy_service_patch_leaves_other_fields(mock_data_file):
    service = DummyCalendarService(MockDataStore(str(mock_data_file)), NEW_YORK)

    assert service.patch_event("evt_timed", {"summary": "Retro"}) == {"id": "evt_timed"}
    event = service.get_event("evt_timed")
    assert event["summary"] == "Retro"
    assert event["location"] == "Room 4"

def test_demo_app_round_trip(test_config, mock_data_file):
    test_config.mock_data_path = str(mock_data_file)

    with TestClient(create_app(test_config)) as client:
        created = client.post(
            "/calendar/event", json={"summary": "Standup", "date": "2024-03-15", "color": "2"}
        )
        assert created.status_code == 201
        event_id = created.json()["id"]

        month = client.get("/calendar/month/202403").json()
        new_event = next(e for e in month if e["id"] == event_id)
        assert new_event["isAllDay"] is True
        assert new_event["date"] == "2024-03-15T00:00:00-04:00"
        assert new_event["backgroundColor"] == "#7ae7bf"

        patched = client.patch(f"/calendar/event/{event_id}", json={"location": "Room 2"})
        assert patched.json() == {"id": event_id}

        fetched = client.get(f"/calendar/event/{event_id}").json()
        assert fetched["summary"] == "Standup"
        assert fetched["location"] == "Room 2"

        assert client.delete(f"/calendar/event/{event_id}").json() is True
        assert client.get(f"/calendar/event/{event_id}").status_code == 404

def test_demo_app_create_without_date_fails_in_backend(test_config):
    with TestClient(create_app(test_config)) as client:
        response = client.post("/calendar/event", json={"summary": "No date"})

        assert response.status_code == 500
        assert response.json()["error"] == "Missing start time."

def test_demo_app_rejects_unpadded_date_and_keeps_listing(test_config):
    with TestClient(create_app(test_config)) as client:
        response = client.post("/calendar/event", json={"summary": "x", "date": "2024-3-5"})
        assert response.status_code == 400
        assert response.json()["code"] == "DECODE_ERROR"

        month = client.get("/calendar/month/202403")
        assert month.status_code == 200
        assert month.json() == []
