import copy
import json
import logging
import os
import uuid
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Google Calendar's standard event palette
DEFAULT_EVENT_COLORS = {
    "1": {"background": "#a4bdfc", "foreground": "#1d1d1d"},
    "2": {"background": "#7ae7bf", "foreground": "#1d1d1d"},
    "3": {"background": "#dbadff", "foreground": "#1d1d1d"},
    "4": {"background": "#ff887c", "foreground": "#1d1d1d"},
    "5": {"background": "#fbd75b", "foreground": "#1d1d1d"},
    "6": {"background": "#ffb878", "foreground": "#1d1d1d"},
    "7": {"background": "#46d6db", "foreground": "#1d1d1d"},
    "8": {"background": "#e1e1e1", "foreground": "#1d1d1d"},
    "9": {"background": "#5484ed", "foreground": "#1d1d1d"},
    "10": {"background": "#51b749", "foreground": "#1d1d1d"},
    "11": {"background": "#dc2127", "foreground": "#1d1d1d"},
}

class MockDataStore:
    """In-memory event store, optionally seeded from a JSON file of provider events."""
    def __init__(self, data_path: Optional[str] = None, events: Optional[List[Dict[str, Any]]] = None):
        self.data_path = data_path
        self._data = self._load_data()
        for event in events or []:
            self.put(event)

    def _load_data(self) -> Dict[str, Any]:
        """Loads the JSON data from disk."""
        data: Dict[str, Any] = {"colors": {"event": copy.deepcopy(DEFAULT_EVENT_COLORS)}, "events": {}}
        if not self.data_path:
            return data

        abs_path = os.path.abspath(self.data_path)
        if not os.path.exists(abs_path):
            logger.warning("Mock Data not found at %s", abs_path)
            return data

        with open(abs_path, 'r', encoding="utf-8") as f:
            raw = json.load(f)

        if "colors" in raw:
            data["colors"] = raw["colors"]
        for event in raw.get("events", []):
            data["events"][event["id"]] = event
        return data

    def get_colors(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data["colors"])

    def get_events(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(e) for e in self._data["events"].values()]

    def get(self, event_id: str) -> Optional[Dict[str, Any]]:
        event = self._data["events"].get(event_id)
        return copy.deepcopy(event) if event is not None else None

    def put(self, event: Dict[str, Any]) -> Dict[str, Any]:
        event = copy.deepcopy(event)
        event.setdefault("id", uuid.uuid4().hex)
        event.setdefault("status", "confirmed")
        self._data["events"][event["id"]] = event
        return copy.deepcopy(event)

    def remove(self, event_id: str) -> bool:
        return self._data["events"].pop(event_id, None) is not None
