import logging
from typing import Any, Dict, List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiClientError, HttpError

from calbridge.config import CalendarBridgeConfig
from calbridge.errors import CalendarBackendError

logger = logging.getLogger(__name__)

LIST_FIELDS = "nextPageToken,items(id,attendees,colorId,creator,description,location,updated,start,summary)"

class CalendarService:
    """
    Blocking wrapper around the Google Calendar v3 API.

    Every provider failure surfaces as ``CalendarBackendError``; deciding what
    status the caller sees is left to the request handlers.
    """
    def __init__(self, config: CalendarBridgeConfig):
        self.config = config
        self.calendar_id = config.calendar_id
        self.service = None

    def authenticate(self, creds) -> bool:
        """Authenticate with Google Calendar using existing credentials"""
        try:
            self.service = build('calendar', 'v3', credentials=creds, cache_discovery=False)
            return True
        except (HttpError, GoogleAuthError) as e:
            logger.error("Error authenticating with Calendar: %s", e)
            return False

    @property
    def is_authenticated(self) -> bool:
        return self.service is not None

    def _client(self):
        if not self.service:
            raise CalendarBackendError("Calendar not authenticated", upstream_status=401)
        return self.service

    def _execute(self, request, action: str):
        try:
            return request.execute()
        except HttpError as e:
            message = getattr(e, "reason", None) or str(e)
            logger.error("Calendar %s failed (%s): %s", action, e.resp.status, message)
            raise CalendarBackendError(message, upstream_status=int(e.resp.status)) from e
        except (GoogleApiClientError, httplib2.HttpLib2Error, GoogleAuthError, OSError) as e:
            logger.error("Calendar %s failed: %s", action, e)
            raise CalendarBackendError(str(e)) from e

    def get_colors(self) -> Dict[str, Any]:
        """Colors resource; the ``event`` key holds the event palette."""
        return self._execute(self._client().colors().get(), "colors.get")

    def list_events(self, time_min: str, time_max: str) -> List[Dict[str, Any]]:
        """Single instances in [time_min, time_max], ordered by start, across all pages."""
        events: List[Dict[str, Any]] = []
        page_token: Optional[str] = None
        while True:
            request = self._client().events().list(
                calendarId=self.calendar_id,
                showDeleted=False,
                singleEvents=True,
                fields=LIST_FIELDS,
                timeMin=time_min,
                timeMax=time_max,
                orderBy='startTime',
                pageToken=page_token,
            )
            result = self._execute(request, "events.list")
            events.extend(result.get('items', []))

            page_token = result.get('nextPageToken')
            if not page_token:
                break
        return events

    def get_event(self, event_id: str) -> Dict[str, Any]:
        request = self._client().events().get(calendarId=self.calendar_id, eventId=event_id)
        return self._execute(request, "events.get")

    def insert_event(self, body: Dict[str, Any], fields: str = "id") -> Dict[str, Any]:
        request = self._client().events().insert(
            calendarId=self.calendar_id, body=body, fields=fields)
        return self._execute(request, "events.insert")

    def patch_event(self, event_id: str, body: Dict[str, Any], fields: str = "id") -> Dict[str, Any]:
        """Partial update; fields missing from ``body`` are left as they are."""
        request = self._client().events().patch(
            calendarId=self.calendar_id, eventId=event_id, body=body, fields=fields)
        return self._execute(request, "events.patch")

    def delete_event(self, event_id: str) -> None:
        request = self._client().events().delete(calendarId=self.calendar_id, eventId=event_id)
        self._execute(request, "events.delete")
