import os
import logging
from typing import Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from calbridge.config import CalendarBridgeConfig

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/calendar']

class GoogleCalendarAuth:
    def __init__(self, config: CalendarBridgeConfig):
        self.config = config
        self.creds: Optional[Credentials] = None

    def authenticate(self) -> bool:
        """Load the cached token, refreshing or re-running the OAuth flow when needed."""
        creds = None
        token_path = self.config.token_path

        if os.path.exists(token_path):
            try:
                creds = Credentials.from_authorized_user_file(token_path, SCOPES)
            except ValueError as e:
                logger.warning("Error loading token (will re-authenticate): %s", e)
                creds = None

        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                if not os.path.exists(self.config.credentials_path):
                    logger.error(
                        "'%s' not found. Download the OAuth 2.0 Client ID JSON from "
                        "Google Cloud Console and point GOOGLE_CREDENTIALS_PATH at it.",
                        self.config.credentials_path,
                    )
                    return False

                flow = InstalledAppFlow.from_client_secrets_file(
                    self.config.credentials_path, SCOPES)
                creds = flow.run_local_server(port=self.config.oauth_port, open_browser=False)

            # Save the credentials for the next run
            token_dir = os.path.dirname(token_path)
            if token_dir:
                os.makedirs(token_dir, exist_ok=True)
            with open(token_path, 'w', encoding="utf-8") as token:
                token.write(creds.to_json())

        self.creds = creds
        return True
