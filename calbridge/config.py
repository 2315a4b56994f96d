import os
from zoneinfo import ZoneInfo
from calbridge.lib.shared.models.util import Environment

class CalendarBridgeConfig:
    def __init__(self):
        # Determine Environment
        env_str = os.getenv("GCAL_ENV", "dev").lower()
        try:
            self.env = Environment(env_str)
        except ValueError:
            self.env = Environment.DEV

        self.credentials_path = os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json")
        self.token_path = os.getenv("GOOGLE_TOKEN_PATH", "token.json")
        self.oauth_port = int(os.getenv("GOOGLE_OAUTH_PORT", 8080))
        self.calendar_id = os.getenv("CALENDAR_ID", "primary")
        self.timezone_name = os.getenv("CALENDAR_TIMEZONE") or os.getenv("TZ") or "UTC"
        self.default_event_color = os.getenv("DEFAULT_EVENT_COLOR", "#039be5")
        self.mock_data_path = os.getenv("MOCK_DATA_PATH")

        self.api_host = os.getenv("API_HOST", "0.0.0.0")
        self.api_port = int(os.getenv("API_PORT", 8000))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # Environment Configuration
        if self.env == Environment.TEST:
            self.use_mock_data = True
        elif self.env == Environment.DEV:
            self.use_mock_data = os.getenv("USE_MOCK_DATA", "false").lower() == "true"
        else: # PROD
            self.use_mock_data = False

    def get_timezone(self) -> ZoneInfo:
        """Local timezone used for month windows and all-day event dates."""
        return ZoneInfo(self.timezone_name)
