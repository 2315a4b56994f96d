import sys
from datetime import date
from dotenv import load_dotenv

from calbridge.api import build_calendar_service
from calbridge.config import CalendarBridgeConfig
from calbridge.errors import CalendarBridgeError
from calbridge.logging_config import setup_logging
from calbridge.services.calendar.mapper import palette_backgrounds, to_display_event
from calbridge.services.calendar.window import month_window

def main(token: str) -> int:
    # 1. Load Environment
    load_dotenv()
    config = CalendarBridgeConfig()
    setup_logging(config.log_level)
    tz = config.get_timezone()

    print("🤖 Calendar Bridge (CLI Mode)")
    print(f"   🌍 Environment: {config.env.value}")
    print(f"   🎭 Mock Data: {config.use_mock_data}")

    # 2. Initialize Services
    calendar_service = build_calendar_service(config, tz)
    if not calendar_service.is_authenticated:
        print("❌ Error: Calendar not authenticated.")
        return 1

    # 3. Month listing
    try:
        time_min, time_max = month_window(token, tz)
        palette = palette_backgrounds(calendar_service.get_colors())
        events = calendar_service.list_events(time_min, time_max)
    except CalendarBridgeError as e:
        print(f"❌ Error: {e.message}")
        return 1

    print(f"\n📅 {len(events)} events between {time_min} and {time_max}")
    for event in events:
        display = to_display_event(event, palette, tz, config.default_event_color)
        marker = f"{display.date[:10]}, all day" if display.is_all_day else display.date
        print(f"- {display.summary or '(No title)'} [{marker}] {display.background_color}")
    return 0

if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else date.today().strftime("%Y%m")))
