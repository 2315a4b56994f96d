import json
import datetime
import sys
from pathlib import Path
from typing import Dict, List, Any

# ISO Format helper
def get_time(day_offset: int, hour: int, minute: int) -> str:
    """Returns an ISO timestamp relative to today."""
    now = datetime.datetime.now()
    target = now + datetime.timedelta(days=day_offset)
    target = target.replace(hour=hour, minute=minute, second=0, microsecond=0)
    # Adding a dummy timezone offset for realism (-08:00 PST)
    return target.isoformat() + "-08:00"

def get_date(day_offset: int) -> str:
    """Returns a plain YYYY-MM-DD date relative to today."""
    return (datetime.date.today() + datetime.timedelta(days=day_offset)).isoformat()

# --- Generators ---

def generate_timed_events() -> List[Dict[str, Any]]:
    return [
        {
            "id": "mock_launch",
            "summary": "Project Phoenix Launch - Go/No-Go",
            "start": {"dateTime": get_time(0, 14, 0)}, # Today 2 PM
            "end": {"dateTime": get_time(0, 15, 0)},
            "description": "Final review before release. Attendance mandatory.",
            "location": "Boardroom A / Zoom",
            "colorId": "11",
            "attendees": [
                {"email": "sarah.chen@techflow.com", "responseStatus": "accepted"},
                {"email": "dave@techflow.com", "responseStatus": "needsAction"},
            ],
        },
        {
            "id": "mock_all_hands",
            "summary": "Weekly All-Hands",
            "start": {"dateTime": get_time(2, 10, 0)},
            "end": {"dateTime": get_time(2, 11, 0)},
            "description": "Updates from all departments.",
            "colorId": "9",
        },
        {
            "id": "mock_dentist",
            "summary": "Dentist",
            "start": {"dateTime": get_time(9, 8, 30)},
            "end": {"dateTime": get_time(9, 9, 30)},
            "location": "Main St Dental",
        },
    ]

def generate_all_day_events() -> List[Dict[str, Any]]:
    return [
        {
            "id": "mock_birthday",
            "summary": "Mom's 60th Birthday",
            "start": {"date": get_date(5)},
            "end": {"date": get_date(6)},
            "location": "The Italian Place",
            "colorId": "4",
        },
        {
            "id": "mock_offsite",
            "summary": "Team Offsite",
            "start": {"date": get_date(-3)},
            "end": {"date": get_date(-1)},
            "description": "Two days, bring a laptop.",
        },
        {
            "id": "mock_cancelled",
            "summary": "Cancelled Retro",
            "status": "cancelled",
            "start": {"date": get_date(1)},
            "end": {"date": get_date(2)},
        },
    ]

def main(output: str = "calbridge/data/mock_store.json"):
    # Windows console emoji support
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding='utf-8')
        except AttributeError:
            pass

    print("🚀 Generating Mock Calendar Data...")

    data = {
        "generated_at": datetime.datetime.now().isoformat(),
        "events": generate_timed_events() + generate_all_day_events(),
    }

    output_file = Path(output)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

    print(f"✅ Mock data generated at: {output_file.absolute()}")
    print(f"   Set MOCK_DATA_PATH={output_file} and USE_MOCK_DATA=true to serve it.")

if __name__ == "__main__":
    main(*sys.argv[1:2])
