import re
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PLAIN_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

class DisplayEvent(BaseModel):
    """Flattened event shape served by the month listing."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    attendees: List[Dict[str, Any]] = Field(default_factory=list)
    is_all_day: bool = Field(False, alias="isAllDay")
    background_color: str = Field("", alias="backgroundColor")
    date: str
    description: str = ""
    location: str = ""
    summary: str = ""

class NewEventRequest(BaseModel):
    """
    Body of create/update requests. Every field is optional; an absent or
    empty value leaves the matching provider field untouched.
    """
    color: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, value: Optional[str]) -> Optional[str]:
        if value:
            # single-day events only, so a zero-padded YYYY-MM-DD calendar date
            if not PLAIN_DATE.match(value):
                raise ValueError("date must be formatted YYYY-MM-DD")
            date.fromisoformat(value)
        return value
