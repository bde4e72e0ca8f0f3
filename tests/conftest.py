"""
Shared fixtures for planner tests.
"""

import pytest

REFERENCE_TIME = "2024-05-06T08:00:00+02:00"


@pytest.fixture
def day_payload() -> dict:
    """A Monday with one meeting and one long deep-work task."""
    return {
        "date": "2024-05-06",
        "timezone": "Europe/Rome",
        "tasks": [
            {
                "id": "t1",
                "title": "Write report",
                "estimated_minutes": 120,
                "priority": "MUST",
                "score": 80,
                "focus_type": "DEEP",
            }
        ],
        "events": [
            {
                "id": "m1",
                "title": "Team sync",
                "start": "2024-05-06T10:00:00+02:00",
                "end": "2024-05-06T11:00:00+02:00",
                "category": "MEETING",
                "flexibility": "FIXED",
            }
        ],
        "constraints": [],
        "preferences": {
            "working_hours": [{"start": "09:00", "end": "17:00"}],
            "minimum_break_minutes": 15,
        },
    }


@pytest.fixture
def options_payload() -> dict:
    """Default options pinned to a fixed reference time."""
    return {"reference_time": REFERENCE_TIME}
