"""
Shared sample values for tests
"""

from datetime import datetime, timezone


CREATED = datetime(2024, 3, 1, 9, 30, 0, 123456, tzinfo=timezone.utc)
UPDATED = datetime(2024, 3, 2, 17, 45, 10, 500000, tzinfo=timezone.utc)
DUE = datetime(2024, 4, 1, 12, 0, tzinfo=timezone.utc)

# LocalDateTime as old writers stored it: a nested map of date parts
LEGACY_NESTED_DATETIME = {
    "year": 2023,
    "monthValue": 11,
    "dayOfMonth": 5,
    "hour": 8,
    "minute": 15,
    "second": 0,
    "nano": 0,
    "dayOfWeek": "SUNDAY",
    "chronology": {"id": "ISO", "calendarType": "iso8601"},
}
