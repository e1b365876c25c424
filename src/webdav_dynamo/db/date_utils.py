"""Timestamp conversion for stored attributes."""

import logging
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def date_to_string(value: datetime) -> str:
    """Format a datetime as a UTC string. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(DATE_FORMAT)


def string_to_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored timestamp, returning None when it is missing or malformed."""
    if not value:
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        logger.warning(f"Unparseable timestamp in stored item: {value!r}")
        return None
