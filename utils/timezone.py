"""UTC-everywhere time handling, with local formatting only at display edges."""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

DISPLAY_TIMEZONE = "Asia/Kolkata"


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def to_local(dt: datetime, tz_name: str = DISPLAY_TIMEZONE) -> datetime:
    """
    Convert UTC datetime to local timezone for display.

    ONLY use this at display boundaries - when rendering for humans.

    Raises:
        ValueError: If datetime is naive or timezone name is invalid
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime. Datetime must be timezone-aware."
        )

    try:
        local_tz = ZoneInfo(tz_name)
    except KeyError:
        raise ValueError(f"Unknown timezone: {tz_name}")

    return dt.astimezone(local_tz)


def format_display_date(value: date | datetime, tz_name: str = DISPLAY_TIMEZONE) -> str:
    """
    Format a date for invoices and emails, e.g. '05 Mar 2026'.

    Datetimes are shifted to the display timezone first so an invoice created
    late in the UTC evening shows the customer's calendar date.
    """
    if isinstance(value, datetime):
        value = to_local(value, tz_name).date()
    return value.strftime("%d %b %Y")
