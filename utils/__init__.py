"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, to_local, format_display_date
from utils.money import format_money
