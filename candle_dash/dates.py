from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from candle_dash.errors import InvalidDateError


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def default_date(today: Optional[date] = None) -> date:
    """Yesterday: the most recent day with a complete set of intraday bars."""
    return (today or utc_today()) - timedelta(days=1)


def parse_selected_date(raw: str, today: Optional[date] = None) -> date:
    """
    Validate a date picked by the user.

    Accepts YYYY-MM-DD only. Anything later than yesterday is rejected
    (never clamped) so the caller can keep its previous selection.
    """
    try:
        day = datetime.strptime(str(raw).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateError(f"Invalid date '{raw}'. Use YYYY-MM-DD.") from None

    latest = default_date(today)
    if day > latest:
        raise InvalidDateError(
            f"Date {day.isoformat()} is not available. Pick {latest.isoformat()} or earlier."
        )
    return day


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time(23, 59), tzinfo=timezone.utc)
