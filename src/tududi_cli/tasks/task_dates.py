# src/tududi_cli/tasks/task_dates.py

"""
Two independent formatting paths for due dates:
- wire: canonical UTC timestamp, only produced at the moment of a write;
- display: the user's locale short date, in local time.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone


def parse_timestamp(raw: object) -> datetime | None:
    """
    Parse a server/user supplied date into an aware datetime.

    A bare date ("2026-10-20") means midnight UTC; a date-time without an
    offset is local time. A number is epoch milliseconds. Unparseable values
    yield None.
    """
    if isinstance(raw, datetime):
        return raw if raw.tzinfo is not None else raw.astimezone()
    if isinstance(raw, date):
        return datetime.combine(raw, time(), tzinfo=timezone.utc)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(raw, str) or not raw.strip():
        return None

    s = raw.strip()
    try:
        if len(s) == 10:
            return datetime.combine(date.fromisoformat(s), time(), tzinfo=timezone.utc)
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    return dt if dt.tzinfo is not None else dt.astimezone()


def parse_user_date(raw: str) -> datetime:
    """
    Parse a date typed into the creation form.

    Form dates are picked in the user's own calendar, so a bare date is local
    midnight rather than UTC. Raises ValueError on bad input.
    """
    s = raw.strip()
    if len(s) == 10:
        return datetime.combine(date.fromisoformat(s), time()).astimezone()
    dt = datetime.fromisoformat(s)
    return dt if dt.tzinfo is not None else dt.astimezone()


def to_wire_timestamp(dt: datetime) -> str:
    """2026-10-20T00:00:00.000Z"""
    utc = dt.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_display_date(dt: datetime) -> str:
    return dt.astimezone().strftime("%x")
