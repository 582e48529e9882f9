import datetime as dt
from typing import Optional

from domain.constants import MSG_DATE_UNAVAILABLE

KST = dt.timezone(dt.timedelta(hours=9), name="KST")


def format_registration_date(value: Optional[dt.datetime], tz: Optional[dt.tzinfo] = KST) -> str:
    """Korean long date with 12-hour time, e.g. '2024년 5월 3일 오후 02:30'."""
    if not isinstance(value, dt.datetime):
        return MSG_DATE_UNAVAILABLE
    if tz is not None and value.tzinfo is not None:
        value = value.astimezone(tz)
    meridiem = "오전" if value.hour < 12 else "오후"
    hour12 = value.hour % 12 or 12
    return f"{value.year}년 {value.month}월 {value.day}일 {meridiem} {hour12:02d}:{value.minute:02d}"
