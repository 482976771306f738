#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/model/timestamps.py
"""Timestamp value types.

A :class:`Timestamp` keeps the calendar date separate from the optional
time-of-day so that "due on 2025-01-15" and "due on 2025-01-15 at 00:00"
remain distinguishable after parsing.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Optional

from orgtasks.constants import RECURRENCE_UNITS, RecurrenceUnit

_UNIT_CODES = {unit: code for code, unit in RECURRENCE_UNITS.items()}
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _add_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


@dataclass(frozen=True)
class Recurrence:
    """Repeater suffix of a timestamp, such as ``+1w``.

    Parameters
    ----------
    amount : int
        Signed repeat interval; negative only for the ``-`` mark
    unit : RecurrenceUnit
        One of ``"day"``, ``"week"``, ``"month"``, ``"year"``
    mark : str, default "+"
        Org repeater mark: ``+`` (cumulate), ``++`` (catch up), ``.+``
        (restart from completion) or ``-``

    """

    amount: int
    unit: RecurrenceUnit
    mark: str = "+"

    def to_org(self) -> str:
        """Return the compact Org form, e.g. ``"+1w"``."""
        return f"{self.mark}{abs(self.amount)}{_UNIT_CODES[self.unit]}"

    def advance(self, value: date, times: int = 1) -> date:
        """Return ``value`` moved forward by ``times`` repeat intervals."""
        step = self.amount * times
        if self.unit == "day":
            return date.fromordinal(value.toordinal() + step)
        if self.unit == "week":
            return date.fromordinal(value.toordinal() + 7 * step)
        if self.unit == "month":
            return _add_months(value, step)
        return _add_months(value, 12 * step)

    def __str__(self) -> str:
        return self.to_org()


@dataclass(frozen=True)
class Timestamp:
    """An active Org timestamp.

    Parameters
    ----------
    date : date
        Calendar date (always present)
    time : time or None, default None
        Start time-of-day, 24-hour clock
    end_time : time or None, default None
        End of a same-day time range (``09:00-10:30``)
    recurrence : Recurrence or None, default None
        Repeater suffix
    warning : str or None, default None
        Raw warning-period suffix (``-2d``) kept for re-serialization

    """

    date: date
    time: Optional[time] = None
    end_time: Optional[time] = None
    recurrence: Optional[Recurrence] = None
    warning: Optional[str] = None

    @property
    def has_time(self) -> bool:
        """Whether a time-of-day component is present."""
        return self.time is not None

    def to_datetime(self, tz: Optional[tzinfo] = None) -> datetime:
        """Combine date and time; a missing time becomes midnight."""
        return datetime.combine(self.date, self.time or time(0, 0), tzinfo=tz)

    def to_org(self) -> str:
        """Serialize back to bracketed Org form, e.g. ``<2025-01-15 Wed 09:00 +1w>``."""
        parts = [self.date.isoformat(), _WEEKDAYS[self.date.weekday()]]
        if self.time is not None:
            clock = self.time.strftime("%H:%M")
            if self.end_time is not None:
                clock = f"{clock}-{self.end_time.strftime('%H:%M')}"
            parts.append(clock)
        if self.recurrence is not None:
            parts.append(self.recurrence.to_org())
        if self.warning:
            parts.append(self.warning)
        return "<" + " ".join(parts) + ">"

    def __str__(self) -> str:
        return self.to_org()
