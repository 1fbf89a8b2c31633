"""Date-window resolution.

Turns a (month, day, ±window) request into month/day bounds, then into the
concrete calendar days to scan for each historical year.

Bounds are computed once against a fixed non-leap reference year. Each scanned
year then applies them to its own calendar, so February 29 is covered in leap
years without the reference year having one.

Windows that cross Dec 31 -> Jan 1 are enumerated day by day across the year
boundary. The window for year Y is the one whose target date falls in Y:

    target Jan 1,  ±5 days -> Dec 27 (Y-1) .. Jan 6 (Y)
    target Dec 30, ±5 days -> Dec 25 (Y)   .. Jan 4 (Y+1)
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
import logging

from weather_odds.config import MAX_WINDOW_DAYS, REFERENCE_YEAR
from weather_odds.errors import InvalidRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateWindow:
    start_month: int
    start_day: int
    end_month: int
    end_day: int
    target_month: int
    target_day: int
    window_days: int

    @property
    def wraps_year(self) -> bool:
        """True if the window crosses the Dec 31 -> Jan 1 boundary."""
        return (self.start_month, self.start_day) > (self.end_month, self.end_day)

    def bounds_for_year(self, year: int) -> tuple[date, date]:
        """Inclusive first and last day of the window around the target date in ``year``.

        Each bound's day is clamped to its own month length, so an end day of
        29 in February becomes 28 in non-leap years.
        """
        start_year = end_year = year
        if self.wraps_year:
            if (self.target_month, self.target_day) >= (self.start_month, self.start_day):
                # Target on the December side, head spills into next January
                end_year = year + 1
            else:
                start_year = year - 1

        first = clamped_date(start_year, self.start_month, self.start_day)
        last = clamped_date(end_year, self.end_month, self.end_day)
        return first, last

    def dates_for_year(self, year: int) -> list[date]:
        """Every calendar day in the window for ``year``."""
        first, last = self.bounds_for_year(year)
        return [first + timedelta(days=i) for i in range((last - first).days + 1)]


def resolve_date_window(
    month: int,
    day: int,
    window: int,
    reference_year: int = REFERENCE_YEAR,
) -> DateWindow:
    """Resolve a target month/day and ±window into month/day bounds.

    Args:
        month: Target month (1-12).
        day: Target day of month (1-31). Clamped to the reference month length
            for the window arithmetic.
        window: Days on each side of the target (0-MAX_WINDOW_DAYS).
        reference_year: Non-leap year used for the calendar arithmetic.

    Returns:
        DateWindow with start/end month and day.
    """
    if not 1 <= month <= 12:
        raise InvalidRequest("month must be between 1 and 12", details={"month": month})
    if not 1 <= day <= 31:
        raise InvalidRequest("day must be between 1 and 31", details={"day": day})
    if not 0 <= window <= MAX_WINDOW_DAYS:
        raise InvalidRequest(
            f"window must be between 0 and {MAX_WINDOW_DAYS}",
            details={"window": window},
        )
    if calendar.isleap(reference_year):
        raise ValueError(f"reference_year must not be a leap year, got {reference_year}")

    if window == 0:
        # Keep the requested day so Feb 29 still lands on Feb 29 in leap years
        return DateWindow(month, day, month, day, month, day, 0)

    anchor = clamped_date(reference_year, month, day)
    start = anchor - timedelta(days=window)
    end = anchor + timedelta(days=window)

    resolved = DateWindow(
        start_month=start.month,
        start_day=start.day,
        end_month=end.month,
        end_day=end.day,
        target_month=anchor.month,
        target_day=anchor.day,
        window_days=window,
    )
    logger.debug(
        "Resolved %02d-%02d ±%d to %02d-%02d..%02d-%02d (wraps=%s)",
        month, day, window,
        resolved.start_month, resolved.start_day,
        resolved.end_month, resolved.end_day,
        resolved.wraps_year,
    )
    return resolved


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamped_date(year: int, month: int, day: int) -> date:
    """Build a date, clamping ``day`` to the month's actual length in ``year``."""
    return date(year, month, max(1, min(day, days_in_month(year, month))))
