"""Resolve filter-bar date presets into inclusive calendar ranges."""

import calendar
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from fincore.domain import UNBOUNDED, DateRange, Unbounded


class Preset(str, Enum):
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"
    LAST_3_MONTHS = "last3Months"
    LAST_6_MONTHS = "last6Months"
    THIS_YEAR = "thisYear"
    ALL = "all"


PRESET_LABELS: Dict[Preset, str] = {
    Preset.THIS_MONTH: "This Month",
    Preset.LAST_MONTH: "Last Month",
    Preset.LAST_3_MONTHS: "Last 3M",
    Preset.LAST_6_MONTHS: "Last 6M",
    Preset.THIS_YEAR: "This Year",
    Preset.ALL: "All Time",
}


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by ``delta`` months, rolling over year boundaries."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_bounds(year: int, month: int) -> DateRange:
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(date(year, month, 1), date(year, month, last_day))


def _months_back(anchor: date, months: int) -> DateRange:
    # current month plus the `months` preceding it
    start_year, start_month = shift_month(anchor.year, anchor.month, -months)
    return DateRange(
        month_bounds(start_year, start_month).start,
        month_bounds(anchor.year, anchor.month).end,
    )


def resolve_date_range(
    preset: Union[Preset, str],
    now: Optional[Union[date, datetime]] = None,
) -> Union[DateRange, Unbounded]:
    """Concrete start/end dates for ``preset`` anchored to ``now``.

    ``now`` is used as given (no timezone conversion) and defaults to the
    local current time. ``Preset.ALL`` returns ``UNBOUNDED``.

    Raises:
        ValueError: if ``preset`` is not a known preset name.
    """
    preset = Preset(preset)
    if preset is Preset.ALL:
        return UNBOUNDED

    anchor = now if now is not None else datetime.now()
    if isinstance(anchor, datetime):
        anchor = anchor.date()

    if preset is Preset.THIS_MONTH:
        return month_bounds(anchor.year, anchor.month)
    if preset is Preset.LAST_MONTH:
        return month_bounds(*shift_month(anchor.year, anchor.month, -1))
    if preset is Preset.LAST_3_MONTHS:
        return _months_back(anchor, 2)
    if preset is Preset.LAST_6_MONTHS:
        return _months_back(anchor, 5)
    # THIS_YEAR
    return DateRange(date(anchor.year, 1, 1), date(anchor.year, 12, 31))
