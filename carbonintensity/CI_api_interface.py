"""
Carbon Intensity API Interface - request paths and parameter validation.
"""

import operator
from collections import namedtuple
from datetime import date, datetime, timedelta, timezone

from .CI_api_response import (
    parse_factors_response,
    parse_intensity_response,
    parse_single_intensity_response,
    parse_single_statistics_response,
    parse_statistics_response,
)
from .exceptions import InvalidBlockSize, InvalidParameter, InvalidRange, RangeTooLarge
from .records import format_timestamp

SETTLEMENT_PERIODS_PER_DAY = 48
MAX_RANGE = timedelta(days=30)
MIN_BLOCK_HOURS = 1
MAX_BLOCK_HOURS = 24


APIQuery = namedtuple("APIQuery", ["path", "parse_response_data"])


def format_date(day: date) -> str:
    """Format the calendar date of a date or datetime (in its own zone)."""
    return day.strftime("%Y-%m-%d")


def validate_settlement_period(settlement_period: int) -> int:
    """Check a settlement period and return it as a plain int."""
    error = InvalidParameter(
        f"Invalid settlement period {settlement_period!r}; "
        f"must be 1 <= settlement_period <= {SETTLEMENT_PERIODS_PER_DAY}"
    )
    if isinstance(settlement_period, bool):
        raise error
    try:
        period = operator.index(settlement_period)
    except TypeError:
        raise error from None
    if not 1 <= period <= SETTLEMENT_PERIODS_PER_DAY:
        raise error
    return period


def validate_range(start: datetime, end: datetime):
    """
    Check a [start, end) range before it is sent to the API.

    Raises:
        InvalidRange: start is not strictly earlier than end
        RangeTooLarge: the range spans more than 30 days
    """
    start, end = _aware(start), _aware(end)
    if not start < end:
        raise InvalidRange(
            f"from ({start}) must be strictly earlier than to ({end})"
        )
    if end - start > MAX_RANGE:
        raise RangeTooLarge(
            f"The maximum date range is limited to {MAX_RANGE.days} days. "
            f"From ({start}) To ({end})"
        )


def _aware(ts: datetime) -> datetime:
    # naive times are taken to be UTC, as they are when formatted
    if ts.tzinfo is None or ts.utcoffset() is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def block_size_hours(block_size: timedelta) -> int:
    """Whole hours in block_size, truncated toward zero, checked to be 1..24."""
    hours = int(block_size.total_seconds() / 3600)
    if not MIN_BLOCK_HOURS <= hours <= MAX_BLOCK_HOURS:
        raise InvalidBlockSize(
            f"Invalid block size {block_size}; must be between "
            f"{MIN_BLOCK_HOURS} and {MAX_BLOCK_HOURS} hours inclusive"
        )
    return hours


def current_intensity() -> APIQuery:
    return APIQuery("/intensity", parse_single_intensity_response)


def intensity_at(timestamp: datetime) -> APIQuery:
    """The half-hour period containing timestamp."""
    return APIQuery(
        f"/intensity/{format_timestamp(timestamp)}", parse_single_intensity_response
    )


def intensity_for_date(day: date) -> APIQuery:
    return APIQuery(f"/intensity/date/{format_date(day)}", parse_intensity_response)


def intensity_for_settlement_period(day: date, settlement_period: int) -> APIQuery:
    """
    A single settlement period of a day.

    The day is split into 48 half-hour settlement periods, numbered from 1
    and following UK local time.
    """
    period = validate_settlement_period(settlement_period)
    return APIQuery(
        f"/intensity/date/{format_date(day)}/{period}",
        parse_single_intensity_response,
    )


def todays_intensity() -> APIQuery:
    return APIQuery("/intensity/date", parse_intensity_response)


def intensity_between(start: datetime, end: datetime) -> APIQuery:
    validate_range(start, end)
    return APIQuery(
        f"/intensity/{format_timestamp(start)}/{format_timestamp(end)}",
        parse_intensity_response,
    )


def next_24h_intensity(start: datetime) -> APIQuery:
    return APIQuery(f"/intensity/{format_timestamp(start)}/fw24h", parse_intensity_response)


def next_48h_intensity(start: datetime) -> APIQuery:
    return APIQuery(f"/intensity/{format_timestamp(start)}/fw48h", parse_intensity_response)


def prior_24h_intensity(start: datetime) -> APIQuery:
    return APIQuery(f"/intensity/{format_timestamp(start)}/pt24h", parse_intensity_response)


def intensity_factors() -> APIQuery:
    return APIQuery("/intensity/factors", parse_factors_response)


def statistics(start: datetime, end: datetime) -> APIQuery:
    validate_range(start, end)
    return APIQuery(
        f"/intensity/stats/{format_timestamp(start)}/{format_timestamp(end)}",
        parse_single_statistics_response,
    )


def statistics_in_blocks(start: datetime, end: datetime, block_size: timedelta) -> APIQuery:
    """
    Statistics between start and end, partitioned server-side into blocks.

    block_size is rounded down to whole hours and must be 1 to 24 hours.
    """
    validate_range(start, end)
    hours = block_size_hours(block_size)
    return APIQuery(
        f"/intensity/stats/{format_timestamp(start)}/{format_timestamp(end)}/{hours}",
        parse_statistics_response,
    )
