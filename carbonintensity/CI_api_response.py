"""
Carbon Intensity API Response - decoding JSON payloads into records.

Every payload is one of two envelopes::

    {"data": [...]}                                   # or a single object
    {"error": {"code": "400", "message": "..."}}

Anything else is rejected. A bad entry fails the whole decode; partial
results are never returned.
"""

import json
import logging
import math
from datetime import datetime
from typing import Union

from .exceptions import APIError, MalformedResponse, UnexpectedEntryCount
from .records import (
    FUEL_MIX_KEYS,
    NOT_AVAILABLE,
    FuelMixFactors,
    IntensityIndex,
    IntensityRecord,
    StatisticsRecord,
)

logger = logging.getLogger(__name__)

RESPONSE_TIME_FORMAT = "%Y-%m-%dT%H:%M%z"

Body = Union[bytes, str]


def _malformed(reason: str, body: Body) -> MalformedResponse:
    logger.warning("Malformed carbon intensity response: %s", reason)
    return MalformedResponse(reason, body)


def decode_envelope(body: Body) -> list[dict]:
    """
    Unwrap the entries of a success envelope.

    Args:
        body: raw UTF-8 JSON response body

    Returns:
        The objects under "data"; a single object is returned as a
        one-element list.

    Raises:
        APIError: the payload is an error envelope
        MalformedResponse: the payload is neither envelope
    """
    try:
        decoded = json.loads(body)
    except ValueError as e:
        raise _malformed(f"Failed to decode JSON ({e})", body) from e

    if not isinstance(decoded, dict):
        raise _malformed("Expected a JSON object", body)

    data = decoded.get("data")
    if data is None:
        error = decoded.get("error")
        if error is None:
            raise _malformed("Failed to unmarshal JSON; no data or error", body)
        if (
            not isinstance(error, dict)
            or not isinstance(error.get("code"), str)
            or not isinstance(error.get("message"), str)
        ):
            raise _malformed("Error payload without a code and message", body)
        logger.info("Carbon intensity API error %s: %s", error["code"], error["message"])
        raise APIError(error["code"], error["message"], body)

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
        raise _malformed("Expected data to be an object or a list of objects", body)
    return data


def _parse_time(entry: dict, key: str, body: Body) -> datetime:
    value = entry.get(key)
    if not isinstance(value, str):
        raise _malformed(f"Missing '{key}' timestamp", body)
    try:
        return datetime.strptime(value, RESPONSE_TIME_FORMAT)
    except ValueError as e:
        raise _malformed(f"Invalid '{key}' timestamp {value!r}", body) from e


def _parse_int(values: dict, key: str, body: Body) -> int:
    value = values.get(key)
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _malformed(f"Non-numeric '{key}' value {value!r}", body)
    if isinstance(value, float) and not math.isfinite(value):
        raise _malformed(f"Non-finite '{key}' value {value!r}", body)
    return int(value)


def _parse_index(values: dict, body: Body) -> IntensityIndex:
    value = values.get("index")
    if not isinstance(value, str):
        raise _malformed("Missing 'index'", body)
    try:
        return IntensityIndex(value)
    except ValueError as e:
        raise _malformed(f"Unknown index {value!r}", body) from e


def _parse_period(entry: dict, body: Body):
    start = _parse_time(entry, "from", body)
    end = _parse_time(entry, "to", body)
    if not start < end:
        raise _malformed(f"Period from {start} is not before to {end}", body)

    values = entry.get("intensity")
    if not isinstance(values, dict):
        raise _malformed("Missing 'intensity' object", body)
    return start, end, values


def _decode_intensity(entry: dict, body: Body) -> IntensityRecord:
    start, end, values = _parse_period(entry, body)
    return IntensityRecord(
        start=start,
        end=end,
        forecast=_parse_int(values, "forecast", body),
        actual=_parse_int(values, "actual", body),
        index=_parse_index(values, body),
    )


def _decode_statistics(entry: dict, body: Body) -> StatisticsRecord:
    start, end, values = _parse_period(entry, body)
    return StatisticsRecord(
        start=start,
        end=end,
        max=_parse_int(values, "max", body),
        average=_parse_int(values, "average", body),
        min=_parse_int(values, "min", body),
        index=_parse_index(values, body),
    )


def _single(entries: list, body: Body):
    if len(entries) != 1:
        logger.warning("Expected a single entry, got %d", len(entries))
        raise UnexpectedEntryCount(len(entries), body)
    return entries[0]


def parse_intensity_response(body: Body) -> list[IntensityRecord]:
    """Parse an intensity response holding any number of periods."""
    return [_decode_intensity(entry, body) for entry in decode_envelope(body)]


def parse_single_intensity_response(body: Body) -> IntensityRecord:
    return _single(parse_intensity_response(body), body)


def parse_statistics_response(body: Body) -> list[StatisticsRecord]:
    return [_decode_statistics(entry, body) for entry in decode_envelope(body)]


def parse_single_statistics_response(body: Body) -> StatisticsRecord:
    return _single(parse_statistics_response(body), body)


def parse_factors_response(body: Body) -> FuelMixFactors:
    """
    Parse the fuel-mix factor table.

    The table is a single object keyed by fuel names such as
    "Gas (Combined Cycle)"; every known fuel must be present.
    """
    factors = _single(decode_envelope(body), body)

    missing = [key for key in FUEL_MIX_KEYS if factors.get(key) is None]
    if missing:
        raise _malformed(f"Missing fuel-mix factors {missing}", body)

    return FuelMixFactors(
        **{name: _parse_int(factors, key, body) for key, name in FUEL_MIX_KEYS.items()}
    )
