"""
Exception classes for the carbon intensity client.

Catch ``CarbonIntensityError`` to handle every failure raised by this
package in one place, or the subclasses for finer control. Parameter errors
are raised before any request is sent. Network errors are the transport's
own ``requests`` exceptions, passed through unchanged (``TransportFailure``).
"""

import requests

TransportFailure = requests.RequestException


class CarbonIntensityError(Exception):
    pass


class InvalidParameter(CarbonIntensityError, ValueError):
    """A query parameter is out of its allowed range."""
    pass


class InvalidBlockSize(InvalidParameter):
    pass


class InvalidRange(CarbonIntensityError, ValueError):
    """The start of a date range is not strictly earlier than its end."""
    pass


class RangeTooLarge(CarbonIntensityError, ValueError):
    """A date range spans more than the API allows."""
    pass


class MalformedResponse(CarbonIntensityError):
    """The response body is not a payload the API documents."""

    def __init__(self, reason: str, body=None):
        self.reason = reason
        self.body = _as_text(body)
        message = reason if self.body is None else f"{reason}; {self.body}"
        super().__init__(message)


class UnexpectedEntryCount(CarbonIntensityError):
    """An endpoint that should return one entry returned some other number."""

    def __init__(self, count: int, body=None):
        self.count = count
        self.body = _as_text(body)
        super().__init__(
            f"Unexpected API response; expected 1 entry, got {count}; {self.body}"
        )


class APIError(CarbonIntensityError):
    """The server reported an error in place of data."""

    def __init__(self, code: str, message: str, body=None):
        self.code = code
        self.message = message
        self.body = _as_text(body)
        super().__init__(f"API error; Code: {code} Message: {message}")


def _as_text(body):
    if isinstance(body, (bytes, bytearray)):
        return body.decode("utf-8", errors="replace")
    return body
