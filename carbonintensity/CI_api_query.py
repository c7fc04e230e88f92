"""
Carbon Intensity API Query - the client facade.
"""

import logging
import os
from datetime import date, datetime, timedelta
from typing import Optional

import requests

from . import CI_api_interface as api
from .CI_api_interface import APIQuery
from .exceptions import MalformedResponse
from .records import FuelMixFactors, IntensityRecord, StatisticsRecord

logger = logging.getLogger(__name__)

NATIONAL_GRID_SERVER_ADDRESS = "https://api.carbonintensity.org.uk"


class APIHandler:
    """
    Queries the National Grid carbon intensity API.

    Every call validates its parameters, sends exactly one GET and decodes
    the JSON reply. The handler keeps no state besides its configuration,
    so one instance can be shared between threads.

    Example:
        >>> handler = APIHandler()
        >>> print(handler.get_current_intensity())
    """

    def __init__(
        self,
        server_address: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            server_address: base URL of the API; defaults to the
                CARBON_INTENSITY_API_URL environment variable, then to the
                public National Grid server
            session: requests session to send through, for callers that
                manage their own connection pool
            timeout: passed to the transport unchanged
        """
        if server_address is None:
            server_address = os.getenv(
                "CARBON_INTENSITY_API_URL", NATIONAL_GRID_SERVER_ADDRESS
            )
        self.server_address = server_address.rstrip("/")
        self.session = session
        self.timeout = timeout

    def _get(self, query: APIQuery):
        url = f"{self.server_address}{query.path}"
        logger.debug("GET %s", url)

        transport = self.session if self.session is not None else requests
        response = transport.get(url, timeout=self.timeout)

        try:
            result = query.parse_response_data(response.content)
        except MalformedResponse as e:
            if response.status_code < 400:
                raise
            raise MalformedResponse(f"HTTP {response.status_code}; {e.reason}", e.body) from e

        logger.debug(
            "Decoded %s entries from %s",
            len(result) if isinstance(result, list) else 1,
            query.path,
        )
        return result

    def get_current_intensity(self) -> IntensityRecord:
        """Intensity for the current half-hour period."""
        return self._get(api.current_intensity())

    def get_intensity_for_time_period(self, timestamp: datetime) -> IntensityRecord:
        """Intensity for the half-hour period containing timestamp."""
        return self._get(api.intensity_at(timestamp))

    def get_intensity_for_day(self, day: date) -> list[IntensityRecord]:
        """Intensity for every half-hour period of a day."""
        return self._get(api.intensity_for_date(day))

    def get_intensity_for_day_and_settlement_period(
        self, day: date, settlement_period: int
    ) -> IntensityRecord:
        """
        Intensity for one settlement period (1 to 48, UK local time) of a day.

        Raises:
            InvalidParameter: settlement_period is outside 1..48
        """
        return self._get(api.intensity_for_settlement_period(day, settlement_period))

    def get_todays_intensity(self) -> list[IntensityRecord]:
        return self._get(api.todays_intensity())

    def get_intensity_between(self, start: datetime, end: datetime) -> list[IntensityRecord]:
        """
        Intensity for every half-hour period between start and end.

        Raises:
            InvalidRange: start is not before end
            RangeTooLarge: the range is longer than 30 days
        """
        return self._get(api.intensity_between(start, end))

    def get_next_24_hour_intensity(self, start: datetime) -> list[IntensityRecord]:
        return self._get(api.next_24h_intensity(start))

    def get_next_48_hour_intensity(self, start: datetime) -> list[IntensityRecord]:
        return self._get(api.next_48h_intensity(start))

    def get_prior_24_hour_intensity(self, start: datetime) -> list[IntensityRecord]:
        return self._get(api.prior_24h_intensity(start))

    def get_intensity_factors(self) -> FuelMixFactors:
        """Emission factors per fuel type used in the intensity estimates."""
        return self._get(api.intensity_factors())

    def get_statistics(self, start: datetime, end: datetime) -> StatisticsRecord:
        """Max, average and min intensity over the whole range."""
        return self._get(api.statistics(start, end))

    def get_statistics_in_blocks(
        self, start: datetime, end: datetime, block_size: timedelta
    ) -> list[StatisticsRecord]:
        """
        Statistics for consecutive blocks of block_size between start and end.

        block_size is rounded down to the hour and must be 1 to 24 hours.

        Raises:
            InvalidRange: start is not before end
            RangeTooLarge: the range is longer than 30 days
            InvalidBlockSize: block_size is outside 1..24 whole hours
        """
        return self._get(api.statistics_in_blocks(start, end, block_size))


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    handler = APIHandler()

    print(handler.get_current_intensity())
    for record in handler.get_todays_intensity()[:5]:
        print(record)
