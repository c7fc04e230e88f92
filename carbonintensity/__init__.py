"""
carbonintensity - National Grid Carbon Intensity API client
Python library for GB grid carbon intensity forecasts, actuals and statistics.
"""

from .records import (
    NOT_AVAILABLE,
    FUEL_MIX_KEYS,
    IntensityIndex,
    IntensityRecord,
    StatisticsRecord,
    FuelMixFactors,
    format_timestamp,
)
from .exceptions import (
    CarbonIntensityError,
    InvalidParameter,
    InvalidBlockSize,
    InvalidRange,
    RangeTooLarge,
    MalformedResponse,
    UnexpectedEntryCount,
    APIError,
    TransportFailure,
)
from .CI_api_query import APIHandler, NATIONAL_GRID_SERVER_ADDRESS
from .dataframe import records_to_frame

__version__ = "1.0.0"

__all__ = [
    'NOT_AVAILABLE',
    'FUEL_MIX_KEYS',
    'IntensityIndex',
    'IntensityRecord',
    'StatisticsRecord',
    'FuelMixFactors',
    'format_timestamp',
    'CarbonIntensityError',
    'InvalidParameter',
    'InvalidBlockSize',
    'InvalidRange',
    'RangeTooLarge',
    'MalformedResponse',
    'UnexpectedEntryCount',
    'APIError',
    'TransportFailure',
    'APIHandler',
    'NATIONAL_GRID_SERVER_ADDRESS',
    'records_to_frame',
]
