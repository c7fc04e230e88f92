"""
Carbon Intensity Records - typed results decoded from the API.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

# Value used for numeric fields the API leaves out or sends as null,
# e.g. the actual intensity of a period that has not happened yet.
NOT_AVAILABLE = -1

PATH_TIME_FORMAT = "%Y-%m-%dT%H:%MZ"


class IntensityIndex(str, Enum):
    VERY_LOW = "very low"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very high"

    def __str__(self):
        return self.value


def format_timestamp(ts: datetime) -> str:
    """
    Format a timestamp the way the API expects it in paths and sends it back.

    UTC (and naive) times use the "Z" suffix, other zones a numeric offset.
    Precision is minutes; seconds are dropped.
    """
    offset = ts.utcoffset()
    # offsets with a seconds part (old zoneinfo LMT zones) are rounded to the minute
    minutes = round(offset.total_seconds() / 60) if offset else 0
    if not minutes:
        return ts.strftime(PATH_TIME_FORMAT)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{ts.strftime('%Y-%m-%dT%H:%M')}{sign}{hours:02d}:{minutes:02d}"


@dataclass(frozen=True)
class IntensityRecord:
    """
    Forecast and estimated actual carbon intensity for one half-hour period.

    Intensities are in gCO2/kWh. For periods in the future only the forecast
    is known and ``actual`` is NOT_AVAILABLE; ``index`` then follows the
    forecast.
    """
    start: datetime  # "from" in the API
    end: datetime  # "to" in the API
    forecast: int
    actual: int
    index: IntensityIndex

    @property
    def value(self) -> int:
        """The actual intensity when known, otherwise the forecast."""
        if self.actual != NOT_AVAILABLE:
            return self.actual
        return self.forecast

    def __str__(self):
        return (
            f"{format_timestamp(self.start)} -> {format_timestamp(self.end)} "
            f"{{forecast: {self.forecast}, actual: {self.actual}, index: {self.index}}}"
        )


@dataclass(frozen=True)
class StatisticsRecord:
    """
    Intensity statistics (gCO2/kWh) over the period between start and end.

    Future periods are computed from forecasts, past periods from actuals.
    """
    start: datetime
    end: datetime
    max: int
    average: int
    min: int
    index: IntensityIndex

    def __str__(self):
        return (
            f"{format_timestamp(self.start)} -> {format_timestamp(self.end)} "
            f"{{max: {self.max}, average: {self.average}, min: {self.min}, index: {self.index}}}"
        )


@dataclass(frozen=True)
class FuelMixFactors:
    """Emission factors (gCO2/kWh) used per fuel type in intensity estimates."""
    biomass: int
    coal: int
    dutch_imports: int
    french_imports: int
    gas_combined_cycle: int
    gas_open_cycle: int
    hydro: int
    irish_imports: int
    nuclear: int
    oil: int
    other: int
    pumped_storage: int
    solar: int
    wind: int

    def as_dict(self) -> dict[str, int]:
        """Factors keyed by the fuel names the API uses."""
        return {key: getattr(self, name) for key, name in FUEL_MIX_KEYS.items()}


FUEL_MIX_KEYS = {
    "Biomass": "biomass",
    "Coal": "coal",
    "Dutch Imports": "dutch_imports",
    "French Imports": "french_imports",
    "Gas (Combined Cycle)": "gas_combined_cycle",
    "Gas (Open Cycle)": "gas_open_cycle",
    "Hydro": "hydro",
    "Irish Imports": "irish_imports",
    "Nuclear": "nuclear",
    "Oil": "oil",
    "Other": "other",
    "Pumped Storage": "pumped_storage",
    "Solar": "solar",
    "Wind": "wind",
}
