"""
Tabular export of decoded records.
"""

from dataclasses import astuple
from typing import Sequence, Union

import pandas as pd

from .records import NOT_AVAILABLE, IntensityRecord, StatisticsRecord

INTENSITY_COLUMNS = ["from", "to", "forecast", "actual", "index"]
STATISTICS_COLUMNS = ["from", "to", "max", "average", "min", "index"]


def records_to_frame(
    records: Sequence[Union[IntensityRecord, StatisticsRecord]]
) -> pd.DataFrame:
    """
    Build a DataFrame with one row per record.

    Unavailable values become <NA> in nullable Int64 columns and the index
    column holds the category strings.
    """
    kinds = {type(r) for r in records}
    if len(kinds) > 1:
        raise TypeError("Cannot mix intensity and statistics records in one frame")

    columns = STATISTICS_COLUMNS if kinds == {StatisticsRecord} else INTENSITY_COLUMNS
    df = pd.DataFrame([astuple(r) for r in records], columns=columns)

    df["from"] = pd.to_datetime(df["from"], utc=True)
    df["to"] = pd.to_datetime(df["to"], utc=True)
    for col in columns[2:-1]:
        df[col] = df[col].astype("Int64").mask(df[col] == NOT_AVAILABLE)
    df["index"] = df["index"].map(str)
    return df
