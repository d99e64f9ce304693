# cases.py
"""Selecting a date from the case time series and joining it onto county polygons."""

import datetime
from typing import List, Optional

import geopandas as gpd
import pandas as pd

from scales import format_number


def active_date(cases: pd.DataFrame) -> datetime.date:
    """
    Returns the date of the last record in the table.

    The NYT file is ordered by date, so this is the most recent day of data.
    The ordering is assumed, not checked.
    """
    if cases.empty:
        raise ValueError("The case table has no records; cannot determine the active date.")
    return pd.Timestamp(cases["date"].iloc[-1]).date()


def available_dates(cases: pd.DataFrame) -> List[datetime.date]:
    """Sorted unique dates present in the table."""
    return sorted({pd.Timestamp(d).date() for d in cases["date"].unique()})


def format_date(d: datetime.date) -> str:
    """Displays a date in YYYY-MM-DD format."""
    return d.strftime("%Y-%m-%d")


def join_cases(counties: gpd.GeoDataFrame, cases: pd.DataFrame, selected_date: datetime.date) -> gpd.GeoDataFrame:
    """
    Attaches the case count for ``selected_date`` to every county polygon.

    Counties are matched on the exact FIPS string. Counties without a record
    for that day get zero cases and empty names. When a FIPS code appears
    more than once on the same day the last row wins. The result is sorted
    by case count, largest first, so smaller bubbles are drawn on top.

    Args:
        counties: County polygons with an ``id`` column holding the FIPS code.
        cases: Validated case records.
        selected_date: The day to display.

    Returns:
        A copy of ``counties`` with ``covid_cases``, ``county`` and ``state`` columns.
    """
    print(f"[join_cases] for date: {format_date(selected_date)}")

    day = cases[cases["date"] == pd.Timestamp(selected_date)]
    day = day.dropna(subset=["fips"]).drop_duplicates(subset="fips", keep="last")
    day = day[["fips", "cases", "county", "state"]].rename(columns={"fips": "id", "cases": "covid_cases"})

    joined = counties.drop(columns=["covid_cases", "county", "state"], errors="ignore")
    joined = joined.merge(day, on="id", how="left")
    joined["covid_cases"] = joined["covid_cases"].fillna(0).astype(int)
    joined["county"] = joined["county"].fillna("")
    joined["state"] = joined["state"].fillna("")

    return joined.sort_values("covid_cases", ascending=False, kind="stable").reset_index(drop=True)


def county_title(row: pd.Series) -> Optional[str]:
    """Tooltip text for a county bubble, or None when the county has no cases."""
    if not row["covid_cases"]:
        return None
    return f"{row['county']}, {row['state']}\nCases: {format_number(row['covid_cases'])}"
