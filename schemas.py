# schemas.py
"""Data validation schemas for the COVID-19 county map."""

import pandera as pa
from pandera.typing import Series


class CaseRecordSchema(pa.DataFrameModel):
    """Schema for the county case-count time series (NYT us-counties.csv)."""
    date: Series[pa.DateTime] = pa.Field(nullable=False, coerce=True)
    # NYT leaves FIPS blank for "Unknown" counties and New York City
    fips: Series[str] = pa.Field(nullable=True)
    county: Series[str] = pa.Field(nullable=False)
    state: Series[str] = pa.Field(nullable=False)
    cases: Series[int] = pa.Field(ge=0, coerce=True)
