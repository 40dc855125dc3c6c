import numpy as np
import pandas as pd


def block_maxima(data: pd.DataFrame, var: str, block_var: str) -> np.ndarray:
    """
    Maxima of `var` within each block (e.g. year) given by `block_var`.

    Args:
        data (pd.DataFrame): point-in-time data (hourly, daily...)
        var (str): column with the variable
        block_var (str): column identifying the block of each observation

    Returns:
        np.array: block maxima, ordered by block
    """
    for key in (var, block_var):
        if key not in data.columns:
            raise KeyError(f"Column '{key}' is missing in the data")

    valid = data.dropna(subset=[var])
    return valid.groupby(block_var, as_index=False)[var].max()[var].values.astype(float)


def annual_maxima(series: pd.Series) -> np.ndarray:
    """Annual maxima of a series indexed by a DatetimeIndex"""
    if not isinstance(series.index, pd.DatetimeIndex):
        raise ValueError("The series must be indexed by a DatetimeIndex")

    series = series.dropna()
    return series.groupby(series.index.year).max().values.astype(float)
