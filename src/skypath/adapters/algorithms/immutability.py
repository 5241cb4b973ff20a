"""
Immutability utilities for the flight index tables.

The index is shared by every concurrent search, so its DataFrames are
frozen once at build time instead of being copied per query.
"""

import numpy as np
import pandas as pd


def make_immutable(df: pd.DataFrame) -> pd.DataFrame:
    """
    Make DataFrame read-only to prevent accidental mutation.

    Sets the writeable flag to False on the underlying numpy arrays.
    Zero-copy: no data duplication occurs. Extension arrays (e.g. Arrow
    backed strings) are already immutable and are left alone.

    Args:
        df: DataFrame to freeze.

    Returns:
        The same DataFrame with read-only arrays.

    Example:
        >>> df = make_immutable(pd.DataFrame({'price': [1.0, 2.0]}))
        >>> df['price'].values[0] = 3.0  # Raises ValueError
    """
    for col in df.columns:
        arr = df[col].values
        if isinstance(arr, np.ndarray) and arr.flags.writeable:
            arr.flags.writeable = False

    return df
