from __future__ import annotations
import numbers

import pandas as pd

def require_columns(df: pd.DataFrame, cols: list[str], name: str = "df") -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"{name} missing columns: {missing}")

def require_no_nulls(df: pd.DataFrame, cols: list[str], name: str = "df") -> None:
    bad = [c for c in cols if df[c].isna().any()]
    if bad:
        raise ValueError(f"{name} has nulls in columns: {bad}")

def require_count(value: object, name: str = "count") -> int:
    """
    Counts and allotments must be non-negative whole numbers.
    bool is rejected even though it is an int subclass.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value}")
    return int(value)

def require_seed(value: object, name: str = "seed") -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)

def require_whole_counts(df: pd.DataFrame, col: str, name: str = "df") -> pd.Series:
    counts = pd.to_numeric(df[col], errors="coerce")
    if counts.isna().any():
        bad = df[counts.isna()][[col]].head(20)
        raise ValueError(f"Non-numeric/NA values found in {name}.{col}. Example rows:\n{bad}")
    if (counts < 0).any() or (counts % 1 != 0).any():
        bad = df[(counts < 0) | (counts % 1 != 0)][[col]].head(20)
        raise ValueError(f"{name}.{col} must hold non-negative whole numbers. Example rows:\n{bad}")
    return counts.astype(int)
