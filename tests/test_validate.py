from __future__ import annotations
import pandas as pd
import pytest

from subcalc.utils.validate import require_columns, require_count, require_no_nulls, require_whole_counts


def test_require_count():
    assert require_count(0) == 0
    assert require_count(12, "allowed") == 12


@pytest.mark.parametrize("value", [-1, 2.0, "3", True, None])
def test_require_count_rejects(value):
    with pytest.raises(ValueError):
        require_count(value)


def test_require_columns_names_missing():
    df = pd.DataFrame({"a": [1]})
    with pytest.raises(ValueError, match=r"\['b'\]"):
        require_columns(df, ["a", "b"], name="counts")


def test_require_no_nulls():
    df = pd.DataFrame({"a": [1, None]})
    with pytest.raises(ValueError, match="nulls"):
        require_no_nulls(df, ["a"])


def test_whole_counts_from_floats():
    df = pd.DataFrame({"count": [3.0, 0.0, 12.0]})
    assert require_whole_counts(df, "count").tolist() == [3, 0, 12]


def test_require_count_accepts_numpy_integers():
    value = pd.Series([4]).iloc[0]
    assert require_count(value) == 4
    assert type(require_count(value)) is int
