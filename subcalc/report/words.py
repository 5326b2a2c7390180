from __future__ import annotations
import re

import pandas as pd

from subcalc.engine.snapshot import Snapshot

STOP_WORDS = {"for", "of", "the", "a", "s", "and", "that", "in", "it"}
COUNTING = ("delegates", "members", "subcaucuses")

_WORD = re.compile(r"\b(\w+)\b")


def word_analysis(snapshot: Snapshot, counting: str = "delegates") -> pd.DataFrame:
    """
    Totals by the words used in subcaucus names:
      1) each distinct lowercase word in a name (stop words skipped) is credited
         with that subcaucus's delegates, members, or 1 per subcaucus
      2) words with the same total are merged into one row, joined by spaces
      3) rows with a zero total are dropped

    Returns columns ["words", counting], largest total first.
    """
    if counting not in COUNTING:
        raise ValueError(f"counting must be one of {COUNTING}, got {counting!r}")

    rows = []
    for sub in snapshot.subcaucuses.values():
        if counting == "delegates":
            value = sub.total_delegates
        elif counting == "members":
            value = sub.count
        else:
            value = 1
        words = dict.fromkeys(w.lower() for w in _WORD.findall(sub.display_name))
        rows.extend((word, value) for word in words if word not in STOP_WORDS)

    df = pd.DataFrame(rows, columns=["word", counting])
    if df.empty:
        return pd.DataFrame(columns=["words", counting])

    totals = (
        df.groupby("word", sort=False)[counting]
        .sum()
        .sort_values(ascending=False, kind="stable")
        .reset_index()
    )
    totals = totals[totals[counting] > 0]

    out = (
        totals.groupby(counting, sort=False)["word"]
        .agg(" ".join)
        .rename("words")
        .reset_index()
    )
    return out[["words", counting]].reset_index(drop=True)
