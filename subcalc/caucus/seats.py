from __future__ import annotations
from dataclasses import dataclass

import pandas as pd

from subcalc.config.constants import COUNT_COL, ID_COL, NAME_COL
from subcalc.engine.apportion import Apportionment, compute
from subcalc.utils.validate import require_columns, require_no_nulls, require_whole_counts


@dataclass(frozen=True)
class _Row:
    id: int
    count: int


def allocate_delegates(
    counts_df: pd.DataFrame,
    allowed: int,
    seed: int,
    id_col: str = ID_COL,
    name_col: str = NAME_COL,
    count_col: str = COUNT_COL,
) -> pd.DataFrame:
    """
    Walking-subcaucus delegate allocation over a table of counts:
      1) Viable subcaucuses: count >= ceil(participants / allowed)
      2) Base delegates: floor(count / delegate_divisor), divisor = viable members / allowed
      3) Leftover delegates by largest remainder, ties broken by the seeded coin

    Returns full table with:
      - viable
      - base_delegates, remainder, remainder_delegates
      - delegates (0 for non-viable)
      - report_tosses, coin_tosses (tosses that decided a delegate)
    """
    df = counts_df.copy()

    require_columns(df, [id_col, count_col], name="counts_df")
    require_no_nulls(df, [id_col], name="counts_df")
    if df[id_col].duplicated().any():
        dupes = df[df[id_col].duplicated(keep=False)][[id_col]].head(20)
        raise ValueError(f"counts_df has duplicate {id_col} values:\n{dupes}")

    df[count_col] = require_whole_counts(df, count_col, name="counts_df")
    df[id_col] = df[id_col].astype(int)
    if name_col not in df.columns:
        df[name_col] = ""
    df[name_col] = df[name_col].fillna("").astype(str)

    rows = [_Row(id=int(i), count=int(c)) for i, c in zip(df[id_col], df[count_col])]
    result = compute(allowed, seed, rows)

    names = {
        int(i): (n.strip() or f"Subcaucus {int(i)}")
        for i, n in zip(df[id_col], df[name_col])
    }

    def _tosses(gid: int) -> str:
        r = result.result_for(gid)
        if not r.report_tosses:
            return ""
        return "; ".join(
            f"{'won' if t.won else 'lost'} toss vs {names[t.opponent_id]}" for t in r.toss_log
        )

    out = df.copy()
    out["viable"] = out[count_col] >= result.viability_number if result.viable_participants else False
    out["base_delegates"] = [result.result_for(g).base_delegates for g in out[id_col]]
    out["remainder"] = [result.result_for(g).remainder for g in out[id_col]]
    out["remainder_delegates"] = [result.result_for(g).remainder_delegates for g in out[id_col]]
    out["delegates"] = out["base_delegates"] + out["remainder_delegates"]
    out["report_tosses"] = [result.result_for(g).report_tosses for g in out[id_col]]
    out["coin_tosses"] = [_tosses(g) for g in out[id_col]]

    # Hard guarantees
    if out.loc[~out["viable"], "delegates"].any():
        raise RuntimeError("Delegate allocation failed: a non-viable subcaucus received delegates.")
    expected = int(allowed) if result.viable_participants else 0
    if int(out["delegates"].sum()) != expected:
        raise RuntimeError(f"Delegate allocation failed: delegates sum to {out['delegates'].sum()} not {expected}.")

    # Sort for readability
    out = out.sort_values(
        ["delegates", count_col, id_col], ascending=[False, False, True]
    ).reset_index(drop=True)
    return out


def summary_frame(result: Apportionment) -> pd.DataFrame:
    return pd.DataFrame([{
        "allowed": result.allowed,
        "seed": result.seed,
        "participants": result.participants,
        "participants_per_delegate": result.participants_per_delegate,
        "viability_number": result.viability_number,
        "viable_participants": result.viable_participants,
        "nonviable_participants": result.nonviable_participants,
        "delegate_divisor": result.delegate_divisor,
        "total_delegates": result.total_delegates,
    }])
