from __future__ import annotations
import logging

from subcalc.config.constants import COIN_SEED, COUNT_COL, DELEGATES_ALLOWED, ID_COL, NAME_COL
from subcalc.config.paths import PATHS
from subcalc.engine.snapshot import Snapshot
from subcalc.engine.subcaucus import Subcaucus
from subcalc.caucus.seats import summary_frame
from subcalc.report.table import as_csv
from subcalc.report.text import as_text
from subcalc.utils.io import read_csv, write_csv, write_text
from subcalc.utils.validate import require_columns, require_whole_counts

IN_PATH = PATHS.inputs / "subcaucus_counts.csv"
MEETING_NAME = "Precinct caucus"
DEVICE = 1

def main():
    logging.basicConfig(level=logging.INFO)
    df = read_csv(IN_PATH)
    require_columns(df, [ID_COL, COUNT_COL], name="subcaucus_counts")
    counts = require_whole_counts(df, COUNT_COL, name="subcaucus_counts")
    names = df[NAME_COL].fillna("").astype(str) if NAME_COL in df.columns else [""] * len(df)

    snapshot = Snapshot(
        device=DEVICE,
        name=MEETING_NAME,
        allowed=DELEGATES_ALLOWED,
        seed=COIN_SEED,
        subcaucuses=[
            Subcaucus(id=int(i), name=n, count=int(c))
            for i, n, c in zip(df[ID_COL], names, counts)
        ],
    )

    write_text(as_text(snapshot), PATHS.outputs / "subcaucus_report.txt")
    write_text(as_csv(snapshot), PATHS.outputs / "subcaucus_report.csv")
    write_csv(summary_frame(snapshot.apportionment), PATHS.outputs / "subcaucus_summary.csv")

    print(f"[OK] Report written for {snapshot.meeting_key()}")
    print(as_text(snapshot))

if __name__ == "__main__":
    main()
