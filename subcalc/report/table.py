from __future__ import annotations
import csv
import io

import pandas as pd

from subcalc.config.constants import SUMMARY_LABELS, TABLE_COLUMNS
from subcalc.engine.snapshot import Snapshot
from subcalc.report.text import format_revised

CRLF = "\r\n"


def delegate_table(snapshot: Snapshot) -> pd.DataFrame:
    """One row per subcaucus, in id order."""
    names = {sub.id: sub.display_name for sub in snapshot.subcaucuses.values()}
    rows = []
    for sub in sorted(snapshot.subcaucuses.values(), key=lambda s: s.id):
        rows.append([
            sub.display_name,
            sub.count,
            sub.total_delegates,
            sub.remainder,
            sub.toss_summary(names) if sub.report_tosses else "",
            sub.remainder_delegates,
        ])
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def summary_rows(snapshot: Snapshot) -> list[list[object]]:
    # "Delegates elected" sits in the Delegates column, like the group rows
    return [
        [SUMMARY_LABELS["participants"], snapshot.participants],
        [SUMMARY_LABELS["total_delegates"], "", snapshot.total_delegates],
        [SUMMARY_LABELS["participants_per_delegate"], snapshot.participants_per_delegate],
        [SUMMARY_LABELS["viability_number"], snapshot.viability_number],
        [SUMMARY_LABELS["viable_participants"], snapshot.viable_participants],
        [SUMMARY_LABELS["nonviable_participants"], snapshot.nonviable_participants],
        [SUMMARY_LABELS["delegate_divisor"], snapshot.delegate_divisor],
    ]


def as_csv(snapshot: Snapshot) -> str:
    buf = io.StringIO()
    delegate_table(snapshot).to_csv(buf, index=False, lineterminator=CRLF)

    writer = csv.writer(buf, lineterminator=CRLF)
    writer.writerow(["", ""])
    writer.writerows(summary_rows(snapshot))
    writer.writerow(["", ""])
    writer.writerow(["Coin random seed", snapshot.seed])
    writer.writerow(["Revised", format_revised(snapshot.revised)])
    writer.writerow(["Revision", snapshot.revision])
    writer.writerow(["Meeting", snapshot.name])
    return buf.getvalue()
