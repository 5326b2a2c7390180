from __future__ import annotations

# --- Meeting settings used by scripts/ ---
DELEGATES_ALLOWED = 10
COIN_SEED = None  # set to an int to reproduce a prior run; None draws a fresh seed

# --- Input columns ---
ID_COL = "subcaucus_id"
NAME_COL = "name"
COUNT_COL = "count"

# --- Report labels (CSV presentation contract) ---
TABLE_COLUMNS = [
    "Subcaucus",
    "Members",
    "Delegates",
    "Remainder",
    "Coin Tosses",
    "Remainder Delegates",
]

SUMMARY_LABELS = {
    "participants": "Participants",
    "total_delegates": "Delegates elected",
    "participants_per_delegate": "Participants per delegate",
    "viability_number": "Viability number",
    "viable_participants": "Members in viable subcaucuses",
    "nonviable_participants": "Members in non-viable subcaucuses",
    "delegate_divisor": "Delegate divisor",
}
