from __future__ import annotations
import logging

from subcalc.config.constants import COIN_SEED, DELEGATES_ALLOWED
from subcalc.config.paths import PATHS
from subcalc.engine.prng import random_seed
from subcalc.utils.io import read_csv, write_csv
from subcalc.caucus.seats import allocate_delegates

IN_PATH = PATHS.inputs / "subcaucus_counts.csv"
OUT_PATH = PATHS.outputs / "subcaucus_delegates.csv"

def main():
    logging.basicConfig(level=logging.INFO)
    counts = read_csv(IN_PATH)
    seed = COIN_SEED if COIN_SEED is not None else random_seed()

    out = allocate_delegates(counts, allowed=DELEGATES_ALLOWED, seed=seed)
    write_csv(out, OUT_PATH)

    print(f"[OK] {DELEGATES_ALLOWED} delegates allocated with coin seed {seed}")
    print(f"Saved: {OUT_PATH} ({len(out):,} rows)")
    print(out.head(15))

if __name__ == "__main__":
    main()
