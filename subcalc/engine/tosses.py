from __future__ import annotations
from collections.abc import Mapping, Sequence

from subcalc.engine.subcaucus import CoinToss


def record_tosses(
    ranked: Sequence[int],
    remainders: Mapping[int, int],
) -> dict[int, list[CoinToss]]:
    """
    Audit log of every remainder tie among viable subcaucuses.

    `ranked` is already in final order, so whoever sits earlier won the toss.
    Each subcaucus gets one entry per tied opponent, in the opponent's rank order.
    """
    log: dict[int, list[CoinToss]] = {gid: [] for gid in ranked}
    for pos, gid in enumerate(ranked):
        for other_pos, other in enumerate(ranked):
            if other_pos == pos or remainders[other] != remainders[gid]:
                continue
            log[gid].append(CoinToss(opponent_id=other, won=pos < other_pos))
    return log


def consequential_ties(
    ranked: Sequence[int],
    remainders: Mapping[int, int],
    cutoff: int,
) -> frozenset[int]:
    """
    Ids whose tie decided who got a remainder delegate.

    `cutoff` is how many remainder delegates were handed out, i.e. ranked[:cutoff]
    won one. The tie matters only when the last winner and the first loser share a
    remainder; then everybody holding that remainder was in the draw.
    """
    if cutoff <= 0 or cutoff >= len(ranked):
        return frozenset()
    boundary = remainders[ranked[cutoff - 1]]
    if remainders[ranked[cutoff]] != boundary:
        return frozenset()
    return frozenset(gid for gid in ranked if remainders[gid] == boundary)
