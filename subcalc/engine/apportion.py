from __future__ import annotations
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from subcalc.engine.prng import SeededRandom
from subcalc.engine.subcaucus import GroupResult
from subcalc.engine.tosses import consequential_ties, record_tosses
from subcalc.utils.validate import require_count, require_seed

logger = logging.getLogger(__name__)


class GroupCount(Protocol):
    id: int
    count: int


@dataclass(frozen=True)
class Apportionment:
    """Aggregate statistics and per-subcaucus results of one computation."""
    allowed: int
    seed: int
    participants: int = 0
    participants_per_delegate: float = 0.0
    viability_number: int = 0
    viable_participants: int = 0
    delegate_divisor: float = 0.0
    total_delegates: int = 0
    results: dict[int, GroupResult] = field(default_factory=dict)
    tie_break_order: tuple[int, ...] = ()
    ranking: tuple[int, ...] = ()

    @property
    def nonviable_participants(self) -> int:
        return self.participants - self.viable_participants

    def result_for(self, group_id: int) -> GroupResult:
        return self.results.get(group_id) or GroupResult.empty(group_id)


def seeded_ranking(ids: Iterable[int], rng: SeededRandom) -> list[int]:
    """
    Fisher-Yates shuffle driven by `rng`.

    This is the "coin" flipped before any tie is seen: tied remainders are
    later ordered by position in this list. It consumes exactly len(ids)
    draws whether or not a tie ever happens.
    """
    order = list(ids)
    m = len(order)
    while m:
        i = rng.next_below(m)
        m -= 1
        order[m], order[i] = order[i], order[m]
    return order


def compute(allowed: int, seed: int, groups: Iterable[GroupCount]) -> Apportionment:
    """
    Largest-remainder distribution of `allowed` delegates with a viability threshold:
      1) participants = total members; viability number = ceil(participants / allowed)
      2) only subcaucuses at or above the viability number take part
      3) delegate divisor = viable members / allowed; each viable subcaucus gets
         floor(count / divisor) delegates
      4) leftover delegates go one each by largest remainder; equal remainders
         are ordered by a shuffle seeded with `seed`

    Quotas are handled as exact fractions count * allowed / viable_participants,
    so equal remainders compare equal regardless of float rounding.

    Returns a new Apportionment; nothing passed in is mutated.
    """
    allowed = require_count(allowed, "allowed")
    seed = require_seed(seed)
    groups = list(groups)
    counts = {g.id: require_count(g.count, f"count of subcaucus {g.id}") for g in groups}
    if len(counts) != len(groups):
        raise ValueError("subcaucus ids must be unique")
    empty = {gid: GroupResult.empty(gid) for gid in counts}

    logger.debug("Distributing %s delegates among %s subcaucuses", allowed, len(counts))

    if not allowed:
        return Apportionment(allowed=allowed, seed=seed, results=empty)

    participants = sum(counts.values())
    if not participants:
        logger.debug("Nobody is participating")
        return Apportionment(allowed=allowed, seed=seed, results=empty)

    participants_per_delegate = participants / allowed
    viability_number = -(-participants // allowed)

    viable = [gid for gid, count in counts.items() if count >= viability_number]
    viable_participants = sum(counts[gid] for gid in viable)
    if not viable_participants:
        logger.debug("No subcaucus reached the viability number %s", viability_number)
        return Apportionment(
            allowed=allowed,
            seed=seed,
            participants=participants,
            participants_per_delegate=participants_per_delegate,
            viability_number=viability_number,
            results=empty,
        )

    delegate_divisor = viable_participants / allowed

    base: dict[int, int] = {}
    remainders: dict[int, int] = {}  # numerators over viable_participants
    for gid in viable:
        base[gid], remainders[gid] = divmod(counts[gid] * allowed, viable_participants)

    total_delegates = sum(base.values())

    rng = SeededRandom(seed)
    tie_break_order = seeded_ranking(sorted(viable), rng)
    tie_rank = {gid: pos for pos, gid in enumerate(tie_break_order)}

    ranked = sorted(viable, key=lambda gid: (-remainders[gid], tie_rank[gid]))

    cutoff = 0
    for _ in ranked:
        if total_delegates >= allowed:
            break
        total_delegates += 1
        cutoff += 1

    tosses = record_tosses(ranked, remainders)
    reporting = consequential_ties(ranked, remainders, cutoff)
    winners = set(ranked[:cutoff])

    results = dict(empty)
    for gid in viable:
        results[gid] = GroupResult(
            id=gid,
            base_delegates=base[gid],
            remainder=remainders[gid] / viable_participants,
            remainder_delegates=1 if gid in winners else 0,
            report_tosses=gid in reporting,
            toss_log=tuple(tosses[gid]),
        )

    logger.debug("random summary %s", rng.summary())
    if reporting:
        logger.info(
            "Coin toss decided remainder delegates among subcaucuses %s",
            sorted(reporting),
        )

    return Apportionment(
        allowed=allowed,
        seed=seed,
        participants=participants,
        participants_per_delegate=participants_per_delegate,
        viability_number=viability_number,
        viable_participants=viable_participants,
        delegate_divisor=delegate_divisor,
        total_delegates=total_delegates,
        results=results,
        tie_break_order=tuple(tie_break_order),
        ranking=tuple(ranked),
    )
