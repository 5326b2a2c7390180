from __future__ import annotations
import pytest

from subcalc.engine.apportion import compute, seeded_ranking
from subcalc.engine.prng import SeededRandom
from subcalc.engine.subcaucus import CoinToss, Subcaucus


def groups(**counts: int) -> list[Subcaucus]:
    return [Subcaucus(id=i, name=name, count=c) for i, (name, c) in enumerate(counts.items(), start=1)]


def totals(result) -> dict[int, int]:
    return {gid: r.total_delegates for gid, r in result.results.items()}


class TestScenarios:
    def test_single_viable_group_takes_everything(self):
        result = compute(10, 7, groups(A=10, B=0, C=100, D=1, E=0))
        assert result.participants == 111
        assert result.viability_number == 12
        assert result.participants_per_delegate == pytest.approx(11.1)
        assert result.viable_participants == 100
        assert result.nonviable_participants == 11
        assert result.delegate_divisor == pytest.approx(10.0)
        assert result.total_delegates == 10
        assert totals(result) == {1: 0, 2: 0, 3: 10, 4: 0, 5: 0}
        c = result.result_for(3)
        assert (c.base_delegates, c.remainder, c.remainder_delegates) == (10, 0.0, 0)

    def test_nobody_viable(self):
        result = compute(1, 7, groups(X=5, Y=5))
        assert result.participants == 10
        assert result.viability_number == 10
        assert result.viable_participants == 0
        assert result.delegate_divisor == 0
        assert result.total_delegates == 0
        assert totals(result) == {1: 0, 2: 0}

    @pytest.mark.parametrize("seed", [1, 2, 30000, 987654])
    def test_small_group_below_viability(self, seed):
        result = compute(2, seed, groups(X=6, Y=4))
        assert result.viability_number == 5
        assert result.viable_participants == 6
        assert result.delegate_divisor == pytest.approx(3.0)
        assert totals(result) == {1: 2, 2: 0}

    def test_no_seats_is_not_configured(self):
        result = compute(0, 7, groups(X=6, Y=4))
        assert result.participants == 0
        assert result.viability_number == 0
        assert result.total_delegates == 0
        assert totals(result) == {1: 0, 2: 0}

    def test_nobody_in_the_room(self):
        result = compute(5, 7, groups(X=0, Y=0))
        assert result.participants == 0
        assert result.total_delegates == 0
        assert result.tie_break_order == ()


class TestTies:
    def test_three_way_tie_for_one_seat(self):
        result = compute(4, 1, groups(Red=10, Blue=10, Green=10))
        assert result.viability_number == 8
        assert result.tie_break_order == (2, 3, 1)
        assert result.ranking == (2, 3, 1)
        assert totals(result) == {1: 1, 2: 2, 3: 1}
        assert all(r.report_tosses for r in result.results.values())
        assert result.result_for(2).remainder == pytest.approx(1 / 3)
        assert result.result_for(2).toss_log == (CoinToss(3, True), CoinToss(1, True))
        assert result.result_for(3).toss_log == (CoinToss(2, False), CoinToss(1, True))
        assert result.result_for(1).toss_log == (CoinToss(2, False), CoinToss(3, False))

    def test_tie_among_winners_is_not_reported(self):
        result = compute(5, 11, groups(A=4, B=4, C=3))
        assert totals(result) == {1: 2, 2: 2, 3: 1}
        assert not any(r.report_tosses for r in result.results.values())
        assert len(result.result_for(1).toss_log) == 1
        assert len(result.result_for(2).toss_log) == 1
        assert result.result_for(3).toss_log == ()

    def test_tie_among_losers_is_not_reported(self):
        result = compute(6, 11, groups(A=4, B=4, C=3))
        assert totals(result) == {1: 2, 2: 2, 3: 2}
        assert result.result_for(3).remainder_delegates == 1
        assert not any(r.report_tosses for r in result.results.values())

    @pytest.mark.parametrize("seed", [1, 5, 42, 30000])
    def test_only_the_contested_run_is_reported(self, seed):
        result = compute(7, seed, groups(A=5, B=5, C=4, D=4))
        t = totals(result)
        assert t[1] == 2 and t[2] == 2
        assert sorted([t[3], t[4]]) == [1, 2]
        flagged = {gid for gid, r in result.results.items() if r.report_tosses}
        assert flagged == {3, 4}

    def test_seed_decides_contested_seat(self):
        first = compute(3, 1, groups(X=5, Y=5))
        second = compute(3, 30000, groups(X=5, Y=5))
        assert totals(first) == {1: 1, 2: 2}
        assert totals(second) == {1: 2, 2: 1}
        assert first.total_delegates == second.total_delegates == 3

    def test_seed_leaves_untied_groups_alone(self):
        outcomes = [totals(compute(7, seed, groups(A=5, B=5, C=4, D=4))) for seed in range(1, 30)]
        assert {(o[1], o[2]) for o in outcomes} == {(2, 2)}
        assert {o[3] + o[4] for o in outcomes} == {3}


class TestProperties:
    @pytest.mark.parametrize(
        "allowed,counts",
        [
            (10, dict(A=10, B=0, C=100, D=1, E=0)),
            (7, dict(A=5, B=5, C=4, D=4)),
            (13, dict(A=17, B=23, C=8, D=31, E=2)),
            (3, dict(A=1, B=1, C=1)),
            (25, dict(A=40, B=39, C=21)),
        ],
    )
    def test_every_seat_is_assigned(self, allowed, counts):
        result = compute(allowed, 4242, groups(**counts))
        assert result.viable_participants > 0
        assert sum(totals(result).values()) == allowed
        assert result.total_delegates == allowed

    def test_insertion_order_does_not_matter(self):
        forward = [Subcaucus(id=i, count=c) for i, c in [(1, 5), (2, 5), (3, 4), (4, 4), (5, 1)]]
        backward = list(reversed(forward))
        a = compute(7, 12345, forward)
        b = compute(7, 12345, backward)
        assert a.results == b.results
        assert a.ranking == b.ranking
        assert a.total_delegates == b.total_delegates

    def test_idempotent(self):
        subs = groups(A=10, B=10, C=10, D=3)
        assert compute(5, 99, subs) == compute(5, 99, subs)

    def test_inputs_not_mutated(self):
        subs = groups(A=10, B=10, C=10)
        compute(4, 1, subs)
        assert all(s.total_delegates == 0 and s.toss_log == [] for s in subs)

    def test_growing_group_never_loses_delegates(self):
        won = [totals(compute(2, 3, groups(X=6, Y=y)))[2] for y in range(11)]
        assert won == sorted(won)
        assert won[0] == 0 and won[-1] == 2

    def test_nonviable_groups_get_nothing(self):
        result = compute(13, 8, groups(A=17, B=23, C=8, D=31, E=2))
        for sub_id, count in enumerate([17, 23, 8, 31, 2], start=1):
            if count < result.viability_number:
                r = result.result_for(sub_id)
                assert r.base_delegates == 0 and r.remainder_delegates == 0


class TestValidation:
    def test_negative_count(self):
        with pytest.raises(ValueError):
            compute(3, 1, [Subcaucus(id=1, count=-1)])

    def test_negative_allowed(self):
        with pytest.raises(ValueError):
            compute(-3, 1, groups(A=1))

    def test_fractional_count(self):
        with pytest.raises(ValueError):
            compute(3, 1, [Subcaucus(id=1, count=2.5)])

    def test_duplicate_ids(self):
        with pytest.raises(ValueError):
            compute(3, 1, [Subcaucus(id=1, count=2), Subcaucus(id=1, count=3)])


def test_shuffle_consumes_one_draw_per_group():
    rng = SeededRandom(77)
    order = seeded_ranking([1, 2, 3, 4], rng)
    assert sorted(order) == [1, 2, 3, 4]
    assert "draws=4" in rng.summary()


def test_fractional_seed_rejected():
    with pytest.raises(ValueError):
        compute(3, 2.5, groups(A=1))
