from __future__ import annotations
import secrets

# Park-Miller "minimal standard" generator.
MODULUS = 2**31 - 1
MULTIPLIER = 48271


def random_seed() -> int:
    """A fresh seed in [1, MODULUS - 1] for a new meeting or a coin flip."""
    return secrets.randbelow(MODULUS - 1) + 1


class SeededRandom:
    """
    Reproducible integer source for breaking remainder ties.

    Seeds are persisted with each snapshot, so the sequence for a given seed
    must never change: only integer arithmetic is used, no floats and no
    dependency on the `random` module's internals.
    """

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._state = self.seed % MODULUS or 1
        self._draws = 0

    def next_below(self, bound: int) -> int:
        """Next value in [0, bound)."""
        if bound < 1:
            raise ValueError(f"bound must be at least 1, got {bound}")
        self._state = self._state * MULTIPLIER % MODULUS
        self._draws += 1
        # state is in [1, MODULUS - 1]
        return (self._state - 1) * bound // (MODULUS - 1)

    def summary(self) -> str:
        return f"seed={self.seed} draws={self._draws} state={self._state}"

    def __repr__(self) -> str:
        return f"SeededRandom({self.summary()})"
