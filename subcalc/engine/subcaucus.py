from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CoinToss:
    opponent_id: int
    won: bool


@dataclass(frozen=True)
class GroupResult:
    """Delegate outcome for one subcaucus from a single computation."""
    id: int
    base_delegates: int = 0
    remainder: float = 0.0
    remainder_delegates: int = 0
    report_tosses: bool = False
    toss_log: tuple[CoinToss, ...] = ()

    @property
    def total_delegates(self) -> int:
        return self.base_delegates + self.remainder_delegates

    @classmethod
    def empty(cls, group_id: int) -> GroupResult:
        return cls(id=group_id)


@dataclass
class Subcaucus:
    """
    One subcaucus as the meeting sees it: a name, a member count and the
    delegate fields written back by the last apportionment.

    The delegate fields only mean something after a recompute against the
    current counts.
    """
    id: int
    name: str = ""
    count: int = 0
    base_delegates: int = 0
    remainder: float = 0.0
    remainder_delegates: int = 0
    report_tosses: bool = False
    toss_log: list[CoinToss] = field(default_factory=list)

    @property
    def total_delegates(self) -> int:
        return self.base_delegates + self.remainder_delegates

    @property
    def display_name(self) -> str:
        return self.name.strip() or f"Subcaucus {self.id}"

    def apply(self, result: GroupResult) -> None:
        if result.id != self.id:
            raise ValueError(f"result for subcaucus {result.id} applied to subcaucus {self.id}")
        self.base_delegates = result.base_delegates
        self.remainder = result.remainder
        self.remainder_delegates = result.remainder_delegates
        self.report_tosses = result.report_tosses
        self.toss_log = list(result.toss_log)

    def toss_summary(self, names: dict[int, str] | None = None) -> str:
        """e.g. 'won toss vs Green; lost toss vs Subcaucus 4'"""
        names = names or {}
        parts = []
        for toss in self.toss_log:
            opponent = names.get(toss.opponent_id) or f"Subcaucus {toss.opponent_id}"
            parts.append(f"{'won' if toss.won else 'lost'} toss vs {opponent}")
        return "; ".join(parts)
