from __future__ import annotations
import copy
import logging
from datetime import datetime, timezone
from typing import Any

from subcalc.engine.apportion import Apportionment, compute
from subcalc.engine.prng import random_seed
from subcalc.engine.subcaucus import Subcaucus
from subcalc.utils.validate import require_count, require_seed

logger = logging.getLogger(__name__)


def now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


class Snapshot:
    """
    A meeting at one moment: allotment, coin seed and the subcaucus list.

    Every change to counts, allotment, seed or the set of subcaucuses is
    followed by a full recompute, so the delegate fields on the snapshot and
    its subcaucuses always reflect the current inputs.
    """

    def __init__(
        self,
        device: int,
        created: str | None = None,
        revised: str | None = None,
        revision: str = "",
        name: str = "",
        allowed: int = 0,
        seed: int | None = None,
        subcaucuses: list[Subcaucus] | None = None,
    ):
        self.device = device
        self.created = created or now()
        self.revised = revised or now()
        self.revision = revision
        self.name = name
        self.allowed = require_count(allowed, "allowed")
        self.seed = random_seed() if seed is None else require_seed(seed)
        self.subcaucuses: dict[int, Subcaucus] = {}
        for sub in subcaucuses or []:
            require_count(sub.count, f"count of subcaucus {sub.id}")
            if sub.id in self.subcaucuses:
                raise ValueError(f"duplicate subcaucus id {sub.id}")
            self.subcaucuses[sub.id] = sub
        self.apportionment = Apportionment(allowed=self.allowed, seed=self.seed)
        self.redistribute_delegates()

    # --- aggregates from the last computation ---

    @property
    def participants(self) -> int:
        return self.apportionment.participants

    @property
    def participants_per_delegate(self) -> float:
        return self.apportionment.participants_per_delegate

    @property
    def viability_number(self) -> int:
        return self.apportionment.viability_number

    @property
    def viable_participants(self) -> int:
        return self.apportionment.viable_participants

    @property
    def nonviable_participants(self) -> int:
        return self.apportionment.nonviable_participants

    @property
    def delegate_divisor(self) -> float:
        return self.apportionment.delegate_divisor

    @property
    def total_delegates(self) -> int:
        return self.apportionment.total_delegates

    # --- identity for the storage layer ---

    def meeting_key(self) -> str:
        return f"{self.created} {self.device}"

    def snapshot_key(self) -> str:
        return f"{self.created} {self.device} {self.revised}"

    # --- recalculation ---

    def redistribute_delegates(self) -> Apportionment:
        subs = list(self.subcaucuses.values())
        self.apportionment = compute(self.allowed, self.seed, subs)
        for sub in subs:
            sub.apply(self.apportionment.result_for(sub.id))
        return self.apportionment

    def _touch(self) -> None:
        self.revised = now()
        self.revision = ""

    def revise(
        self,
        name: str | None = None,
        allowed: int | None = None,
        seed: int | None = None,
    ) -> Apportionment:
        """Apply any updates, mark the snapshot revised and recompute."""
        if allowed is not None:
            allowed = require_count(allowed, "allowed")
        if seed is not None:
            seed = require_seed(seed)
        if name is not None:
            self.name = name
        if allowed is not None:
            self.allowed = allowed
        if seed is not None:
            self.seed = seed
        self._touch()
        return self.redistribute_delegates()

    def flip_coin(self) -> Apportionment:
        """Draw a new seed, giving ties a fresh order."""
        seed = random_seed()
        while seed == self.seed:
            seed = random_seed()
        logger.info("Coin flipped for %s: seed %s -> %s", self.meeting_key(), self.seed, seed)
        return self.revise(seed=seed)

    # --- subcaucus set ---

    def next_subcaucus_id(self) -> int:
        return max(self.subcaucuses, default=0) + 1

    def get(self, subcaucus_id: int) -> Subcaucus:
        try:
            return self.subcaucuses[subcaucus_id]
        except KeyError:
            raise KeyError(f"no subcaucus with id {subcaucus_id}") from None

    def add_subcaucus(self, name: str = "", count: int = 0) -> Subcaucus:
        sub = Subcaucus(
            id=self.next_subcaucus_id(),
            name=name,
            count=require_count(count, "count"),
        )
        self.subcaucuses[sub.id] = sub
        self.revise()
        return sub

    def delete_subcaucus(self, subcaucus_id: int) -> None:
        self.get(subcaucus_id)
        del self.subcaucuses[subcaucus_id]
        self.revise()

    def set_count(self, subcaucus_id: int, count: int) -> Subcaucus:
        sub = self.get(subcaucus_id)
        sub.count = require_count(count, f"count of subcaucus {subcaucus_id}")
        self.revise()
        return sub

    def rename_subcaucus(self, subcaucus_id: int, name: str) -> Subcaucus:
        sub = self.get(subcaucus_id)
        sub.name = name
        self._touch()
        return sub

    def clear_counts(self) -> None:
        for sub in self.subcaucuses.values():
            sub.count = 0
        self.revise()

    def remove_empty(self, unnamed_only: bool = False) -> list[int]:
        """Drop subcaucuses without members (only the unnamed ones if asked)."""
        removed = [
            sub.id
            for sub in self.subcaucuses.values()
            if sub.count == 0 and not (unnamed_only and sub.name.strip())
        ]
        for sub_id in removed:
            del self.subcaucuses[sub_id]
        self.revise()
        return removed

    # --- copies and exchange ---

    def recreate(self) -> Snapshot:
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "device": self.device,
            "created": self.created,
            "revised": self.revised,
            "revision": self.revision,
            "name": self.name,
            "allowed": self.allowed,
            "seed": self.seed,
            "subcaucuses": {
                str(sub.id): {"name": sub.name, "count": sub.count}
                for sub in self.subcaucuses.values()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        expected = {
            "device": int,
            "created": str,
            "revised": str,
            "revision": str,
            "name": str,
            "allowed": int,
            "seed": int,
            "subcaucuses": dict,
        }
        missing = [k for k in expected if k not in data]
        if missing:
            raise ValueError(f"snapshot record missing fields: {missing}")
        bad = [k for k, t in expected.items() if isinstance(data[k], bool) or not isinstance(data[k], t)]
        if bad:
            raise ValueError(f"snapshot record has fields of the wrong type: {bad}")

        subcaucuses = []
        for key, record in data["subcaucuses"].items():
            try:
                sub_id = int(key)
            except ValueError:
                raise ValueError(f"subcaucus key {key!r} is not an integer id") from None
            if not isinstance(record, dict):
                raise ValueError(f"subcaucus {key} is not a record")
            subcaucuses.append(
                Subcaucus(
                    id=sub_id,
                    name=str(record.get("name") or ""),
                    count=require_count(record.get("count", 0), f"count of subcaucus {key}"),
                )
            )

        return cls(
            device=data["device"],
            created=data["created"],
            revised=data["revised"],
            revision=data["revision"],
            name=data["name"],
            allowed=data["allowed"],
            seed=data["seed"],
            subcaucuses=subcaucuses,
        )

    def __repr__(self) -> str:
        subs = ", ".join(f"{s.display_name}={s.count}" for s in self.subcaucuses.values())
        return f"Snapshot({self.name!r}/{self.revision!r}/{self.allowed} [{subs}])"
