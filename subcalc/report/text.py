from __future__ import annotations
from datetime import datetime

from subcalc.engine.snapshot import Snapshot
from subcalc.engine.subcaucus import Subcaucus


def plural(n: int, singular: str, plural_form: str) -> str:
    return f"{n} {singular if n == 1 else plural_form}"


def format_revised(revised: str) -> str:
    try:
        stamp = datetime.fromisoformat(revised)
    except ValueError:
        return revised
    return stamp.strftime("%B %d, %Y %I:%M %p %Z").strip()


def subcaucus_text(sub: Subcaucus, names: dict[int, str]) -> str:
    if not sub.count:
        return ""
    text = (
        f"{sub.display_name} had {plural(sub.count, 'member', 'members')} "
        f"and elected {plural(sub.total_delegates, 'delegate', 'delegates')}."
    )
    if sub.report_tosses:
        text += f" Coin tosses: {sub.toss_summary(names)}."
    return text


def as_text(snapshot: Snapshot) -> str:
    """
    Narrative summary of a computed snapshot, one paragraph per fact group,
    suitable for pasting into meeting minutes.
    """
    names = {sub.id: sub.display_name for sub in snapshot.subcaucuses.values()}
    revision = f"({snapshot.revision}) " if snapshot.revision else ""
    text = (
        f"{snapshot.name} {revision}was allowed "
        f"{plural(snapshot.allowed, 'delegate', 'delegates')}.\n\n"
    )

    if snapshot.participants > 0:
        for sub in snapshot.subcaucuses.values():
            line = subcaucus_text(sub, names)
            if line:
                text += f"- {line}\n\n"

        text += (
            f"{plural(snapshot.participants, 'person was', 'people were')} participating, "
            f"the initial viability number was {snapshot.viability_number} "
            f"({snapshot.participants_per_delegate:.3f} participants per delegate).\n\n"
        )

        if snapshot.nonviable_participants > 0:
            text += (
                f"{plural(snapshot.viable_participants, 'member was', 'members were')} "
                f"in viable subcaucuses. "
                f"The delegate divisor (number of members needed to allocate each delegate) "
                f"was {snapshot.delegate_divisor:.3f}.\n\n"
            )
            text += (
                f"{plural(snapshot.nonviable_participants, 'person was', 'people were')} "
                f"in a non-viable subcaucus.\n\n"
            )
    else:
        text += "Nobody was participating.\n\n"

    text += f"The coin had a random seed of {snapshot.seed}.\n"
    text += f"Last revised {format_revised(snapshot.revised)}\n"
    return text
