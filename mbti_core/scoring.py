from __future__ import annotations
from typing import Dict, Tuple

from .errors import SessionIncomplete
from .types import DICHOTOMIES, SessionSnapshot, Trait

TraitTally = Dict[Trait, int]


def empty_tally() -> TraitTally:
    return {t: 0 for t in Trait}


def _credit(tally: TraitTally, alpha: Trait, beta: Trait, value: int) -> None:
    if value > 0:
        tally[alpha] += 1
    elif value < 0:
        tally[beta] += 1
    else:
        # neutral credits both poles of the question's dichotomy
        tally[alpha] += 1
        tally[beta] += 1


def tally(snapshot: SessionSnapshot) -> TraitTally:
    """
    Count pole credits over a completed snapshot.
    +1/+2 -> trait_alpha, -1/-2 -> trait_beta, 0 -> both.
    """
    if not snapshot.is_complete():
        missing = sum(1 for q in snapshot.questions if q.id not in snapshot.answers)
        raise SessionIncomplete(missing)
    counts = empty_tally()
    for q in snapshot.questions:
        _credit(counts, q.trait_alpha, q.trait_beta, int(snapshot.answers[q.id]))
    return counts


def resolve(counts: TraitTally) -> str:
    return "".join(
        (first if counts[first] >= counts[second] else second).value
        for first, second in DICHOTOMIES
    )


def score_snapshot(snapshot: SessionSnapshot) -> str:
    """Returns the four-letter code for a completed snapshot."""
    return resolve(tally(snapshot))


def dichotomy_balance(counts: TraitTally) -> Dict[str, Tuple[float, float]]:
    """Share of each pole per pair, e.g. {"EI": (0.6, 0.4)}; (0.5, 0.5) when untouched."""
    out: Dict[str, Tuple[float, float]] = {}
    for first, second in DICHOTOMIES:
        total = counts[first] + counts[second]
        if total == 0:
            out[first.value + second.value] = (0.5, 0.5)
        else:
            out[first.value + second.value] = (counts[first] / total, counts[second] / total)
    return out
