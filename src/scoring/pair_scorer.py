"""
Pairwise compatibility between two items of one outfit.

Each term is symmetric in its two items except ``fit_compatibility``, which
is defined for a (top, bottom) pair only.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from catalog.models import CatalogItem
from config.constants import NEUTRAL_COLOURS, Fit, Sport, Vibe
from core.utils import fuzzy_contains


@dataclass(frozen=True)
class PairWeights:
    """Coefficients applied to each pairwise term."""

    colour: float = 0.6
    vibe: float = 0.9
    fit: float = 0.7
    sport: float = 0.8
    team: float = 1.0


DEFAULT_PAIR_WEIGHTS = PairWeights()


# (top fit, bottom fit) -> score; every other combination scores DEFAULT_FIT_PAIR
FIT_PAIR_SCORES: Dict[Tuple[Fit, Fit], float] = {
    (Fit.OVERSIZED, Fit.SLIM): 1.3,
    (Fit.OVERSIZED, Fit.REGULAR): 1.0,
    (Fit.REGULAR, Fit.SLIM): 1.0,
    (Fit.SLIM, Fit.SLIM): 0.9,
    (Fit.OVERSIZED, Fit.OVERSIZED): 0.4,
}
DEFAULT_FIT_PAIR = 0.5

# Vibes that read well together across garments, counted once per direction
VIBE_AFFINITIES: Dict[Tuple[Vibe, Vibe], float] = {
    (Vibe.STREETWEAR, Vibe.SPORTY): 0.5,
    (Vibe.CHIC, Vibe.MINIMAL): 0.4,
}

TEAM_MATCH = 1.2
TEAM_CLASH = -0.3


def colour_compatibility(a: CatalogItem, b: CatalogItem) -> float:
    """Mean over all colour pairs: same 1.0, two neutrals 0.6, one neutral 0.4."""
    if not a.colours or not b.colours:
        return 0.0

    total = 0.0
    for ca in a.colours:
        for cb in b.colours:
            if ca == cb:
                total += 1.0
                continue
            neutral_a = ca in NEUTRAL_COLOURS
            neutral_b = cb in NEUTRAL_COLOURS
            if neutral_a and neutral_b:
                total += 0.6
            elif neutral_a or neutral_b:
                total += 0.4
    return total / (len(a.colours) * len(b.colours))


def vibe_compatibility(a: CatalogItem, b: CatalogItem) -> float:
    va, vb = set(a.vibes), set(b.vibes)
    score = float(len(va & vb))
    for (x, y), bonus in VIBE_AFFINITIES.items():
        if x in va and y in vb:
            score += bonus
        if y in va and x in vb:
            score += bonus
    return score


def fit_compatibility(top: CatalogItem, bottom: CatalogItem) -> float:
    return FIT_PAIR_SCORES.get((top.effective_fit, bottom.effective_fit), DEFAULT_FIT_PAIR)


def sport_compatibility(a: CatalogItem, b: CatalogItem, sport_context: Sport) -> float:
    sa, sb = a.sport, b.sport

    if sport_context is Sport.NONE:
        if sa is Sport.NONE and sb is Sport.NONE:
            return 0.0
        if sa is not Sport.NONE and sb is not Sport.NONE:
            return -0.5
        return -0.2

    if sa is Sport.NONE or sb is Sport.NONE:
        return 0.0
    return 1.0 if sa is sb else 0.2


def team_compatibility(a: CatalogItem, b: CatalogItem) -> float:
    if not a.teams or not b.teams:
        return 0.0
    for x in a.teams:
        for y in b.teams:
            if fuzzy_contains(x, y):
                return TEAM_MATCH
    return TEAM_CLASH


def pair_score(
    a: CatalogItem,
    b: CatalogItem,
    sport_context: Sport,
    include_fit: bool = False,
    weights: Optional[PairWeights] = None,
) -> float:
    """
    Weighted pairwise score for two outfit items.

    Pass ``include_fit=True`` only for a (top, bottom) pair, with the top
    as ``a``.
    """
    w = weights or DEFAULT_PAIR_WEIGHTS
    score = (
        w.colour * colour_compatibility(a, b)
        + w.vibe * vibe_compatibility(a, b)
        + w.sport * sport_compatibility(a, b, sport_context)
        + w.team * team_compatibility(a, b)
    )
    if include_fit:
        score += w.fit * fit_compatibility(a, b)
    return score
