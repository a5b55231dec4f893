"""
ItemScorer: how well one catalog item fits the request on its own.

The total is a fixed linear combination of seven factors:

    colour    best colour weight, mismatch penalty, neutral bonus
    vibe      summed vibe weights, mismatch penalty
    fit       weight of the item's fit (missing fit counts as regular)
    brand     brand tokens in the item name / entity text
    sport     sport weight, kit bonus, off-context penalty
    team      team tokens against teams, team entities and free text
    specific  named-item tokens anywhere in the item's text

Every factor is total: empty colour/vibe lists score 0 and nothing divides.

Usage::

    scorer = ItemScorer()
    scorer.score(item, weights)          # float
    scorer.explain(item, weights)        # per-factor breakdown
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from catalog.models import CatalogItem
from config.constants import NEUTRAL_COLOURS, Sport
from core.utils import count_token_hits, fuzzy_contains
from scoring.weights import ContextWeights


@dataclass(frozen=True)
class ItemScoringWeights:
    """Factor coefficients and the constants inside each factor."""

    colour: float = 1.0
    vibe: float = 1.2
    fit: float = 0.8
    brand: float = 1.0
    sport: float = 1.0
    team: float = 1.2
    specific: float = 1.5

    colour_mismatch_penalty: float = -0.5
    neutral_bonus_factor: float = 0.2
    vibe_mismatch_penalty: float = -0.3

    brand_in_name: float = 1.0
    brand_in_entities: float = 1.5

    kit_bonus: float = 0.5
    off_context_kit_penalty: float = -0.7
    off_context_sport_penalty: float = -0.4

    team_in_sport_meta: float = 1.5
    team_in_entities: float = 1.5
    team_in_text: float = 1.0

    specific_hit: float = 1.0


DEFAULT_ITEM_WEIGHTS = ItemScoringWeights()


# =============================================================================
# Factors
# =============================================================================

def colour_alignment(
    item: CatalogItem,
    weights: ContextWeights,
    config: ItemScoringWeights = DEFAULT_ITEM_WEIGHTS,
) -> float:
    if not item.colours:
        return 0.0

    item_weights = [weights.colour[c] for c in item.colours]
    score = max(item_weights)

    if weights.total_colour_weight > 0 and not any(w > 0 for w in item_weights):
        score += config.colour_mismatch_penalty

    # Any neutral on the item earns a share of the strongest neutral weight
    if any(c in NEUTRAL_COLOURS for c in item.colours):
        score += config.neutral_bonus_factor * max(weights.colour[c] for c in NEUTRAL_COLOURS)

    return score


def vibe_alignment(
    item: CatalogItem,
    weights: ContextWeights,
    config: ItemScoringWeights = DEFAULT_ITEM_WEIGHTS,
) -> float:
    if not item.vibes:
        return 0.0

    score = sum(weights.vibe[v] for v in item.vibes)
    if weights.has_vibe_preference and score <= 0:
        score += config.vibe_mismatch_penalty
    return score


def fit_alignment(item: CatalogItem, weights: ContextWeights) -> float:
    return weights.fit[item.effective_fit]


def brand_alignment(
    item: CatalogItem,
    weights: ContextWeights,
    config: ItemScoringWeights = DEFAULT_ITEM_WEIGHTS,
) -> float:
    if not weights.brand_tokens:
        return 0.0
    return (
        config.brand_in_name * count_token_hits(item.name_text, weights.brand_tokens)
        + config.brand_in_entities * count_token_hits(item.entity_text, weights.brand_tokens)
    )


def sport_alignment(
    item: CatalogItem,
    weights: ContextWeights,
    config: ItemScoringWeights = DEFAULT_ITEM_WEIGHTS,
) -> float:
    sport_weight = weights.sport[item.sport]
    score = sport_weight

    if sport_weight > 0 and item.is_kit:
        score += config.kit_bonus

    # Keep jerseys and training gear out of non-sport looks
    if weights.sport_context is Sport.NONE and item.is_sport_item:
        score += config.off_context_kit_penalty if item.is_kit else config.off_context_sport_penalty

    return score


def _any_fuzzy(candidates: Sequence[str], token: str) -> bool:
    return any(fuzzy_contains(c, token) for c in candidates)


def team_alignment(
    item: CatalogItem,
    weights: ContextWeights,
    config: ItemScoringWeights = DEFAULT_ITEM_WEIGHTS,
) -> float:
    if not weights.team_tokens:
        return 0.0

    teams = item.teams
    team_entities = item.team_entities
    text = item.team_text

    score = 0.0
    for token in weights.team_tokens:
        if _any_fuzzy(teams, token):
            score += config.team_in_sport_meta
        if _any_fuzzy(team_entities, token):
            score += config.team_in_entities
        if token in text:
            score += config.team_in_text
    return score


def specific_match_count(item: CatalogItem, weights: ContextWeights) -> int:
    """How many named-item tokens occur in the item's text."""
    if not weights.specific_tokens:
        return 0
    return count_token_hits(item.specific_text, weights.specific_tokens)


def specific_alignment(
    item: CatalogItem,
    weights: ContextWeights,
    config: ItemScoringWeights = DEFAULT_ITEM_WEIGHTS,
) -> float:
    return config.specific_hit * specific_match_count(item, weights)


# =============================================================================
# Scorer
# =============================================================================

class ItemScorer:
    """
    Combines the single-item factors.

    Stateless apart from its config; safe to share across requests.
    """

    def __init__(self, config: Optional[ItemScoringWeights] = None) -> None:
        self.config = config or DEFAULT_ITEM_WEIGHTS

    def factors(self, item: CatalogItem, weights: ContextWeights) -> Dict[str, float]:
        """Raw (unweighted) factor values."""
        cfg = self.config
        return {
            "colour": colour_alignment(item, weights, cfg),
            "vibe": vibe_alignment(item, weights, cfg),
            "fit": fit_alignment(item, weights),
            "brand": brand_alignment(item, weights, cfg),
            "sport": sport_alignment(item, weights, cfg),
            "team": team_alignment(item, weights, cfg),
            "specific": specific_alignment(item, weights, cfg),
        }

    def score(self, item: CatalogItem, weights: ContextWeights) -> float:
        factors = self.factors(item, weights)
        return sum(getattr(self.config, name) * value for name, value in factors.items())

    def explain(self, item: CatalogItem, weights: ContextWeights) -> dict:
        """
        Return detailed breakdown of scoring for debugging.

        Each factor is reported as its raw value and its weighted
        contribution; ``total`` equals ``score(item, weights)``.
        """
        breakdown: dict = {"item_id": item.id, "total": 0.0}
        for name, value in self.factors(item, weights).items():
            contribution = getattr(self.config, name) * value
            breakdown[name] = {
                "value": round(value, 4),
                "contribution": round(contribution, 4),
            }
            breakdown["total"] += contribution
        breakdown["total"] = round(breakdown["total"], 4)
        return breakdown
