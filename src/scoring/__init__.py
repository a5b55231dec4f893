"""
Scoring Module.

Turns a ``PromptIntent`` into context weights and scores catalog items and
item pairs against them.

Quick start::

    from scoring import ItemScorer, WeightBuilder, pair_score

    weights = WeightBuilder().build(intent)
    score = ItemScorer().score(item, weights)
    harmony = pair_score(top, bottom, weights.sport_context, include_fit=True)
"""

from scoring.weights import ContextWeights, WeightBuilder, WeightConfig, build_weights
from scoring.item_scorer import ItemScorer, ItemScoringWeights
from scoring.pair_scorer import PairWeights, pair_score

__all__ = [
    "ContextWeights",
    "WeightBuilder",
    "WeightConfig",
    "build_weights",
    "ItemScorer",
    "ItemScoringWeights",
    "PairWeights",
    "pair_score",
]
