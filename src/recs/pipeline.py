"""
Outfit recommendation pipeline.

Flow:
1. Resolve the prompt into a ``PromptIntent`` (planner + heuristic repair)
2. Build ``ContextWeights`` from the intent
3. Shortlist candidates for every required role
4. Assemble and score outfits (or single items)
5. Diversity-sample the final list

Everything after step 1 is pure and synchronous; randomness (jitter and
epsilon draws) comes from one ``random.Random`` owned by the recommender,
so a fixed seed reproduces the output exactly.
"""

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from catalog.models import CatalogItem
from config.constants import Category
from config.settings import MAX_EPSILON, Settings, get_settings
from core.logging import LoggerMixin
from intent.models import PromptIntent
from intent.resolver import IntentResolver
from recs.assembler import OutfitAssembler, OutfitCandidate
from recs.candidate_selection import CandidateSelector
from recs.sampler import DiversitySampler
from scoring.item_scorer import ItemScorer
from scoring.pair_scorer import PairWeights
from scoring.weights import ContextWeights, WeightBuilder


class NoRecommendationsError(Exception):
    """Raised when no outfit or item can be constructed for a request."""
    pass


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class RecommendOptions:
    """Per-run knobs for the recommender."""

    pool_size: int = 6             # results returned
    per_role_limit: int = 12       # shortlist size per role
    epsilon: float = 0.15          # exploration probability, clamped to [0, 0.5]
    jitter: float = 0.15           # uniform tie-breaking noise range
    seed: Optional[int] = None

    def __post_init__(self):
        self.pool_size = max(1, int(self.pool_size))
        self.per_role_limit = max(1, int(self.per_role_limit))
        self.epsilon = max(0.0, min(MAX_EPSILON, float(self.epsilon)))
        self.jitter = max(0.0, float(self.jitter))

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides) -> "RecommendOptions":
        """Defaults from ``Settings``; ``None`` overrides are ignored."""
        settings = settings or get_settings()
        values = {
            "pool_size": settings.pool_size,
            "per_role_limit": settings.per_role_limit,
            "epsilon": settings.epsilon,
            "jitter": settings.jitter,
            "seed": settings.random_seed,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class RecommendationResult:
    intent: PromptIntent
    weights: ContextWeights
    candidates_by_role: Dict[Category, List[CatalogItem]] = field(default_factory=dict)
    outfits: List[OutfitCandidate] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "intent": self.intent.model_dump(mode="json"),
            "candidates_per_role": {
                role.value: len(items) for role, items in self.candidates_by_role.items()
            },
            "outfits": [outfit.to_dict() for outfit in self.outfits],
        }


# =============================================================================
# Recommender
# =============================================================================

class OutfitRecommender(LoggerMixin):
    """
    Prompt-to-outfits recommender.

    One instance owns one RNG; create a new instance (or pass a fresh
    ``rng``) for each independent run.
    """

    def __init__(
        self,
        resolver: Optional[IntentResolver] = None,
        options: Optional[RecommendOptions] = None,
        rng: Optional[random.Random] = None,
        scorer: Optional[ItemScorer] = None,
        weight_builder: Optional[WeightBuilder] = None,
        pair_weights: Optional[PairWeights] = None,
    ) -> None:
        self.resolver = resolver or IntentResolver()
        self.options = options or RecommendOptions()
        self.rng = rng or random.Random(self.options.seed)
        self.scorer = scorer or ItemScorer()
        self.weight_builder = weight_builder or WeightBuilder()

        self.selector = CandidateSelector(
            per_role_limit=self.options.per_role_limit,
            scorer=self.scorer,
        )
        self.assembler = OutfitAssembler(
            scorer=self.scorer,
            pair_weights=pair_weights,
            jitter=self.options.jitter,
            rng=self.rng,
        )
        self.sampler = DiversitySampler(epsilon=self.options.epsilon, rng=self.rng)

    def recommend(
        self,
        catalog: Sequence[CatalogItem],
        prompt: str,
        gender_pref: str = "any",
    ) -> RecommendationResult:
        """
        Resolve ``prompt`` and recommend from ``catalog``.

        Raises:
            NoRecommendationsError: If nothing can be constructed
        """
        intent = self.resolver.resolve(prompt, gender_pref)
        return self.recommend_for_intent(catalog, intent)

    def recommend_for_intent(
        self,
        catalog: Sequence[CatalogItem],
        intent: PromptIntent,
    ) -> RecommendationResult:
        weights = self.weight_builder.build(intent)
        self.logger.debug("Context weights built", **weights.to_dict())

        candidates_by_role: Dict[Category, List[CatalogItem]] = {}
        for role in intent.roles:
            candidates_by_role[role] = self.selector.select(catalog, role, intent, weights)

        candidates = self.assembler.assemble(intent, candidates_by_role, weights)
        if not candidates:
            self.logger.warning(
                "No outfits could be constructed",
                roles=[r.value for r in intent.roles],
                catalog_size=len(catalog),
            )
            raise NoRecommendationsError("No outfits/items could be constructed.")

        outfits = self.sampler.sample(candidates, self.options.pool_size)
        self.logger.info(
            "Recommendations ready",
            requested_form=intent.requested_form.value if intent.requested_form else None,
            candidates=len(candidates),
            returned=len(outfits),
            top_score=round(outfits[0].score, 4) if outfits else None,
        )
        return RecommendationResult(
            intent=intent,
            weights=weights,
            candidates_by_role=candidates_by_role,
            outfits=outfits,
        )


def format_outfits(outfits: Sequence[OutfitCandidate]) -> str:
    """
    Render outfits as ``"<role> <image_path>"`` lines in role order, with a
    blank line between outfits.
    """
    blocks = []
    for outfit in outfits:
        blocks.append("\n".join(f"{role.value} {item.image_path}" for role, item in outfit.ordered_items()))
    return "\n\n".join(blocks)
