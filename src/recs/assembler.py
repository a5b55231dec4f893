"""
Outfit assembly: per-role shortlists combined into scored candidates.

Single-role requests turn every shortlisted item into its own candidate.
Multi-role requests enumerate combinations:

- mono required: mono x shoes (when shoes are required and available), else mono alone
- otherwise: cross-product over the required roles among top, bottom, shoes;
  shoes are dropped when there are no shoe candidates

A candidate's score is the sum of its item scores plus the pairwise terms
for every pair present among top-bottom, top-shoes, bottom-shoes and
mono-shoes, plus optional uniform jitter to break ties.
"""

import itertools
import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from catalog.models import CatalogItem
from config.constants import ROLE_ORDER, Category
from core.logging import get_logger
from intent.models import PromptIntent
from scoring.item_scorer import ItemScorer
from scoring.pair_scorer import PairWeights, pair_score
from scoring.weights import ContextWeights

logger = get_logger(__name__)


# (first, second, include_fit) for every pair that contributes to a composite score
SCORED_PAIRS: Tuple[Tuple[Category, Category, bool], ...] = (
    (Category.TOP, Category.BOTTOM, True),
    (Category.TOP, Category.SHOES, False),
    (Category.BOTTOM, Category.SHOES, False),
    (Category.MONO, Category.SHOES, False),
)

_SEPARATE_ROLES = (Category.TOP, Category.BOTTOM, Category.SHOES)


@dataclass
class OutfitCandidate:
    """One assembled outfit (or single item) with its composite score."""

    items: Dict[Category, CatalogItem] = field(default_factory=dict)
    score: float = 0.0

    @property
    def signature(self) -> Tuple[str, ...]:
        """Sorted item ids; two candidates with the same items are duplicates."""
        return tuple(sorted(item.id for item in self.items.values()))

    def ordered_items(self) -> Iterator[Tuple[Category, CatalogItem]]:
        for role in ROLE_ORDER:
            item = self.items.get(role)
            if item is not None:
                yield role, item

    def to_dict(self) -> dict:
        return {
            "score": round(self.score, 4),
            "items": [
                {
                    "role": role.value,
                    "id": item.id,
                    "image_path": item.image_path,
                    "name": item.name,
                }
                for role, item in self.ordered_items()
            ],
        }


class OutfitAssembler:
    """Builds and scores ``OutfitCandidate`` objects from role shortlists."""

    def __init__(
        self,
        scorer: Optional[ItemScorer] = None,
        pair_weights: Optional[PairWeights] = None,
        jitter: float = 0.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.scorer = scorer or ItemScorer()
        self.pair_weights = pair_weights or PairWeights()
        self.jitter = max(0.0, jitter)
        self.rng = rng or random.Random()

    def composite_score(
        self,
        items: Mapping[Category, CatalogItem],
        weights: ContextWeights,
        item_scores: Optional[Mapping[str, float]] = None,
    ) -> float:
        """Item scores plus pairwise terms. Deterministic (no jitter)."""
        total = 0.0
        for item in items.values():
            if item_scores is not None and item.id in item_scores:
                total += item_scores[item.id]
            else:
                total += self.scorer.score(item, weights)

        for first, second, include_fit in SCORED_PAIRS:
            a, b = items.get(first), items.get(second)
            if a is None or b is None:
                continue
            total += pair_score(
                a, b, weights.sport_context,
                include_fit=include_fit, weights=self.pair_weights,
            )
        return total

    def _perturb(self, score: float) -> float:
        if self.jitter <= 0:
            return score
        return score + self.rng.uniform(-self.jitter, self.jitter)

    def assemble(
        self,
        intent: PromptIntent,
        candidates_by_role: Mapping[Category, Sequence[CatalogItem]],
        weights: ContextWeights,
    ) -> List[OutfitCandidate]:
        roles = list(intent.roles)
        item_scores = {
            item.id: self.scorer.score(item, weights)
            for role in roles
            for item in candidates_by_role.get(role, ())
        }

        if not intent.is_outfit or len(roles) <= 1:
            combos = self._single_items(roles, candidates_by_role)
        elif Category.MONO in roles:
            combos = self._mono_outfits(roles, candidates_by_role)
        else:
            combos = self._separates_outfits(roles, candidates_by_role)

        outfits = [
            OutfitCandidate(
                items=combo,
                score=self._perturb(self.composite_score(combo, weights, item_scores)),
            )
            for combo in combos
        ]
        logger.debug("Assembled candidates", roles=[r.value for r in roles], count=len(outfits))
        return outfits

    @staticmethod
    def _single_items(roles, candidates_by_role) -> List[Dict[Category, CatalogItem]]:
        return [
            {role: item}
            for role in roles
            for item in candidates_by_role.get(role, ())
        ]

    @staticmethod
    def _mono_outfits(roles, candidates_by_role) -> List[Dict[Category, CatalogItem]]:
        monos = candidates_by_role.get(Category.MONO, ())
        shoes = candidates_by_role.get(Category.SHOES, ()) if Category.SHOES in roles else ()
        if shoes:
            return [
                {Category.MONO: mono, Category.SHOES: shoe}
                for mono in monos
                for shoe in shoes
            ]
        return [{Category.MONO: mono} for mono in monos]

    @staticmethod
    def _separates_outfits(roles, candidates_by_role) -> List[Dict[Category, CatalogItem]]:
        wanted = [r for r in _SEPARATE_ROLES if r in roles]
        if Category.SHOES in wanted and not candidates_by_role.get(Category.SHOES):
            wanted.remove(Category.SHOES)

        pools = [candidates_by_role.get(role, ()) for role in wanted]
        if not wanted or any(not pool for pool in pools):
            return []
        return [
            dict(zip(wanted, combo))
            for combo in itertools.product(*pools)
        ]
