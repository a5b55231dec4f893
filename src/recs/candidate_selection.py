"""
Candidate Selection Module

Builds the per-role shortlist that outfit assembly combines.

Pipeline (per role):
1. Restrict the catalog to the role
2. Sport narrowing: with a sport context, keep sport/team-relevant items
   if there are any
3. Staged relaxation: try filter stages from strictest to loosest and keep
   the first non-empty pool
4. Specific-item narrowing: keep the items matching the most named-item
   tokens (when any token matches at all)
5. Fallback: the whole role pool if every stage came back empty
6. Score with ItemScorer, stable sort descending, truncate

Each stage is a tuple of ``CandidateFilter`` objects applied in a fixed
order (gender, sport, brand, team). Every filter is a per-item keep/drop
predicate, so a stage that uses a subset of the previous stage's filters
can only widen the pool.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from catalog.models import CatalogItem
from config.constants import Category, Gender, Sport, TargetGender
from core.logging import get_logger
from core.utils import count_token_hits, fuzzy_contains
from intent.models import PromptIntent
from scoring.item_scorer import ItemScorer, specific_match_count
from scoring.weights import ContextWeights

logger = get_logger(__name__)


# =============================================================================
# Match predicates
# =============================================================================

def is_gender_compatible(item: CatalogItem, target: Optional[TargetGender]) -> bool:
    if target is None or target is TargetGender.ANY:
        return True
    if item.gender is Gender.UNISEX:
        return True
    return item.gender.value == target.value


def has_brand_match(item: CatalogItem, brand_tokens: Sequence[str]) -> bool:
    if not brand_tokens:
        return False
    text = f"{item.name_text} {item.entity_text}"
    return count_token_hits(text, brand_tokens) > 0


def has_team_match(item: CatalogItem, team_tokens: Sequence[str]) -> bool:
    if not team_tokens:
        return False
    known = list(item.teams) + item.team_entities
    text = item.team_text
    for token in team_tokens:
        if not token:
            continue
        if any(fuzzy_contains(name, token) for name in known) or token in text:
            return True
    return False


def is_sport_relevant(item: CatalogItem, sport_context: Sport, team_tokens: Sequence[str]) -> bool:
    """Item plays the requested sport, or carries a requested team."""
    if sport_context is Sport.NONE:
        return False
    return item.sport is sport_context or has_team_match(item, team_tokens)


# =============================================================================
# Filters
# =============================================================================

class CandidateFilter:
    """One narrowing step. Subclasses implement ``apply``."""

    name = "filter"

    def apply(
        self,
        pool: List[CatalogItem],
        intent: PromptIntent,
        weights: ContextWeights,
    ) -> List[CatalogItem]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class GenderFilter(CandidateFilter):
    name = "gender"

    def apply(self, pool, intent, weights):
        return [it for it in pool if is_gender_compatible(it, intent.target_gender)]


class SportRelevanceFilter(CandidateFilter):
    """
    With a sport context: only sport/team-relevant items.
    Without one: non-sport items, unless there are none.
    """

    name = "sport"

    def apply(self, pool, intent, weights):
        if weights.sport_context is not Sport.NONE:
            return [
                it for it in pool
                if is_sport_relevant(it, weights.sport_context, weights.team_tokens)
            ]
        non_sport = [it for it in pool if not it.is_sport_item]
        return non_sport or pool


class BrandMatchFilter(CandidateFilter):
    """Requires a brand hit. Passes everything through when no brand was asked for."""

    name = "brand"

    def apply(self, pool, intent, weights):
        if not weights.brand_tokens:
            return pool
        return [it for it in pool if has_brand_match(it, weights.brand_tokens)]


class TeamMatchFilter(CandidateFilter):
    """Requires a team hit. Passes everything through when no team was asked for."""

    name = "team"

    def apply(self, pool, intent, weights):
        if not weights.team_tokens:
            return pool
        return [it for it in pool if has_team_match(it, weights.team_tokens)]


@dataclass(frozen=True)
class RelaxationStage:
    name: str
    filters: Tuple[CandidateFilter, ...]

    def apply(
        self,
        pool: Iterable[CatalogItem],
        intent: PromptIntent,
        weights: ContextWeights,
    ) -> List[CatalogItem]:
        result = list(pool)
        for candidate_filter in self.filters:
            if not result:
                break
            result = candidate_filter.apply(result, intent, weights)
        return result


_GENDER = GenderFilter()
_SPORT = SportRelevanceFilter()
_BRAND = BrandMatchFilter()
_TEAM = TeamMatchFilter()

# Strictest first
DEFAULT_STAGES: Tuple[RelaxationStage, ...] = (
    RelaxationStage("gender_sport_brand_team", (_GENDER, _SPORT, _BRAND, _TEAM)),
    RelaxationStage("gender_sport_team", (_GENDER, _SPORT, _TEAM)),
    RelaxationStage("gender_sport", (_GENDER, _SPORT)),
    RelaxationStage("gender_only", (_GENDER,)),
)


def narrow_to_specific(pool: List[CatalogItem], weights: ContextWeights) -> List[CatalogItem]:
    """Keep the items tying for the most named-item token hits, if any hit."""
    if not weights.specific_tokens or not pool:
        return pool
    counts = [specific_match_count(it, weights) for it in pool]
    best = max(counts)
    if best <= 0:
        return pool
    return [it for it, count in zip(pool, counts) if count == best]


# =============================================================================
# Selector
# =============================================================================

class CandidateSelector:
    """
    Per-role shortlist builder.

    Never returns an empty list for a role that has catalog items.
    """

    def __init__(
        self,
        per_role_limit: int = 12,
        scorer: Optional[ItemScorer] = None,
        stages: Sequence[RelaxationStage] = DEFAULT_STAGES,
    ) -> None:
        self.per_role_limit = max(1, per_role_limit)
        self.scorer = scorer or ItemScorer()
        self.stages = tuple(stages)

    def role_pool(
        self,
        catalog: Iterable[CatalogItem],
        role: Category,
        weights: ContextWeights,
    ) -> List[CatalogItem]:
        """Role restriction plus sport narrowing (steps 1-2)."""
        base = [it for it in catalog if it.category is role]
        if weights.sport_context is not Sport.NONE:
            relevant = [
                it for it in base
                if is_sport_relevant(it, weights.sport_context, weights.team_tokens)
            ]
            if relevant:
                base = relevant
        return base

    def relax(
        self,
        pool: List[CatalogItem],
        intent: PromptIntent,
        weights: ContextWeights,
    ) -> Tuple[List[CatalogItem], Optional[str]]:
        """Return the first non-empty stage pool and the stage name."""
        for stage in self.stages:
            result = stage.apply(pool, intent, weights)
            if result:
                return result, stage.name
            logger.debug("Relaxation stage empty", stage=stage.name)
        return [], None

    def select(
        self,
        catalog: Sequence[CatalogItem],
        role: Category,
        intent: PromptIntent,
        weights: ContextWeights,
    ) -> List[CatalogItem]:
        role_items = [it for it in catalog if it.category is role]
        if not role_items:
            logger.debug("No catalog items for role", role=role.value)
            return []

        base = self.role_pool(role_items, role, weights)
        pool, stage = self.relax(base, intent, weights)

        if pool:
            pool = narrow_to_specific(pool, weights)
        else:
            stage = "fallback"
            pool = role_items
            logger.debug("All relaxation stages empty, using whole role pool", role=role.value)

        ranked = sorted(pool, key=lambda it: self.scorer.score(it, weights), reverse=True)
        selected = ranked[:self.per_role_limit]

        logger.debug(
            "Selected candidates",
            role=role.value,
            stage=stage,
            pool=len(pool),
            selected=len(selected),
        )
        return selected
