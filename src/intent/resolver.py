"""
Intent resolution: planner output repaired with the heuristic intent.

The heuristic intent is always computed. The planner intent, when there is
one, wins on content (brands, teams, named items, vibes) but the heuristic
repairs its shape: missing scalars, missing categories, and outfits the
planner under-specified.
"""

from typing import Optional

from config.constants import FORM_CATEGORIES, form_for_categories
from core.logging import get_logger
from intent.heuristic import HeuristicIntentParser
from intent.models import PromptIntent
from intent.planner import IntentPlanner

logger = get_logger(__name__)


_SCALAR_FIELDS = ("outfit_mode", "requested_form", "target_gender", "sport_context")


def merge_intents(oracle: Optional[PromptIntent], fallback: PromptIntent) -> PromptIntent:
    """
    Combine a planner intent with the heuristic intent.

    Rules, in order:
    1. No planner intent: the heuristic intent as-is.
    2. No required categories from the planner: take the heuristic's
       categories, and its form and mode where the planner left them out.
    3. Both say "outfit" and the heuristic found strictly more roles: take
       the heuristic's categories and form.
    4. Any scalar still missing is filled from the heuristic. A form that
       disagrees with the final categories is re-derived from them.

    Neither input is modified.
    """
    if oracle is None:
        return fallback.model_copy(deep=True)

    updates = {}

    if not oracle.required_categories:
        updates["required_categories"] = list(fallback.required_categories)
        if oracle.requested_form is None:
            updates["requested_form"] = fallback.requested_form
        if oracle.outfit_mode is None:
            updates["outfit_mode"] = fallback.outfit_mode
    elif (
        oracle.is_outfit
        and fallback.is_outfit
        and len(oracle.roles) < len(fallback.roles)
    ):
        updates["required_categories"] = list(fallback.required_categories)
        updates["requested_form"] = fallback.requested_form

    for name in _SCALAR_FIELDS:
        if updates.get(name, getattr(oracle, name)) is None:
            updates[name] = getattr(fallback, name)

    merged = oracle.model_copy(update=updates, deep=True)

    derived = form_for_categories(merged.roles)
    if derived is not None and (
        merged.requested_form is None
        or frozenset(FORM_CATEGORIES[merged.requested_form]) != frozenset(merged.roles)
    ):
        merged = merged.model_copy(update={"requested_form": derived})

    return merged


class IntentResolver:
    """Runs the heuristic parser and the planner, then merges."""

    def __init__(
        self,
        planner: Optional[IntentPlanner] = None,
        parser: Optional[HeuristicIntentParser] = None,
    ):
        self.planner = planner
        self.parser = parser or HeuristicIntentParser()

    def resolve(self, prompt: str, gender_pref: str = "any") -> PromptIntent:
        fallback = self.parser.parse(prompt, gender_pref)
        oracle = self.planner.plan(prompt, gender_pref) if self.planner else None

        intent = merge_intents(oracle, fallback)
        logger.info(
            "Intent resolved",
            source="planner" if oracle is not None else "heuristic",
            outfit_mode=intent.outfit_mode.value,
            requested_form=intent.requested_form.value,
            roles=[c.value for c in intent.roles],
            sport_context=intent.sport_context.value,
            target_gender=intent.target_gender.value,
        )
        return intent
