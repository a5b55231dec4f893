"""
Structured prompt intent.

``PromptIntent`` is what both the LLM planner and the heuristic parser
produce. Its ``before`` validators are the sanitization layer for planner
output: values outside the closed vocabularies are dropped from lists and
turned into ``None`` for scalars, so downstream code only ever sees enum
members.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.constants import (
    Category,
    Colour,
    FitPreference,
    OutfitForm,
    OutfitMode,
    Sport,
    TargetGender,
    Vibe,
    parse_enum,
)
from core.utils import unique


MAX_VIBE_TAGS = 3


def _as_list(v) -> list:
    if v is None:
        return []
    if isinstance(v, (str, bytes)) or not hasattr(v, "__iter__"):
        return [v]
    return list(v)


def _enum_members(enum_cls, v) -> list:
    return unique(m for m in (parse_enum(enum_cls, x) for x in _as_list(v)) if m is not None)


def _clean_strings(v) -> List[str]:
    out = []
    for x in _as_list(v):
        if isinstance(x, str) and x.strip():
            out.append(x.strip())
    return unique(out)


class PromptIntent(BaseModel):
    """
    What the user asked for, in closed-vocabulary terms.

    Scalar fields may be None when they came from the planner and it left them
    out; ``intent.resolver.merge_intents`` fills them from the heuristic
    intent, so a resolved intent always has them set.
    """
    model_config = ConfigDict(extra="ignore")

    outfit_mode: Optional[OutfitMode] = Field(
        default=None, description="'outfit' for multi-role looks, 'single' for one garment"
    )
    requested_form: Optional[OutfitForm] = Field(
        default=None, description="Which roles the look is made of"
    )
    required_categories: List[Category] = Field(
        default_factory=list, description="Roles that must be filled (each at most once)"
    )
    optional_categories: List[Category] = Field(
        default_factory=list, description="Roles the user would accept but did not require"
    )
    target_gender: Optional[TargetGender] = Field(
        default=None, description="Gender filter; 'any' disables filtering"
    )
    vibe_tags: List[Vibe] = Field(default_factory=list, description="Up to three style vibes")
    colour_hints: List[Colour] = Field(default_factory=list, description="Requested colours")
    brand_focus: List[str] = Field(default_factory=list, description="Brand names mentioned")
    team_focus: List[str] = Field(default_factory=list, description="Sports teams mentioned")
    sport_context: Optional[Sport] = Field(default=None, description="Sport the look is for")
    fit_preference: Optional[FitPreference] = Field(
        default=None, description="Requested silhouette; None means no preference"
    )
    specific_items: List[str] = Field(
        default_factory=list, description="Named pieces, as phrased in the prompt"
    )

    # ------------------------------------------------------------------
    # Sanitization
    # ------------------------------------------------------------------

    @field_validator("outfit_mode", mode="before")
    @classmethod
    def parse_outfit_mode(cls, v):
        return parse_enum(OutfitMode, v)

    @field_validator("requested_form", mode="before")
    @classmethod
    def parse_requested_form(cls, v):
        return parse_enum(OutfitForm, v)

    @field_validator("target_gender", mode="before")
    @classmethod
    def parse_target_gender(cls, v):
        return parse_enum(TargetGender, v)

    @field_validator("sport_context", mode="before")
    @classmethod
    def parse_sport_context(cls, v):
        return parse_enum(Sport, v)

    @field_validator("fit_preference", mode="before")
    @classmethod
    def parse_fit_preference(cls, v):
        return parse_enum(FitPreference, v)

    @field_validator("required_categories", "optional_categories", mode="before")
    @classmethod
    def parse_categories(cls, v):
        return _enum_members(Category, v)

    @field_validator("vibe_tags", mode="before")
    @classmethod
    def parse_vibe_tags(cls, v):
        return _enum_members(Vibe, v)[:MAX_VIBE_TAGS]

    @field_validator("colour_hints", mode="before")
    @classmethod
    def parse_colour_hints(cls, v):
        return _enum_members(Colour, v)

    @field_validator("brand_focus", "team_focus", "specific_items", mode="before")
    @classmethod
    def parse_free_text(cls, v):
        return _clean_strings(v)

    # ------------------------------------------------------------------
    # Convenience
    # ------------------------------------------------------------------

    @property
    def is_outfit(self) -> bool:
        return self.outfit_mode is OutfitMode.OUTFIT

    @property
    def roles(self) -> Tuple[Category, ...]:
        """Required roles, de-duplicated in request order."""
        return tuple(unique(self.required_categories))

    @property
    def effective_sport(self) -> Sport:
        return self.sport_context or Sport.NONE

    @property
    def effective_gender(self) -> TargetGender:
        return self.target_gender or TargetGender.ANY
