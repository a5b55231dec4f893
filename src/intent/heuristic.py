"""
Keyword-based prompt parser.

Deterministic fallback used whenever the LLM planner is disabled or fails,
and as the repair source for incomplete planner output. Matching runs over
the normalized prompt. Most tables use plain substring matching ("fit"
also fires inside "outfit"); colour words are matched as whole tokens so
"red" does not fire inside "tailored".
"""

import re
from typing import Dict, List, Tuple

from config.constants import (
    FORM_CATEGORIES,
    Colour,
    FitPreference,
    OutfitForm,
    OutfitMode,
    Sport,
    TargetGender,
    Vibe,
    parse_enum,
)
from core.logging import get_logger
from core.utils import normalize_text, unique
from intent.models import MAX_VIBE_TAGS, PromptIntent

logger = get_logger(__name__)


# ============================================================================
# Keyword tables
# ============================================================================

OUTFIT_KEYWORDS = ("fit", "outfit", "look", "top and bottom", "top bottom")

SHOE_KEYWORDS = ("shoes", "boots", "sneakers", "trainers")
BOTTOM_KEYWORDS = ("pants", "jeans", "trousers", "bottom")
MONO_KEYWORDS = ("dress", "gown")

# First match wins
SPORT_KEYWORDS: Tuple[Tuple[Sport, Tuple[str, ...]], ...] = (
    (Sport.FOOTBALL, ("football", "soccer", "kit", "matchday")),
    (Sport.BASKETBALL, ("basketball", "nba")),
    (Sport.GYM, ("gym", "workout", "training")),
    (Sport.RUNNING, ("running", "runner")),
    (Sport.TENNIS, ("tennis",)),
)

VIBE_KEYWORDS: Tuple[Tuple[Vibe, Tuple[str, ...]], ...] = (
    (Vibe.STREETWEAR, ("streetwear", "street", "trap", "hoodie", "cargo", "graphic", "hype")),
    (Vibe.EDGY, ("grunge", "goth", "rock", "punk", "dark", "leather")),
    (Vibe.MINIMAL, ("minimal", "clean", "basic", "essentials", "capsule", "neutral")),
    (Vibe.Y2K, ("y2k", "2000")),
    (Vibe.PREPPY, ("preppy", "college", "ivy", "varsity", "polo")),
    (Vibe.VINTAGE, ("vintage", "retro", "oldschool")),
    (Vibe.CHIC, ("chic", "elegant", "slip dress", "silk", "satin")),
)

# First match wins
FIT_KEYWORDS: Tuple[Tuple[FitPreference, Tuple[str, ...]], ...] = (
    (FitPreference.OVERSIZED, ("baggy", "oversized", "huge", "boxy")),
    (FitPreference.SLIM, ("skinny", "tight", "slim")),
    (FitPreference.CROPPED, ("cropped",)),
)

# Everyday colour words that are not palette names
COLOUR_SYNONYMS: Dict[str, Colour] = {
    "gray": Colour.GREY,
    "charcoal": Colour.GREY,
    "navy": Colour.BLUE,
    "cream": Colour.BEIGE,
    "tan": Colour.BEIGE,
    "khaki": Colour.BEIGE,
    "camel": Colour.BEIGE,
    "ivory": Colour.WHITE,
    "burgundy": Colour.RED,
    "maroon": Colour.RED,
    "crimson": Colour.RED,
    "olive": Colour.GREEN,
    "mustard": Colour.YELLOW,
    "chocolate": Colour.BROWN,
    "lilac": Colour.PURPLE,
    "lavender": Colour.PURPLE,
}

_TOKEN_RE = re.compile(r"[a-z0-9]+")


def _colour_hints(tokens: List[str]) -> List[Colour]:
    hints = []
    for token in tokens:
        colour = parse_enum(Colour, token) or COLOUR_SYNONYMS.get(token)
        if colour is not None:
            hints.append(colour)
    return unique(hints)


class HeuristicIntentParser:
    """Rule-based ``PromptIntent`` extraction. Never fails."""

    def parse(self, prompt: str, gender_pref: str = "any") -> PromptIntent:
        text = normalize_text(prompt)

        def has(*keywords: str) -> bool:
            return any(k in text for k in keywords)

        outfit_mode = OutfitMode.OUTFIT if has(*OUTFIT_KEYWORDS) else OutfitMode.SINGLE
        form = self._detect_form(outfit_mode, has)

        sport = Sport.NONE
        for candidate, keywords in SPORT_KEYWORDS:
            if has(*keywords):
                sport = candidate
                break

        vibes = [vibe for vibe, keywords in VIBE_KEYWORDS if has(*keywords)]
        if sport is not Sport.NONE:
            vibes.append(Vibe.SPORTY)

        fit = FitPreference.MIXED
        for candidate, keywords in FIT_KEYWORDS:
            if has(*keywords):
                fit = candidate
                break

        intent = PromptIntent(
            outfit_mode=outfit_mode,
            requested_form=form,
            required_categories=list(FORM_CATEGORIES[form]),
            target_gender=parse_enum(TargetGender, gender_pref) or TargetGender.ANY,
            vibe_tags=unique(vibes)[:MAX_VIBE_TAGS],
            colour_hints=_colour_hints(_TOKEN_RE.findall(text)),
            sport_context=sport,
            fit_preference=fit,
        )
        logger.debug(
            "Heuristic intent parsed",
            outfit_mode=intent.outfit_mode.value,
            requested_form=intent.requested_form.value,
            sport_context=intent.sport_context.value,
            vibes=[v.value for v in intent.vibe_tags],
        )
        return intent

    @staticmethod
    def _detect_form(outfit_mode: OutfitMode, has) -> OutfitForm:
        if outfit_mode is OutfitMode.SINGLE:
            if has(*SHOE_KEYWORDS):
                return OutfitForm.SHOES_ONLY
            if has(*BOTTOM_KEYWORDS):
                return OutfitForm.BOTTOM_ONLY
            if has(*MONO_KEYWORDS):
                return OutfitForm.MONO_ONLY
            return OutfitForm.TOP_ONLY

        if has(*MONO_KEYWORDS):
            if has(*SHOE_KEYWORDS):
                return OutfitForm.MONO_AND_SHOES
            return OutfitForm.MONO_ONLY
        return OutfitForm.TOP_BOTTOM_SHOES
