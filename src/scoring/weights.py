"""
Context weights: a ``PromptIntent`` translated into numbers.

Every map covers every member of its closed enum, so lookups never miss and
there is no such thing as an unknown key. Weights are built once per request
and are read-only afterwards (``MappingProxyType`` over a private dict).

Usage::

    from scoring.weights import build_weights

    weights = build_weights(intent)
    weights.colour[Colour.BLACK]   # 0.3 when no colours were requested
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from config.constants import Colour, Fit, Sport, Vibe
from core.utils import normalize_text, normalize_tokens, unique
from intent.models import PromptIntent


@dataclass(frozen=True)
class WeightConfig:
    """
    Tunable constants for weight construction.

    The neutral baseline and the no-preference fit bias were tuned by hand;
    they are defaults, not fixed rules.
    """

    hinted_colour: float = 1.0
    neutral_baseline: Mapping[Colour, float] = field(default_factory=lambda: MappingProxyType({
        Colour.BLACK: 0.3,
        Colour.WHITE: 0.3,
        Colour.GREY: 0.3,
        Colour.BEIGE: 0.2,
    }))

    tagged_vibe: float = 1.0

    preferred_fit: float = 1.0
    other_fit: float = 0.1
    default_fit_bias: Mapping[Fit, float] = field(default_factory=lambda: MappingProxyType({
        Fit.OVERSIZED: 0.4,
        Fit.REGULAR: 0.9,
        Fit.SLIM: 0.4,
        Fit.CROPPED: 0.2,
    }))

    context_sport: float = 1.0


DEFAULT_WEIGHT_CONFIG = WeightConfig()


@dataclass(frozen=True)
class ContextWeights:
    """Per-request scoring weights. Immutable."""

    colour: Mapping[Colour, float]
    vibe: Mapping[Vibe, float]
    fit: Mapping[Fit, float]
    sport: Mapping[Sport, float]
    brand_tokens: Tuple[str, ...] = ()
    team_tokens: Tuple[str, ...] = ()
    specific_tokens: Tuple[str, ...] = ()
    sport_context: Sport = Sport.NONE

    @property
    def total_colour_weight(self) -> float:
        return sum(self.colour.values())

    @property
    def has_vibe_preference(self) -> bool:
        return any(w > 0 for w in self.vibe.values())

    def to_dict(self) -> dict:
        """Plain-JSON view for debug logs and the API."""
        return {
            "colour": {k.value: v for k, v in self.colour.items() if v},
            "vibe": {k.value: v for k, v in self.vibe.items() if v},
            "fit": {k.value: v for k, v in self.fit.items()},
            "sport": {k.value: v for k, v in self.sport.items() if v},
            "brand_tokens": list(self.brand_tokens),
            "team_tokens": list(self.team_tokens),
            "specific_tokens": list(self.specific_tokens),
            "sport_context": self.sport_context.value,
        }


def _zeroed(enum_cls) -> Dict:
    return {member: 0.0 for member in enum_cls}


def _frozen(values: Dict) -> Mapping:
    return MappingProxyType(dict(values))


def split_specific_tokens(phrases: Iterable[str]) -> Tuple[str, ...]:
    """Normalize phrases and split them into unique words, first-seen order."""
    words = []
    for phrase in phrases:
        norm = normalize_text(phrase)
        words.extend(w for w in norm.split(" ") if w)
    return tuple(unique(words))


def build_weights(
    intent: PromptIntent,
    config: Optional[WeightConfig] = None,
) -> ContextWeights:
    """Build the weight maps and token lists for ``intent``. Pure."""
    config = config or DEFAULT_WEIGHT_CONFIG

    colour = _zeroed(Colour)
    for hint in intent.colour_hints:
        colour[hint] += config.hinted_colour
    if not intent.colour_hints:
        for neutral, baseline in config.neutral_baseline.items():
            colour[neutral] += baseline

    vibe = _zeroed(Vibe)
    for tag in intent.vibe_tags:
        vibe[tag] += config.tagged_vibe

    preferred = intent.fit_preference.as_fit() if intent.fit_preference else None
    if preferred is not None:
        fit = {f: config.other_fit for f in Fit}
        fit[preferred] = config.preferred_fit
    else:
        fit = {f: config.default_fit_bias.get(f, 0.0) for f in Fit}

    sport_context = intent.effective_sport
    sport = _zeroed(Sport)
    if sport_context is not Sport.NONE:
        sport[sport_context] = config.context_sport

    return ContextWeights(
        colour=_frozen(colour),
        vibe=_frozen(vibe),
        fit=_frozen(fit),
        sport=_frozen(sport),
        brand_tokens=tuple(unique(normalize_tokens(intent.brand_focus))),
        team_tokens=tuple(unique(normalize_tokens(intent.team_focus))),
        specific_tokens=split_specific_tokens(intent.specific_items),
        sport_context=sport_context,
    )


class WeightBuilder:
    """Callable wrapper around ``build_weights`` with a fixed config."""

    def __init__(self, config: Optional[WeightConfig] = None) -> None:
        self.config = config or DEFAULT_WEIGHT_CONFIG

    def build(self, intent: PromptIntent) -> ContextWeights:
        return build_weights(intent, self.config)
