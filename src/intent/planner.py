"""
LLM-based intent planner.

Turns a free-text style prompt into a ``PromptIntent`` with one OpenAI chat
completion. The planner is best-effort: it returns None when

- no API key is configured or the feature flag is off
- the call fails or times out
- the response is empty, has no JSON object, or does not validate

and the caller falls back to ``HeuristicIntentParser``. There is no retry.
"""

import json
import threading
import time
from typing import Any, Dict, Optional

from pydantic import ValidationError

from config.constants import (
    Category,
    Colour,
    Fit,
    OutfitForm,
    Sport,
    Vibe,
)
from config.settings import Settings, get_settings
from core.logging import get_logger
from intent.models import PromptIntent

logger = get_logger(__name__)


def _choices(enum_cls) -> str:
    return " | ".join(f'"{m.value}"' for m in enum_cls)


# =============================================================================
# System Prompt
# =============================================================================

_SYSTEM_PROMPT = f"""You turn a shopper's outfit request into a JSON object for a fashion outfit recommender.

Return exactly one JSON object with these keys and nothing else (no prose, no markdown):

- outfit_mode: "outfit" | "single"
- requested_form: {_choices(OutfitForm)}
- required_categories: list of {_choices(Category)}
- optional_categories: list of the same values
- target_gender: "men" | "women" | "unisex" | "any"
- vibe_tags: list of {_choices(Vibe)} (at most 3)
- colour_hints: list of {_choices(Colour)}
- brand_focus: list of lowercase brand names mentioned
- team_focus: list of lowercase sports teams or clubs mentioned
- sport_context: {_choices(Sport)}
- fit_preference: {_choices(Fit)} | "mixed" | null
- specific_items: list of named pieces, copied as written in the prompt

GUIDELINES:

1. Mode and form
   - Words like "fit", "outfit" or "look", or several garment types, mean outfit_mode="outfit".
   - A request for one kind of garment ("just sneakers", "a hoodie") means outfit_mode="single"
     with the matching *_only form.
   - Dresses, gowns and jumpsuits are "mono". A dress look with shoes is "mono_and_shoes".
   - required_categories must list the roles of requested_form.

2. Sport
   - "football" for football/soccer kits, matches or clubs; "basketball" for basketball or NBA;
     "gym" for workout or training clothes; "running" and "tennis" only when named.
   - Use "none" for ordinary fashion requests.

3. Vibes
   - streetwear: hoodies, cargos, graphic tees, hype sneakers, hip-hop looks.
   - edgy: leather, punk, goth, grunge, all-black.
   - minimal: clean basics, essentials, neutral palettes, capsule wardrobes.
   - sporty: jerseys, track pants, athletic looks.
   - y2k, preppy, vintage, chic, techwear when they naturally fit.

4. Fit
   - "oversized" for baggy/boxy/huge, "slim" for skinny/tight/fitted, "cropped" for cropped pieces.
   - "mixed" when the user wants contrasting silhouettes; null when fit is not mentioned.

5. Names
   - Only put brands, teams and specific items that literally appear in the prompt.

Use the gender hint for target_gender unless the prompt clearly says otherwise."""


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """
    Parse the JSON object spanning the first "{" to the last "}" of ``text``.

    Models sometimes wrap the object in prose or code fences; this strips
    that. Returns None when there is no brace pair or the slice is not a
    JSON object.
    """
    if not text:
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


# =============================================================================
# Intent Planner
# =============================================================================

class IntentPlanner:
    """LLM intent planner using the OpenAI chat completions API."""

    def __init__(self, settings: Optional[Settings] = None, client=None):
        settings = settings or get_settings()
        self._client = client
        self._client_lock = threading.Lock()
        self._api_key = settings.openai_api_key
        self._model = settings.intent_planner_model
        self._timeout = settings.intent_planner_timeout_seconds
        self._enabled = settings.intent_planner_enabled and (bool(self._api_key) or client is not None)

    @property
    def client(self):
        """Lazy-load OpenAI client."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    from openai import OpenAI
                    self._client = OpenAI(
                        api_key=self._api_key,
                        timeout=self._timeout,
                    )
        return self._client

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def model(self) -> str:
        return self._model

    def plan(self, prompt: str, gender_pref: str = "any") -> Optional[PromptIntent]:
        """
        Ask the model for a structured intent.

        Returns None if the planner is disabled or anything goes wrong.
        """
        if not self._enabled:
            logger.debug("Intent planner disabled (no API key or feature flag off)")
            return None

        user_message = f'User prompt: "{prompt}"\nGender preference hint: "{gender_pref}"'

        t_start = time.time()
        try:
            response = self.client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": user_message},
                ],
                temperature=0.0,
                max_tokens=600,
                response_format={"type": "json_object"},
            )
            raw = response.choices[0].message.content
        except Exception as e:
            latency_ms = int((time.time() - t_start) * 1000)
            logger.warning(
                "Intent planner failed, falling back to heuristics",
                error=str(e),
                latency_ms=latency_ms,
            )
            return None

        if not raw or not raw.strip():
            logger.warning("Intent planner returned empty response")
            return None

        data = extract_json_object(raw)
        if data is None:
            logger.warning("Intent planner returned no JSON object", raw=raw[:200])
            return None

        try:
            intent = PromptIntent.model_validate(data)
        except ValidationError as e:
            logger.warning("Intent planner returned an invalid intent", errors=e.error_count())
            return None

        latency_ms = int((time.time() - t_start) * 1000)
        logger.info(
            "Intent planner generated intent",
            model=self._model,
            outfit_mode=intent.outfit_mode.value if intent.outfit_mode else None,
            required_categories=[c.value for c in intent.required_categories],
            sport_context=intent.sport_context.value if intent.sport_context else None,
            brands=intent.brand_focus,
            teams=intent.team_focus,
            latency_ms=latency_ms,
        )
        return intent


# =============================================================================
# Singleton
# =============================================================================

_planner: Optional[IntentPlanner] = None
_planner_lock = threading.Lock()


def get_intent_planner() -> IntentPlanner:
    """Get or create the global intent planner."""
    global _planner
    if _planner is None:
        with _planner_lock:
            if _planner is None:
                _planner = IntentPlanner()
    return _planner
