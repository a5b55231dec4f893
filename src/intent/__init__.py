"""
Intent module: turns a free-text prompt into a structured ``PromptIntent``.

Usage:
    from intent import IntentResolver, get_intent_planner

    resolver = IntentResolver(planner=get_intent_planner())
    intent = resolver.resolve("baggy streetwear fit", gender_pref="men")
"""

from intent.heuristic import HeuristicIntentParser
from intent.models import PromptIntent
from intent.planner import IntentPlanner, get_intent_planner
from intent.resolver import IntentResolver, merge_intents

__all__ = [
    "HeuristicIntentParser",
    "IntentPlanner",
    "IntentResolver",
    "PromptIntent",
    "get_intent_planner",
    "merge_intents",
]
