"""
Command-line entry point.

    outfit-recommend --index index.json --prompt "baggy black streetwear fit" --gender-pref men

Recommendations go to stdout as ``<role> <image_path>`` lines, one blank
line between outfits. Logs go to stderr. Exit status is 0 when at least
one result was produced, 1 otherwise.
"""

import argparse
import sys
from typing import List, Optional

from catalog.loader import CatalogLoadError, load_catalog
from config.settings import get_settings
from core.logging import configure_logging, get_logger
from intent.planner import IntentPlanner
from intent.resolver import IntentResolver
from recs.pipeline import (
    NoRecommendationsError,
    OutfitRecommender,
    RecommendOptions,
    format_outfits,
)

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="outfit-recommend",
        description="Recommend outfits from a tagged catalog for a style prompt",
    )
    parser.add_argument(
        "--index", "--catalog", dest="index", required=True,
        help="Path to the catalog JSON produced by the tagger",
    )
    parser.add_argument("--prompt", required=True, help="Free-text style request")
    parser.add_argument(
        "--gender-pref", "--gender_pref", dest="gender_pref",
        choices=["any", "men", "women"], default="any",
        help="Gender filter (default: any)",
    )
    parser.add_argument(
        "--pool-size", "--pool_size", dest="pool_size", type=int, default=settings.pool_size,
        help=f"Number of results (default: {settings.pool_size})",
    )
    parser.add_argument(
        "--per-role-limit", "--per_role_limit", dest="per_role_limit", type=int,
        default=settings.per_role_limit,
        help=f"Shortlist size per role (default: {settings.per_role_limit})",
    )
    parser.add_argument(
        "--epsilon", type=float, default=settings.epsilon,
        help=f"Diversity factor, clamped to 0-0.5 (default: {settings.epsilon})",
    )
    parser.add_argument(
        "--jitter", type=float, default=settings.jitter,
        help=f"Score jitter range (default: {settings.jitter})",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.random_seed,
        help="Random seed for reproducible output",
    )
    parser.add_argument(
        "--model", default=settings.intent_planner_model,
        help=f"OpenAI model for intent parsing (default: {settings.intent_planner_model})",
    )
    parser.add_argument(
        "--no-llm", action="store_true",
        help="Skip the LLM planner and use keyword heuristics only",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logs on stderr")
    return parser


def build_recommender(args: argparse.Namespace) -> OutfitRecommender:
    settings = get_settings()

    planner = None
    if not args.no_llm:
        planner = IntentPlanner(settings.model_copy(update={"intent_planner_model": args.model}))

    options = RecommendOptions.from_settings(
        settings,
        pool_size=args.pool_size,
        per_role_limit=args.per_role_limit,
        epsilon=args.epsilon,
        jitter=args.jitter,
        seed=args.seed,
    )
    return OutfitRecommender(resolver=IntentResolver(planner=planner), options=options)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        log_level="DEBUG" if args.debug else "WARNING",
        include_timestamp=False,
        stream=sys.stderr,
    )

    try:
        catalog = load_catalog(args.index)
    except CatalogLoadError as e:
        logger.error("Could not load catalog", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    recommender = build_recommender(args)
    try:
        result = recommender.recommend(catalog, args.prompt, args.gender_pref)
    except NoRecommendationsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(format_outfits(result.outfits))
    return 0


if __name__ == "__main__":
    sys.exit(main())
