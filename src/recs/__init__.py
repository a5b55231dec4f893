"""
Recommendation module: candidate selection, outfit assembly, diversity
sampling and the end-to-end ``OutfitRecommender`` pipeline.
"""

from recs.assembler import OutfitAssembler, OutfitCandidate
from recs.candidate_selection import CandidateSelector
from recs.pipeline import (
    NoRecommendationsError,
    OutfitRecommender,
    RecommendationResult,
    RecommendOptions,
    format_outfits,
)
from recs.sampler import DiversitySampler

__all__ = [
    "CandidateSelector",
    "DiversitySampler",
    "NoRecommendationsError",
    "OutfitAssembler",
    "OutfitCandidate",
    "OutfitRecommender",
    "RecommendOptions",
    "RecommendationResult",
    "format_outfits",
]
