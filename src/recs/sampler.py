"""
Epsilon-greedy diversity sampling over the top-scoring band.

Mostly takes the best remaining candidate; with probability epsilon draws
one from the band, weighted by score shifted above the band minimum. Every
draw leaves the band whether or not it is accepted, so the loop always ends.
"""

import random
from typing import List, Optional, Sequence

from config.settings import MAX_EPSILON
from recs.assembler import OutfitCandidate

MIN_DRAW_WEIGHT = 1e-4
DRAW_WEIGHT_OFFSET = 1e-3


def clamp_epsilon(epsilon: float) -> float:
    return max(0.0, min(MAX_EPSILON, epsilon))


class DiversitySampler:
    def __init__(self, epsilon: float = 0.15, rng: Optional[random.Random] = None) -> None:
        self.epsilon = clamp_epsilon(epsilon)
        self.rng = rng or random.Random()

    def _draw_index(self, band: List[OutfitCandidate]) -> int:
        floor = band[-1].score
        weights = [
            max(MIN_DRAW_WEIGHT, c.score - floor + DRAW_WEIGHT_OFFSET)
            for c in band
        ]
        return self.rng.choices(range(len(band)), weights=weights, k=1)[0]

    def sample(self, candidates: Sequence[OutfitCandidate], count: int) -> List[OutfitCandidate]:
        """
        Pick up to ``count`` candidates with distinct item signatures.

        Returns fewer than ``count`` when the band runs out; never more than
        the band size.
        """
        if count <= 0 or not candidates:
            return []

        band = sorted(candidates, key=lambda c: c.score, reverse=True)[:max(3 * count, count)]

        chosen: List[OutfitCandidate] = []
        seen = set()
        while len(chosen) < count and band:
            if self.epsilon > 0 and self.rng.random() < self.epsilon:
                index = self._draw_index(band)
            else:
                index = 0
            pick = band.pop(index)

            if pick.signature in seen:
                continue
            seen.add(pick.signature)
            chosen.append(pick)

        return chosen
