"""
Tests for outfit assembly and composite scoring.
"""

import random

import pytest

from config.constants import Category, Sport
from recs.assembler import OutfitAssembler, OutfitCandidate
from scoring.item_scorer import ItemScorer
from scoring.pair_scorer import pair_score
from scoring.weights import build_weights


def _by_role(catalog):
    out = {}
    for item in catalog:
        out.setdefault(item.category, []).append(item)
    return out


@pytest.fixture
def assembler():
    return OutfitAssembler()


class TestAssemble:

    def test_cross_product(self, assembler, streetwear_catalog, make_intent):
        intent = make_intent()
        outfits = assembler.assemble(intent, _by_role(streetwear_catalog), build_weights(intent))

        assert len(outfits) == 2 * 2 * 2
        assert all(set(o.items) == {Category.TOP, Category.BOTTOM, Category.SHOES} for o in outfits)
        assert len({o.signature for o in outfits}) == 8

    def test_shoes_dropped_when_missing(self, assembler, streetwear_catalog, make_intent):
        intent = make_intent()
        pools = _by_role(streetwear_catalog)
        pools[Category.SHOES] = []

        outfits = assembler.assemble(intent, pools, build_weights(intent))

        assert len(outfits) == 4
        assert all(set(o.items) == {Category.TOP, Category.BOTTOM} for o in outfits)

    def test_missing_bottom_gives_nothing(self, assembler, streetwear_catalog, make_intent):
        intent = make_intent()
        pools = _by_role(streetwear_catalog)
        del pools[Category.BOTTOM]

        assert assembler.assemble(intent, pools, build_weights(intent)) == []

    def test_single_mode(self, assembler, streetwear_catalog, make_intent):
        intent = make_intent(outfit_mode="single", requested_form="shoes_only",
                             required_categories=["shoes"])

        outfits = assembler.assemble(intent, _by_role(streetwear_catalog), build_weights(intent))

        assert sorted(o.signature for o in outfits) == [("heels",), ("sneaker",)]

    def test_mono_with_shoes(self, assembler, streetwear_catalog, make_intent):
        intent = make_intent(requested_form="mono_and_shoes", required_categories=["mono", "shoes"])

        outfits = assembler.assemble(intent, _by_role(streetwear_catalog), build_weights(intent))

        assert len(outfits) == 2
        assert all(set(o.items) == {Category.MONO, Category.SHOES} for o in outfits)

    def test_mono_without_shoes(self, assembler, streetwear_catalog, make_intent):
        intent = make_intent(requested_form="mono_and_shoes", required_categories=["mono", "shoes"])
        pools = _by_role(streetwear_catalog)
        pools[Category.SHOES] = []

        outfits = assembler.assemble(intent, pools, build_weights(intent))

        assert [o.signature for o in outfits] == [("slipdress",)]


class TestScoring:

    def test_composite_is_items_plus_pairs(self, assembler, streetwear_catalog, make_intent):
        intent = make_intent(vibe_tags=["streetwear"], colour_hints=["black"])
        weights = build_weights(intent)
        hoodie, cargos, sneaker = streetwear_catalog[0], streetwear_catalog[2], streetwear_catalog[4]
        scorer = ItemScorer()

        expected = (
            scorer.score(hoodie, weights) + scorer.score(cargos, weights) + scorer.score(sneaker, weights)
            + pair_score(hoodie, cargos, Sport.NONE, include_fit=True)
            + pair_score(hoodie, sneaker, Sport.NONE)
            + pair_score(cargos, sneaker, Sport.NONE)
        )
        items = {Category.TOP: hoodie, Category.BOTTOM: cargos, Category.SHOES: sneaker}

        assert assembler.composite_score(items, weights) == pytest.approx(expected)

    def test_no_jitter_means_exact_scores(self, assembler, streetwear_catalog, make_intent):
        intent = make_intent()
        weights = build_weights(intent)

        for outfit in assembler.assemble(intent, _by_role(streetwear_catalog), weights):
            assert outfit.score == pytest.approx(assembler.composite_score(outfit.items, weights))

    def test_jitter_bounded(self, streetwear_catalog, make_intent):
        intent = make_intent()
        weights = build_weights(intent)
        assembler = OutfitAssembler(jitter=0.15, rng=random.Random(7))

        for outfit in assembler.assemble(intent, _by_role(streetwear_catalog), weights):
            exact = assembler.composite_score(outfit.items, weights)
            assert abs(outfit.score - exact) <= 0.15


class TestOutfitCandidate:

    def test_signature_and_order(self, streetwear_catalog):
        hoodie, cargos, sneaker = streetwear_catalog[0], streetwear_catalog[2], streetwear_catalog[4]
        outfit = OutfitCandidate(
            items={Category.SHOES: sneaker, Category.TOP: hoodie, Category.BOTTOM: cargos},
            score=1.23456,
        )

        assert outfit.signature == ("cargos", "hoodie", "sneaker")
        assert [role for role, _ in outfit.ordered_items()] == [
            Category.TOP, Category.BOTTOM, Category.SHOES,
        ]

        data = outfit.to_dict()
        assert data["score"] == 1.2346
        assert data["items"][0] == {
            "role": "top",
            "id": "hoodie",
            "image_path": "images/top/hoodie.jpg",
            "name": "Black Oversized Hoodie",
        }
