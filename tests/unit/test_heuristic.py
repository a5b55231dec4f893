"""
Tests for the keyword-based intent parser.
"""

import pytest

from config.constants import (
    Category,
    Colour,
    FitPreference,
    OutfitForm,
    OutfitMode,
    Sport,
    TargetGender,
    Vibe,
)
from intent.heuristic import HeuristicIntentParser


@pytest.fixture
def parser():
    return HeuristicIntentParser()


class TestModeAndForm:

    def test_outfit_keyword_gives_full_outfit(self, parser):
        intent = parser.parse("baggy streetwear fit for the weekend")

        assert intent.outfit_mode is OutfitMode.OUTFIT
        assert intent.requested_form is OutfitForm.TOP_BOTTOM_SHOES
        assert intent.required_categories == [Category.TOP, Category.BOTTOM, Category.SHOES]

    @pytest.mark.parametrize("prompt,form", [
        ("white sneakers", OutfitForm.SHOES_ONLY),
        ("some black jeans", OutfitForm.BOTTOM_ONLY),
        ("a grey hoodie", OutfitForm.TOP_ONLY),
        ("a red dress", OutfitForm.MONO_ONLY),
    ])
    def test_single_forms(self, parser, prompt, form):
        intent = parser.parse(prompt)

        assert intent.outfit_mode is OutfitMode.SINGLE
        assert intent.requested_form is form

    def test_dress_outfit(self, parser):
        assert parser.parse("elegant dress outfit").requested_form is OutfitForm.MONO_ONLY

    def test_dress_outfit_with_shoes(self, parser):
        intent = parser.parse("summer dress look with white sneakers")

        assert intent.requested_form is OutfitForm.MONO_AND_SHOES
        assert intent.required_categories == [Category.MONO, Category.SHOES]


class TestAttributes:

    @pytest.mark.parametrize("prompt,sport", [
        ("barcelona matchday fit", Sport.FOOTBALL),
        ("nba jersey look", Sport.BASKETBALL),
        ("gym outfit", Sport.GYM),
        ("running gear outfit", Sport.RUNNING),
        ("tennis outfit", Sport.TENNIS),
        ("date night outfit", Sport.NONE),
    ])
    def test_sport_context(self, parser, prompt, sport):
        assert parser.parse(prompt).sport_context is sport

    def test_sport_adds_sporty_vibe(self, parser):
        assert Vibe.SPORTY in parser.parse("football outfit").vibe_tags

    def test_vibes(self, parser):
        intent = parser.parse("vintage preppy polo look")

        assert intent.vibe_tags == [Vibe.PREPPY, Vibe.VINTAGE]

    def test_vibes_capped_at_three(self, parser):
        intent = parser.parse("street punk minimal y2k retro chic fit")

        assert len(intent.vibe_tags) == 3
        assert intent.vibe_tags == [Vibe.STREETWEAR, Vibe.EDGY, Vibe.MINIMAL]

    @pytest.mark.parametrize("prompt,fit", [
        ("baggy fit", FitPreference.OVERSIZED),
        ("skinny jeans", FitPreference.SLIM),
        ("cropped top", FitPreference.CROPPED),
        ("a nice outfit", FitPreference.MIXED),
    ])
    def test_fit_preference(self, parser, prompt, fit):
        assert parser.parse(prompt).fit_preference is fit

    def test_colour_hints_with_synonyms(self, parser):
        intent = parser.parse("navy and cream outfit with black boots")

        assert intent.colour_hints == [Colour.BLUE, Colour.BEIGE, Colour.BLACK]

    def test_colour_words_match_whole_tokens(self, parser):
        assert parser.parse("tailored trousers").colour_hints == []

    @pytest.mark.parametrize("pref,target", [
        ("any", TargetGender.ANY),
        ("men", TargetGender.MEN),
        ("women", TargetGender.WOMEN),
        ("nonsense", TargetGender.ANY),
    ])
    def test_target_gender(self, parser, pref, target):
        assert parser.parse("outfit", pref).target_gender is target

    def test_no_free_text_focus(self, parser):
        intent = parser.parse("yeezy hoodie")

        assert intent.brand_focus == []
        assert intent.team_focus == []
        assert intent.specific_items == []
