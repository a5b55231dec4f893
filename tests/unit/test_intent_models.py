"""
Tests for PromptIntent sanitization.
"""

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
from intent.models import PromptIntent


class TestPromptIntentSanitization:

    def test_valid_payload(self):
        intent = PromptIntent.model_validate({
            "outfit_mode": "outfit",
            "requested_form": "top_bottom_shoes",
            "required_categories": ["top", "bottom", "shoes"],
            "target_gender": "men",
            "vibe_tags": ["streetwear"],
            "colour_hints": ["black"],
            "brand_focus": ["yeezy"],
            "sport_context": "none",
            "fit_preference": "oversized",
        })

        assert intent.outfit_mode is OutfitMode.OUTFIT
        assert intent.requested_form is OutfitForm.TOP_BOTTOM_SHOES
        assert intent.roles == (Category.TOP, Category.BOTTOM, Category.SHOES)
        assert intent.target_gender is TargetGender.MEN
        assert intent.fit_preference is FitPreference.OVERSIZED

    def test_unknown_list_values_dropped(self):
        intent = PromptIntent.model_validate({
            "required_categories": ["top", "hat", "TOP", "shoes"],
            "vibe_tags": ["cottagecore", "edgy"],
            "colour_hints": ["navy", "Red"],
        })

        assert intent.required_categories == [Category.TOP, Category.SHOES]
        assert intent.vibe_tags == [Vibe.EDGY]
        assert intent.colour_hints == [Colour.RED]

    def test_unknown_scalars_become_none(self):
        intent = PromptIntent.model_validate({
            "outfit_mode": "capsule",
            "requested_form": "everything",
            "target_gender": "kids",
            "sport_context": "golf",
            "fit_preference": "relaxed",
        })

        assert intent.outfit_mode is None
        assert intent.requested_form is None
        assert intent.target_gender is None
        assert intent.sport_context is None
        assert intent.fit_preference is None

    def test_vibes_truncated_to_three(self):
        intent = PromptIntent.model_validate({
            "vibe_tags": ["streetwear", "edgy", "minimal", "y2k", "chic"],
        })

        assert intent.vibe_tags == [Vibe.STREETWEAR, Vibe.EDGY, Vibe.MINIMAL]

    def test_free_text_lists_cleaned(self):
        intent = PromptIntent.model_validate({
            "brand_focus": "nike",
            "team_focus": ["barcelona", "", None, 7, "barcelona"],
            "specific_items": None,
        })

        assert intent.brand_focus == ["nike"]
        assert intent.team_focus == ["barcelona"]
        assert intent.specific_items == []

    def test_unknown_keys_ignored(self):
        intent = PromptIntent.model_validate({"confidence": 0.9, "sport_context": "gym"})

        assert intent.sport_context is Sport.GYM
        assert not hasattr(intent, "confidence")

    def test_defaults_for_missing_scalars(self):
        intent = PromptIntent()

        assert intent.effective_sport is Sport.NONE
        assert intent.effective_gender is TargetGender.ANY
        assert intent.is_outfit is False
        assert intent.roles == ()
