"""
Pytest configuration and shared fixtures for the outfit recommender tests.
"""
import json
import os
import random
import sys
from typing import Callable, List

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

from catalog.models import CatalogItem  # noqa: E402
from intent.models import PromptIntent  # noqa: E402


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

def _item(item_id: str, category: str, **fields) -> CatalogItem:
    record = {
        "id": item_id,
        "imagePath": fields.pop("imagePath", f"images/{category}/{item_id}.jpg"),
        "category": category,
        "colours": fields.pop("colours", ["black"]),
        "vibes": fields.pop("vibes", []),
        "gender": fields.pop("gender", "unisex"),
    }
    record.update(fields)
    return CatalogItem.model_validate(record)


def _intent(**fields) -> PromptIntent:
    defaults = {
        "outfit_mode": "outfit",
        "requested_form": "top_bottom_shoes",
        "required_categories": ["top", "bottom", "shoes"],
        "target_gender": "any",
        "sport_context": "none",
    }
    defaults.update(fields)
    return PromptIntent.model_validate(defaults)


@pytest.fixture
def make_item() -> Callable[..., CatalogItem]:
    """Factory: make_item("t1", "top", colours=["white"], fit="oversized")."""
    return _item


@pytest.fixture
def make_intent() -> Callable[..., PromptIntent]:
    """Factory for a complete outfit intent with overridable fields."""
    return _intent


@pytest.fixture
def streetwear_catalog() -> List[CatalogItem]:
    """Small catalog with a clear best streetwear outfit."""
    return [
        _item("hoodie", "top", colours=["black"], vibes=["streetwear"], fit="oversized",
              name="Black Oversized Hoodie"),
        _item("blouse", "top", colours=["yellow"], vibes=["chic"], fit="slim",
              gender="women", name="Yellow Silk Blouse"),
        _item("cargos", "bottom", colours=["black"], vibes=["streetwear"], fit="regular",
              name="Black Cargo Trousers"),
        _item("skirt", "bottom", colours=["pink"], vibes=["y2k"], fit="slim",
              gender="women", name="Pink Mini Skirt"),
        _item("sneaker", "shoes", colours=["white"], vibes=["sporty"], name="White Sneakers"),
        _item("heels", "shoes", colours=["red"], vibes=["chic"], gender="women", name="Red Heels"),
        _item("slipdress", "mono", colours=["beige"], vibes=["chic", "minimal"], gender="women",
              name="Beige Slip Dress"),
    ]


@pytest.fixture
def football_catalog() -> List[CatalogItem]:
    """Barcelona kit pieces next to plain everyday items."""
    return [
        _item("barca-jersey", "top", colours=["blue", "red"], vibes=["sporty"],
              name="FC Barcelona Home Jersey",
              sportMeta={"sport": "football", "teams": ["FC Barcelona"], "isKit": True},
              entityMeta=[{"text": "FC Barcelona", "weight": 1.0, "type": "team"},
                          {"text": "Nike", "weight": 0.8, "type": "brand"}]),
        _item("white-tee", "top", colours=["white"], vibes=["minimal", "streetwear"],
              name="Plain White T-Shirt"),
        _item("barca-shorts", "bottom", colours=["blue"], vibes=["sporty"],
              name="Barcelona Home Shorts",
              sportMeta={"sport": "football", "teams": ["barcelona"], "isKit": True}),
        _item("jeans", "bottom", colours=["blue"], vibes=["streetwear"], fit="regular",
              name="Straight Jeans"),
        _item("boots", "shoes", colours=["black"], vibes=["sporty"], name="Football Boots",
              sportMeta={"sport": "football", "teams": [], "isKit": False}),
        _item("loafers", "shoes", colours=["brown"], vibes=["preppy"], name="Leather Loafers"),
    ]


@pytest.fixture
def catalog_file(tmp_path, streetwear_catalog) -> str:
    """Catalog JSON on disk, written with the tagger's camelCase keys."""
    records = [item.model_dump(mode="json", by_alias=True) for item in streetwear_catalog]
    path = tmp_path / "index.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return str(path)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


# ============================================================================
# Markers
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
