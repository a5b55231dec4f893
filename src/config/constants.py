"""
Closed vocabularies shared by the catalog, intent and scoring layers.

Every attribute axis the recommender weighs (colour, vibe, fit, sport) is a
closed ``str`` enum, so weight maps keyed by these enums can never contain an
unknown key. These values are process-wide static configuration: they are
defined once at import and never mutated.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple, Type, TypeVar


E = TypeVar("E", bound=Enum)


# =============================================================================
# Garment roles
# =============================================================================

class Category(str, Enum):
    """Garment role an item can fill in an outfit."""
    TOP = "top"
    BOTTOM = "bottom"
    SHOES = "shoes"
    MONO = "mono"          # single full-body garment (dress, jumpsuit)


# Fixed output order for every outfit
ROLE_ORDER: Tuple[Category, ...] = (
    Category.TOP,
    Category.BOTTOM,
    Category.SHOES,
    Category.MONO,
)


# =============================================================================
# Attribute palettes
# =============================================================================

class Colour(str, Enum):
    BLACK = "black"
    WHITE = "white"
    GREY = "grey"
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    BEIGE = "beige"
    BROWN = "brown"
    PINK = "pink"
    YELLOW = "yellow"
    PURPLE = "purple"


NEUTRAL_COLOURS: FrozenSet[Colour] = frozenset({
    Colour.BLACK,
    Colour.WHITE,
    Colour.GREY,
    Colour.BEIGE,
    Colour.BROWN,
})


class Vibe(str, Enum):
    STREETWEAR = "streetwear"
    EDGY = "edgy"
    MINIMAL = "minimal"
    Y2K = "y2k"
    TECHWEAR = "techwear"
    SPORTY = "sporty"
    PREPPY = "preppy"
    VINTAGE = "vintage"
    CHIC = "chic"


class Fit(str, Enum):
    OVERSIZED = "oversized"
    REGULAR = "regular"
    SLIM = "slim"
    CROPPED = "cropped"


# Items without a fit are scored as regular
DEFAULT_FIT = Fit.REGULAR


class FitPreference(str, Enum):
    """Requested fit. ``None`` on the intent means no preference."""
    OVERSIZED = "oversized"
    REGULAR = "regular"
    SLIM = "slim"
    CROPPED = "cropped"
    MIXED = "mixed"

    def as_fit(self) -> Optional[Fit]:
        """Return the single fit this preference names, or None for mixed."""
        if self is FitPreference.MIXED:
            return None
        return Fit(self.value)


class Sport(str, Enum):
    FOOTBALL = "football"
    BASKETBALL = "basketball"
    RUNNING = "running"
    TENNIS = "tennis"
    GYM = "gym"
    OTHER = "other"
    NONE = "none"


class Gender(str, Enum):
    MEN = "men"
    WOMEN = "women"
    UNISEX = "unisex"


class TargetGender(str, Enum):
    """Gender requested by the user. ``ANY`` disables gender filtering."""
    MEN = "men"
    WOMEN = "women"
    UNISEX = "unisex"
    ANY = "any"


class EntityType(str, Enum):
    BRAND = "brand"
    TEAM = "team"
    SPONSOR = "sponsor"
    GENERIC = "generic"


# =============================================================================
# Request shape
# =============================================================================

class OutfitMode(str, Enum):
    OUTFIT = "outfit"
    SINGLE = "single"


class OutfitForm(str, Enum):
    """Which roles a request needs filled."""
    TOP_BOTTOM_SHOES = "top_bottom_shoes"
    TOP_BOTTOM = "top_bottom"
    MONO_ONLY = "mono_only"
    MONO_AND_SHOES = "mono_and_shoes"
    TOP_ONLY = "top_only"
    BOTTOM_ONLY = "bottom_only"
    SHOES_ONLY = "shoes_only"


FORM_CATEGORIES: Dict[OutfitForm, Tuple[Category, ...]] = {
    OutfitForm.TOP_BOTTOM_SHOES: (Category.TOP, Category.BOTTOM, Category.SHOES),
    OutfitForm.TOP_BOTTOM: (Category.TOP, Category.BOTTOM),
    OutfitForm.MONO_ONLY: (Category.MONO,),
    OutfitForm.MONO_AND_SHOES: (Category.MONO, Category.SHOES),
    OutfitForm.TOP_ONLY: (Category.TOP,),
    OutfitForm.BOTTOM_ONLY: (Category.BOTTOM,),
    OutfitForm.SHOES_ONLY: (Category.SHOES,),
}


def form_for_categories(categories) -> Optional[OutfitForm]:
    """Return the form whose role set equals ``categories``, if any."""
    wanted = frozenset(categories)
    for form, roles in FORM_CATEGORIES.items():
        if frozenset(roles) == wanted:
            return form
    return None


def parse_enum(enum_cls: Type[E], value) -> Optional[E]:
    """
    Map a raw value onto a member of ``enum_cls``.

    Matching is case- and whitespace-insensitive. Anything outside the
    closed set (including non-strings) returns None so callers can drop it.
    """
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        return None
