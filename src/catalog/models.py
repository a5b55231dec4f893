"""
Pydantic models for catalog items produced by the image-tagging pipeline.

Items are frozen: the recommender only ever reads them. JSON keys from the
tagger (``imagePath``, ``sportMeta``, ``entityMeta``, ``isKit``) are accepted
as aliases of the snake_case field names.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.constants import (
    DEFAULT_FIT,
    Category,
    Colour,
    EntityType,
    Fit,
    Gender,
    Sport,
    Vibe,
    parse_enum,
)
from core.utils import join_normalized, normalize_text, normalize_tokens, unique


MAX_ITEM_COLOURS = 2
MAX_ITEM_VIBES = 2


def _as_list(values) -> list:
    """None -> [], a string -> [string], list/tuple as-is; anything else is a validation error."""
    if values is None:
        return []
    if isinstance(values, str):
        return [values]
    if not isinstance(values, (list, tuple)):
        raise ValueError(f"expected a list, got {type(values).__name__}")
    return list(values)


def _enum_list(enum_cls, values, limit: int) -> list:
    """Keep known members in order, de-duplicated, capped at ``limit``."""
    values = _as_list(values)
    parsed = [parse_enum(enum_cls, v) for v in values]
    return unique(p for p in parsed if p is not None)[:limit]


class EntityMeta(BaseModel):
    """Weighted named entity detected on the garment (brand, team, sponsor)."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    text: str
    weight: float = 1.0
    type: EntityType = EntityType.GENERIC

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v):
        return parse_enum(EntityType, v) or EntityType.GENERIC


class SportMeta(BaseModel):
    """Sport metadata: which sport, which teams, and whether it is an official kit."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    sport: Sport = Sport.NONE
    teams: Tuple[str, ...] = ()
    is_kit: bool = Field(default=False, alias="isKit")

    @field_validator("sport", mode="before")
    @classmethod
    def parse_sport(cls, v):
        return parse_enum(Sport, v) or Sport.NONE

    @field_validator("teams", mode="before")
    @classmethod
    def normalize_teams(cls, v):
        return tuple(unique(normalize_tokens(_as_list(v))))

    @field_validator("is_kit", mode="before")
    @classmethod
    def parse_is_kit(cls, v):
        return bool(v)


class CatalogItem(BaseModel):
    """
    One tagged garment.

    ``category`` decides the role the item can fill. ``fit`` is only
    meaningful for tops and bottoms; scoring treats a missing fit as regular.
    """
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str
    image_path: str = Field(alias="imagePath")
    category: Category
    sub: Optional[str] = None
    colours: Tuple[Colour, ...] = ()
    vibes: Tuple[Vibe, ...] = ()
    gender: Gender = Gender.UNISEX
    fit: Optional[Fit] = None
    sport_meta: Optional[SportMeta] = Field(default=None, alias="sportMeta")
    name: Optional[str] = None
    name_normalized: Optional[str] = None
    entities: Tuple[str, ...] = ()
    entity_meta: Tuple[EntityMeta, ...] = Field(default=(), alias="entityMeta")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("colours", mode="before")
    @classmethod
    def parse_colours(cls, v):
        return tuple(_enum_list(Colour, v, MAX_ITEM_COLOURS))

    @field_validator("vibes", mode="before")
    @classmethod
    def parse_vibes(cls, v):
        return tuple(_enum_list(Vibe, v, MAX_ITEM_VIBES))

    @field_validator("fit", mode="before")
    @classmethod
    def parse_fit(cls, v):
        return parse_enum(Fit, v)

    @field_validator("entities", mode="before")
    @classmethod
    def parse_entities(cls, v):
        return tuple(str(e) for e in _as_list(v) if e)

    @field_validator("entity_meta", mode="before")
    @classmethod
    def parse_entity_meta(cls, v):
        return v or ()

    # ------------------------------------------------------------------
    # Derived views (all read-only)
    # ------------------------------------------------------------------

    @property
    def sport(self) -> Sport:
        return self.sport_meta.sport if self.sport_meta else Sport.NONE

    @property
    def is_sport_item(self) -> bool:
        return self.sport is not Sport.NONE

    @property
    def is_kit(self) -> bool:
        return bool(self.sport_meta and self.sport_meta.is_kit)

    @property
    def effective_fit(self) -> Fit:
        return self.fit or DEFAULT_FIT

    @property
    def teams(self) -> Tuple[str, ...]:
        return self.sport_meta.teams if self.sport_meta else ()

    @property
    def team_entities(self) -> List[str]:
        return [
            norm for norm in (
                normalize_text(e.text) for e in self.entity_meta if e.type is EntityType.TEAM
            ) if norm
        ]

    @property
    def name_text(self) -> str:
        return join_normalized(self.name, self.name_normalized)

    @property
    def entity_text(self) -> str:
        return join_normalized(*(e.text for e in self.entity_meta))

    @property
    def specific_text(self) -> str:
        """Blob searched for specific-item tokens (name, path, entities)."""
        return join_normalized(
            self.name, self.name_normalized, self.image_path,
            *(e.text for e in self.entity_meta),
        )

    @property
    def team_text(self) -> str:
        """Blob searched for team tokens; also covers the plain entity list."""
        return join_normalized(
            self.name, self.name_normalized, self.image_path,
            *self.entities,
            *(e.text for e in self.entity_meta),
        )
