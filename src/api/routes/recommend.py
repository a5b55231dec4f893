"""
Outfit recommendation endpoint.

Routes use `def` (not `async def`): the planner call and scoring are
synchronous, so FastAPI runs them in its thread pool.

The catalog is loaded from ``Settings.catalog_path`` on first use and kept
for the life of the process. Catalog and resolver are FastAPI dependencies
so tests can override them.
"""

import threading
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from catalog.loader import CatalogLoadError, load_catalog
from catalog.models import CatalogItem
from config.constants import TargetGender
from config.settings import MAX_EPSILON, get_settings
from core.logging import get_logger
from intent.planner import get_intent_planner
from intent.resolver import IntentResolver
from recs.pipeline import NoRecommendationsError, OutfitRecommender, RecommendOptions

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Recommend"])

_catalog: Optional[List[CatalogItem]] = None
_catalog_lock = threading.Lock()


# =============================================================================
# Models
# =============================================================================

class RecommendRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="Free-text style request")
    gender_pref: TargetGender = Field(default=TargetGender.ANY, description="any, men or women")
    pool_size: Optional[int] = Field(default=None, ge=1, le=50)
    per_role_limit: Optional[int] = Field(default=None, ge=1, le=50)
    epsilon: Optional[float] = Field(default=None, ge=0.0, le=MAX_EPSILON)
    jitter: Optional[float] = Field(default=None, ge=0.0)
    seed: Optional[int] = None


class OutfitItemOut(BaseModel):
    role: str
    id: str
    image_path: str
    name: Optional[str] = None


class OutfitOut(BaseModel):
    score: float
    items: List[OutfitItemOut]


class RecommendResponse(BaseModel):
    intent: Dict[str, Any]
    candidates_per_role: Dict[str, int]
    outfits: List[OutfitOut]


# =============================================================================
# Dependencies
# =============================================================================

def get_catalog() -> List[CatalogItem]:
    """Load (once) and return the catalog; 503 if it cannot be loaded."""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                path = get_settings().catalog_path
                try:
                    _catalog = load_catalog(path)
                except CatalogLoadError as e:
                    logger.error("Catalog unavailable", path=str(path), error=str(e))
                    raise HTTPException(status_code=503, detail=f"Catalog unavailable: {e}")
    return _catalog


def reset_catalog_cache() -> None:
    global _catalog
    with _catalog_lock:
        _catalog = None


def get_resolver() -> IntentResolver:
    return IntentResolver(planner=get_intent_planner())


# =============================================================================
# Routes
# =============================================================================

@router.post(
    "/recommend",
    response_model=RecommendResponse,
    summary="Recommend outfits for a style prompt",
)
def recommend(
    request: RecommendRequest,
    catalog: List[CatalogItem] = Depends(get_catalog),
    resolver: IntentResolver = Depends(get_resolver),
) -> Dict[str, Any]:
    """
    Resolve the prompt and return a diverse, ranked list of outfits.

    Unset knobs fall back to the server settings. 404 when nothing can be
    built from the catalog for this prompt.
    """
    options = RecommendOptions.from_settings(
        pool_size=request.pool_size,
        per_role_limit=request.per_role_limit,
        epsilon=request.epsilon,
        jitter=request.jitter,
        seed=request.seed,
    )
    recommender = OutfitRecommender(resolver=resolver, options=options)

    try:
        result = recommender.recommend(catalog, request.prompt, request.gender_pref.value)
    except NoRecommendationsError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return result.to_dict()
