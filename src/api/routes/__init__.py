"""
Route modules for the API.

Each module exports a FastAPI APIRouter.
"""

from api.routes import health
from api.routes import recommend

__all__ = ["health", "recommend"]
