"""
HTTP API for the outfit recommender (FastAPI).
"""

from api.routes import health, recommend

__all__ = ["health", "recommend"]
