"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


MAX_EPSILON = 0.5


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Nothing is required: without OPENAI_API_KEY the intent planner is
    disabled and every request uses the heuristic parser.

    Optional environment variables:
        - CATALOG_PATH: Catalog JSON produced by the tagging pipeline
        - OPENAI_API_KEY: Enables the LLM intent planner
        - POOL_SIZE / PER_ROLE_LIMIT / EPSILON / JITTER: Sampling defaults
        - RANDOM_SEED: Fixed seed for reproducible output
        - ENVIRONMENT: Environment name (development, staging, production)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.debug else "INFO"

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Catalog
    # ==========================================================================
    catalog_path: Path = Field(
        default=Path("index.json"),
        description="Path to the tagged catalog JSON (array of items)"
    )

    @field_validator("catalog_path", mode="before")
    @classmethod
    def parse_catalog_path(cls, v):
        if isinstance(v, str):
            return Path(v)
        return v

    # ==========================================================================
    # OpenAI (LLM Intent Planner)
    # ==========================================================================
    openai_api_key: str = Field(default="", description="OpenAI API key for the intent planner")
    intent_planner_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model used to parse prompts into intents"
    )
    intent_planner_enabled: bool = Field(
        default=True,
        description="Enable LLM intent planner (falls back to heuristics if disabled or fails)"
    )
    intent_planner_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for the intent planner call (seconds)"
    )

    # ==========================================================================
    # Recommendation defaults
    # ==========================================================================
    pool_size: int = Field(default=6, ge=1, description="Number of outfits/items to return")
    per_role_limit: int = Field(
        default=12, ge=1,
        description="Max candidates kept per role before combinatorics"
    )
    epsilon: float = Field(
        default=0.15,
        description="Diversity factor for epsilon-greedy sampling (clamped to 0-0.5)"
    )
    jitter: float = Field(
        default=0.15, ge=0.0,
        description="Uniform score jitter range used to break ties"
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for jitter/sampling; unset means system entropy"
    )

    @field_validator("epsilon", mode="after")
    @classmethod
    def clamp_epsilon(cls, v: float) -> float:
        return max(0.0, min(MAX_EPSILON, v))


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance
    """
    # Try to find .env file in project root
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))

    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.
    The LLM planner is off unless an override turns it back on.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "environment": "testing",
        "debug": True,
        "openai_api_key": "",
        "intent_planner_enabled": False,
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)
