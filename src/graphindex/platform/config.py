"""
graphindex Configuration Management

Uses Pydantic Settings for type-safe configuration from environment variables.
"""

from functools import lru_cache
from typing import List, Tuple

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service configuration loaded from environment variables."""

    # =========================================================================
    # APPLICATION
    # =========================================================================
    APP_NAME: str = "graphindex"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "info"

    # =========================================================================
    # INDEX BACKEND
    # =========================================================================
    INDEX_BACKEND: str = "neo4j"  # neo4j | falkordb
    # Comma separated Label.field pairs indexed at startup
    INDEX_FIELDS: str = ""

    # =========================================================================
    # NEO4J
    # =========================================================================
    NEO4J_URI: str = "bolt://localhost:7687"
    NEO4J_USER: str = "neo4j"
    NEO4J_PASSWORD: str = "graphindex_dev"
    NEO4J_DATABASE: str = "neo4j"

    # =========================================================================
    # FALKORDB (RedisGraph protocol)
    # =========================================================================
    FALKORDB_HOST: str = "localhost"
    FALKORDB_PORT: int = 6379
    FALKORDB_PASSWORD: str = ""
    FALKORDB_GRAPH: str = "index"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    @property
    def index_fields(self) -> List[Tuple[str, str]]:
        """Parse INDEX_FIELDS into (label, field) pairs."""
        pairs = []
        for item in self.INDEX_FIELDS.split(","):
            item = item.strip()
            if not item:
                continue
            label, sep, field = item.partition(".")
            if not sep or not label or not field:
                raise ValueError(f"INDEX_FIELDS entry must be Label.field, got {item!r}")
            pairs.append((label, field))
        return pairs


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for easy import
settings = get_settings()
