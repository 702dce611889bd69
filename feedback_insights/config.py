"""
Feedback Insights Configuration Module
======================================

Centralized configuration management using environment variables.
Supports both .env files and system environment variables.

Environment Variables:
    SOFTSKILLS_TAXONOMY_PATH: JSON taxonomy file (default: built-in taxonomy)
    SOFTSKILLS_LEXICON_PATH: JSON sentiment lexicon file (default: built-in lexicon)
    SOFTSKILLS_CONTEXT_WINDOW: Snippet characters around a match (default: 50)
    SOFTSKILLS_TOP_N: Number of top issues per period (default: 3)
    SOFTSKILLS_SENTIMENT_MERGE: "pairwise" or "mean" (default: pairwise)
    SOFTSKILLS_COMMENT_SOURCE: API comment store, "memory" or "database" (default: memory)

    DATABASE_HOST: PostgreSQL host (default: localhost)
    DATABASE_PORT: PostgreSQL port (default: 5432)
    DATABASE_NAME: Database name (default: feedback_insights)
    DATABASE_USER: Database user (default: postgres)
    DATABASE_PASSWORD: Database password (default: empty)
    DATABASE_POOL_MIN: Minimum pool connections (default: 1)
    DATABASE_POOL_MAX: Maximum pool connections (default: 5)

    LOG_LEVEL: Root log level (default: INFO)
    LOG_JSON: JSON log lines (default: false)
    LOG_FILE: Optional rotating log file
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load environment variables from the project root .env file if present
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """
    Get environment variable with optional default and required validation.

    Raises:
        ValueError: If required=True and variable is not set
    """
    value = os.getenv(key, default)
    if required and value is None:
        raise ValueError(f"Required environment variable '{key}' is not set")
    return value


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be an integer, got: {value}")


def get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class AnalyzerConfig:
    """Soft-skill analysis engine configuration."""

    taxonomy_path: Optional[str] = field(default_factory=lambda: get_env("SOFTSKILLS_TAXONOMY_PATH"))
    lexicon_path: Optional[str] = field(default_factory=lambda: get_env("SOFTSKILLS_LEXICON_PATH"))
    context_window: int = field(default_factory=lambda: get_env_int("SOFTSKILLS_CONTEXT_WINDOW", 50))
    top_n: int = field(default_factory=lambda: get_env_int("SOFTSKILLS_TOP_N", 3))
    sentiment_merge: str = field(
        default_factory=lambda: get_env("SOFTSKILLS_SENTIMENT_MERGE", "pairwise")
    )
    comment_source: str = field(
        default_factory=lambda: get_env("SOFTSKILLS_COMMENT_SOURCE", "memory")
    )

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.context_window < 0:
            raise ValueError("SOFTSKILLS_CONTEXT_WINDOW cannot be negative")
        if self.top_n < 1:
            raise ValueError("SOFTSKILLS_TOP_N must be at least 1")
        if self.sentiment_merge not in ("pairwise", "mean"):
            raise ValueError(
                f"SOFTSKILLS_SENTIMENT_MERGE must be 'pairwise' or 'mean', got: {self.sentiment_merge}"
            )
        if self.comment_source not in ("memory", "database"):
            raise ValueError(
                f"SOFTSKILLS_COMMENT_SOURCE must be 'memory' or 'database', got: {self.comment_source}"
            )


@dataclass
class DatabaseConfig:
    """PostgreSQL database configuration (comment store only)."""

    host: str = field(default_factory=lambda: get_env("DATABASE_HOST", "localhost"))
    port: int = field(default_factory=lambda: get_env_int("DATABASE_PORT", 5432))
    name: str = field(default_factory=lambda: get_env("DATABASE_NAME", "feedback_insights"))
    user: str = field(default_factory=lambda: get_env("DATABASE_USER", "postgres"))
    password: str = field(default_factory=lambda: get_env("DATABASE_PASSWORD", ""))

    pool_min_size: int = field(default_factory=lambda: get_env_int("DATABASE_POOL_MIN", 1))
    pool_max_size: int = field(default_factory=lambda: get_env_int("DATABASE_POOL_MAX", 5))
    connect_timeout: int = field(default_factory=lambda: get_env_int("DATABASE_CONNECT_TIMEOUT", 10))
    ssl_mode: str = field(default_factory=lambda: get_env("DATABASE_SSL_MODE", "prefer"))

    def __post_init__(self):
        if self.pool_min_size < 1:
            raise ValueError("pool_min_size must be at least 1")
        if self.pool_max_size < self.pool_min_size:
            raise ValueError("pool_max_size must be >= pool_min_size")

    def connection_params(self) -> dict:
        """Keyword arguments for psycopg2.connect / connection pools."""
        return {
            "host": self.host,
            "port": self.port,
            "dbname": self.name,
            "user": self.user,
            "password": self.password,
            "sslmode": self.ssl_mode,
            "connect_timeout": self.connect_timeout,
        }


@dataclass
class LoggingConfig:
    level: str = field(default_factory=lambda: get_env("LOG_LEVEL", "INFO"))
    json_output: bool = field(default_factory=lambda: get_env_bool("LOG_JSON", False))
    log_file: Optional[str] = field(default_factory=lambda: get_env("LOG_FILE"))
