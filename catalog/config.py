"""Runtime settings for the DesignBook catalog, service and tools.

All settings can be overridden via environment variables (optionally from a
``.env`` file at the repo root) or by passing values to ``load_config``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_SOURCE = BASE_DIR / "md" / "design_principles.md"
DEFAULT_OUTPUT_DIR = BASE_DIR / "output" / "catalog"
DEFAULT_PORT = 8800


@dataclass
class CatalogConfig:
    """Where the catalog is read from and how its adapters behave."""

    source: Path = DEFAULT_SOURCE
    output_dir: Path = DEFAULT_OUTPUT_DIR
    log_level: str = "INFO"
    search_limit: int = 20
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    port: int = DEFAULT_PORT
    link_check_timeout: float = 10.0
    link_check_workers: int = 8


def load_env_file(env_path: Path = BASE_DIR / ".env") -> bool:
    """Load environment variables from .env file if present."""
    if env_path.exists():
        load_dotenv(env_path)
        logger.info("Loaded environment from %s", env_path)
        return True
    return False


def _parse_origins(value: str) -> List[str]:
    if value.strip() == "*":
        return ["*"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def load_config(**overrides) -> CatalogConfig:
    """Build a CatalogConfig with env-var and keyword overrides.

    Resolution order (later wins):
      1. Dataclass defaults
      2. Environment variables
      3. Explicit keyword arguments

    Supported env vars:
      - CATALOG_SOURCE        definition file (.json or .md)
      - CATALOG_OUTPUT_DIR    builder output directory
      - CATALOG_LOG_LEVEL
      - CATALOG_SEARCH_LIMIT
      - CORS_ORIGINS          "*" or comma-separated origins
      - CATALOG_PORT
      - LINK_CHECK_TIMEOUT / LINK_CHECK_WORKERS
    """
    cfg = CatalogConfig()

    source = os.getenv("CATALOG_SOURCE")
    if source:
        cfg.source = Path(source)

    output_dir = os.getenv("CATALOG_OUTPUT_DIR")
    if output_dir:
        cfg.output_dir = Path(output_dir)

    log_level = os.getenv("CATALOG_LOG_LEVEL")
    if log_level:
        cfg.log_level = log_level.upper()

    search_limit = os.getenv("CATALOG_SEARCH_LIMIT")
    if search_limit:
        cfg.search_limit = int(search_limit)

    cors_origins = os.getenv("CORS_ORIGINS")
    if cors_origins:
        cfg.cors_origins = _parse_origins(cors_origins)

    port = os.getenv("CATALOG_PORT")
    if port:
        cfg.port = int(port)

    timeout = os.getenv("LINK_CHECK_TIMEOUT")
    if timeout:
        cfg.link_check_timeout = float(timeout)

    workers = os.getenv("LINK_CHECK_WORKERS")
    if workers:
        cfg.link_check_workers = int(workers)

    # Explicit overrides layer
    for key, value in overrides.items():
        if hasattr(cfg, key):
            setattr(cfg, key, value)
        else:
            raise TypeError(f"Unknown config key: {key!r}")

    if cfg.search_limit < 1:
        raise ValueError(f"search_limit must be at least 1, got {cfg.search_limit}")

    if cfg.link_check_workers < 1:
        raise ValueError(f"link_check_workers must be at least 1, got {cfg.link_check_workers}")

    return cfg
