#!/usr/bin/env python3
"""
Configuration for the recipe analysis pipeline.
Values come from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return float(value)


@dataclass
class AnalyzerConfig:
    """Configuration for recipe analysis."""

    # Remote analysis service
    remote_url: Optional[str] = None
    remote_timeout: float = 10.0
    api_token: Optional[str] = None

    # Reference data directory; None uses the packaged defaults
    data_dir: Optional[str] = None

    # Suggestion thresholds (per serving)
    calorie_limit: float = 800.0
    sodium_limit: float = 1000.0
    protein_minimum: float = 10.0

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # json or console

    @classmethod
    def from_env(cls) -> "AnalyzerConfig":
        """Build configuration from the current environment."""
        return cls(
            remote_url=os.getenv("RECIPE_ANALYZER_REMOTE_URL") or None,
            remote_timeout=_env_float("RECIPE_ANALYZER_REMOTE_TIMEOUT", 10.0),
            api_token=os.getenv("RECIPE_ANALYZER_API_TOKEN") or None,
            data_dir=os.getenv("RECIPE_ANALYZER_DATA_DIR") or None,
            calorie_limit=_env_float("SUGGEST_CALORIE_LIMIT", 800.0),
            sodium_limit=_env_float("SUGGEST_SODIUM_LIMIT", 1000.0),
            protein_minimum=_env_float("SUGGEST_PROTEIN_MINIMUM", 10.0),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "console"),
        )
