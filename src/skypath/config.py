"""
Configuration module for the SkyPath search backend.

This module handles loading environment variables and provides
centralized configuration for the dataset location, CORS and logging.
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_DATA_PATH = "data/flights.json"


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """
    Application settings.

    Attributes:
        data_path: Path to the JSON dataset with airports and flights.
        cors_allow_origins: Origins allowed to call the HTTP API.
        log_level: Root logging level name for the HTTP entry point.
    """

    data_path: str = DEFAULT_DATA_PATH
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (and .env)."""
        return cls(
            data_path=os.getenv("FLIGHTS_DATA_PATH") or DEFAULT_DATA_PATH,
            cors_allow_origins=_split_csv(os.getenv("CORS_ALLOW_ORIGINS", "*")) or ["*"],
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
