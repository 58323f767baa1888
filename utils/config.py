"""
Configuration module for the insight pipeline's environment-driven defaults.

The pipeline itself takes its lookup URL and timeout as constructor
arguments; this module is where the CLI and ``on_transaction`` read them
from the environment (or a ``.env`` file).
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from utils.logging import get_logger

# Load environment variables from .env file
load_dotenv()

logger = get_logger("utils.config")


@dataclass(frozen=True)
class InsightsConfig:
    """Settings needed to build a default insight pipeline."""

    lookup_url: str
    request_timeout: float


class Config:
    """Global configuration handler."""

    DEFAULT_TIMEOUT = 30  # seconds
    DEFAULT_LOOKUP_URL = "https://www.4byte.directory/api/v1/signatures/"

    @staticmethod
    def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
        """Get environment variable with fallback to default."""
        return os.getenv(key, default)

    @staticmethod
    def get_env_float(key: str, default: float) -> float:
        """Get environment variable as float with fallback to default."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid float value for %s: %s. Using default %s", key, value, default)
            return default

    @classmethod
    def get_request_timeout(cls) -> float:
        """Get HTTP request timeout in seconds."""
        return cls.get_env_float("REQUEST_TIMEOUT", cls.DEFAULT_TIMEOUT)

    @classmethod
    def get_signature_lookup_url(cls) -> str:
        """Get the base URL of the 4byte-style signature directory."""
        return cls.get_env("SIGNATURE_LOOKUP_URL") or cls.DEFAULT_LOOKUP_URL

    @classmethod
    def get_insights_config(cls) -> InsightsConfig:
        return InsightsConfig(
            lookup_url=cls.get_signature_lookup_url(),
            request_timeout=cls.get_request_timeout(),
        )
