"""Configuration management for n8n Architect.

Centralizes all environment variable access for better testability and maintainability.
"""

import os
from pathlib import Path
from typing import Optional

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_TEMPERATURE = 0.4
DEFAULT_HTTP_TIMEOUT = 30.0


class Config:
    """Application configuration loaded from environment variables."""

    # Gemini AI API
    @staticmethod
    def gemini_api_key() -> Optional[str]:
        """Get Gemini API key from environment."""
        return (
            os.getenv("GOOGLE_GENERATIVE_AI_API_KEY")
            or os.getenv("GEMINI_API_KEY")
            or os.getenv("API_KEY")
        )

    @staticmethod
    def gemini_model() -> str:
        """Get Gemini model name used for workflow generation."""
        return os.getenv("N8N_ARCHITECT_MODEL") or DEFAULT_GEMINI_MODEL

    @staticmethod
    def gemini_temperature() -> float:
        """Get generation temperature (kept low so replies stay close to the schema)."""
        raw = os.getenv("N8N_ARCHITECT_TEMPERATURE")
        if not raw:
            return DEFAULT_GEMINI_TEMPERATURE
        try:
            return float(raw)
        except ValueError:
            return DEFAULT_GEMINI_TEMPERATURE

    # n8n REST API
    @staticmethod
    def http_timeout() -> float:
        """Get timeout in seconds for calls to the n8n instance."""
        raw = os.getenv("N8N_ARCHITECT_HTTP_TIMEOUT")
        if not raw:
            return DEFAULT_HTTP_TIMEOUT
        try:
            return float(raw)
        except ValueError:
            return DEFAULT_HTTP_TIMEOUT

    # Local state
    @staticmethod
    def config_store_path() -> Path:
        """Get path of the persisted connection config file."""
        override = os.getenv("N8N_ARCHITECT_CONFIG_PATH")
        if override:
            return Path(override).expanduser()
        base = os.getenv("XDG_CONFIG_HOME") or str(Path.home() / ".config")
        return Path(base) / "n8n-architect" / "config.json"

    # Logging
    @staticmethod
    def log_level() -> str:
        """Get log level name (INFO by default)."""
        return (os.getenv("N8N_ARCHITECT_LOG_LEVEL") or "INFO").upper()

    # Helper methods
    @staticmethod
    def is_configured() -> bool:
        """Check if all required configuration is present."""
        return not Config.get_missing_config()

    @staticmethod
    def get_missing_config() -> list[str]:
        """Get list of missing required configuration keys."""
        missing = []
        if not Config.gemini_api_key():
            missing.append("GEMINI_API_KEY or GOOGLE_GENERATIVE_AI_API_KEY")
        return missing


# Singleton instance for easy access
config = Config()
