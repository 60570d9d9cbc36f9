"""
Application configuration.

Settings are read once from the environment (after ``.env`` has been
loaded) and passed explicitly into the request handler through the
``get_settings`` dependency.
"""

import logging
import os
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from typing import Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "copilot-webhook"
DEFAULT_PRODUCT_NAME = "MSDevPlatform"
DEFAULT_GITHUB_API_URL = "https://api.github.com"


def get_package_version() -> str:
    """Return the installed distribution version, or "Unknown"."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "Unknown"


class CopilotSettings(BaseModel):
    """Immutable process-wide configuration for the Copilot webhook."""

    model_config = ConfigDict(frozen=True)

    webhook_secret: Optional[str] = None
    product_name: str = DEFAULT_PRODUCT_NAME
    product_version: str = "Unknown"
    github_api_url: str = DEFAULT_GITHUB_API_URL
    github_timeout: float = 10.0

    @property
    def secret_configured(self) -> bool:
        """An empty secret counts as not configured."""
        return bool(self.webhook_secret)

    @property
    def product_header(self) -> str:
        """Product identifier sent as the User-Agent to the identity provider."""
        return f"{self.product_name}/{self.product_version}"

    @classmethod
    def from_env(cls) -> "CopilotSettings":
        """
        Build settings from environment variables.

        Environment variables:
            COPILOT_WEBHOOK_SECRET: Shared secret for signature verification
            COPILOT_PRODUCT_NAME: Product name presented to GitHub
            COPILOT_PRODUCT_VERSION: Product version presented to GitHub
            GITHUB_API_URL: Base URL of the GitHub REST API
            GITHUB_TIMEOUT: Timeout in seconds for GitHub API calls

        Returns:
            CopilotSettings instance
        """
        settings = cls(
            webhook_secret=os.getenv("COPILOT_WEBHOOK_SECRET") or None,
            product_name=os.getenv("COPILOT_PRODUCT_NAME", DEFAULT_PRODUCT_NAME),
            product_version=os.getenv("COPILOT_PRODUCT_VERSION") or get_package_version(),
            github_api_url=os.getenv("GITHUB_API_URL", DEFAULT_GITHUB_API_URL).rstrip("/"),
            github_timeout=float(os.getenv("GITHUB_TIMEOUT", "10")),
        )

        if settings.secret_configured:
            logger.info("Webhook signature verification is enabled")
        else:
            logger.warning("COPILOT_WEBHOOK_SECRET not set - signature verification disabled")

        return settings


@lru_cache
def get_settings() -> CopilotSettings:
    """FastAPI dependency returning the process settings."""
    return CopilotSettings.from_env()
