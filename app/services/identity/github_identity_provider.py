"""
GitHub identity provider implementation.

This module resolves the caller of the Copilot webhook by asking the GitHub
REST API for the user that owns the forwarded bearer token.
"""

import logging

import httpx
from pydantic import ValidationError

from app.config import CopilotSettings
from app.logic.errors import IdentityProviderError, IdentityRejectedError

from .base_identity_provider import BaseIdentityProvider, GitHubUser

logger = logging.getLogger(__name__)


class GitHubIdentityProvider(BaseIdentityProvider):
    """Identity provider backed by ``GET /user`` of the GitHub REST API."""

    def __init__(self, settings: CopilotSettings):
        """Initialize the provider with the process settings."""
        self.api_url = settings.github_api_url
        self.timeout = settings.github_timeout
        self.user_agent = settings.product_header

    def is_available(self) -> bool:
        """The provider only needs an API URL."""
        return bool(self.api_url)

    async def resolve_user(self, token: str) -> GitHubUser:
        """
        Resolve the GitHub user owning ``token``.

        Args:
            token: GitHub token taken from the request

        Returns:
            The authenticated GitHub user

        Raises:
            IdentityRejectedError: If GitHub answers 401 or 403
            IdentityProviderError: On transport errors or unexpected responses
        """
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": self.user_agent,
        }

        try:
            async with httpx.AsyncClient(base_url=self.api_url, timeout=self.timeout) as client:
                response = await client.get("/user", headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"GitHub API request failed: {str(e)}")
            raise IdentityProviderError("GitHub API is not reachable.") from e

        if response.status_code in (401, 403):
            logger.warning(f"GitHub rejected the token with status {response.status_code}")
            raise IdentityRejectedError("GitHub token was rejected.")

        if response.status_code != 200:
            logger.error(f"Unexpected GitHub API status: {response.status_code}")
            raise IdentityProviderError(f"GitHub API returned status {response.status_code}.")

        try:
            user = GitHubUser.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Invalid GitHub user payload: {str(e)}")
            raise IdentityProviderError("GitHub API returned an invalid user.") from e

        logger.info(f"Resolved GitHub user: {user.login}")
        return user
