"""
Base identity provider abstract class.

This module defines the interface used by the webhook to resolve the caller
behind a bearer token.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class GitHubUser(BaseModel):
    """The authenticated user as returned by the identity provider."""

    login: str
    id: Optional[int] = None
    name: Optional[str] = None


class BaseIdentityProvider(ABC):
    """
    Abstract base class for identity providers.

    Implementations turn a bearer token into the user it belongs to.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the identity provider is properly configured.

        Returns:
            bool: True if the provider can be used, False otherwise
        """
        raise NotImplementedError("Subclasses must implement is_available")

    @abstractmethod
    async def resolve_user(self, token: str) -> GitHubUser:
        """
        Resolve the user owning a bearer token.

        Args:
            token: Bearer token, forwarded unmodified

        Returns:
            The authenticated user

        Raises:
            IdentityRejectedError: If the provider refuses the token
            IdentityProviderError: If the provider cannot be reached
        """
        raise NotImplementedError("Subclasses must implement resolve_user")
