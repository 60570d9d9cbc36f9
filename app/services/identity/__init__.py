"""
Identity providers package.

This package contains the identity providers that inherit from BaseIdentityProvider.
"""

from .base_identity_provider import BaseIdentityProvider, GitHubUser
from .github_identity_provider import GitHubIdentityProvider

__all__ = [
    "BaseIdentityProvider",
    "GitHubUser",
    "GitHubIdentityProvider",
]
