"""Webhook source providers.

Each provider implements ProviderPort for one webhook source.
"""

from .github import GitHubProvider

__all__ = ["GitHubProvider"]
