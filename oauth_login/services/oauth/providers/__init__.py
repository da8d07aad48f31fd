"""OAuth providers module."""
from .base import OAuthProvider
from .github import GitHubOAuthProvider

__all__ = ["OAuthProvider", "GitHubOAuthProvider"]
