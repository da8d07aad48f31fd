"""GitHub OAuth 2.0 authorization code login service."""

__version__ = "0.1.0"
