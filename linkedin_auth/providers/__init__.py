"""
OAuth provider system for the LinkedIn authentication package.

This package provides the provider interface and the LinkedIn implementation that
turns a completed OAuth 2.0 token response into an authenticated user.
"""

from .base_provider import BaseProvider, ProviderConfigurationError, OAuthFlowError
from .linkedin_provider import LinkedInProvider

__all__ = [
    'BaseProvider',
    'LinkedInProvider',
    'ProviderConfigurationError',
    'OAuthFlowError'
]
