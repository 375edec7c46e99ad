"""
LinkedIn OAuth 2.0 authentication provider.

Projects the LinkedIn person document into an authenticated context for the
hosting authentication pipeline and an extended profile with positions,
educations, projects, certifications, courses and skills.
"""

from .context import LinkedInAuthenticatedContext, TokenInfo, parse_expires, project
from .profile import (
    LinkedInFullProfile,
    LinkedInPosition,
    LinkedInEducation,
    LinkedInProject
)
from .providers import LinkedInProvider, ProviderConfigurationError, OAuthFlowError

__all__ = [
    'project',
    'parse_expires',
    'TokenInfo',
    'LinkedInAuthenticatedContext',
    'LinkedInFullProfile',
    'LinkedInPosition',
    'LinkedInEducation',
    'LinkedInProject',
    'LinkedInProvider',
    'ProviderConfigurationError',
    'OAuthFlowError'
]
