"""
LinkedIn OAuth 2.0 provider implementation.

This module implements the LinkedIn provider using the BaseProvider interface,
fetching the member's person document from the LinkedIn People API and projecting
it into an authenticated context and an extended profile.
"""

from typing import Dict, Any, Optional, Tuple
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.requests_client import OAuth2Session
from requests.exceptions import RequestException, ConnectionError, Timeout

from .base_provider import BaseProvider, OAuthFlowError
from ..context import LinkedInAuthenticatedContext, project
from ..profile import LinkedInFullProfile


DEFAULT_PROFILE_FIELDS = [
    'id',
    'first-name',
    'last-name',
    'formatted-name',
    'email-address',
    'last-modified-timestamp',
    'summary',
    'interests',
    'positions',
    'educations',
    'skills',
    'certifications',
    'courses',
    'projects'
]


class LinkedInProvider(BaseProvider):
    """
    LinkedIn OAuth 2.0 provider implementation.

    Retrieves the member profile with a field selector covering the identity and
    extended profile fields, then hands the document to the profile projection.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize LinkedIn OAuth provider.

        Args:
            config: LinkedIn provider configuration dictionary

        Raises:
            ProviderConfigurationError: If configuration is invalid
        """
        default_config = {
            'userinfo_url': 'https://api.linkedin.com/v1/people/~',
            'display_name': 'LinkedIn',
            'scopes': [
                'r_basicprofile',
                'r_emailaddress',
                'r_fullprofile'
            ],
            'profile_fields': DEFAULT_PROFILE_FIELDS
        }

        merged_config = {**default_config, **config}

        super().__init__('linkedin', merged_config)

        self.profile_fields = list(merged_config['profile_fields'])

    def get_profile_url(self) -> str:
        """Build the People API URL with the configured field selector."""
        if not self.profile_fields:
            return self.userinfo_url
        return f"{self.userinfo_url}:({','.join(self.profile_fields)})"

    def get_user_info(self, access_token: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve the LinkedIn person document using an access token.

        Args:
            access_token: Valid LinkedIn access token

        Returns:
            Person document as returned by the People API

        Raises:
            OAuthFlowError: If user info retrieval fails
        """
        try:
            session = OAuth2Session(
                self.client_id,
                self.client_secret,
                token={'access_token': access_token, 'token_type': 'Bearer'}
            )

            self.logger.debug("Retrieving LinkedIn person document")

            response = session.get(
                self.get_profile_url(),
                params={'format': 'json'},
                headers={'Accept': 'application/json', 'x-li-format': 'json'},
                timeout=self.timeout
            )

            if response.status_code != 200:
                error_msg = f'HTTP {response.status_code}'
                self.logger.error(f"LinkedIn user info request failed: {error_msg}")
                raise OAuthFlowError(f"User info request failed: {error_msg}")

            user = response.json()
            if not isinstance(user, dict):
                raise OAuthFlowError("User info response is not a JSON object")

            return user

        except OAuthFlowError:
            raise
        except RequestException as e:
            self.logger.error(f"Network error during LinkedIn user info retrieval: {e}", exc_info=True)
            if isinstance(e, ConnectionError):
                raise OAuthFlowError("Network connection failed. Please check your internet connection.")
            elif isinstance(e, Timeout):
                raise OAuthFlowError("Request timed out. Please try again.")
            else:
                raise OAuthFlowError(f"User info retrieval network error: {e}")
        except (AuthlibBaseError, ValueError) as e:
            self.logger.error(f"Unexpected error during LinkedIn user info retrieval: {e}", exc_info=True)
            raise OAuthFlowError(f"User info retrieval failed: {e}")

    def authenticate(self, token_data: Dict[str, Any]) -> Tuple[LinkedInAuthenticatedContext, LinkedInFullProfile]:
        """
        Complete a LinkedIn login from a successful token response.

        Args:
            token_data: Token response from the LinkedIn token endpoint

        Returns:
            Tuple of (authenticated context, extended profile)

        Raises:
            OAuthFlowError: If the token response is invalid or the profile cannot be fetched
        """
        token = self.parse_token_response(token_data)
        user = self.get_user_info(token.access_token)

        context, profile = project(user, token.access_token, token_data.get('expires_in'))

        if user and profile == LinkedInFullProfile.empty():
            self.logger.warning(f"LinkedIn profile for user {context.id} could not be projected; using empty profile")

        self.logger.info(f"Successfully authenticated LinkedIn user: {context.id or 'unknown'}")

        return context, profile
