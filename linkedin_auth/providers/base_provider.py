"""
Base provider interface for OAuth 2.0 identity providers.

This module defines the abstract base class for providers that turn a completed
OAuth 2.0 token response into an authenticated user, providing configuration
validation, token response handling and user profile retrieval hooks.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import logging
from urllib.parse import urlparse

from ..context import TokenInfo, parse_expires


class ProviderConfigurationError(Exception):
    """Raised when provider configuration is invalid."""
    pass


class OAuthFlowError(Exception):
    """Raised when OAuth flow encounters an error."""
    pass


class BaseProvider(ABC):
    """
    Abstract base class for OAuth 2.0 identity providers.

    The hosting authentication pipeline owns the authorization redirect and the
    code-for-token exchange; providers take over once an access token is available.
    """

    def __init__(self, name: str, config: Dict[str, Any]):
        """
        Initialize the OAuth provider.

        Args:
            name: Provider name (e.g., 'linkedin')
            config: Provider configuration dictionary

        Raises:
            ProviderConfigurationError: If configuration is invalid
        """
        self.name = name
        self.config = config
        self.logger = logging.getLogger(f"{__name__}.{name}")

        self._validate_config()

        self.client_id = config['client_id']
        self.client_secret = config['client_secret']
        self.scopes = config.get('scopes', [])
        self.userinfo_url = config.get('userinfo_url')
        self.display_name = config.get('display_name', name.title())
        self.timeout = config.get('timeout', 30)

        self.logger.info(f"Initialized {self.display_name} OAuth provider")

    def _validate_config(self) -> None:
        """
        Validate provider configuration.

        Raises:
            ProviderConfigurationError: If required configuration is missing or invalid
        """
        required_fields = ['client_id', 'client_secret']
        missing_fields = [field for field in required_fields if not self.config.get(field)]

        if missing_fields:
            raise ProviderConfigurationError(
                f"Missing required configuration for {self.name} provider: {', '.join(missing_fields)}"
            )

        if not isinstance(self.config['client_id'], str):
            raise ProviderConfigurationError(f"client_id must be a string for {self.name} provider")

        if not isinstance(self.config['client_secret'], str):
            raise ProviderConfigurationError(f"client_secret must be a string for {self.name} provider")

        scopes = self.config.get('scopes')
        if scopes is not None and not isinstance(scopes, list):
            raise ProviderConfigurationError(f"scopes must be a list for {self.name} provider")

        url = self.config.get('userinfo_url')
        if url and not self._is_valid_url(url):
            raise ProviderConfigurationError(f"Invalid userinfo_url for {self.name} provider: {url}")

    def _is_valid_url(self, url: str) -> bool:
        """
        Validate URL format.

        Args:
            url: URL to validate

        Returns:
            True if URL has a scheme and host, False otherwise
        """
        try:
            result = urlparse(url)
            return all([result.scheme, result.netloc])
        except ValueError:
            return False

    def validate_token_response(self, token_data: Dict[str, Any]) -> bool:
        """
        Validate OAuth token response.

        A missing or unparsable expires_in is tolerated; the token is then
        treated as having no known expiry.

        Args:
            token_data: Token response from OAuth provider

        Returns:
            True if token response is valid, False otherwise
        """
        if not token_data:
            self.logger.error(f"Empty token response from {self.name}")
            return False

        if not token_data.get('access_token'):
            self.logger.error(f"Missing access_token in response from {self.name}")
            return False

        expires_in = token_data.get('expires_in')
        if expires_in is not None and parse_expires(expires_in) is None:
            self.logger.warning(f"Non-numeric expires_in value from {self.name}: {expires_in}")

        return True

    def parse_token_response(self, token_data: Dict[str, Any]) -> TokenInfo:
        """
        Extract the access token and its lifetime from an OAuth token response.

        Raises:
            OAuthFlowError: If the token response is invalid
        """
        if not self.validate_token_response(token_data):
            raise OAuthFlowError(f"Invalid token response from {self.display_name}")

        return TokenInfo.from_response(token_data['access_token'], token_data.get('expires_in'))

    @abstractmethod
    def get_user_info(self, access_token: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve the raw user profile document using an access token.

        Args:
            access_token: Valid access token

        Returns:
            User profile document

        Raises:
            OAuthFlowError: If user info retrieval fails
        """
        pass

    def __str__(self) -> str:
        """String representation of the provider."""
        return f"{self.__class__.__name__}(name='{self.name}', display_name='{self.display_name}')"

    def __repr__(self) -> str:
        """Detailed string representation of the provider."""
        return (f"{self.__class__.__name__}(name='{self.name}', "
                f"display_name='{self.display_name}', scopes={self.scopes})")
