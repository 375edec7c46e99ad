"""
Configuration module for the LinkedIn authentication provider.

This module handles environment variable loading, provider configuration loading
with environment variable reference support, and logging setup.
"""

import os
import sys
import json
import logging
from typing import Dict, Any, Optional, List
from dotenv import load_dotenv

from .providers import LinkedInProvider


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""
    pass


class Config:
    """Configuration class for the LinkedIn authentication provider."""

    def __init__(self, providers_config_path: Optional[str] = None):
        """
        Initialize configuration by loading environment variables and provider configurations.

        Args:
            providers_config_path: Path to the providers configuration file; defaults to
                LINKEDIN_AUTH_PROVIDERS_FILE or providers.json
        """
        load_dotenv()

        self.providers_config_path = (
            providers_config_path or os.getenv('LINKEDIN_AUTH_PROVIDERS_FILE', 'providers.json')
        )
        self.DEBUG = os.getenv('LINKEDIN_AUTH_DEBUG', 'False').lower() == 'true'

        self._load_provider_configurations()

    def _load_provider_configurations(self) -> None:
        """Load provider configurations from JSON file with environment variable resolution."""
        try:
            with open(self.providers_config_path, 'r') as f:
                config_data = json.load(f)
        except FileNotFoundError:
            raise ConfigurationError(f"Provider configuration file not found: {self.providers_config_path}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in provider configuration file: {e}")

        self.PROVIDER_CONFIGS = config_data.get('providers', {})
        self.PROVIDER_SETTINGS = config_data.get('settings', {})

        self.OAUTH_CONFIG = {}
        for provider_name, provider_config in self.PROVIDER_CONFIGS.items():
            self.OAUTH_CONFIG[provider_name] = self._process_provider_config(
                provider_name, provider_config.copy()
            )

    def _process_provider_config(self, provider_name: str, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process provider configuration by resolving environment variable references.

        Values of the form 'env:NAME' are replaced by the NAME environment variable.

        Args:
            provider_name: Provider name, used in error messages
            config: Raw provider configuration dictionary

        Returns:
            Processed configuration with environment variables resolved

        Raises:
            ConfigurationError: If a referenced variable is missing for an enabled provider
        """
        processed_config = {}

        for key, value in config.items():
            if isinstance(value, str) and value.startswith('env:'):
                env_var_name = value[4:]
                env_value = os.getenv(env_var_name)
                if env_value is None and config.get('enabled', True):
                    raise ConfigurationError(
                        f"Environment variable {env_var_name} not found for provider {provider_name}"
                    )
                processed_config[key] = env_value
            else:
                processed_config[key] = value

        return processed_config

    def get_oauth_config(self, provider: str) -> Dict[str, Any]:
        """
        Get OAuth configuration for a specific provider.

        Raises:
            ConfigurationError: If provider is not supported or disabled
        """
        if provider not in self.OAUTH_CONFIG:
            raise ConfigurationError(f"Unsupported OAuth provider: {provider}")

        if not self.is_provider_enabled(provider):
            raise ConfigurationError(f"OAuth provider is disabled: {provider}")

        return self.OAUTH_CONFIG[provider]

    def get_enabled_providers(self) -> List[str]:
        return [
            provider_name for provider_name, config in self.PROVIDER_CONFIGS.items()
            if config.get('enabled', True)
        ]

    def is_provider_enabled(self, provider: str) -> bool:
        if provider not in self.PROVIDER_CONFIGS:
            return False
        return self.PROVIDER_CONFIGS[provider].get('enabled', True)

    def get_provider_settings(self) -> Dict[str, Any]:
        """
        Get global provider settings.

        Returns:
            Provider settings dictionary
        """
        return self.PROVIDER_SETTINGS.copy()

    def reload_provider_configurations(self) -> None:
        """
        Reload provider configurations from file.

        Raises:
            ConfigurationError: If configuration loading fails
        """
        self._load_provider_configurations()


def configure_logging(debug: bool = False) -> None:
    """
    Configure package logging.

    Third-party HTTP and OAuth libraries are kept at WARNING unless debug is enabled.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    logging.getLogger('authlib').setLevel(logging.DEBUG if debug else logging.WARNING)
    logging.getLogger('requests').setLevel(logging.DEBUG if debug else logging.WARNING)


def create_provider(config: Config) -> LinkedInProvider:
    """
    Create the LinkedIn provider from configuration.

    Raises:
        ConfigurationError: If the LinkedIn provider is missing or disabled
        ProviderConfigurationError: If the LinkedIn configuration is invalid
    """
    provider_config = dict(config.get_oauth_config('linkedin'))
    provider_config.pop('enabled', None)

    settings = config.get_provider_settings()
    if 'timeout' in settings and 'timeout' not in provider_config:
        provider_config['timeout'] = settings['timeout']

    return LinkedInProvider(provider_config)


_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance, loading it on first use.

    Returns:
        The global Config instance
    """
    global _config
    if _config is None:
        _config = Config()
        configure_logging(_config.DEBUG)
    return _config
