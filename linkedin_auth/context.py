"""
Authenticated LinkedIn login context.

This module turns a LinkedIn person document and its access token into the
identity fields the hosting authentication pipeline needs to sign the user in,
together with the serialized extended profile.
"""

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Any, Optional, Tuple

from .profile import LinkedInFullProfile


_INTEGER_PATTERN = re.compile(r'\s*[+-]?[0-9]+\s*')
_INT32_MIN = -2 ** 31
_INT32_MAX = 2 ** 31 - 1


def parse_expires(expires: Any) -> Optional[timedelta]:
    """
    Parse an 'expires in' value given in seconds.

    Only base-10 ASCII digits with an optional sign and surrounding whitespace are
    accepted, and the value must fit in a signed 32-bit integer.

    Args:
        expires: Seconds until expiration, usually as a string

    Returns:
        Expiry duration, or None if the value is missing or unparsable
    """
    if expires is None or isinstance(expires, bool):
        return None

    text = str(expires)
    if not _INTEGER_PATTERN.fullmatch(text):
        return None

    seconds = int(text)
    if seconds < _INT32_MIN or seconds > _INT32_MAX:
        return None

    return timedelta(seconds=seconds)


def _optional_string(user: Dict[str, Any], key: str) -> Optional[str]:
    value = user.get(key)
    return str(value) if value is not None else None


@dataclass(frozen=True)
class TokenInfo:
    """Access token and its lifetime from an OAuth2 token response."""
    access_token: str
    expires_in: Optional[timedelta] = None

    @classmethod
    def from_response(cls, access_token: str, expires: Any = None) -> 'TokenInfo':
        return cls(access_token=access_token, expires_in=parse_expires(expires))


@dataclass(frozen=True)
class LinkedInAuthenticatedContext:
    """
    Identity of a user who completed the LinkedIn login.

    Attributes:
        id: LinkedIn member ID, or None if the document has no 'id'
        user: The raw LinkedIn person document
        access_token: LinkedIn access token
        expires_in: Access token lifetime, if the token response carried a valid one
        profile: JSON-serialized LinkedInFullProfile
        name: Formatted member name, if present
        email: Primary email address, if present
    """
    id: Optional[str]
    user: Dict[str, Any]
    access_token: str
    expires_in: Optional[timedelta]
    profile: str
    name: Optional[str] = None
    email: Optional[str] = None


def project(user: Dict[str, Any], access_token: str,
            expires: Any = None) -> Tuple[LinkedInAuthenticatedContext, LinkedInFullProfile]:
    """
    Project a LinkedIn person document into identity fields and an extended profile.

    Identity fields are extracted independently of the extended profile, so a
    malformed profile still yields a usable identity with an empty profile.
    No error is raised for missing or malformed optional data.

    Args:
        user: JSON person document from the LinkedIn People API
        access_token: LinkedIn access token
        expires: Seconds until the token expires, as returned by the token endpoint

    Returns:
        Tuple of (authenticated context, extended profile)
    """
    token = TokenInfo.from_response(access_token, expires)
    profile = LinkedInFullProfile.from_user(user)

    context = LinkedInAuthenticatedContext(
        id=_optional_string(user, 'id'),
        user=user,
        access_token=token.access_token,
        expires_in=token.expires_in,
        profile=profile.to_json(),
        name=_optional_string(user, 'formattedName'),
        email=_optional_string(user, 'emailAddress')
    )

    return context, profile
