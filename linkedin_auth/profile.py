"""
Extended LinkedIn profile projection.

This module maps the JSON person document returned by the LinkedIn People API
into a LinkedInFullProfile: free-text fields with normalized line breaks and
ordered lists of positions, educations, projects, certifications, courses and skills.
"""

import json
from dataclasses import dataclass, field, asdict
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional, List


LINE_BREAK = '<br>'
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def select_token(token: Any, *path: str) -> Any:
    """
    Follow a key path through nested JSON objects.

    Args:
        token: JSON object to start from
        *path: Keys to follow in order

    Returns:
        The value at the end of the path, or None if any key is missing
    """
    for key in path:
        if not isinstance(token, dict) or key not in token:
            return None
        token = token[key]
    return token


def require_token(token: Any, *path: str) -> Any:
    """
    Follow a key path through nested JSON objects that must exist.

    Raises:
        KeyError: If a key along the path is missing or null
        TypeError: If an intermediate value is not a JSON object
    """
    for key in path:
        if not isinstance(token, dict):
            raise TypeError(f"Expected an object at '{key}', got {type(token).__name__}")
        if token.get(key) is None:
            raise KeyError(key)
        token = token[key]
    return token


def _text(token: Any, key: str) -> Optional[str]:
    """Read a scalar child as a string; missing or null children read as None."""
    value = select_token(token, key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise TypeError(f"Cannot read '{key}' as text: got {type(value).__name__}")
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _flag(token: Any, key: str) -> bool:
    """Read a boolean child; only a missing key reads as False."""
    if key not in token:
        return False
    value = token[key]
    if not isinstance(value, bool):
        raise TypeError(f"Cannot read '{key}' as a flag: got {type(value).__name__}")
    return value


def _object(token: Dict[str, Any], key: str) -> Dict[str, Any]:
    """
    Read a child that must be a JSON object.

    Raises:
        KeyError: If the key is missing
        TypeError: If the value is null or not an object
    """
    value = token[key]
    if not isinstance(value, dict):
        raise TypeError(f"Expected an object at '{key}', got {type(value).__name__}")
    return value


def _values(user: Dict[str, Any], key: str) -> List[Any]:
    """Read the values array of a collection; every element must be an object."""
    values = require_token(user, key, 'values')
    if not isinstance(values, list):
        raise TypeError(f"Expected a list of values for '{key}'")
    if not all(isinstance(value, dict) for value in values):
        raise TypeError(f"Expected objects in the values of '{key}'")
    return values


def replace_line_breaks(text: str) -> str:
    """Replace every newline with an HTML line break."""
    return text.replace('\n', LINE_BREAK)


def _multiline(token: Any, key: str) -> str:
    # Present-but-null text is malformed and fails the whole projection
    return replace_line_breaks(_text(token, key))


def _month_year(date: Any) -> str:
    """Format a date object as 'month - year'."""
    return f"{_text(date, 'month') or ''} - {_text(date, 'year') or ''}"


def _last_modified(user: Dict[str, Any]) -> datetime:
    """Read the epoch-millisecond lastModifiedTimestamp; raises if missing or not a number."""
    raw = user['lastModifiedTimestamp']
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise TypeError(f"lastModifiedTimestamp is not a number: {raw!r}")
    return EPOCH + timedelta(milliseconds=int(raw))


@dataclass(frozen=True)
class LinkedInPosition:
    """A single employment position."""
    company: Optional[str]
    industry: Optional[str]
    title: Optional[str]
    is_current_company: bool
    start_date: str
    end_date: Optional[str] = None
    summary: Optional[str] = None

    @classmethod
    def from_value(cls, value: Dict[str, Any]) -> 'LinkedInPosition':
        company = _object(value, 'company')
        return cls(
            company=_text(company, 'name'),
            industry=_text(company, 'industry'),
            title=_text(value, 'title'),
            is_current_company=_flag(value, 'isCurrent'),
            start_date=_month_year(_object(value, 'startDate')),
            end_date=_month_year(_object(value, 'endDate')) if 'endDate' in value else None,
            summary=_multiline(value, 'summary') if 'summary' in value else None
        )


@dataclass(frozen=True)
class LinkedInEducation:
    """A single education entry; degree carries the attendance years."""
    school_name: Optional[str]
    degree: str
    field_of_study: Optional[str]

    @classmethod
    def from_value(cls, value: Dict[str, Any]) -> 'LinkedInEducation':
        start_year = _text(_object(value, 'startDate'), 'year') or ''
        end_year = _text(_object(value, 'endDate'), 'year') or ''
        return cls(
            school_name=_text(value, 'schoolName'),
            degree=f"{_text(value, 'degree') or ''} {start_year} - {end_year}",
            field_of_study=_text(value, 'fieldOfStudy')
        )


@dataclass(frozen=True)
class LinkedInProject:
    """A single project; description and url are optional."""
    name: Optional[str]
    description: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_value(cls, value: Dict[str, Any]) -> 'LinkedInProject':
        return cls(
            name=_text(value, 'name'),
            description=_multiline(value, 'description') if 'description' in value else None,
            url=_text(value, 'url') if 'url' in value else None
        )


@dataclass(frozen=True)
class LinkedInFullProfile:
    """
    Extended LinkedIn profile.

    Each field is None when the source document lacks the corresponding key.
    A profile built from a malformed document has every list field set to an
    empty list and every other field left unset.
    """
    last_modified: Optional[datetime] = None
    summary: Optional[str] = None
    interests: Optional[str] = None
    certifications: Optional[List[str]] = field(default_factory=list)
    courses: Optional[List[str]] = field(default_factory=list)
    skills: Optional[List[str]] = field(default_factory=list)
    positions: Optional[List[LinkedInPosition]] = field(default_factory=list)
    educations: Optional[List[LinkedInEducation]] = field(default_factory=list)
    projects: Optional[List[LinkedInProject]] = field(default_factory=list)

    @classmethod
    def empty(cls) -> 'LinkedInFullProfile':
        """Profile used when the source document cannot be projected."""
        return cls()

    @classmethod
    def from_user(cls, user: Dict[str, Any]) -> 'LinkedInFullProfile':
        """
        Project a LinkedIn person document into an extended profile.

        Extraction is all-or-nothing: if any field fails to extract, including a
        missing lastModifiedTimestamp, the partial result is discarded and the
        empty profile is returned instead. This method never raises.

        Args:
            user: JSON person document from the LinkedIn People API

        Returns:
            Projected profile, or the empty profile if the document is malformed
        """
        try:
            return cls(
                last_modified=_last_modified(user),
                summary=_multiline(user, 'summary') if 'summary' in user else None,
                interests=_multiline(user, 'interests') if 'interests' in user else None,
                certifications=[
                    _text(value, 'name') for value in _values(user, 'certifications')
                ] if 'certifications' in user else None,
                courses=[
                    _text(value, 'name') for value in _values(user, 'courses')
                ] if 'courses' in user else None,
                skills=[
                    _text(_object(value, 'skill'), 'name') for value in _values(user, 'skills')
                ] if 'skills' in user else None,
                positions=[
                    LinkedInPosition.from_value(value) for value in _values(user, 'positions')
                ] if 'positions' in user else None,
                educations=[
                    LinkedInEducation.from_value(value) for value in _values(user, 'educations')
                ] if 'educations' in user else None,
                projects=[
                    LinkedInProject.from_value(value) for value in _values(user, 'projects')
                ] if 'projects' in user else None
            )
        except Exception:
            return cls.empty()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = asdict(self)
        if self.last_modified is not None:
            result['last_modified'] = self.last_modified.isoformat()
        return result

    def to_json(self) -> str:
        """Serialize the profile for transport alongside the identity."""
        return json.dumps(self.to_dict())
