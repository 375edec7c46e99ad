"""
Unit tests for the authenticated LinkedIn context.

This module tests expiry parsing, identity field extraction and the combined
projection of a person document into identity fields and an extended profile.
"""

import unittest
import json
from datetime import timedelta
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from linkedin_auth.context import LinkedInAuthenticatedContext, TokenInfo, parse_expires, project
from linkedin_auth.profile import LinkedInFullProfile

from test_profile import make_user


class TestParseExpires(unittest.TestCase):
    """Test cases for expiry parsing."""

    def test_valid_integer_strings(self):
        """Test valid integer strings become second durations."""
        for value, seconds in [('0', 0), ('3600', 3600), ('5184000', 5184000),
                               (' 60 ', 60), ('+30', 30), ('2147483647', 2147483647)]:
            with self.subTest(value=value):
                self.assertEqual(parse_expires(value), timedelta(seconds=seconds))

    def test_integer_value(self):
        """Test a numeric expires_in from a JSON token response is accepted."""
        self.assertEqual(parse_expires(3600), timedelta(seconds=3600))

    def test_unparsable_values(self):
        """Test unparsable values leave expiry unset."""
        for value in [None, '', '   ', 'abc', '12.5', '1e3', '0x10', '1_000',
                      '١٢', '2147483648', '-2147483649', True]:
            with self.subTest(value=value):
                self.assertIsNone(parse_expires(value))

    def test_token_info_from_response(self):
        """Test TokenInfo keeps the access token even without a valid expiry."""
        token = TokenInfo.from_response('token-123', 'soon')

        self.assertEqual(token.access_token, 'token-123')
        self.assertIsNone(token.expires_in)


class TestProject(unittest.TestCase):
    """Test cases for projecting a person document."""

    def test_identity_fields(self):
        """Test identity fields are extracted from the document and token."""
        user = make_user()

        context, profile = project(user, 'token-123', '5184000')

        self.assertIsInstance(context, LinkedInAuthenticatedContext)
        self.assertEqual(context.id, 'abc123')
        self.assertIs(context.user, user)
        self.assertEqual(context.access_token, 'token-123')
        self.assertEqual(context.expires_in, timedelta(seconds=5184000))
        self.assertEqual(context.name, 'Ada Lovelace')
        self.assertEqual(context.email, 'ada@example.com')
        self.assertEqual(profile, LinkedInFullProfile.from_user(user))

    def test_profile_attached_as_json(self):
        """Test the serialized profile is attached to the context."""
        context, profile = project(make_user(), 'token-123', '3600')

        self.assertEqual(context.profile, profile.to_json())
        self.assertEqual(json.loads(context.profile)['certifications'], ['PMP', 'CISSP'])

    def test_missing_id(self):
        """Test a document without an id yields an unset id."""
        user = make_user()
        del user['id']
        del user['formattedName']

        context, _ = project(user, 'token-123', '3600')

        self.assertIsNone(context.id)
        self.assertIsNone(context.name)
        self.assertEqual(context.email, 'ada@example.com')

    def test_numeric_id_is_stringified(self):
        """Test a numeric id is converted to a string."""
        context, _ = project({'id': 42}, 'token-123', '3600')

        self.assertEqual(context.id, '42')

    def test_unparsable_expiry(self):
        """Test an unparsable expiry leaves expires_in unset without failing."""
        context, profile = project(make_user(), 'token-123', 'never')

        self.assertIsNone(context.expires_in)
        self.assertEqual(profile.skills, ['Python', 'Mathematics'])

    def test_malformed_profile_keeps_identity(self):
        """Test identity survives when the extended profile is reset."""
        user = make_user()
        del user['lastModifiedTimestamp']

        context, profile = project(user, 'token-123', '3600')

        self.assertEqual(context.id, 'abc123')
        self.assertEqual(context.access_token, 'token-123')
        self.assertEqual(context.expires_in, timedelta(seconds=3600))
        self.assertEqual(profile, LinkedInFullProfile.empty())
        self.assertEqual(json.loads(context.profile)['positions'], [])

    def test_empty_document(self):
        """Test an empty document still produces a context."""
        context, profile = project({}, 'token-123', None)

        self.assertIsNone(context.id)
        self.assertIsNone(context.expires_in)
        self.assertEqual(profile, LinkedInFullProfile.empty())

    def test_project_is_idempotent(self):
        """Test projecting the same document twice gives equal results."""
        user = make_user()

        self.assertEqual(project(user, 'token-123', '3600'), project(user, 'token-123', '3600'))


if __name__ == '__main__':
    unittest.main()
