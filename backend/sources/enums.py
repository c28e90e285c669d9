"""
Source enums

Defines the closed set of link source kinds and the partner API auth modes.
This is in a separate file to avoid circular imports between registry and sources.
"""

from enum import Enum


class SourceKind(str, Enum):
    """
    Supported link source kinds

    The aggregator holds an ordered list of these variants; each one exposes
    the same fetch(company_name, limit) operation.
    """
    TEMPLATE = "template"
    PARTNER_API = "partner_api"
    SITE_CANDIDATE = "site_candidate"


class AuthMode(str, Enum):
    """Partner API authentication modes"""
    OAUTH2 = "oauth2"
    API_KEY = "apiKey"

    @classmethod
    def from_string(cls, value: str) -> "AuthMode":
        """
        Convert a config string to AuthMode

        Args:
            value: Auth mode (case-insensitive). "basic", "apikey" and
                   "api_key" all mean key-based auth.

        Returns:
            AuthMode enum value (OAUTH2 for anything unrecognized, which is
            the partner platform's default)

        Example:
            >>> AuthMode.from_string("basic")
            <AuthMode.API_KEY: 'apiKey'>
        """
        normalized = (value or "").strip().lower()
        if normalized in ("apikey", "api_key", "basic"):
            return cls.API_KEY
        return cls.OAUTH2
