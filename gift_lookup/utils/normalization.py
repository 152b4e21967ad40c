"""
Normalization utilities for customer identity matching.

Provides centralized, deterministic normalization for:
- Last names (case-insensitive, whitespace-safe)
- Postcodes (case-insensitive, ignores internal spaces and hyphens)

Used by:
- Request validation before any upstream fetch
- Comparison against order shipping addresses in the match resolver
"""
import re
from typing import Optional

from gift_lookup.models.lookup import NormalizedIdentity


_POSTCODE_STRIP = re.compile(r"[\s-]")


class InvalidLookupRequest(ValueError):
    """Raised when last name or postcode is missing or blank."""
    pass


def normalize_last_name(value: Optional[str]) -> str:
    """
    Normalize a last name for exact, case-insensitive matching.

    Examples:
        "Smith" -> "smith"
        "  O'Brien " -> "o'brien"
        None -> ""
    """
    if not value:
        return ""
    return str(value).strip().lower()


def normalize_postcode(value: Optional[str]) -> str:
    """
    Normalize a postcode for matching regardless of spacing or hyphenation.

    Examples:
        "SW1A 1-AA" -> "SW1A1AA"
        "sw1a1aa" -> "SW1A1AA"
        None -> ""
    """
    if not value:
        return ""
    return _POSTCODE_STRIP.sub("", str(value).strip().upper())


def normalize_identity(last_name: Optional[str], postcode: Optional[str]) -> NormalizedIdentity:
    """
    Build the identity used to match orders.

    Raises:
        InvalidLookupRequest: If either field is missing or empty after trimming
    """
    last = normalize_last_name(last_name)
    pc = normalize_postcode(postcode)
    if not last or not pc:
        raise InvalidLookupRequest("Both last name and postcode are required")
    return NormalizedIdentity(last=last, postcode=pc)
