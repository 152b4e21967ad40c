"""
Lookup value types shared by the normalizer, fetcher, resolver and formatter.

All of these are immutable views constructed at request start and discarded
when the response is sent.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from gift_lookup.models.enums import LookupStatus


@dataclass(frozen=True)
class NormalizedIdentity:
    """Canonical last name + postcode used for comparison against shipping details."""
    last: str
    postcode: str


@dataclass(frozen=True)
class OrderRecord:
    """Read-only view over one upstream order."""
    name: str
    created_at: Optional[datetime]
    note: Optional[str] = None
    shipping_last_name: Optional[str] = None
    shipping_postcode: Optional[str] = None
    gift_metafield_value: Optional[str] = None


@dataclass(frozen=True)
class GiftMessage:
    present: bool
    text: str = ""


@dataclass(frozen=True)
class LookupOutcome:
    """
    Result of a single lookup. Exactly one is produced per request.

    message is non-empty only for FOUND_WITH_MESSAGE; upstream_status is set
    only for UPSTREAM_ERROR.
    """
    status: LookupStatus
    message: str = ""
    upstream_status: Optional[int] = None

    @classmethod
    def bad_request(cls) -> "LookupOutcome":
        return cls(status=LookupStatus.BAD_REQUEST)

    @classmethod
    def not_found(cls) -> "LookupOutcome":
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def found(cls, message: GiftMessage) -> "LookupOutcome":
        if message.present and message.text:
            return cls(status=LookupStatus.FOUND_WITH_MESSAGE, message=message.text)
        return cls(status=LookupStatus.FOUND_NO_MESSAGE)

    @classmethod
    def upstream_error(cls, status_code: int) -> "LookupOutcome":
        return cls(status=LookupStatus.UPSTREAM_ERROR, upstream_status=status_code)

    @classmethod
    def internal_error(cls) -> "LookupOutcome":
        return cls(status=LookupStatus.INTERNAL_ERROR)
