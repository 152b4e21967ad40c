"""
Gift lookup service - match-and-resolve engine.

Pipeline (strictly forward, single pass):
1. Normalize last name + postcode (reject blank input before fetching)
2. Fetch the most recent orders once
3. Resolve the first eligible order whose shipping identity matches
4. Select the gift message: metafield value > order note > none
5. Return a LookupOutcome; every failure becomes an outcome, never an exception
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from gift_lookup.models.lookup import GiftMessage, LookupOutcome, NormalizedIdentity, OrderRecord
from gift_lookup.services.shopify_service import ShopifyAPIError, ShopifyOrderFetcher, ShopifyServiceError
from gift_lookup.utils.normalization import (
    InvalidLookupRequest, normalize_identity, normalize_last_name, normalize_postcode
)


logger = logging.getLogger(__name__)

DEFAULT_RECENCY_WINDOW_DAYS = 90


def _is_within_window(order: OrderRecord, cutoff: datetime) -> bool:
    # Undated orders cannot be proven recent
    if order.created_at is None:
        return False
    created_at = order.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at >= cutoff


def _matches_identity(order: OrderRecord, identity: NormalizedIdentity) -> bool:
    ship_last = normalize_last_name(order.shipping_last_name)
    ship_zip = normalize_postcode(order.shipping_postcode)
    if not ship_last or not ship_zip:
        return False
    return ship_last == identity.last and ship_zip == identity.postcode


def resolve_order(
    orders: Iterable[OrderRecord],
    identity: NormalizedIdentity,
    recency_window_days: int = DEFAULT_RECENCY_WINDOW_DAYS,
    now: Optional[datetime] = None
) -> Optional[OrderRecord]:
    """
    Return the first order in fetched order that is recent and matches identity.

    The cutoff is checked per record rather than as an early stop, so an
    out-of-order upstream page still resolves correctly.

    Args:
        orders: Orders as returned upstream (newest first)
        identity: Normalized request identity
        recency_window_days: Maximum order age in days
        now: Reference time (defaults to current UTC time)

    Returns:
        The matched OrderRecord, or None when nothing qualifies
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now - timedelta(days=recency_window_days)

    for order in orders:
        if not _is_within_window(order, cutoff):
            continue
        if _matches_identity(order, identity):
            return order
    return None


def select_message(order: OrderRecord) -> GiftMessage:
    """Pick the gift message: metafield value first, then note. Empty counts as absent."""
    for candidate in (order.gift_metafield_value, order.note):
        if candidate:
            return GiftMessage(present=True, text=candidate)
    return GiftMessage(present=False)


def lookup_gift_message(
    last_name: Optional[str],
    postcode: Optional[str],
    fetcher: Optional[ShopifyOrderFetcher],
    limit: int,
    recency_window_days: int = DEFAULT_RECENCY_WINDOW_DAYS,
    now: Optional[datetime] = None
) -> LookupOutcome:
    """
    Run a full lookup and map every result or failure to a LookupOutcome.

    Blank input is rejected before the fetcher is consulted, so a missing
    fetcher (unconfigured credentials) still reports bad_request first.

    Returns:
        LookupOutcome with one of the LookupStatus categories
    """
    try:
        identity = normalize_identity(last_name, postcode)
    except InvalidLookupRequest:
        logger.info("[GIFT_LOOKUP] bad_request: missing last name or postcode")
        return LookupOutcome.bad_request()

    if fetcher is None:
        logger.error("[GIFT_LOOKUP] order fetcher not configured")
        return LookupOutcome.internal_error()

    try:
        orders = fetcher.fetch_recent_orders(limit)
    except ShopifyAPIError as e:
        logger.warning("[GIFT_LOOKUP] upstream status=%s: %s", e.status_code, e)
        return LookupOutcome.upstream_error(e.status_code)
    except ShopifyServiceError:
        logger.exception("[GIFT_LOOKUP] order fetch failed")
        return LookupOutcome.internal_error()
    except Exception:
        logger.exception("[GIFT_LOOKUP] unexpected error during order fetch")
        return LookupOutcome.internal_error()

    order = resolve_order(orders, identity, recency_window_days=recency_window_days, now=now)
    if order is None:
        logger.info("[GIFT_LOOKUP] not_found scanned=%d window_days=%d", len(orders), recency_window_days)
        return LookupOutcome.not_found()

    outcome = LookupOutcome.found(select_message(order))
    logger.info("[GIFT_LOOKUP] %s order=%s", outcome.status.value, order.name)
    return outcome
