"""
Shopify Service - Client for the Shopify Admin GraphQL order query.

Provides:
- Credentials container built from settings at the request boundary
- A single bounded fetch of the most recent orders, newest-first
- Mapping of GraphQL order nodes to OrderRecord views
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Dict, List, Any

import requests

from gift_lookup.config import Settings
from gift_lookup.models.lookup import OrderRecord


logger = logging.getLogger(__name__)

# Shopify caps `first:` at 250 per connection page
MAX_PAGE_SIZE = 250

ORDERS_QUERY = """
{
  orders(first: %(limit)d, sortKey: CREATED_AT, reverse: true) {
    edges {
      node {
        name
        createdAt
        note
        shippingAddress { lastName zip }
        metafield(namespace: "%(namespace)s", key: "%(key)s") { value }
      }
    }
  }
}
"""


@dataclass(frozen=True)
class ShopifyCredentials:
    """Credentials for Shopify Admin API access."""
    store_domain: str
    access_token: str
    api_version: str = "2024-10"

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShopifyCredentials":
        return cls(
            store_domain=settings.SHOPIFY_STORE_DOMAIN,
            access_token=settings.SHOPIFY_ADMIN_TOKEN,
            api_version=settings.SHOPIFY_API_VERSION,
        )

    @property
    def graphql_url(self) -> str:
        domain = self.store_domain.strip()
        for prefix in ("https://", "http://"):
            if domain.startswith(prefix):
                domain = domain[len(prefix):]
        return f"https://{domain.rstrip('/')}/admin/api/{self.api_version}/graphql.json"


class ShopifyServiceError(Exception):
    """Base exception for Shopify service errors (transport or malformed response)."""
    pass


class ShopifyAPIError(ShopifyServiceError):
    """Raised when Shopify responds with a non-success HTTP status."""
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


def _build_shopify_headers(access_token: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "X-Shopify-Access-Token": access_token,
    }


def _parse_order_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a Shopify createdAt value.

    Returns:
        timezone-aware datetime in UTC, or None if missing or unparseable
    """
    if not value or not isinstance(value, str):
        return None
    ts_str = value
    if ts_str.endswith("Z"):
        ts_str = ts_str[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(ts_str)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def map_order_node(node: Dict[str, Any]) -> OrderRecord:
    """
    Map a GraphQL order node to an OrderRecord.

    Missing nested objects (no shipping address, no metafield) map to None
    fields rather than errors.
    """
    shipping = node.get("shippingAddress") or {}
    metafield = node.get("metafield") or {}
    return OrderRecord(
        name=str(node.get("name") or ""),
        created_at=_parse_order_timestamp(node.get("createdAt")),
        note=_optional_text(node.get("note")),
        shipping_last_name=_optional_text(shipping.get("lastName")),
        shipping_postcode=_optional_text(shipping.get("zip")),
        gift_metafield_value=_optional_text(metafield.get("value")),
    )


def _extract_edges(payload: Any) -> List[Dict[str, Any]]:
    if not isinstance(payload, dict):
        raise ShopifyServiceError("Shopify response body is not a JSON object")

    data = payload.get("data")
    if not isinstance(data, dict):
        errors = payload.get("errors")
        raise ShopifyServiceError(f"Shopify response has no data: {errors!r}")

    orders = data.get("orders")
    if not isinstance(orders, dict) or not isinstance(orders.get("edges"), list):
        raise ShopifyServiceError("Shopify response is missing data.orders.edges")

    return orders["edges"]


class ShopifyOrderFetcher:
    """
    Issues one bounded order query per lookup.

    No retries and no pagination: if the matching order lies beyond the first
    page the lookup reports not found.
    """

    def __init__(
        self,
        credentials: ShopifyCredentials,
        timeout: float = 30.0,
        metafield_namespace: str = "gift",
        metafield_key: str = "message",
    ):
        self.credentials = credentials
        self.timeout = timeout
        self.metafield_namespace = metafield_namespace
        self.metafield_key = metafield_key

    def build_query(self, limit: int) -> str:
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}, got {limit}")
        return ORDERS_QUERY % {
            "limit": limit,
            "namespace": self.metafield_namespace,
            "key": self.metafield_key,
        }

    def fetch_recent_orders(self, limit: int) -> List[OrderRecord]:
        """
        Fetch up to `limit` orders sorted by creation time, newest first.

        Raises:
            ShopifyAPIError: If Shopify returns a non-success status
            ShopifyServiceError: On transport failure or an unparseable body
        """
        query = self.build_query(limit)

        try:
            response = requests.post(
                self.credentials.graphql_url,
                headers=_build_shopify_headers(self.credentials.access_token),
                json={"query": query},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise ShopifyServiceError(f"Request timeout: {e}") from e
        except requests.exceptions.RequestException as e:
            raise ShopifyServiceError(f"Connection error: {e}") from e

        if not response.ok:
            error_text = response.text[:200] if response.text else f"HTTP {response.status_code}"
            raise ShopifyAPIError(f"Shopify API error: {error_text}", response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise ShopifyServiceError(f"Invalid JSON from Shopify: {e}") from e

        edges = _extract_edges(payload)
        orders = [map_order_node(edge.get("node") or {}) for edge in edges if isinstance(edge, dict)]

        # Log fetch stats (no secrets)
        logger.info("[SHOPIFY_SERVICE] requested=%d fetched=%d", limit, len(orders))
        return orders
