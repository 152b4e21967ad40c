"""
Gift Lookup API - storefront endpoint for gift message lookup.

Provides endpoints for:
- GET /api/gift-lookup - lookup via query parameters
- POST /api/gift-lookup - lookup via JSON or URL-encoded form body
- OPTIONS /api/gift-lookup - empty response for bare OPTIONS requests
  (browser CORS preflights are answered by CORSMiddleware with "OK")

Every resolved outcome (including bad request, not found and upstream
failures) is returned with HTTP 200; the category is carried in the payload.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import ValidationError

from gift_lookup.api.request_decoding import build_lookup_request, select_body_decoder
from gift_lookup.config import Settings, get_settings
from gift_lookup.models.enums import DisplayFormat
from gift_lookup.models.lookup import LookupOutcome
from gift_lookup.schemas.lookup import LookupRequest, LookupResponse
from gift_lookup.services.fragment_renderer import render_fragment
from gift_lookup.services.gift_lookup_service import DEFAULT_RECENCY_WINDOW_DAYS, lookup_gift_message
from gift_lookup.services.shopify_service import MAX_PAGE_SIZE, ShopifyCredentials, ShopifyOrderFetcher


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gift-lookup", tags=["gift-lookup"])

NO_STORE_HEADERS = {"Cache-Control": "no-store"}


def get_lookup_settings() -> Optional[Settings]:
    """
    Load settings without failing the request.

    Missing Shopify credentials surface as a server_error outcome rather
    than a bare 500, and blank input is still reported as bad_request.
    """
    try:
        return get_settings()
    except ValidationError:
        logger.exception("[GIFT_LOOKUP] settings missing or invalid")
        return None


def get_order_fetcher(
    settings: Optional[Settings] = Depends(get_lookup_settings)
) -> Optional[ShopifyOrderFetcher]:
    if settings is None:
        return None
    return ShopifyOrderFetcher(
        ShopifyCredentials.from_settings(settings),
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        metafield_namespace=settings.GIFT_METAFIELD_NAMESPACE,
        metafield_key=settings.GIFT_METAFIELD_KEY,
    )


def render_outcome(outcome: LookupOutcome, display_format: DisplayFormat) -> Response:
    if display_format == DisplayFormat.STRUCTURED:
        payload = LookupResponse.from_outcome(outcome).model_dump(mode="json")
        return JSONResponse(content=payload, status_code=200, headers=NO_STORE_HEADERS)
    return HTMLResponse(content=render_fragment(outcome), status_code=200, headers=NO_STORE_HEADERS)


async def _run_lookup(
    lookup: LookupRequest,
    settings: Optional[Settings],
    fetcher: Optional[ShopifyOrderFetcher]
) -> Response:
    limit = settings.ORDER_FETCH_LIMIT if settings else MAX_PAGE_SIZE
    window_days = settings.RECENCY_WINDOW_DAYS if settings else DEFAULT_RECENCY_WINDOW_DAYS
    outcome = await run_in_threadpool(
        lookup_gift_message,
        lookup.last_name,
        lookup.postcode,
        fetcher,
        limit,
        window_days,
    )
    return render_outcome(outcome, lookup.display_format)


@router.get("")
async def gift_lookup_get(
    request: Request,
    settings: Optional[Settings] = Depends(get_lookup_settings),
    fetcher: Optional[ShopifyOrderFetcher] = Depends(get_order_fetcher)
):
    lookup = build_lookup_request(request.query_params)
    return await _run_lookup(lookup, settings, fetcher)


@router.post("")
async def gift_lookup_post(
    request: Request,
    settings: Optional[Settings] = Depends(get_lookup_settings),
    fetcher: Optional[ShopifyOrderFetcher] = Depends(get_order_fetcher)
):
    decoder = select_body_decoder(request.headers.get("content-type"))
    body_fields = decoder(await request.body())
    lookup = build_lookup_request(request.query_params, body_fields)
    return await _run_lookup(lookup, settings, fetcher)


@router.options("")
def gift_lookup_options():
    return Response(status_code=200)
