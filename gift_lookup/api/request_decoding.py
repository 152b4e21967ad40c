"""
Request decoding strategies for the gift lookup endpoint.

The transport picks a decoder from the request's method and Content-Type;
the lookup engine only ever sees a LookupRequest with plain string fields.

- GET: query parameters
- POST application/json: JSON object body
- POST anything else: URL-encoded form body
Query parameters fill in any field the body leaves out.
"""
import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import parse_qsl

from gift_lookup.schemas.lookup import LookupRequest


logger = logging.getLogger(__name__)

LOOKUP_FIELDS = ("last_name", "postcode", "format")

BodyDecoder = Callable[[bytes], Dict[str, Any]]


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return _as_text(value[0]) if value else None
    if isinstance(value, (dict, bool)):
        return None
    return str(value)


def decode_json_body(body: bytes) -> Dict[str, Any]:
    if not body:
        return {}
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.info("[REQUEST_DECODING] ignoring malformed JSON body: %s", e)
        return {}
    return data if isinstance(data, dict) else {}


def decode_form_body(body: bytes) -> Dict[str, Any]:
    if not body:
        return {}
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.info("[REQUEST_DECODING] ignoring undecodable form body: %s", e)
        return {}
    # First occurrence wins for repeated keys
    decoded: Dict[str, Any] = {}
    for key, value in parse_qsl(text, keep_blank_values=True):
        decoded.setdefault(key, value)
    return decoded


BODY_DECODERS: Dict[str, BodyDecoder] = {
    "application/json": decode_json_body,
    "application/x-www-form-urlencoded": decode_form_body,
}


def select_body_decoder(content_type: Optional[str]) -> BodyDecoder:
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type.endswith("+json"):
        return decode_json_body
    return BODY_DECODERS.get(media_type, decode_form_body)


def build_lookup_request(
    query_params: Mapping[str, Any],
    body_fields: Optional[Mapping[str, Any]] = None
) -> LookupRequest:
    """Merge body fields over query parameters into a LookupRequest."""
    body_fields = body_fields or {}
    values = {}
    for field in LOOKUP_FIELDS:
        value = _as_text(body_fields.get(field))
        if value is None:
            value = _as_text(query_params.get(field))
        values[field] = value
    return LookupRequest(**values)
