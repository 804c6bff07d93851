"""Form-encode request payloads for the Amplitude HTTP API."""

import json
from typing import Any, Mapping
from urllib.parse import quote, urlencode

from .models import Event

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


def to_json(value: Any) -> str:
    """Compact JSON, as the API's reference clients send it."""
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def encode_form(fields: Mapping[str, str]) -> tuple[bytes, dict[str, str]]:
    """
    Serialize a flat field mapping as an x-www-form-urlencoded body.

    Returns:
        (body, headers) where headers carry Content-Type and Content-Length
    """
    body = urlencode(fields, quote_via=quote).encode('ascii')
    headers = {
        'Content-Type': FORM_CONTENT_TYPE,
        'Content-Length': str(len(body)),
    }
    return body, headers


def event_fields(api_key: str, event: Event) -> dict[str, str]:
    """Form fields for POST /httpapi."""
    return {
        'api_key': api_key,
        'event': to_json(event),
    }


def identification_fields(
    api_key: str,
    group_type: str,
    group_value: Any,
    group_properties: Mapping[str, Any] | None,
) -> dict[str, str]:
    """Form fields for POST /groupidentify."""
    return {
        'api_key': api_key,
        'identification': to_json(
            {
                'group_type': group_type,
                'group_value': group_value,
                'group_properties': dict(group_properties or {}),
            }
        ),
    }
