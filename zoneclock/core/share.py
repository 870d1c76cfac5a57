"""Share links that carry the tracked locations and selected hour."""
from __future__ import annotations

import base64
import json
import logging
from typing import Sequence
from urllib.parse import urlencode, urlsplit, urlunsplit

from zoneclock.config.settings import get_settings
from zoneclock.core.models import HourReference, Location

logger = logging.getLogger("zoneclock.share")


def build_share_payload(locations: Sequence[Location], reference: HourReference | None) -> dict:
    """Number locations ``z1..zN`` in display order and point the selection at one of them."""
    zones = [
        {
            "id": f"z{index + 1}",
            "timeZone": location.time_zone,
            "title": location.title,
            "subtitle": location.subtitle,
        }
        for index, location in enumerate(locations)
    ]
    selected = None
    if reference is not None:
        zone_key = next(
            (f"z{index + 1}" for index, location in enumerate(locations) if location.id == reference.source_id),
            None,
        )
        selected = {
            "zoneId": zone_key,
            "timeZone": reference.source_time_zone,
            "localHour": reference.local_hour,
        }
    return {"zones": zones, "selected": selected}


def encode_state(payload: dict) -> str:
    """JSON-encode then base64url-encode without padding."""
    raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def share_link(
    locations: Sequence[Location],
    reference: HourReference | None,
    *,
    base_url: str | None = None,
) -> str:
    base = base_url or get_settings().share_base_url
    try:
        encoded = encode_state(build_share_payload(locations, reference))
    except (TypeError, ValueError):
        logger.exception("Could not encode share state")
        return base
    parts = urlsplit(base)
    return urlunsplit((parts.scheme, parts.netloc, parts.path or "/", urlencode({"state": encoded}), parts.fragment))
