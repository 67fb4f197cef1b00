#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import json
import logging
from datetime import timezone
from json import JSONDecodeError
from urllib.parse import unquote, urlparse

from slugify import slugify

from ocean_publisher.exceptions import ValidationError

logger = logging.getLogger(__name__)

TIMEOUTS = {
    "Forever": 0,
    "1 day": 86400,
    "1 week": 604800,
    "1 month": 2630000,
    "1 year": 31556952,
}


def transform_tags(original_tags):
    """Slugifies every tag, keeping input order. Empty input stays undefined.

    Free text is split on commas. Tags without any slug character are dropped.
    """
    if isinstance(original_tags, str):
        original_tags = original_tags.split(",")
    if not original_tags:
        return None

    tags = [slugify(str(tag)).lower() for tag in original_tags]
    return [tag for tag in tags if tag] or None


def get_url_file_extension(file_url):
    if not file_url:
        return ""

    last_segment = urlparse(file_url).path.rstrip("/").split("/")[-1]
    if "." not in last_segment:
        return ""

    return last_segment.split(".")[-1]


def date_to_string_no_ms(date):
    if date.tzinfo is not None:
        date = date.astimezone(timezone.utc)

    return date.replace(microsecond=0, tzinfo=None).isoformat() + "Z"


def map_timeout_string_to_seconds(timeout):
    if timeout not in TIMEOUTS:
        raise ValidationError(f"Unknown timeout value {timeout}.")

    return TIMEOUTS[timeout]


def seconds_to_timeout_string(seconds):
    for name, value in TIMEOUTS.items():
        if value == seconds:
            return name

    return f"{seconds} seconds"


def sanitize_url(url):
    """Only http(s) urls are kept, anything else is replaced by about:blank."""
    u = unquote(url).strip().lower()
    is_allowed_url_scheme = u.startswith("http://") or u.startswith("https://")

    return url if is_allowed_url_scheme else "about:blank"


def _headers_to_dict(headers):
    try:
        return {header["key"]: header["value"] for header in headers or []}
    except (KeyError, TypeError):
        raise ValidationError("File headers must be a list of key/value pairs.")


def normalize_file(file, chain_id):
    """Builds the provider file object for a form file entry."""
    storage_type = file.get("type") or "url"
    headers = _headers_to_dict(file.get("headers"))

    if storage_type == "ipfs":
        return {"type": storage_type, "hash": file.get("url")}

    if storage_type == "arweave":
        return {"type": storage_type, "transactionId": file.get("url")}

    if storage_type == "graphql":
        return {
            "type": storage_type,
            "url": file.get("url"),
            "query": file.get("query"),
            "headers": headers,
        }

    if storage_type == "smartcontract":
        abi = file.get("abi")
        if isinstance(abi, str):
            try:
                abi = json.loads(abi)
            except JSONDecodeError:
                raise ValidationError("Smart contract file has an invalid abi.")

        return {
            "type": storage_type,
            "address": file.get("url"),
            "abi": abi,
            "chainId": chain_id,
        }

    return {
        "type": "url",
        "index": 0,
        "url": file.get("url"),
        "headers": headers,
        "method": file.get("method", "get"),
    }
