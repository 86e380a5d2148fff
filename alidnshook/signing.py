"""Request signing for Alibaba Cloud RPC-style APIs."""

import base64
import hashlib
import hmac
from collections.abc import Mapping
from urllib.parse import quote


def percent_encode(value: str) -> str:
    """Percent-encode a string, leaving only ``[A-Za-z0-9-_.~]`` unescaped.

    Stricter than form encoding: ``/`` becomes ``%2F`` and space becomes
    ``%20`` (never ``+``).
    """
    return quote(value, safe="~")


def canonical_query_string(params: Mapping[str, str]) -> str:
    """Build the sorted, encoded ``name=value&...`` string used for signing.

    Args:
        params: Request parameters (must not be empty)

    Returns:
        The canonical query string
    """
    if not params:
        raise ValueError("Cannot canonicalize an empty parameter set")

    return "&".join(
        f"{percent_encode(name)}={percent_encode(params[name])}"
        for name in sorted(params)
    )


def string_to_sign(canonical: str, method: str = "GET") -> str:
    """Wrap a canonical query string into the string-to-sign."""
    return f"{method}&{percent_encode('/')}&{percent_encode(canonical)}"


def compute_signature(params: Mapping[str, str], secret: str) -> str:
    """Compute the base64 HMAC-SHA1 signature for a parameter set.

    Args:
        params: Request parameters, excluding ``Signature`` itself
        secret: The access key secret

    Returns:
        The base64-encoded signature
    """
    message = string_to_sign(canonical_query_string(params))
    digest = hmac.new(
        f"{secret}&".encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")
