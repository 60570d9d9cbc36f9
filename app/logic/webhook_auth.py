"""
Authentication of inbound Copilot webhook requests.

This module contains the signature verification, the bearer token
extraction and the content type check. All functions are pure: they look
only at the values passed in and never perform I/O.
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, Union

from app.logic.errors import AuthenticationError

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-GitHub-Signature"
TOKEN_HEADER = "X-GitHub-Token"
SIGNATURE_PREFIX = "sha256="


class MultiValueHeaders(Protocol):
    """Headers object that can return every value of a repeated header."""

    def getlist(self, key: str) -> list: ...


@dataclass(frozen=True)
class HeaderMissing:
    """The header was not sent."""


@dataclass(frozen=True)
class HeaderSingle:
    """The header was sent exactly once."""

    value: str


@dataclass(frozen=True)
class HeaderMultiple:
    """The header was sent more than once."""

    values: Tuple[str, ...]


HeaderValue = Union[HeaderMissing, HeaderSingle, HeaderMultiple]


def read_header(headers: MultiValueHeaders, name: str) -> HeaderValue:
    """
    Read a header that is expected to appear at most once.

    Args:
        headers: Request headers (case-insensitive, multi-valued)
        name: Header name

    Returns:
        HeaderMissing, HeaderSingle or HeaderMultiple
    """
    values = headers.getlist(name)
    if not values:
        return HeaderMissing()
    if len(values) == 1:
        return HeaderSingle(values[0])
    return HeaderMultiple(tuple(values))


def compute_signature(secret: str, raw_body: bytes) -> str:
    """Return ``sha256=<lowercase hex HMAC-SHA256 of raw_body keyed by secret>``."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(
    secret_configured: bool,
    secret: Optional[str],
    signature_header: HeaderValue,
    raw_body: bytes,
) -> bool:
    """
    Decide whether a webhook request is authentic.

    A signature is required when a secret is configured and forbidden
    when it is not. A repeated signature header is always rejected.

    Args:
        secret_configured: Whether a shared secret is configured
        secret: The shared secret
        signature_header: Value(s) of the signature header
        raw_body: Request body exactly as received

    Returns:
        True if the request is accepted, False otherwise
    """
    if isinstance(signature_header, HeaderMultiple):
        return False

    if isinstance(signature_header, HeaderMissing):
        return not secret_configured

    if not secret_configured or not secret:
        # a signature arrived that nobody asked for
        return False

    expected = compute_signature(secret, raw_body)
    return hmac.compare_digest(
        expected.encode("utf-8"), signature_header.value.encode("utf-8")
    )


def extract_token(headers: MultiValueHeaders) -> str:
    """
    Extract the bearer token forwarded to the identity provider.

    Args:
        headers: Request headers

    Returns:
        The token, unmodified

    Raises:
        AuthenticationError: If the token header is missing or repeated
    """
    token = read_header(headers, TOKEN_HEADER)

    if isinstance(token, HeaderMissing):
        raise AuthenticationError("GitHub token not found.")
    if isinstance(token, HeaderMultiple):
        raise AuthenticationError("Multiple GitHub tokens provided.")

    return token.value


def has_json_content_type(content_type: Optional[str]) -> bool:
    """
    Check for ``application/json`` or an ``application/*+json`` media type.

    Parameters such as ``charset`` are ignored.
    """
    if not content_type:
        return False

    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type == "application/json":
        return True

    main_type, _, sub_type = media_type.partition("/")
    return main_type == "application" and sub_type.endswith("+json")
