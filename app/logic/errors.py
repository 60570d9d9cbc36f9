"""
Exceptions raised while authenticating a Copilot webhook request.

Each exception carries the HTTP status code the API layer reports when the
failure happens before the response stream starts.
"""


class WebhookError(Exception):
    """Base class for request failures surfaced to the hosting layer."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedContentTypeError(WebhookError):
    """The request does not carry a JSON content type."""

    status_code = 415


class AuthenticationError(WebhookError):
    """Signature mismatch or missing/duplicate bearer token."""

    status_code = 401


class IdentityRejectedError(AuthenticationError):
    """The identity provider refused the bearer token."""


class IdentityProviderError(WebhookError):
    """The identity provider could not be reached or answered unexpectedly."""

    status_code = 502
