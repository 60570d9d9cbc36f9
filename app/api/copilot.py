"""
Copilot webhook endpoint streaming OpenAI-style chat completion chunks.
"""

"""
----------------------------------------------------------------
# MODULES AND IMPORTS
----------------------------------------------------------------
#
# In this step we import the necessary modules.
#
# - logging is used for logging messages
# - uuid is used to generate invocation identifiers
# - fastapi is the web framework for building the API
# - Depends is used to inject settings, the identity provider
#   and the invocation id so tests can replace them
# - StreamingResponse is used to return the chunks one by one
#   as Server-Sent Events
# - CopilotSettings and get_settings hold the shared secret and
#   product identifier
# - webhook_auth contains the signature verification and the
#   token extraction
# - GitHubIdentityProvider resolves the caller from the token
# - stream_completion renders the chunks of the reply
#
----------------------------------------------------------------
"""

import logging
import uuid
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from app.config import CopilotSettings, get_settings
from app.logic.errors import AuthenticationError, UnsupportedContentTypeError, WebhookError
from app.logic.webhook_auth import (
    SIGNATURE_HEADER,
    extract_token,
    has_json_content_type,
    read_header,
    verify_signature,
)
from app.services.identity import BaseIdentityProvider, GitHubIdentityProvider
from app.services.streaming import stream_completion


"""
----------------------------------------------------------------
# LOGGER SETUP
----------------------------------------------------------------
"""

logger = logging.getLogger(__name__)


"""
----------------------------------------------------------------
# ROUTER SETUP
----------------------------------------------------------------
"""

router = APIRouter()

GREETING_TEMPLATE = "Hello {login}, I am the Developer Platform AI."


"""
----------------------------------------------------------------
# DEPENDENCIES
----------------------------------------------------------------
#
# The identity provider and the invocation id are provided as
# dependencies. The hosting layer builds them per request and
# tests override them through app.dependency_overrides.
#
----------------------------------------------------------------
"""

def get_identity_provider(
    settings: CopilotSettings = Depends(get_settings),
) -> BaseIdentityProvider:
    """Build the GitHub identity provider for the current settings."""
    return GitHubIdentityProvider(settings)


def get_invocation_id() -> str:
    """Return a fresh invocation identifier."""
    return str(uuid.uuid4())


"""
----------------------------------------------------------------
# COPILOT WEBHOOK ENDPOINT
----------------------------------------------------------------
#
# POST /copilot walks through these states:
#
# - Received: the content type must be JSON
# - Authenticated: the raw body matches the signature header
# - IdentityResolved: the token resolves to a GitHub user
# - Streaming: greeting chunk, final chunk, [DONE]
#
# Any failure before streaming raises an HTTPException and no
# body is written. Once streaming started, failures close the
# connection.
#
----------------------------------------------------------------
"""

@router.post("/copilot")
async def copilot(
    request: Request,
    settings: CopilotSettings = Depends(get_settings),
    identity_provider: BaseIdentityProvider = Depends(get_identity_provider),
    invocation_id: str = Depends(get_invocation_id),
):
    """
    Authenticate a Copilot webhook call and stream the greeting.

    Args:
        request: Incoming webhook request
        settings: Shared secret and product identifier
        identity_provider: Resolves the caller behind the bearer token
        invocation_id: Correlation identifier for the reply chunks

    Returns:
        StreamingResponse with the chat completion chunks
    """
    try:
        if not has_json_content_type(request.headers.get("content-type")):
            raise UnsupportedContentTypeError("GitHub event does not have the correct content type.")

        body = await request.body()

        signature = read_header(request.headers, SIGNATURE_HEADER)
        if not verify_signature(settings.secret_configured, settings.webhook_secret, signature, body):
            raise AuthenticationError("GitHub event failed signature validation.")

        token = extract_token(request.headers)
        user = await identity_provider.resolve_user(token)

    except WebhookError as e:
        logger.warning(f"Rejected Copilot webhook request: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    logger.info(f"Copilot webhook request authenticated for user: {user.login}")

    greeting = GREETING_TEMPLATE.format(login=user.login)

    return StreamingResponse(
        stream_completion([greeting], invocation_id.replace("-", "")),
        media_type="text/event-stream"
    )
