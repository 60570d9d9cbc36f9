"""
Streaming responder for chat completion chunks.

This module turns a list of content fragments into the Server-Sent-Event
records of an OpenAI-style streaming chat completion. Every record is
yielded on its own so that Starlette's StreamingResponse sends it to the
client as a separate body message before the next one is produced.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Sequence

from app.models.chat import DEFAULT_MODEL, ChatCompletionChunk

logger = logging.getLogger(__name__)

DONE_EVENT = "data: [DONE]\n\n"


async def stream_completion(
    fragments: Sequence[str],
    invocation_id: str,
    model: str = DEFAULT_MODEL,
) -> AsyncGenerator[str, None]:
    """
    Generate the SSE records of one streamed reply.

    Chunk ids are ``invocation_id`` followed by the chunk sequence number.
    The terminal chunk takes the number after the last fragment and is
    followed by the ``[DONE]`` sentinel.

    Args:
        fragments: Content fragments, in emission order
        invocation_id: Correlation identifier shared by every chunk
        model: Model label reported in each chunk

    Yields:
        Server-sent events in OpenAI streaming format
    """
    logger.info(f"Streaming {len(fragments)} chunk(s) for invocation {invocation_id}")

    try:
        for sequence, content in enumerate(fragments):
            chunk = ChatCompletionChunk.from_content(f"{invocation_id}{sequence}", content, model=model)
            yield chunk.to_sse()

        yield ChatCompletionChunk.final(f"{invocation_id}{len(fragments)}", model=model).to_sse()

        yield DONE_EVENT

    except asyncio.CancelledError:
        logger.warning(f"Stream for invocation {invocation_id} cancelled by the client")
        raise
    except Exception as e:
        # Headers are already sent; the connection is closed instead of
        # writing an error body.
        logger.error(f"Stream for invocation {invocation_id} failed: {str(e)}")
        raise

    logger.info(f"Stream for invocation {invocation_id} completed")
