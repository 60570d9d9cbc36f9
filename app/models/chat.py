"""
Pydantic models for the streamed chat completion chunks.
"""
import time
from typing import List, Optional

from pydantic import BaseModel, Field

DEFAULT_MODEL = "gpt-3.5-turbo-0613"
STOP_REASON = "stop"


class Delta(BaseModel):
    """Content fragment carried by one streaming chunk."""
    content: str = ""


class StreamChoice(BaseModel):
    """A single choice in a streaming chat completion response."""
    index: int
    delta: Delta
    finish_reason: Optional[str] = None


class ChatCompletionChunk(BaseModel):
    """Chunk in a streaming chat completion response."""
    id: str
    object: str = "chat.completion.chunk"
    created: int = Field(default_factory=lambda: int(time.time()))
    model: str = DEFAULT_MODEL
    choices: List[StreamChoice] = Field(default_factory=list)

    @classmethod
    def from_content(cls, id: str, content: str, model: str = DEFAULT_MODEL) -> "ChatCompletionChunk":
        """Build an in-progress chunk carrying one content fragment."""
        return cls(
            id=id,
            model=model,
            choices=[StreamChoice(index=0, delta=Delta(content=content))],
        )

    @classmethod
    def final(cls, id: str, model: str = DEFAULT_MODEL) -> "ChatCompletionChunk":
        """Build the terminal chunk: empty content, finish_reason "stop"."""
        return cls(
            id=id,
            model=model,
            choices=[StreamChoice(index=0, delta=Delta(content=""), finish_reason=STOP_REASON)],
        )

    def to_sse(self) -> str:
        """Render the chunk as a single Server-Sent-Event ``data:`` record."""
        return f"data: {self.model_dump_json()}\n\n"
