"""
Tests for the streaming responder and the chunk models.
"""
import json
from unittest.mock import patch

import pytest

from app.models.chat import ChatCompletionChunk
from app.services.streaming import DONE_EVENT, stream_completion


async def collect(generator):
    return [record async for record in generator]


def parse(record: str) -> dict:
    assert record.startswith("data: ")
    assert record.endswith("\n\n")
    return json.loads(record[len("data: "):-2])


class TestChatCompletionChunk:
    """Test the chunk model serialization."""

    def test_from_content(self):
        chunk = ChatCompletionChunk.from_content("abc0", "Hi")
        data = parse(chunk.to_sse())

        assert data["id"] == "abc0"
        assert data["object"] == "chat.completion.chunk"
        assert isinstance(data["created"], int)
        assert data["choices"] == [{"index": 0, "delta": {"content": "Hi"}, "finish_reason": None}]

    def test_final(self):
        data = parse(ChatCompletionChunk.final("abc1").to_sse())

        assert data["choices"][0]["finish_reason"] == "stop"
        assert data["choices"][0]["delta"] == {"content": ""}

    def test_created_is_epoch_seconds_at_construction(self):
        with patch("app.models.chat.time.time", return_value=1700000000.9):
            chunk = ChatCompletionChunk.from_content("abc0", "Hi")
        assert chunk.created == 1700000000

    def test_record_is_single_line(self):
        record = ChatCompletionChunk.from_content("abc0", "line one\nline two").to_sse()
        assert record.count("\n") == 2
        assert parse(record)["choices"][0]["delta"]["content"] == "line one\nline two"


@pytest.mark.asyncio
async def test_stream_single_fragment():
    """Test one fragment yields chunk, final chunk and sentinel."""
    records = await collect(stream_completion(["Hello alice"], "abc"))

    assert len(records) == 3
    assert records[-1] == DONE_EVENT == "data: [DONE]\n\n"

    first, final = parse(records[0]), parse(records[1])
    assert first["id"] == "abc0"
    assert first["choices"][0]["delta"]["content"] == "Hello alice"
    assert first["choices"][0]["finish_reason"] is None
    assert final["id"] == "abc1"
    assert final["choices"][0]["finish_reason"] == "stop"
    assert final["choices"][0]["delta"]["content"] == ""


@pytest.mark.asyncio
async def test_stream_multiple_fragments_keeps_order():
    """Test fragments keep their order and ids increment by one."""
    records = await collect(stream_completion(["a", "b", "c"], "xyz"))

    chunks = [parse(record) for record in records[:-1]]
    assert [chunk["id"] for chunk in chunks] == ["xyz0", "xyz1", "xyz2", "xyz3"]
    assert [chunk["choices"][0]["delta"]["content"] for chunk in chunks] == ["a", "b", "c", ""]
    assert [chunk["choices"][0]["finish_reason"] for chunk in chunks] == [None, None, None, "stop"]
    assert records[-1] == DONE_EVENT


@pytest.mark.asyncio
async def test_stream_without_fragments():
    """Test an empty reply still terminates properly."""
    records = await collect(stream_completion([], "abc"))

    assert len(records) == 2
    assert parse(records[0])["id"] == "abc0"
    assert records[1] == DONE_EVENT


@pytest.mark.asyncio
async def test_stream_uses_model_label():
    """Test the model label is applied to every chunk."""
    records = await collect(stream_completion(["x"], "abc", model="custom-model"))
    assert {parse(record)["model"] for record in records[:-1]} == {"custom-model"}


@pytest.mark.asyncio
async def test_stream_stops_after_failure():
    """Test nothing is yielded after a chunk fails to render."""
    generator = stream_completion(["a", "b"], "abc")
    first = await generator.__anext__()
    assert parse(first)["id"] == "abc0"

    with patch.object(ChatCompletionChunk, "to_sse", side_effect=RuntimeError("boom")):
        with pytest.raises(RuntimeError, match="boom"):
            await generator.__anext__()

    with pytest.raises(StopAsyncIteration):
        await generator.__anext__()
