"""Tests for the completion and speech clients."""

import json

import httpx
import pytest

from upstream import CompletionClient, CompletionError, CompletionMessage, SpeechClient, SynthesisResult


MESSAGES = [
    CompletionMessage(role="system", content="be helpful"),
    CompletionMessage(role="user", content="hello"),
]


def completion_response(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class TestCompletionClient:
    @pytest.mark.asyncio
    async def test_posts_model_messages_and_temperature(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=completion_response("  Sure thing.  "))

        client = CompletionClient("sk-test", transport=httpx.MockTransport(handler))
        try:
            text = await client.complete(MESSAGES, model="gpt-4.1-mini", temperature=0.4)
        finally:
            await client.close()

        assert text == "Sure thing."
        assert seen["url"] == "https://api.openai.com/v1/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"] == {
            "model": "gpt-4.1-mini",
            "messages": [
                {"role": "system", "content": "be helpful"},
                {"role": "user", "content": "hello"},
            ],
            "temperature": 0.4,
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"choices": []},
        {},
        completion_response(None),
        completion_response("   "),
    ])
    async def test_missing_content_returns_none(self, payload):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
        client = CompletionClient("sk-test", transport=transport)
        try:
            assert await client.complete(MESSAGES, model="m", temperature=0.1) is None
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_non_success_raises_with_raw_body(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(401, text='{"error": "invalid key"}')
        )
        client = CompletionClient("sk-test", transport=transport)
        try:
            with pytest.raises(CompletionError) as exc_info:
                await client.complete(MESSAGES, model="m", temperature=0.1)
        finally:
            await client.close()

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == '{"error": "invalid key"}'


class TestSpeechClient:
    @pytest.mark.asyncio
    async def test_sends_voice_settings_and_returns_audio(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["key"] = request.headers["xi-api-key"]
            seen["accept"] = request.headers["accept"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, content=b"\xff\xfbmp3")

        client = SpeechClient("xi-test", "voice-1", transport=httpx.MockTransport(handler))
        try:
            result = await client.synthesize("Hello there")
        finally:
            await client.close()

        assert result == SynthesisResult.succeeded(b"\xff\xfbmp3")
        assert seen["path"] == "/v1/text-to-speech/voice-1"
        assert seen["key"] == "xi-test"
        assert seen["accept"] == "audio/mpeg"
        assert seen["body"] == {
            "text": "Hello there",
            "model_id": "eleven_multilingual_v2",
            "voice_settings": {"stability": 0.5, "similarity_boost": 0.75},
        }

    @pytest.mark.asyncio
    async def test_non_success_is_a_failed_result(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="overloaded"))
        client = SpeechClient("xi-test", "voice-1", transport=transport)
        try:
            result = await client.synthesize("Hello")
        finally:
            await client.close()

        assert result.status == "failed"
        assert "overloaded" in result.error
        assert result.as_base64() is None

    @pytest.mark.asyncio
    async def test_transport_error_is_a_failed_result(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        client = SpeechClient("xi-test", "voice-1", transport=httpx.MockTransport(handler))
        try:
            result = await client.synthesize("Hello")
        finally:
            await client.close()

        assert result.status == "failed"
        assert result.as_base64() is None


def test_only_success_produces_base64():
    assert SynthesisResult.skipped().as_base64() is None
    assert SynthesisResult.failed("nope").as_base64() is None
    assert SynthesisResult.succeeded(b"abc").as_base64() == "YWJj"
