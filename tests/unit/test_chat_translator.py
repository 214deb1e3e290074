"""
Unit tests for providers/chat_translator.py - OpenRouter text translation
"""
import pytest
import httpx

from conftest import chat_response, make_settings, request_json
from core.exceptions import ErrorKind
from providers.chat_translator import ChatTranslator, build_system_prompt, extract_translation


class TestExtractTranslation:
    """Unwrapping raw model answers."""

    def test_marker_pair_returns_inner_text(self):
        assert extract_translation("<translation>Xin chào thế giới</translation>") == "Xin chào thế giới"

    def test_marker_pair_is_trimmed_and_surroundings_dropped(self):
        raw = "Sure!\n<translation>\n  Tôi yêu lập trình  \n</translation>\nHope this helps."
        assert extract_translation(raw) == "Tôi yêu lập trình"

    def test_markers_case_insensitive(self):
        assert extract_translation("<TRANSLATION>Bonjour</Translation>") == "Bonjour"

    def test_empty_markers_fall_through(self):
        assert extract_translation("<translation></translation>") == "<translation></translation>"

    def test_prefix_stripped_case_insensitive(self):
        assert extract_translation("TRANSLATION: Xin chào") == "Xin chào"

    def test_only_first_prefix_stripped(self):
        # "Translation:" matches first; the remaining "Dịch:" is content
        assert extract_translation("Translation: Dịch: xin chào") == "Dịch: xin chào"

    def test_suffix_stripped(self):
        assert extract_translation("Xin chào. Hope this helps.") == "Xin chào."

    def test_prefix_and_suffix_stripped(self):
        assert extract_translation("Bản dịch: Xin chào Let me know if you need anything else.") == "Xin chào"

    def test_plain_text_untouched(self):
        assert extract_translation("  Xin chào thế giới \n") == "Xin chào thế giới"

    def test_unlisted_suffix_untouched(self):
        assert extract_translation("Xin chào. Cheers!") == "Xin chào. Cheers!"


class TestSystemPrompt:

    def test_language_names_used(self):
        prompt = build_system_prompt("en", "vi")
        assert "from English to Vietnamese" in prompt
        assert "<translation>" in prompt

    def test_auto_source(self):
        assert "from the source language to Japanese" in build_system_prompt("auto", "ja")


class TestChatTranslator:

    @pytest.mark.asyncio
    async def test_hello_world(self, test_settings, mock_http):
        client, transport = mock_http(lambda request: chat_response("<translation>Xin chào thế giới</translation>"))
        translator = ChatTranslator(test_settings, client=client)

        result = await translator.translate_text("Hello world", "en", "vi")

        assert result.is_ok
        assert result.text == "Xin chào thế giới"
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_request_shape(self, test_settings, mock_http):
        client, transport = mock_http(lambda request: chat_response("<translation>x</translation>"))
        translator = ChatTranslator(test_settings, client=client)

        await translator.translate_text("Hello", "en", "vi")

        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://openrouter.ai/api/v1/chat/completions"
        assert request.headers["Authorization"] == f"Bearer {test_settings.openrouter_api_key}"
        assert request.headers["X-Title"] == "DeepSeek Translator"
        assert "HTTP-Referer" in request.headers

        body = request_json(request)
        assert body["model"] == "deepseek/deepseek-chat"
        assert body["temperature"] == 0.01
        assert body["max_tokens"] == 4000
        assert [m["role"] for m in body["messages"]] == ["system", "user"]
        assert body["messages"][1]["content"] == "Hello"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    async def test_empty_text_makes_no_call(self, test_settings, mock_http, text):
        client, transport = mock_http(lambda request: chat_response("unused"))
        translator = ChatTranslator(test_settings, client=client)

        result = await translator.translate_text(text, "en", "vi")

        assert result.is_ok
        assert result.text == ""
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_missing_key_is_auth_error_without_call(self, mock_http):
        client, transport = mock_http(lambda request: chat_response("unused"))
        translator = ChatTranslator(make_settings(openrouter_api_key=""), client=client)

        result = await translator.translate_text("Hello", "en", "vi")

        assert result.error_kind == ErrorKind.AUTH
        assert transport.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status, kind", [
        (401, ErrorKind.AUTH),
        (429, ErrorKind.RATE_LIMITED),
        (500, ErrorKind.PROVIDER),
        (400, ErrorKind.PROVIDER),
    ])
    async def test_http_errors_classified(self, test_settings, mock_http, status, kind):
        client, _ = mock_http(lambda request: httpx.Response(status, json={"error": {"message": "boom"}}))
        translator = ChatTranslator(test_settings, client=client)

        result = await translator.translate_text("Hello", "en", "vi")

        assert not result.is_ok
        assert result.error_kind == kind

    @pytest.mark.asyncio
    async def test_provider_error_carries_status_and_detail(self, test_settings, mock_http):
        client, _ = mock_http(lambda request: httpx.Response(503, json={"error": {"message": "overloaded"}}))
        translator = ChatTranslator(test_settings, client=client)

        result = await translator.translate_text("Hello", "en", "vi")

        assert result.message == "503 - overloaded"

    @pytest.mark.asyncio
    async def test_network_failure(self, test_settings, mock_http):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = mock_http(handler)
        translator = ChatTranslator(test_settings, client=client)

        result = await translator.translate_text("Hello", "en", "vi")

        assert result.error_kind == ErrorKind.NETWORK

    @pytest.mark.asyncio
    async def test_unexpected_body(self, test_settings, mock_http):
        client, _ = mock_http(lambda request: httpx.Response(200, json={"id": "x"}))
        translator = ChatTranslator(test_settings, client=client)

        result = await translator.translate_text("Hello", "en", "vi")

        assert result.error_kind == ErrorKind.PROVIDER
        assert result.message == "Unexpected API response format."

    @pytest.mark.asyncio
    async def test_undecodable_body_is_network_error(self, test_settings, mock_http):
        def handler(request):
            raise httpx.DecodingError("bad gzip stream", request=request)

        client, _ = mock_http(handler)
        translator = ChatTranslator(test_settings, client=client)

        result = await translator.translate_text("Hello", "en", "vi")

        assert not result.is_ok
        assert result.error_kind == ErrorKind.NETWORK

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"choices": ["oops"]},
        {"choices": "x"},
        {"choices": []},
        {"choices": [{"message": "plain"}]},
        ["not", "an", "object"],
    ])
    async def test_malformed_choices(self, test_settings, mock_http, body):
        client, _ = mock_http(lambda request: httpx.Response(200, json=body))
        translator = ChatTranslator(test_settings, client=client)

        result = await translator.translate_text("Hello", "en", "vi")

        assert result.error_kind == ErrorKind.PROVIDER
        assert result.message == "Unexpected API response format."

    @pytest.mark.asyncio
    async def test_probe_availability(self, test_settings, mock_http):
        client, transport = mock_http(lambda request: httpx.Response(200, json={"data": []}))
        translator = ChatTranslator(test_settings, client=client)

        assert await translator.probe_availability() is True
        assert transport.requests[0].url.path.endswith("/models")

    @pytest.mark.asyncio
    async def test_probe_never_raises(self, test_settings, mock_http):
        def handler(request):
            raise httpx.ConnectTimeout("timeout", request=request)

        client, _ = mock_http(handler)
        translator = ChatTranslator(test_settings, client=client)

        assert await translator.probe_availability() is False
