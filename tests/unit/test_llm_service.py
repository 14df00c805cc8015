"""
Unit tests for the recommender model call
"""
import asyncio
import json

import httpx
import openai
import pytest

from roomcraft.core.exceptions import ExternalServiceError
from roomcraft.services.llm_service import LLMService
from tests.factories import chat_completion, make_product

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


@pytest.fixture
def service(mock_openai_client):
    return LLMService(client=mock_openai_client)


class TestBuildMessages:

    @pytest.mark.unit
    def test_prompt_contains_room_and_catalog(self, service):
        products = [make_product("Modern Sofa", 899.99, style_tags=["modern", "minimal"])]

        messages = service.build_messages("Room dimensions: 12ft x 10ft.", products)

        assert messages[0]["role"] == "system"
        user_prompt = messages[1]["content"]
        assert "Room dimensions: 12ft x 10ft." in user_prompt
        assert '"name": "Modern Sofa"' in user_prompt
        assert "productName" in user_prompt


class TestCallRecommender:

    @pytest.mark.unit
    async def test_returns_content_and_tracks_usage(self, service, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = chat_completion("[]", total_tokens=321)

        content = await service.call_recommender("room", [make_product("Chair")])

        assert content == "[]"
        stats = service.get_usage_stats()
        assert stats["successful_requests"] == 1
        assert stats["total_tokens"] == 321
        assert stats["success_rate"] == 100

    @pytest.mark.unit
    async def test_candidates_are_capped(self, service, mock_openai_client):
        """Only the first fifty candidates are sent"""
        mock_openai_client.chat.completions.create.return_value = chat_completion("[]")
        products = [make_product(f"Item {i:03d}") for i in range(80)]

        await service.call_recommender("room", products)

        prompt = mock_openai_client.chat.completions.create.call_args.kwargs["messages"][1]["content"]
        catalog = json.loads(prompt.split("products):\n", 1)[1].split("\n\nReturn ONLY", 1)[0])
        assert len(catalog) == 50
        assert catalog[-1]["name"] == "Item 049"

    @pytest.mark.unit
    async def test_single_attempt_no_retry(self, service, mock_openai_client):
        mock_openai_client.chat.completions.create.side_effect = openai.APIConnectionError(request=_REQUEST)

        with pytest.raises(ExternalServiceError):
            await service.call_recommender("room", [make_product("Chair")])

        assert mock_openai_client.chat.completions.create.call_count == 1

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error, kind, status_code",
        [
            (asyncio.TimeoutError(), "timeout", None),
            (openai.APITimeoutError(request=_REQUEST), "timeout", None),
            (
                openai.AuthenticationError(
                    "Incorrect API key", response=httpx.Response(401, request=_REQUEST), body=None
                ),
                "auth",
                401,
            ),
            (
                openai.RateLimitError("Rate limit reached", response=httpx.Response(429, request=_REQUEST), body=None),
                "http",
                429,
            ),
            (openai.APIConnectionError(request=_REQUEST), "connection", None),
        ],
    )
    async def test_failures_map_to_kinds(self, service, mock_openai_client, error, kind, status_code):
        mock_openai_client.chat.completions.create.side_effect = error

        with pytest.raises(ExternalServiceError) as exc_info:
            await service.call_recommender("room", [make_product("Chair")])

        assert exc_info.value.kind == kind
        assert exc_info.value.status_code == status_code
        assert service.get_usage_stats()["failed_requests"] == 1

    @pytest.mark.unit
    async def test_upstream_message_is_kept(self, service, mock_openai_client):
        mock_openai_client.chat.completions.create.side_effect = openai.AuthenticationError(
            "Incorrect API key provided", response=httpx.Response(401, request=_REQUEST), body=None
        )

        with pytest.raises(ExternalServiceError) as exc_info:
            await service.call_recommender("room", [make_product("Chair")])

        assert exc_info.value.message == "Incorrect API key provided"
        assert str(exc_info.value) == "[auth] Incorrect API key provided"

    @pytest.mark.unit
    async def test_empty_content_is_an_error(self, service, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = chat_completion(None)

        with pytest.raises(ExternalServiceError) as exc_info:
            await service.call_recommender("room", [make_product("Chair")])

        assert exc_info.value.kind == "empty"

    @pytest.mark.unit
    async def test_missing_client_is_not_configured(self):
        service = LLMService(client=None)
        service.client = None

        with pytest.raises(ExternalServiceError) as exc_info:
            await service.call_recommender("room", [make_product("Chair")])

        assert exc_info.value.kind == "not_configured"
