"""
Tests for the Groq tier: model rotation and failure classification.
All HTTP traffic is mocked at GroqIndexService._post.
"""
import json
from unittest.mock import AsyncMock

import pytest

from app.services.ai.base import AIAnalysisError, InvalidResponseError
from app.services.ai.groq_service import GroqIndexService

MODELS = ["model-a", "model-b", "model-c"]


def _completion(content):
    return json.dumps({"choices": [{"message": {"content": content}}]})


def _proposal_json(name="Groq Picks Index"):
    return json.dumps({
        "indexName": name,
        "description": "Picked by a fast model.",
        "companies": [{"name": f"Co {i}", "symbol": f"C{i}"} for i in range(7)],
    })


def _error(code, message):
    return json.dumps({"error": {"code": code, "type": "invalid_request_error", "message": message}})


@pytest.fixture
def groq(settings):
    settings.GROQ_API_KEY = "test-key"
    return GroqIndexService(settings=settings, models=MODELS)


class TestModelRotation:

    @pytest.mark.asyncio
    async def test_first_model_success(self, groq):
        groq._post = AsyncMock(return_value=(200, _completion(_proposal_json())))

        proposal = await groq.propose("space")

        assert proposal.index_name == "Groq Picks Index"
        assert proposal.source == "groq:model-a"
        assert groq._post.await_count == 1

    @pytest.mark.asyncio
    async def test_decommissioned_then_rate_limited_then_success(self, groq):
        groq._post = AsyncMock(side_effect=[
            (400, _error("model_decommissioned", "The model `model-a` has been decommissioned")),
            (429, _error("rate_limit_exceeded", "slow down")),
            (200, _completion(_proposal_json())),
        ])

        proposal = await groq.propose("space")

        assert proposal.source == "groq:model-c"
        assert [c.args[0] for c in groq._post.await_args_list] == MODELS

    @pytest.mark.asyncio
    async def test_not_found_advances(self, groq):
        groq._post = AsyncMock(side_effect=[
            (404, _error("model_not_found", "The model `model-a` does not exist")),
            (200, _completion(_proposal_json())),
        ])

        proposal = await groq.propose("space")

        assert proposal.source == "groq:model-b"

    @pytest.mark.asyncio
    async def test_all_models_exhausted(self, groq):
        groq._post = AsyncMock(return_value=(429, _error("rate_limit_exceeded", "slow down")))

        with pytest.raises(AIAnalysisError):
            await groq.propose("space")
        assert groq._post.await_count == len(MODELS)


class TestFailures:

    @pytest.mark.asyncio
    async def test_other_400_fails_whole_tier(self, groq):
        groq._post = AsyncMock(return_value=(400, _error("invalid_request", "messages is required")))

        with pytest.raises(AIAnalysisError):
            await groq.propose("space")
        assert groq._post.await_count == 1

    @pytest.mark.asyncio
    async def test_server_error_fails_whole_tier(self, groq):
        groq._post = AsyncMock(return_value=(503, "unavailable"))

        with pytest.raises(AIAnalysisError):
            await groq.propose("space")
        assert groq._post.await_count == 1

    @pytest.mark.asyncio
    async def test_unparseable_content_fails(self, groq):
        groq._post = AsyncMock(return_value=(200, _completion("I think NVDA is nice")))

        with pytest.raises(InvalidResponseError):
            await groq.propose("space")

    @pytest.mark.asyncio
    async def test_not_available_without_key(self, settings):
        service = GroqIndexService(settings=settings, models=MODELS)
        assert service.is_available() is False
        with pytest.raises(AIAnalysisError):
            await service.propose("space")
