"""Tests for the meal photo analysis pipeline."""

import asyncio

import pytest

from nutricare.domain.nutrition import ParseSource
from nutricare.domain.profile import Language, Profile
from nutricare.services.analysis import (
    AnalysisFailedError,
    AnalysisService,
    MissingImageError,
    score_reported_nutrition,
)
from nutricare.services.assistant import AssistantError, AssistantService
from nutricare.services.parser import ResponseParser
from tests.conftest import PNG_DATA_URL, FakeAssistantClient


def _service(client: FakeAssistantClient) -> AnalysisService:
    return AnalysisService(
        assistant=AssistantService(client=client, model="test-model", api_key="key"),
        parser=ResponseParser(),
    )


def test_analyze_parses_json_reply(profile: Profile) -> None:
    client = FakeAssistantClient()

    parsed = asyncio.run(_service(client).analyze(profile, PNG_DATA_URL))

    assert parsed.source == ParseSource.JSON
    assert parsed.record.food_name == "Rice"
    assert parsed.record.health_score == 100
    assert '"foodName": "Name of the food item"' in client.calls[0]["prompt"]
    assert client.calls[0]["image"].mime_type == "image/png"


def test_analyze_uses_urdu_prompt(profile: Profile) -> None:
    client = FakeAssistantClient()

    asyncio.run(
        _service(client).analyze(profile, PNG_DATA_URL, language=Language.UR)
    )

    assert "کھانے کی اشیاء کا نام" in client.calls[0]["prompt"]


def test_missing_image_is_rejected_before_any_call(profile: Profile) -> None:
    client = FakeAssistantClient()

    with pytest.raises(MissingImageError):
        asyncio.run(_service(client).analyze(profile, None))

    assert client.calls == []


def test_remote_failure_raises_analysis_error(profile: Profile) -> None:
    client = FakeAssistantClient(error=AssistantError("boom"))

    with pytest.raises(AnalysisFailedError):
        asyncio.run(_service(client).analyze(profile, PNG_DATA_URL))


def test_free_text_reply_is_scored_locally(profile: Profile) -> None:
    client = FakeAssistantClient(
        reply="Pepperoni Pizza\ncalories: 900\nsodium: 1900mg\nsugar: 8g"
    )

    parsed = asyncio.run(_service(client).analyze(profile, PNG_DATA_URL))

    assert parsed.source == ParseSource.HEURISTIC
    assert parsed.record.food_name == "Pepperoni Pizza"
    assert parsed.record.health_score == 50
    assert "May increase blood pressure" in parsed.record.warnings


def test_json_reply_is_scored_after_parsing(profile: Profile) -> None:
    client = FakeAssistantClient(
        reply='{"foodName": "Ramen", "calories": 500, "sodium": 1800}'
    )

    parsed = asyncio.run(_service(client).analyze(profile, PNG_DATA_URL))

    assert parsed.record.health_score == 70
    assert "High sodium content" in parsed.record.risks
    assert "May increase blood pressure" in parsed.record.warnings


def test_supplied_score_survives_local_scoring(profile: Profile) -> None:
    decoded = ResponseParser().decode(
        '{"foodName": "Cake", "sugar": 40, "healthScore": 35}', profile
    )

    scored = score_reported_nutrition(decoded, profile)

    assert scored.record.health_score == 35
    assert scored.record.risks == ("High sugar content",)
    assert scored.record.warnings == ("May cause blood sugar spike",)
    assert scored.fields_found == decoded.fields_found
