"""Tests for analysis service."""

import asyncio

import pytest

from nutri_snap.errors import AnalysisError
from nutri_snap.services.analysis import (
    ANALYSIS_SCHEMA,
    SYSTEM_PROMPT,
    AnalysisService,
    resolve_mime_type,
    to_data_url,
)
from tests.conftest import FakeAnalysisClient


def test_analysis_service_returns_structured_analysis() -> None:
    client = FakeAnalysisClient()
    service = AnalysisService(client=client, model="gemini-2.5-flash")

    result = asyncio.run(service.analyze(b"\x89PNG\r\n\x1a\nrest"))

    assert result.health_score == 6
    assert result.food_items[0].item_name == "grilled chicken"
    assert result.healthy_alternatives[0].suggestion == "roasted sweet potato"
    call = client.calls[0]
    assert call["model"] == "gemini-2.5-flash"
    assert call["prompt"] == SYSTEM_PROMPT
    assert call["schema"] is ANALYSIS_SCHEMA
    assert call["mime_type"] == "image/png"


def test_analysis_service_prefers_declared_image_type() -> None:
    client = FakeAnalysisClient()
    service = AnalysisService(client=client, model="gemini-2.5-flash")

    asyncio.run(service.analyze(b"\x89PNG\r\n\x1a\nrest", "image/webp"))

    assert client.calls[0]["mime_type"] == "image/webp"


def test_analysis_service_rejects_out_of_range_score() -> None:
    payload = FakeAnalysisClient().payload
    payload["health_score"] = 11
    service = AnalysisService(
        client=FakeAnalysisClient(payload=payload), model="gemini-2.5-flash"
    )

    with pytest.raises(AnalysisError):
        asyncio.run(service.analyze(b"image-bytes"))


def test_analysis_service_rejects_missing_fields() -> None:
    service = AnalysisService(
        client=FakeAnalysisClient(payload={"food_items": []}),
        model="gemini-2.5-flash",
    )

    with pytest.raises(AnalysisError):
        asyncio.run(service.analyze(b"image-bytes"))


def test_schema_requires_every_field() -> None:
    assert set(ANALYSIS_SCHEMA["required"]) == {
        "food_items",
        "total_calories",
        "health_analysis",
        "health_score",
        "healthy_alternatives",
    }


@pytest.mark.parametrize(
    ("data", "declared", "expected"),
    [
        (b"\xff\xd8\xff\xe0rest", None, "image/jpeg"),
        (b"RIFF\x00\x00\x00\x00WEBPVP8 ", None, "image/webp"),
        (b"GIF89a....", None, "image/gif"),
        (b"unknown", None, "image/jpeg"),
        (b"unknown", "application/octet-stream", "image/jpeg"),
        (b"unknown", "IMAGE/PNG", "image/png"),
    ],
)
def test_resolve_mime_type(data: bytes, declared: str | None, expected: str) -> None:
    assert resolve_mime_type(data, declared) == expected


def test_to_data_url_encodes_base64() -> None:
    url = to_data_url(b"fake", "image/png")

    assert url == "data:image/png;base64,ZmFrZQ=="
