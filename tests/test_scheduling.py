"""Tests for the Gemini scheduling suggestion."""
import json
from unittest.mock import MagicMock, patch

import pytest

from cleansweep.scheduling import (
    SchedulingError,
    build_prompt,
    parse_suggestion,
    suggest_booking_time,
)


def _reply(payload):
    return MagicMock(text=payload if isinstance(payload, str) else json.dumps(payload))


def test_prompt_includes_service_attributes():
    prompt = build_prompt("deep", 3, 2, "2026-11-02")
    assert "2026-11-02" in prompt
    assert "Service Type: deep" in prompt
    assert "Number of Bedrooms: 3" in prompt
    assert "Number of Bathrooms: 2" in prompt


def test_parse_strips_markdown_fences():
    content = '```json\n{"suggestedTime": "9:00", "reminderNoticeSuggestion": " See you soon! "}\n```'
    suggestion = parse_suggestion(content)
    assert suggestion.suggested_time == "09:00"
    assert suggestion.reminder_notice == "See you soon!"


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[]",
        '{"suggestedTime": "noonish", "reminderNoticeSuggestion": "hi"}',
        '{"suggestedTime": "10:00"}',
        '{"suggestedTime": "10:00", "reminderNoticeSuggestion": "   "}',
    ],
)
def test_parse_rejects_malformed_replies(content):
    with pytest.raises(SchedulingError):
        parse_suggestion(content)


@patch("cleansweep.scheduling.genai")
def test_suggest_calls_configured_model(mock_genai, app_config):
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.return_value = _reply(
        {"suggestedTime": "10:30", "reminderNoticeSuggestion": "Your clean is tomorrow!"}
    )

    suggestion = suggest_booking_time("standard", 2, 1, "2026-11-02", app_config)

    assert suggestion.suggested_time == "10:30"
    assert suggestion.reminder_notice == "Your clean is tomorrow!"
    mock_genai.configure.assert_called_once_with(api_key="gemini-test-key")
    assert mock_genai.GenerativeModel.call_args[0][0] == "gemini-2.0-flash"
    model.generate_content.assert_called_once()


@patch("cleansweep.scheduling.genai")
def test_transport_failure_is_not_retried(mock_genai, app_config):
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.side_effect = RuntimeError("quota exceeded")

    with pytest.raises(SchedulingError):
        suggest_booking_time("standard", 2, 1, "2026-11-02", app_config)
    assert model.generate_content.call_count == 1
