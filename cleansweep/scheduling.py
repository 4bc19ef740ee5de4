from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict
import json
import logging

import google.generativeai as genai

from cleansweep.booking_flow import parse_time_str
from cleansweep.config import AppConfig

logger = logging.getLogger(__name__)


PROMPT_TEMPLATE = (
    "You are an AI assistant designed to suggest the optimal booking time and reminder "
    "notices for cleaning services based on historical data.\n\n"
    "Consider the following factors when making your suggestion:\n"
    "- Historical booking data showing popular times for similar services\n"
    "- Customer's preferred date for the service: {date_preference}\n"
    "- Service Type: {service_type}\n"
    "- Number of Bedrooms: {bedrooms}\n"
    "- Number of Bathrooms: {bathrooms}\n\n"
    "Output the suggested booking time in HH:mm format (24-hour) and provide a compelling "
    "reminder notice suggestion, using the present tense. The reminder notice should be "
    "brief and friendly, encouraging the customer to keep the booking.\n"
    "Return a valid JSON object (no markdown formatting) with exactly these keys:\n"
    '{{"suggestedTime": "HH:mm", "reminderNoticeSuggestion": "Reminder notice here"}}'
)


class SchedulingError(Exception):
    """The model call failed or its reply did not match the expected schema."""


@dataclass
class SchedulingSuggestion:
    suggested_time: str
    reminder_notice: str


def build_prompt(service_type: str, bedrooms: int, bathrooms: int, date_preference: str) -> str:
    return PROMPT_TEMPLATE.format(
        service_type=service_type,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        date_preference=date_preference,
    )


def parse_suggestion(content: str) -> SchedulingSuggestion:
    content = (content or "").replace("```json", "").replace("```", "").strip()
    try:
        data: Dict[str, Any] = json.loads(content)
    except json.JSONDecodeError as e:
        raise SchedulingError(f"Model reply is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise SchedulingError("Model reply is not a JSON object.")

    suggested = data.get("suggestedTime")
    reminder = data.get("reminderNoticeSuggestion")
    parsed = parse_time_str(suggested) if isinstance(suggested, str) else None
    if parsed is None:
        raise SchedulingError(f"Invalid suggestedTime in model reply: {suggested!r}")
    if not isinstance(reminder, str) or not reminder.strip():
        raise SchedulingError("Missing reminderNoticeSuggestion in model reply.")

    return SchedulingSuggestion(
        suggested_time=parsed.strftime("%H:%M"),
        reminder_notice=reminder.strip(),
    )


def suggest_booking_time(
    service_type: str,
    bedrooms: int,
    bathrooms: int,
    date_preference: str,
    cfg: AppConfig,
) -> SchedulingSuggestion:
    """
    Ask Gemini for a time slot on the preferred date and a reminder message.
    Makes a single attempt; callers decide whether to try again.
    """
    prompt = build_prompt(service_type, bedrooms, bathrooms, date_preference)

    try:
        genai.configure(api_key=cfg.gemini.api_key)
        model = genai.GenerativeModel(
            cfg.gemini.model,
            generation_config={"response_mime_type": "application/json"},
        )
        response = model.generate_content(prompt)
        content = response.text
    except Exception as e:
        logger.error(f"Gemini request failed ({cfg.gemini.model}): {e}")
        raise SchedulingError("Scheduling service is unavailable.") from e

    suggestion = parse_suggestion(content)
    logger.info(f"Suggested {suggestion.suggested_time} for {service_type} on {date_preference}")
    return suggestion
