"""
Client for the AI goal suggestion gateway.

Talks to an OpenAI-compatible chat completions endpoint: one structured
prompt goes out, a JSON object with three SMART goal suggestions comes back.
"""
import json
import logging
import re
from typing import Any, Dict, Optional

import requests
from django.conf import settings

from superhit.exceptions import SuggestionRateLimited, SuggestionQuotaExceeded, SuggestionUnavailable
from .serializers import GoalSuggestionSerializer

logger = logging.getLogger(__name__)

SUGGESTION_COUNT = 3

CODE_FENCE_PATTERN = re.compile(r'```(?:json)?\s*', re.IGNORECASE)

SYSTEM_PROMPT = """You are an energetic, motivational fitness coach for GetFitSuperHit.
Your role is to transform vague fitness goals into SMART (Specific, Measurable, Achievable, Relevant, Time-bound) action plans.

Fitness Level Guidelines:
- Beginner: Gentle encouragement, focus on small wins, build confidence
- Intermediate: Steady improvement, balanced challenges
- Advanced: Push boundaries, performance-oriented, ambitious targets

Always respond with exactly 3 goal suggestions in JSON format using this structure:
{
  "suggestions": [
    {
      "title": "Catchy goal title",
      "activity": "activity name (lowercase, simple)",
      "target_value": number,
      "unit": "unit (lowercase)",
      "deadline_days": number,
      "frequency": "X days/week",
      "motivation": "Short motivational line"
    }
  ],
  "summary": "Personalized encouragement using the user's name"
}

Make goals realistic for the given fitness level and frequency. deadline_days must be between 1 and 365."""

USER_PROMPT = """Goal: "{description}"
Fitness Level: {level}
Available: {days_per_week} days/week
User Name: {user_name}

Generate 3 SMART fitness goal suggestions."""


def build_messages(description: str, level: str, days_per_week: int, user_name: Optional[str]) -> list:
    return [
        {'role': 'system', 'content': SYSTEM_PROMPT},
        {'role': 'user', 'content': USER_PROMPT.format(
            description=description,
            level=level,
            days_per_week=days_per_week,
            user_name=user_name or 'Friend',
        )},
    ]


def strip_code_fences(content: str) -> str:
    if '```' in content:
        content = CODE_FENCE_PATTERN.sub('', content)
    return content.strip()


def parse_suggestions(content: str) -> Dict[str, Any]:
    """Parse the model's reply into ``{'suggestions': [...], 'summary': str}``."""
    try:
        payload = json.loads(strip_code_fences(content))
    except (TypeError, ValueError):
        raise SuggestionUnavailable('AI returned a response that could not be read.')

    if not isinstance(payload, dict):
        raise SuggestionUnavailable('AI returned a response that could not be read.')

    if payload.get('error'):
        raise SuggestionUnavailable(str(payload['error']))

    suggestions = []
    for item in payload.get('suggestions') or []:
        serializer = GoalSuggestionSerializer(data=item)
        if serializer.is_valid():
            suggestions.append(dict(serializer.validated_data))
        else:
            logger.warning(f'Dropping invalid suggestion: {serializer.errors}')

    if not suggestions:
        raise SuggestionUnavailable('AI did not return any usable suggestions.')

    summary = payload.get('summary')
    return {
        'suggestions': suggestions[:SUGGESTION_COUNT],
        'summary': summary if isinstance(summary, str) else '',
    }


class SuggestionGenerator:
    def __init__(self, api_url: str = None, api_key: str = None, model: str = None,
                 timeout: float = None, session: requests.Session = None):
        self.api_url = api_url or settings.SUGGESTION_API_URL
        self.api_key = api_key if api_key is not None else settings.SUGGESTION_API_KEY
        self.model = model or settings.SUGGESTION_MODEL
        self.timeout = timeout or settings.SUGGESTION_TIMEOUT
        self.session = session or requests.Session()

    def generate(self, description: str, level: str, days_per_week: int,
                 user_name: Optional[str] = None) -> Dict[str, Any]:
        if not self.api_key:
            logger.error('SUGGESTION_API_KEY is not configured')
            raise SuggestionUnavailable('AI suggestions are not configured.')

        payload = {
            'model': self.model,
            'messages': build_messages(description, level, days_per_week, user_name),
            'response_format': {'type': 'json_object'},
        }

        try:
            response = self.session.post(
                self.api_url,
                json=payload,
                headers={
                    'Authorization': f'Bearer {self.api_key}',
                    'Content-Type': 'application/json',
                },
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f'Suggestion gateway request failed: {e}')
            raise SuggestionUnavailable()

        if response.status_code == 429:
            raise SuggestionRateLimited()
        if response.status_code == 402:
            raise SuggestionQuotaExceeded()
        if not response.ok:
            logger.warning(f'Suggestion gateway error: {response.status_code} {response.text[:500]}')
            raise SuggestionUnavailable()

        try:
            content = response.json()['choices'][0]['message']['content']
        except (ValueError, KeyError, IndexError, TypeError):
            logger.warning(f'Unexpected suggestion gateway response: {response.text[:500]}')
            raise SuggestionUnavailable('AI returned a response that could not be read.')

        return parse_suggestions(content)
