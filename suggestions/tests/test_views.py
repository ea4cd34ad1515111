import json
from decimal import Decimal
from unittest.mock import Mock, patch

import pytest

from superhit.exceptions import SuggestionRateLimited, SuggestionQuotaExceeded, SuggestionUnavailable
from suggestions.views import GenerateSuggestionsView

SUGGESTIONS_URL = '/api/suggestions/'

RESULT = {
    'suggestions': [{
        'title': 'Couch to 5K',
        'activity': 'running',
        'target_value': 30,
        'unit': 'km',
        'deadline_days': 30,
        'frequency': '3 days/week',
        'motivation': 'Every step counts!'
    }],
    'summary': 'You got this, sam!'
}


@pytest.fixture
def generator(monkeypatch):
    generator = Mock()
    generator.generate.return_value = RESULT
    monkeypatch.setattr(GenerateSuggestionsView, 'generator_class', Mock(return_value=generator))
    return generator


def test_suggestions_require_token(api_client, db):
    response = api_client.post(SUGGESTIONS_URL, {'description': 'run a 5k'}, format='json')

    assert response.status_code == 401


def test_generate_suggestions(auth_client, generator):
    response = auth_client.post(SUGGESTIONS_URL, {'description': 'run a 5k'}, format='json')

    assert response.status_code == 200
    assert response.data['summary'] == 'You got this, sam!'
    assert response.data['suggestions'][0]['activity'] == 'running'
    generator.generate.assert_called_once_with(
        description='run a 5k', level='beginner', days_per_week=3, user_name='sam'
    )


def test_generate_suggestions_with_options(auth_client, generator):
    auth_client.post(SUGGESTIONS_URL, {
        'description': 'get stronger',
        'level': 'advanced',
        'days_per_week': 5,
        'user_name': 'Samantha'
    }, format='json')

    generator.generate.assert_called_once_with(
        description='get stronger', level='advanced', days_per_week=5, user_name='Samantha'
    )


@pytest.mark.parametrize('payload', [
    {},
    {'description': 'run', 'level': 'expert'},
    {'description': 'run', 'days_per_week': 8},
])
def test_generate_suggestions_validation(auth_client, generator, payload):
    response = auth_client.post(SUGGESTIONS_URL, payload, format='json')

    assert response.status_code == 400
    generator.generate.assert_not_called()


@pytest.mark.parametrize('error,status_code', [
    (SuggestionRateLimited(), 429),
    (SuggestionQuotaExceeded(), 402),
    (SuggestionUnavailable(), 502),
])
def test_generate_suggestions_errors_fall_back_to_manual(auth_client, generator, error, status_code):
    generator.generate.side_effect = error

    response = auth_client.post(SUGGESTIONS_URL, {'description': 'run a 5k'}, format='json')

    assert response.status_code == status_code
    assert response.data == {'error': str(error.detail), 'fallback': 'manual'}


def test_generate_suggestions_through_gateway(auth_client):
    gateway = Mock(status_code=200, ok=True)
    gateway.json.return_value = {'choices': [{'message': {'content': json.dumps(RESULT)}}]}

    with patch('suggestions.client.requests.Session.post', return_value=gateway) as post:
        response = auth_client.post(SUGGESTIONS_URL, {'description': 'run a 5k'}, format='json')

    assert response.status_code == 200
    assert response.data['suggestions'][0]['target_value'] == Decimal('30.000')
    assert post.call_args.kwargs['json']['model'] == 'test-model'


def test_huge_target_from_gateway_falls_back_to_manual(auth_client):
    content = {'suggestions': [dict(RESULT['suggestions'][0], target_value=1e30)], 'summary': ''}
    gateway = Mock(status_code=200, ok=True)
    gateway.json.return_value = {'choices': [{'message': {'content': json.dumps(content)}}]}

    with patch('suggestions.client.requests.Session.post', return_value=gateway):
        response = auth_client.post(SUGGESTIONS_URL, {'description': 'run a 5k'}, format='json')

    assert response.status_code == 502
    assert response.data['fallback'] == 'manual'
