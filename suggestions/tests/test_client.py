import json
from decimal import Decimal
from unittest.mock import Mock

import pytest
import requests

from suggestions.client import SuggestionGenerator, parse_suggestions, strip_code_fences, build_messages
from superhit.exceptions import SuggestionRateLimited, SuggestionQuotaExceeded, SuggestionUnavailable


def suggestion(**overrides):
    item = {
        'title': 'Couch to 5K',
        'activity': 'Running',
        'target_value': 30,
        'unit': 'KM',
        'deadline_days': 30,
        'frequency': '3 days/week',
        'motivation': 'Every step counts!'
    }
    item.update(overrides)
    return item


def gateway_response(status_code=200, content=None, body=None):
    response = Mock(status_code=status_code, ok=status_code < 400, text='')
    if body is None:
        body = {'choices': [{'message': {'content': content}}]}
    response.json.return_value = body
    return response


def make_generator(response=None, error=None, api_key='test-key'):
    session = Mock()
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    return SuggestionGenerator(api_url='https://llm.test/v1/chat/completions', api_key=api_key,
                               model='test-model', timeout=5, session=session)


def test_build_messages_includes_request_details():
    messages = build_messages('run a 5k', 'beginner', 3, None)

    assert messages[0]['role'] == 'system'
    assert '"run a 5k"' in messages[1]['content']
    assert '3 days/week' in messages[1]['content']
    assert 'User Name: Friend' in messages[1]['content']


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


def test_parse_suggestions_normalizes_items():
    result = parse_suggestions(json.dumps({'suggestions': [suggestion()], 'summary': 'Go Sam!'}))

    assert result['summary'] == 'Go Sam!'
    item = result['suggestions'][0]
    assert item['activity'] == 'running'
    assert item['unit'] == 'km'
    assert item['target_value'] == Decimal('30.000')


def test_parse_suggestions_keeps_three():
    content = json.dumps({'suggestions': [suggestion(title=f'Goal {i}') for i in range(5)]})

    result = parse_suggestions(content)

    assert [item['title'] for item in result['suggestions']] == ['Goal 0', 'Goal 1', 'Goal 2']
    assert result['summary'] == ''


def test_parse_suggestions_drops_invalid_items():
    content = json.dumps({'suggestions': [
        suggestion(target_value=-1),
        suggestion(deadline_days=400),
        suggestion(title='Keeper'),
    ]})

    result = parse_suggestions(content)

    assert [item['title'] for item in result['suggestions']] == ['Keeper']


@pytest.mark.parametrize('content', [
    'not json',
    '[]',
    json.dumps({'error': 'Could not understand the goal'}),
    json.dumps({'suggestions': []}),
    json.dumps({'suggestions': [suggestion(target_value='many')]}),
])
def test_parse_suggestions_unusable(content):
    with pytest.raises(SuggestionUnavailable):
        parse_suggestions(content)


def test_generate(settings):
    content = '```json\n' + json.dumps({'suggestions': [suggestion()], 'summary': 'You got this!'}) + '\n```'
    generator = make_generator(gateway_response(content=content))

    result = generator.generate('run a 5k', 'beginner', 3, 'Sam')

    assert result['suggestions'][0]['title'] == 'Couch to 5K'
    args, kwargs = generator.session.post.call_args
    assert args[0] == 'https://llm.test/v1/chat/completions'
    assert kwargs['headers']['Authorization'] == 'Bearer test-key'
    assert kwargs['json']['model'] == 'test-model'
    assert kwargs['timeout'] == 5


def test_generate_uses_settings(settings):
    settings.SUGGESTION_MODEL = 'other-model'
    generator = SuggestionGenerator(session=Mock())

    assert generator.model == 'other-model'
    assert generator.api_key == 'test-key'


def test_generate_without_api_key():
    generator = make_generator(api_key='')

    with pytest.raises(SuggestionUnavailable):
        generator.generate('run a 5k', 'beginner', 3)

    generator.session.post.assert_not_called()


@pytest.mark.parametrize('status_code,error', [
    (429, SuggestionRateLimited),
    (402, SuggestionQuotaExceeded),
    (500, SuggestionUnavailable),
    (401, SuggestionUnavailable),
])
def test_generate_gateway_errors(status_code, error):
    generator = make_generator(gateway_response(status_code=status_code, body={}))

    with pytest.raises(error):
        generator.generate('run a 5k', 'beginner', 3)


def test_generate_connection_error():
    generator = make_generator(error=requests.exceptions.ConnectionError('boom'))

    with pytest.raises(SuggestionUnavailable):
        generator.generate('run a 5k', 'beginner', 3)


def test_generate_unexpected_body():
    generator = make_generator(gateway_response(body={'choices': []}))

    with pytest.raises(SuggestionUnavailable):
        generator.generate('run a 5k', 'beginner', 3)


def test_parse_suggestions_drops_huge_targets():
    content = json.dumps({'suggestions': [
        suggestion(title='Huge', target_value=1e30),
        suggestion(title='Too big to save', target_value=123456789),
        suggestion(title='Five', target_value=5),
        suggestion(title='Six', target_value=6),
    ]})

    result = parse_suggestions(content)

    assert [item['title'] for item in result['suggestions']] == ['Five', 'Six']


def test_parse_suggestions_target_limits():
    content = json.dumps({'suggestions': [
        suggestion(title='Largest', target_value='9999999.999'),
        suggestion(title='Rounds over the limit', target_value='9999999.9996'),
        suggestion(title='Rounds to zero', target_value='0.0001'),
        suggestion(title='Rounded', target_value='2.71828'),
    ]})

    result = parse_suggestions(content)

    assert [(item['title'], item['target_value']) for item in result['suggestions']] == [
        ('Largest', Decimal('9999999.999')),
        ('Rounded', Decimal('2.718')),
    ]


def test_parse_suggestions_only_huge_targets():
    with pytest.raises(SuggestionUnavailable):
        parse_suggestions(json.dumps({'suggestions': [suggestion(target_value=1e30)]}))
