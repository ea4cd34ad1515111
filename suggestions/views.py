import logging

from drf_spectacular.utils import extend_schema, OpenApiResponse, OpenApiExample
from rest_framework.response import Response
from rest_framework.views import APIView

from superhit.authentication import TokenAuthentication, HasValidToken
from superhit.error_responses import (BAD_REQUEST_RESPONSE, UNAUTHORIZED_RESPONSE, RATE_LIMITED_RESPONSE,
                                      PAYMENT_REQUIRED_RESPONSE, BAD_GATEWAY_RESPONSE)
from superhit.exceptions import SuggestionError
from .client import SuggestionGenerator
from .serializers import SuggestionRequestSerializer, SuggestionResponseSerializer

logger = logging.getLogger(__name__)


class GenerateSuggestionsView(APIView):
    authentication_classes = [TokenAuthentication]
    permission_classes = [HasValidToken]
    generator_class = SuggestionGenerator

    @extend_schema(
        summary='Generate SMART goal suggestions',
        description='''
            AI goal suggestions

            Turns a free text description into three SMART goal suggestions.
            Nothing is saved: pick a suggestion and create it through
            POST /api/goals/ with source=ai.

            Required fields:
            - description: What the user wants to achieve

            Optional fields:
            - level: beginner (default), intermediate or advanced
            - days_per_week: 1 to 7 (default 3)
            - user_name: Name used in the summary (defaults to the username)

            Errors:
            - 429: The AI gateway is rate limited
            - 402: The AI quota is exhausted
            - 502: The AI gateway failed or returned something unusable
            Every error body carries fallback=manual as a hint to create the goal manually.
            ''',
        request=SuggestionRequestSerializer,
        responses={
            200: OpenApiResponse(
                response=SuggestionResponseSerializer,
                description='OK',
                examples=[
                    OpenApiExample(
                        name='Suggestions',
                        value={
                            'suggestions': [
                                {
                                    'title': 'Couch to 5K',
                                    'activity': 'running',
                                    'target_value': 30,
                                    'unit': 'km',
                                    'deadline_days': 30,
                                    'frequency': '3 days/week',
                                    'motivation': 'Every step counts!'
                                }
                            ],
                            'summary': 'You got this, Sam!'
                        }
                    )
                ]
            ),
            400: BAD_REQUEST_RESPONSE,
            401: UNAUTHORIZED_RESPONSE,
            402: PAYMENT_REQUIRED_RESPONSE,
            429: RATE_LIMITED_RESPONSE,
            502: BAD_GATEWAY_RESPONSE
        },
        examples=[
            OpenApiExample(
                name='Suggestion request',
                value={
                    'description': 'I want to run a 5k without stopping',
                    'level': 'beginner',
                    'days_per_week': 3
                },
                request_only=True
            )
        ],
        tags=['Suggestions']
    )
    def post(self, request):
        serializer = SuggestionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            result = self.generator_class().generate(
                description=data['description'],
                level=data['level'],
                days_per_week=data['days_per_week'],
                user_name=data.get('user_name') or request.user.username,
            )
        except SuggestionError as e:
            logger.warning(f'Suggestions failed for user {request.user.id}: {e.detail}')
            return Response(
                {
                    'error': str(e.detail),
                    'fallback': e.fallback
                },
                status=e.status_code
            )

        return Response(SuggestionResponseSerializer(result).data)
