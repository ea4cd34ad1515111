from rest_framework import status
from rest_framework.exceptions import APIException


class DuplicateGoal(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'You already have a goal for this activity and unit.'
    default_code = 'duplicate_goal'


class StoreUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Storage is temporarily unavailable, please try again.'
    default_code = 'store_unavailable'


class SuggestionError(APIException):
    """Base class for failures of the AI goal suggestion gateway.

    Every subclass is shown to the user together with a hint to fall back to
    creating the goal manually.
    """
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Failed to generate suggestions.'
    default_code = 'suggestion_error'
    fallback = 'manual'


class SuggestionRateLimited(SuggestionError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = 'Rate limits exceeded, please try again later.'
    default_code = 'suggestion_rate_limited'


class SuggestionQuotaExceeded(SuggestionError):
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_detail = 'AI suggestion quota is exhausted, please create your goal manually.'
    default_code = 'suggestion_quota_exceeded'


class SuggestionUnavailable(SuggestionError):
    default_detail = 'AI suggestions are unavailable right now.'
    default_code = 'suggestion_unavailable'
