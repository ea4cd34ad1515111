from drf_spectacular.utils import OpenApiResponse


BAD_REQUEST_RESPONSE = OpenApiResponse(
   response={
       'type': 'object',
       'properties': {
           'field_name': {'type': 'array', 'items': {'type': 'string', 'example': 'description'}}
       }
   },
   description='Bad Request'
)

UNAUTHORIZED_RESPONSE = OpenApiResponse(
   response={
       'type': 'object',
       'properties': {
           'detail': {'type': 'string', 'example': 'Authentication credentials were not provided.'}
       }
   },
   description='Unauthorized'
)

NOT_FOUND_RESPONSE = OpenApiResponse(
   response={
       'type': 'object',
       'properties': {
           'detail': {'type': 'string', 'example': 'No Goal matches the given query.'}
       }
   },
   description='Not Found'
)

CONFLICT_RESPONSE = OpenApiResponse(
   response={
       'type': 'object',
       'properties': {
           'detail': {'type': 'string', 'example': 'You already have a goal for this activity and unit.'}
       }
   },
   description='Conflict'
)

SERVICE_UNAVAILABLE_RESPONSE = OpenApiResponse(
   response={
       'type': 'object',
       'properties': {
           'detail': {'type': 'string', 'example': 'Storage is temporarily unavailable, please try again.'}
       }
   },
   description='Service Unavailable'
)


def suggestion_error_response(description, example):
    return OpenApiResponse(
        response={
            'type': 'object',
            'properties': {
                'error': {'type': 'string', 'example': example},
                'fallback': {'type': 'string', 'example': 'manual'}
            }
        },
        description=description
    )


RATE_LIMITED_RESPONSE = suggestion_error_response(
    'Too Many Requests', 'Rate limits exceeded, please try again later.'
)

PAYMENT_REQUIRED_RESPONSE = suggestion_error_response(
    'Payment Required', 'AI suggestion quota is exhausted, please create your goal manually.'
)

BAD_GATEWAY_RESPONSE = suggestion_error_response(
    'Bad Gateway', 'AI suggestions are unavailable right now.'
)

INTERNAL_SERVER_ERROR = OpenApiResponse(
   response={
       'type': 'string'
   },
   description='Internal Server Error'
)
