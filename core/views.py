import logging

from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from superhit.authentication import TokenAuthentication, HasValidToken
from superhit.error_responses import BAD_REQUEST_RESPONSE, UNAUTHORIZED_RESPONSE, INTERNAL_SERVER_ERROR
from .models import User, AuthToken
from .serializers import UserSerializer, UserCreateSerializer, LoginSerializer, LoginResponseSerializer

logger = logging.getLogger(__name__)


class UserViewSet(mixins.CreateModelMixin, viewsets.GenericViewSet):
    queryset = User.objects.all()
    authentication_classes = [TokenAuthentication]

    def get_permissions(self):
        if self.action == 'create':
            return []

        return [HasValidToken()]

    def get_serializer_class(self):
        return {
            'create': UserCreateSerializer,
        }.get(self.action, UserSerializer)

    @extend_schema(
        summary='Register a new user',
        description='''
            Registration

            Creates a new account. The endpoint does not require authentication.

            Required fields:
            - email: Unique email address
            - username: Display name (2 to 50 characters)
            - password: Password (at least 6 characters)
            - confirm_password: Must match password

            Validation:
            - Email format and uniqueness (case insensitive)
            - Password length and confirmation
            ''',
        request=UserCreateSerializer,
        responses={
            201: OpenApiResponse(
                response=UserSerializer,
                description='Created',
                examples=[
                    OpenApiExample(
                        name='User created',
                        value={
                            'id': 7,
                            'email': 'sam@example.com',
                            'username': 'sam',
                            'is_active': True,
                            'last_login': None,
                            'created_at': '2024-01-15T10:30:00Z',
                            'updated_at': '2024-01-15T10:30:00Z'
                        }
                    )
                ]
            ),
            400: BAD_REQUEST_RESPONSE,
            500: INTERNAL_SERVER_ERROR
        },
        examples=[
            OpenApiExample(
                name='Registration example',
                value={
                    'email': 'sam@example.com',
                    'username': 'sam',
                    'password': 'secret123',
                    'confirm_password': 'secret123'
                },
                request_only=True
            )
        ],
        tags=['Users']
    )
    def create(self, request, *args, **kwargs):
        response = super().create(request, *args, **kwargs)
        logger.info(f"Registered user {response.data['id']}")
        return response

    @extend_schema(
        summary='Get the current user',
        responses={
            200: UserSerializer,
            401: UNAUTHORIZED_RESPONSE
        },
        tags=['Users']
    )
    @action(detail=False, methods=['get'])
    def me(self, request):
        return Response(UserSerializer(request.user).data)


class LoginView(APIView):
    authentication_classes = []
    permission_classes = []

    @extend_schema(
        summary='Log in',
        description='''
            Authentication

            Exchanges email and password for an access token.

            Process:
            - Credentials check (user exists, password matches, account active)
            - Token creation with a limited lifetime (AUTH_TOKEN_TTL_HOURS, 24 hours by default)
            - last_login update

            Send the token in the Authorization header of later requests,
            either bare or prefixed with "Token ".
            ''',
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(
                response=LoginResponseSerializer,
                description='OK'
            ),
            401: UNAUTHORIZED_RESPONSE
        },
        examples=[
            OpenApiExample(
                name='Login example',
                value={
                    'email': 'sam@example.com',
                    'password': 'secret123'
                },
                request_only=True
            )
        ],
        tags=['Users']
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)

        if serializer.is_valid():
            user = serializer.validated_data['user']

            token = AuthToken.create_token(user)

            user.last_login = timezone.now()
            user.save(update_fields=['last_login'])

            return Response({
                'success': True,
                'message': 'Welcome back!',
                'token': token.key,
                'expires_at': token.expires_at,
                'user': UserSerializer(user).data
            })

        return Response({
            'success': False,
            'errors': serializer.errors
        }, status=status.HTTP_401_UNAUTHORIZED)


class LogoutView(APIView):
    authentication_classes = [TokenAuthentication]
    permission_classes = [HasValidToken]

    @extend_schema(
        summary='Log out',
        description='''
            Deactivates the token presented in the Authorization header.
            Other tokens of the same user stay valid.
            ''',
        request=None,
        responses={
            200: OpenApiResponse(
                description='OK'
            ),
            401: UNAUTHORIZED_RESPONSE
        },
        tags=['Users']
    )
    def post(self, request):
        token = request.auth

        token.is_active = False
        token.save(update_fields=['is_active'])

        return Response(status=status.HTTP_200_OK)
