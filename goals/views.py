import logging

from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse, OpenApiExample
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.pagination import LimitOffsetPagination

from superhit.authentication import TokenAuthentication, HasValidToken, IsOwner
from superhit.error_responses import (BAD_REQUEST_RESPONSE, UNAUTHORIZED_RESPONSE, NOT_FOUND_RESPONSE,
                                      CONFLICT_RESPONSE, SERVICE_UNAVAILABLE_RESPONSE, INTERNAL_SERVER_ERROR)
from superhit.exceptions import StoreUnavailable
from .models import Goal
from .progress import summarize_goal
from .serializers import GoalSerializer, GoalCreateSerializer, ProgressLogSerializer, \
    ProgressLogCreateSerializer, ProgressLogResultSerializer, DashboardSerializer
from . import services

logger = logging.getLogger(__name__)

GOAL_EXAMPLE = {
    "id": 12,
    "user_id": 3,
    "activity": "running",
    "unit": "km",
    "target_value": "20.000",
    "deadline_days": 30,
    "source": "manual",
    "completed_at": None,
    "created_at": "2024-01-10T09:15:30Z",
    "progress": {
        "total_progress": "15.000",
        "percentage": 75.0,
        "streak": 3,
        "days_left": 25,
        "is_completed": False,
        "has_logged_today": True
    }
}

PAGINATION_PARAMETERS = [
    OpenApiParameter(
        name='limit',
        type=int,
        location=OpenApiParameter.QUERY,
        description='Number of records per page (max 100)',
        required=False,
        default=10
    ),
    OpenApiParameter(
        name='offset',
        type=int,
        location=OpenApiParameter.QUERY,
        description='Offset from the start of the list',
        required=False,
        default=0
    )
]


class GoalLimitOffsetPagination(LimitOffsetPagination):
    default_limit = 10
    limit_query_param = 'limit'
    offset_query_param = 'offset'
    max_limit = 100


class GoalViewSet(viewsets.GenericViewSet):
    pagination_class = GoalLimitOffsetPagination
    authentication_classes = [TokenAuthentication]
    permission_classes = [HasValidToken, IsOwner]

    def get_queryset(self):
        return services.list_goals(self.request.user)

    def get_serializer_class(self):
        return {
            'create': GoalCreateSerializer,
            'progress': ProgressLogCreateSerializer,
        }.get(self.action, GoalSerializer)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['now'] = timezone.now()
        return context

    def handle_exception(self, exc):
        # Writes already raise StoreUnavailable from services; this covers reads.
        if isinstance(exc, DatabaseError):
            logger.exception(f'Goal store failed during {self.action}')
            exc = StoreUnavailable('Failed to load goals.')
        return super().handle_exception(exc)

    @extend_schema(
        summary="List my goals",
        description="""
            List of the current user's goals

            Goals are ordered by creation date (newest first). Every goal carries
            its derived progress, recomputed from the full progress log:
            - total_progress: Sum of all logged values
            - percentage: 100 * total / target, clamped to [0, 100]
            - streak: Consecutive calendar days ending today with at least one entry
            - days_left: Days remaining until the deadline (never negative)
            - is_completed: Whether the total reached the target
            - has_logged_today: Whether anything was logged today

            Pagination:
            - limit: Number of records per page (max 100)
            - offset: Offset from the start of the list
            """,
        parameters=PAGINATION_PARAMETERS,
        responses={
            200: OpenApiResponse(
                response=GoalSerializer(many=True),
                description='OK',
                examples=[
                    OpenApiExample(
                        name="Goal list",
                        value={
                            "count": 1,
                            "next": None,
                            "previous": None,
                            "results": [GOAL_EXAMPLE]
                        }
                    )
                ]
            ),
            401: UNAUTHORIZED_RESPONSE,
            503: SERVICE_UNAVAILABLE_RESPONSE,
            500: INTERNAL_SERVER_ERROR
        },
        tags=['Goals']
    )
    def list(self, request, *args, **kwargs):
        goals = self.get_queryset()

        page = self.paginate_queryset(goals)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = self.get_serializer(goals, many=True)
        return Response(serializer.data)

    @extend_schema(
        summary="Create a goal",
        description="""
            Create a new fitness goal

            Used both for manual goals and for saving an AI suggestion
            (pass source=ai).

            Required fields:
            - activity: Activity name, stored lowercase (max 100 characters)
            - unit: Unit, stored lowercase (max 50 characters)
            - target_value: Positive number, up to 3 decimal places
            - deadline_days: Whole days from now, 1 to 365

            Optional fields:
            - source: manual (default) or ai

            Restrictions:
            - A user can own only one goal per (activity, unit) pair
            """,
        request=GoalCreateSerializer,
        responses={
            201: OpenApiResponse(
                response=GoalSerializer,
                description='Created'
            ),
            400: BAD_REQUEST_RESPONSE,
            401: UNAUTHORIZED_RESPONSE,
            409: CONFLICT_RESPONSE,
            503: SERVICE_UNAVAILABLE_RESPONSE
        },
        examples=[
            OpenApiExample(
                name="Manual goal",
                value={
                    "activity": "Running",
                    "unit": "km",
                    "target_value": 20,
                    "deadline_days": 30
                },
                request_only=True
            )
        ],
        tags=['Goals']
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        goal = services.create_goal(request.user, **serializer.validated_data)

        data = GoalSerializer(goal, context=self.get_serializer_context()).data
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Get a goal",
        description="""
            Returns one of the current user's goals with its derived progress.
            Goals of other users are reported as not found.
            """,
        responses={
            200: OpenApiResponse(
                response=GoalSerializer,
                description='OK',
                examples=[OpenApiExample(name="Goal", value=GOAL_EXAMPLE)]
            ),
            401: UNAUTHORIZED_RESPONSE,
            404: NOT_FOUND_RESPONSE,
            503: SERVICE_UNAVAILABLE_RESPONSE
        },
        tags=['Goals']
    )
    def retrieve(self, request, *args, **kwargs):
        goal = self.get_object()
        serializer = self.get_serializer(goal)
        return Response(serializer.data)

    @extend_schema(
        summary="Dashboard",
        description="""
            Summary of all of the current user's goals

            Returned fields:
            - goals: All goals with their derived progress (newest first)
            - has_logged_today: Whether any goal received an entry today
            - best_streak: Longest current streak across goals
            - completed_goals: Number of goals whose total reached the target
            """,
        responses={
            200: DashboardSerializer,
            401: UNAUTHORIZED_RESPONSE,
            503: SERVICE_UNAVAILABLE_RESPONSE
        },
        tags=['Goals']
    )
    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        context = self.get_serializer_context()
        dashboard = services.build_dashboard(self.get_queryset(), now=context['now'])
        return Response(DashboardSerializer(dashboard, context=context).data)

    @extend_schema(
        methods=['GET'],
        summary="List progress entries of a goal",
        description="""
            Entries of one goal, newest first. Entries are append-only and
            can't be edited or deleted.
            """,
        parameters=PAGINATION_PARAMETERS,
        responses={
            200: ProgressLogSerializer(many=True),
            401: UNAUTHORIZED_RESPONSE,
            404: NOT_FOUND_RESPONSE,
            503: SERVICE_UNAVAILABLE_RESPONSE
        },
        tags=['Progress']
    )
    @extend_schema(
        methods=['POST'],
        summary="Log progress",
        description="""
            Append a progress entry to a goal

            Required fields:
            - value: Positive number, up to 3 decimal places

            The entry is timestamped by the server. The response contains the
            recomputed progress of the goal and goal_completed=true for the one
            entry that makes the total reach the target.
            """,
        request=ProgressLogCreateSerializer,
        responses={
            201: OpenApiResponse(
                response=ProgressLogResultSerializer,
                description='Created',
                examples=[
                    OpenApiExample(
                        name="Goal completed",
                        value={
                            "entry": {
                                "id": 41,
                                "goal": 12,
                                "value": "4.000",
                                "logged_at": "2024-01-15T10:30:00Z"
                            },
                            "goal_completed": True,
                            "progress": {
                                "total_progress": "22.000",
                                "percentage": 100.0,
                                "streak": 4,
                                "days_left": 25,
                                "is_completed": True,
                                "has_logged_today": True
                            }
                        }
                    )
                ]
            ),
            400: BAD_REQUEST_RESPONSE,
            401: UNAUTHORIZED_RESPONSE,
            404: NOT_FOUND_RESPONSE,
            503: SERVICE_UNAVAILABLE_RESPONSE
        },
        examples=[
            OpenApiExample(
                name="Progress entry",
                value={"value": 5},
                request_only=True
            )
        ],
        tags=['Progress']
    )
    @action(detail=True, methods=['get', 'post'])
    def progress(self, request, pk=None):
        goal = self.get_object()

        if request.method == 'GET':
            entries = services.list_entries(goal)

            page = self.paginate_queryset(entries)
            if page is not None:
                serializer = ProgressLogSerializer(page, many=True)
                return self.get_paginated_response(serializer.data)

            return Response(ProgressLogSerializer(entries, many=True).data)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        now = self.get_serializer_context()['now']
        entry, completed_now = services.log_progress(goal, serializer.validated_data['value'], now=now)

        goal = get_object_or_404(Goal, pk=goal.pk)
        result = {
            'entry': entry,
            'goal_completed': completed_now,
            'progress': summarize_goal(goal, goal.progress_logs.all(), now=now),
        }
        return Response(ProgressLogResultSerializer(result).data, status=status.HTTP_201_CREATED)
