from django.utils import timezone
from rest_framework import serializers
from .models import Goal, ProgressLog, MAX_DEADLINE_DAYS
from .progress import summarize_goal


class ProgressSerializer(serializers.Serializer):
    total_progress = serializers.DecimalField(max_digits=16, decimal_places=3)
    percentage = serializers.FloatField()
    streak = serializers.IntegerField()
    days_left = serializers.IntegerField()
    is_completed = serializers.BooleanField()
    has_logged_today = serializers.BooleanField()


class GoalSerializer(serializers.ModelSerializer):
    progress = serializers.SerializerMethodField()

    class Meta:
        model = Goal
        fields = [
            'id', 'user_id', 'activity', 'unit', 'target_value',
            'deadline_days', 'source', 'completed_at', 'created_at', 'progress'
        ]

    def get_progress(self, obj) -> dict:
        now = self.context.get('now') or timezone.now()
        return ProgressSerializer(summarize_goal(obj, obj.progress_logs.all(), now=now)).data


class GoalCreateSerializer(serializers.ModelSerializer):
    activity = serializers.CharField(max_length=100, trim_whitespace=True)
    unit = serializers.CharField(max_length=50, trim_whitespace=True)
    target_value = serializers.DecimalField(max_digits=10, decimal_places=3)
    deadline_days = serializers.IntegerField(min_value=1, max_value=MAX_DEADLINE_DAYS)

    class Meta:
        model = Goal
        fields = [
            'activity', 'unit', 'target_value', 'deadline_days', 'source'
        ]
        extra_kwargs = {
            'source': {'required': False},
        }

    def validate_activity(self, value):
        return value.lower()

    def validate_unit(self, value):
        return value.lower()

    def validate_target_value(self, value):
        if value <= 0:
            raise serializers.ValidationError('Target must be a positive number')
        return value


class ProgressLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProgressLog
        fields = ['id', 'goal', 'value', 'logged_at']


class ProgressLogCreateSerializer(serializers.Serializer):
    value = serializers.DecimalField(max_digits=10, decimal_places=3)

    def validate_value(self, value):
        if value <= 0:
            raise serializers.ValidationError('Please enter a valid positive number')
        return value


class ProgressLogResultSerializer(serializers.Serializer):
    entry = ProgressLogSerializer()
    goal_completed = serializers.BooleanField()
    progress = ProgressSerializer()


class DashboardSerializer(serializers.Serializer):
    goals = GoalSerializer(many=True)
    has_logged_today = serializers.BooleanField()
    best_streak = serializers.IntegerField()
    completed_goals = serializers.IntegerField()
