from decimal import Decimal, InvalidOperation

from rest_framework import serializers

from goals.models import MAX_DEADLINE_DAYS, MAX_TARGET_VALUE


class SuggestionRequestSerializer(serializers.Serializer):
    LEVEL_CHOICES = ['beginner', 'intermediate', 'advanced']

    description = serializers.CharField(max_length=1000, trim_whitespace=True)
    level = serializers.ChoiceField(choices=LEVEL_CHOICES, default='beginner')
    days_per_week = serializers.IntegerField(min_value=1, max_value=7, default=3)
    user_name = serializers.CharField(max_length=50, required=False, allow_blank=True)


class GoalSuggestionSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    activity = serializers.CharField(max_length=100)
    # Model output may carry extra decimals; they are rounded in validate_target_value.
    target_value = serializers.DecimalField(max_digits=None, decimal_places=None, coerce_to_string=False)
    unit = serializers.CharField(max_length=50)
    deadline_days = serializers.IntegerField(min_value=1, max_value=MAX_DEADLINE_DAYS)
    frequency = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    motivation = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_activity(self, value):
        return value.lower()

    def validate_unit(self, value):
        return value.lower()

    def validate_target_value(self, value):
        too_large = serializers.ValidationError(f'Target must not exceed {MAX_TARGET_VALUE}')
        if value > MAX_TARGET_VALUE:
            raise too_large

        try:
            value = value.quantize(Decimal('0.001'))
        except InvalidOperation:
            raise too_large

        if value <= 0:
            raise serializers.ValidationError('Target must be a positive number')
        if value > MAX_TARGET_VALUE:
            raise too_large
        return value


class SuggestionResponseSerializer(serializers.Serializer):
    suggestions = GoalSuggestionSerializer(many=True)
    summary = serializers.CharField(allow_blank=True)
