from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
from core.models import User

MAX_DEADLINE_DAYS = 365
# Largest value a DecimalField(max_digits=10, decimal_places=3) holds.
MAX_TARGET_VALUE = Decimal('9999999.999')


class Goal(models.Model):
    class Source(models.TextChoices):
        MANUAL = 'manual', 'Manual'
        AI = 'ai', 'AI-generated'

    class Meta:
        db_table = 'fitness_goals'
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'activity', 'unit'],
                name='unique_goal_activity_unit_per_user'
            )
        ]

    id = models.BigAutoField(primary_key=True)

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='goals'
    )

    activity = models.CharField('Activity', max_length=100)
    unit = models.CharField('Unit', max_length=50)
    target_value = models.DecimalField('Target value', max_digits=10, decimal_places=3)
    deadline_days = models.PositiveSmallIntegerField(
        'Deadline (days)',
        validators=[MinValueValidator(1), MaxValueValidator(MAX_DEADLINE_DAYS)]
    )
    source = models.CharField(
        'Source',
        max_length=10,
        choices=Source.choices,
        default=Source.MANUAL
    )
    completed_at = models.DateTimeField('Completed', null=True, blank=True)
    created_at = models.DateTimeField('Created', auto_now_add=True)

    def __str__(self):
        return f'{self.activity} ({self.target_value} {self.unit})'


class ProgressLog(models.Model):
    class Meta:
        db_table = 'progress_logs'
        ordering = ['-logged_at', '-id']

    id = models.BigAutoField(primary_key=True)

    goal = models.ForeignKey(
        Goal,
        on_delete=models.CASCADE,
        related_name='progress_logs'
    )

    value = models.DecimalField('Value', max_digits=10, decimal_places=3)
    logged_at = models.DateTimeField('Logged', default=timezone.now, db_index=True)
