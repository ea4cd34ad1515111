import logging

from django.db import transaction, IntegrityError, DatabaseError
from django.db.models import Sum
from django.utils import timezone

from superhit.exceptions import DuplicateGoal, StoreUnavailable
from .models import Goal, ProgressLog
from .progress import crossed_target, summarize_goal

logger = logging.getLogger(__name__)


def create_goal(user, **fields):
    try:
        with transaction.atomic():
            goal = Goal.objects.create(user=user, **fields)
    except IntegrityError:
        logger.info(f"Duplicate goal '{fields.get('activity')}' ({fields.get('unit')}) for user {user.id}")
        raise DuplicateGoal()
    except DatabaseError:
        logger.exception(f'Failed to create goal for user {user.id}')
        raise StoreUnavailable('Failed to create goal.')

    logger.info(f'Created goal {goal.id} for user {user.id} ({goal.source})')
    return goal


def list_goals(user):
    return Goal.objects.filter(user=user).prefetch_related('progress_logs')


def list_entries(goal):
    return ProgressLog.objects.filter(goal=goal).order_by('-logged_at', '-id')


def log_progress(goal, value, now=None):
    """
    Append one progress entry and detect the completion crossing.

    The existing total is summed, the entry inserted and ``completed_at``
    stamped in one transaction with the goal row locked, so the crossing is
    reported exactly once per goal.
    """
    now = now or timezone.now()

    try:
        with transaction.atomic():
            goal = Goal.objects.select_for_update().get(pk=goal.pk)
            prior_total = goal.progress_logs.aggregate(total=Sum('value'))['total'] or 0

            entry = ProgressLog.objects.create(goal=goal, value=value, logged_at=now)

            completed_now = (
                goal.completed_at is None
                and crossed_target(prior_total, prior_total + entry.value, goal.target_value)
            )
            if completed_now:
                goal.completed_at = now
                goal.save(update_fields=['completed_at'])
    except DatabaseError:
        logger.exception(f'Failed to log progress for goal {goal.id}')
        raise StoreUnavailable('Failed to log progress.')

    logger.info(f'Logged {value} {goal.unit} for goal {goal.id}')
    if completed_now:
        logger.info(f'Goal {goal.id} completed by user {goal.user_id}')

    return entry, completed_now


def build_dashboard(goals, now=None):
    now = now or timezone.now()

    goals = list(goals)
    summaries = [summarize_goal(goal, goal.progress_logs.all(), now=now) for goal in goals]

    return {
        'goals': goals,
        'has_logged_today': any(progress['has_logged_today'] for progress in summaries),
        'best_streak': max((progress['streak'] for progress in summaries), default=0),
        'completed_goals': sum(1 for progress in summaries if progress['is_completed']),
    }
