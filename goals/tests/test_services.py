from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from goals import services
from goals.models import Goal, ProgressLog
from superhit.exceptions import DuplicateGoal


@pytest.fixture
def goal(user):
    return services.create_goal(user, activity='running', unit='km', target_value=Decimal('20'), deadline_days=30)


def test_create_goal_defaults(goal, user):
    assert goal.user_id == user.id
    assert goal.source == Goal.Source.MANUAL
    assert goal.completed_at is None


def test_duplicate_goal_is_rejected(goal, user):
    with pytest.raises(DuplicateGoal):
        services.create_goal(user, activity='running', unit='km', target_value=Decimal('5'), deadline_days=7)

    assert Goal.objects.filter(user=user).count() == 1


def test_same_activity_with_other_unit_is_allowed(goal, user):
    services.create_goal(user, activity='running', unit='minutes', target_value=Decimal('90'), deadline_days=7)

    assert Goal.objects.filter(user=user).count() == 2


def test_same_goal_for_other_user_is_allowed(goal, other_user):
    other = services.create_goal(other_user, activity='running', unit='km',
                                 target_value=Decimal('20'), deadline_days=30)

    assert other.user_id == other_user.id


def test_list_goals_only_returns_own_goals(goal, user, other_user):
    services.create_goal(other_user, activity='cycling', unit='km', target_value=Decimal('50'), deadline_days=30)

    assert list(services.list_goals(user)) == [goal]


def test_completion_fires_once(goal):
    now = timezone.now()

    _, completed = services.log_progress(goal, Decimal('18'), now=now)
    assert completed is False

    _, completed = services.log_progress(goal, Decimal('4'), now=now)
    assert completed is True

    goal.refresh_from_db()
    assert goal.completed_at == now

    _, completed = services.log_progress(goal, Decimal('3'), now=now + timedelta(minutes=1))
    assert completed is False

    goal.refresh_from_db()
    assert goal.completed_at == now
    assert ProgressLog.objects.filter(goal=goal).count() == 3


def test_exact_target_completes(goal):
    entry, completed = services.log_progress(goal, Decimal('20'))

    assert completed is True
    assert entry.value == Decimal('20')


def test_list_entries_newest_first(goal):
    now = timezone.now()
    older, _ = services.log_progress(goal, Decimal('1'), now=now - timedelta(days=1))
    newer, _ = services.log_progress(goal, Decimal('2'), now=now)

    assert list(services.list_entries(goal)) == [newer, older]


def test_build_dashboard(goal, user):
    now = timezone.now()
    cycling = services.create_goal(user, activity='cycling', unit='km', target_value=Decimal('10'), deadline_days=30)

    for days_ago in range(3):
        ProgressLog.objects.create(goal=goal, value=Decimal('1'), logged_at=now - timedelta(days=days_ago))
    ProgressLog.objects.create(goal=cycling, value=Decimal('12'), logged_at=now - timedelta(days=1))

    dashboard = services.build_dashboard(services.list_goals(user), now=now)

    assert dashboard['has_logged_today'] is True
    assert dashboard['best_streak'] == 3
    assert dashboard['completed_goals'] == 1
    assert dashboard['goals'] == [cycling, goal]


def test_build_dashboard_without_goals(user):
    dashboard = services.build_dashboard(services.list_goals(user))

    assert dashboard == {'goals': [], 'has_logged_today': False, 'best_streak': 0, 'completed_goals': 0}
