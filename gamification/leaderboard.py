from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Count, IntegerField, Q, Value
from django.db.models.functions import Coalesce

from core import datetime_utils
from core.constants import PERIOD_ALL, PERIOD_WINDOW_DAYS

User = get_user_model()


def build_leaderboard(period=PERIOD_ALL, limit=None):
    """
    Top users by points, then badge count.

    `period` only narrows which badges are counted (earned in the last 7 or
    30 days); points, level and streak are always lifetime values. Users
    without a stats row rank with zeros.
    """
    if period not in PERIOD_WINDOW_DAYS:
        raise ValueError(f"Unknown leaderboard period: {period!r}")
    if limit is None:
        limit = settings.GAMIFICATION["LEADERBOARD_SIZE"]

    since = datetime_utils.window_start(PERIOD_WINDOW_DAYS[period])
    badge_filter = Q(achievements__earned_at__gte=since) if since is not None else None

    rows = (
        User.objects.annotate(
            total_points=Coalesce(
                "gamification_stats__total_points", Value(0), output_field=IntegerField()
            ),
            level=Coalesce(
                "gamification_stats__level", Value(1), output_field=IntegerField()
            ),
            streak_days=Coalesce(
                "gamification_stats__streak_days", Value(0), output_field=IntegerField()
            ),
            badge_count=Count("achievements", filter=badge_filter, distinct=True),
        )
        .order_by("-total_points", "-badge_count", "id")
        .values("id", "full_name", "email", "total_points", "level", "streak_days", "badge_count")
    )
    return list(rows[:limit])
