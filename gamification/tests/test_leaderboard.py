from datetime import date, datetime, timedelta
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase

from gamification import badges
from gamification.leaderboard import build_leaderboard
from gamification.models import Achievement, UserStats

User = get_user_model()

BADGE_TYPES = list(badges.BADGES)


def give_badges(user, count, earned_at=None):
    for badge_type in BADGE_TYPES[:count]:
        badge = badges.get_badge(badge_type)
        Achievement.objects.create(
            user=user,
            badge_type=badge.badge_type,
            badge_name=badge.badge_name,
            badge_description=badge.badge_description,
            points=badge.points,
            earned_at=earned_at or datetime.now(),
        )


class LeaderboardTest(TestCase):
    def make_user(self, name, points=None, badge_count=0, streak=0):
        user = User.objects.create_user(username=name.lower(), password="pass", full_name=name)
        if points is not None:
            UserStats.objects.create(
                user=user,
                total_points=points,
                level=points // 100 + 1,
                streak_days=streak,
            )
        give_badges(user, badge_count)
        return user

    def test_ranks_by_points_then_badges(self):
        self.make_user("A", points=150, badge_count=2)
        self.make_user("B", points=150, badge_count=3)
        self.make_user("C", points=90, badge_count=5)

        names = [row["full_name"] for row in build_leaderboard()]

        self.assertEqual(names, ["B", "A", "C"])

    def test_users_without_stats_rank_with_defaults(self):
        self.make_user("Veteran", points=40, badge_count=1, streak=3)
        self.make_user("Newcomer")

        rows = build_leaderboard()

        self.assertEqual(rows[0]["full_name"], "Veteran")
        self.assertEqual(rows[0]["streak_days"], 3)
        newcomer = rows[1]
        self.assertEqual(newcomer["full_name"], "Newcomer")
        self.assertEqual(
            (newcomer["total_points"], newcomer["level"], newcomer["streak_days"], newcomer["badge_count"]),
            (0, 1, 0, 0),
        )

    def test_capped_at_ten(self):
        for i in range(12):
            self.make_user(f"User{i:02d}", points=i * 10)

        rows = build_leaderboard()

        self.assertEqual(len(rows), 10)
        self.assertEqual(rows[0]["full_name"], "User11")

    def test_period_windows_badge_count_only(self):
        today = date(2026, 6, 30)
        user = User.objects.create_user(username="windowed", password="pass", full_name="Windowed")
        UserStats.objects.create(user=user, total_points=300, level=4, streak_days=2)
        old = datetime.combine(today - timedelta(days=20), datetime.min.time())
        ancient = datetime.combine(today - timedelta(days=90), datetime.min.time())
        recent = datetime.combine(today - timedelta(days=2), datetime.min.time())
        for badge_type, earned_at in zip(BADGE_TYPES, (recent, old, ancient)):
            badge = badges.get_badge(badge_type)
            Achievement.objects.create(
                user=user, badge_type=badge_type, badge_name=badge.badge_name,
                badge_description=badge.badge_description, points=badge.points,
                earned_at=earned_at,
            )

        with mock.patch("core.datetime_utils.today", return_value=today):
            counts = {
                period: build_leaderboard(period)[0]["badge_count"]
                for period in ("all", "week", "month")
            }
            week_row = build_leaderboard("week")[0]

        self.assertEqual(counts, {"all": 3, "week": 1, "month": 2})
        self.assertEqual(week_row["total_points"], 300)
        self.assertEqual(week_row["level"], 4)
        self.assertEqual(week_row["streak_days"], 2)

    def test_unknown_period_rejected(self):
        with self.assertRaises(ValueError):
            build_leaderboard("year")
