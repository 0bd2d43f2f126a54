from decimal import Decimal

from django.db import models
from django.conf import settings
from django.utils import timezone

from core.datetime_utils import is_previous_day

from .badges import BADGE_TYPE_CHOICES

POINTS_PER_LEVEL = 100


def level_for_points(total_points):
    return total_points // POINTS_PER_LEVEL + 1


class UserStats(models.Model):
    """
    Denormalized gamification state for one user.
    Created lazily on first read or evaluation; only the engine writes it.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="gamification_stats",
    )

    total_points = models.PositiveIntegerField(default=0)
    level = models.PositiveIntegerField(default=1)

    # Consecutive calendar days with at least one hours_logged action
    streak_days = models.PositiveIntegerField(default=0)
    last_activity_date = models.DateField(null=True, blank=True)

    tasks_completed = models.PositiveIntegerField(default=0)
    hours_logged = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "user stats"
        indexes = [
            models.Index(fields=["-total_points"], name="userstats_points_idx"),  # Leaderboard
        ]

    def __str__(self):
        return f"{self.user}: {self.total_points} pts (Lvl {self.level})"

    def add_points(self, points):
        """Points only ever go up, and level always follows them."""
        self.total_points += points
        self.level = level_for_points(self.total_points)

    def record_streak_activity(self, today):
        """
        Advance the logging streak for activity on `today`.

        Same day: unchanged. Day after the last activity: +1. Anything else
        (gap, first activity, clock moved back): restart at 1.
        """
        last = self.last_activity_date
        if last == today:
            return
        if is_previous_day(last, today):
            self.streak_days += 1
        else:
            self.streak_days = 1
        self.last_activity_date = today


class Achievement(models.Model):
    """
    A badge earned by a user. Append-only, one row per (user, badge_type).
    Name/description/points are a snapshot of the catalog at award time.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="achievements",
    )
    badge_type = models.CharField(max_length=64, choices=BADGE_TYPE_CHOICES)
    badge_name = models.CharField(max_length=128)
    badge_description = models.CharField(max_length=255, blank=True)
    points = models.PositiveIntegerField()

    earned_at = models.DateTimeField(default=timezone.now)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "badge_type"],
                name="unique_user_badge",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "-earned_at"], name="achievement_user_earned_idx"),
        ]

    def __str__(self):
        return f"{self.user} earned {self.badge_name} (+{self.points})"
