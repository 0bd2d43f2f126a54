from django.contrib.auth import get_user_model
from rest_framework import serializers

from core.constants import PERIOD_ALL, PERIOD_WINDOW_DAYS
from .models import Achievement, UserStats

User = get_user_model()


class BadgeSerializer(serializers.Serializer):
    """Catalog entry, as returned in `newAchievements`."""
    badge_type = serializers.CharField()
    badge_name = serializers.CharField()
    badge_description = serializers.CharField()
    points = serializers.IntegerField()


class BadgeStatusSerializer(BadgeSerializer):
    earned = serializers.BooleanField()
    earned_at = serializers.DateTimeField(allow_null=True)


class CheckAchievementsSerializer(serializers.Serializer):
    userId = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    action = serializers.CharField(max_length=64)
    # Any JSON; non-object payloads are treated as empty metadata
    metadata = serializers.JSONField(default=dict, allow_null=True)


class AchievementSerializer(serializers.ModelSerializer):
    class Meta:
        model = Achievement
        fields = [
            'id',
            'user',
            'badge_type',
            'badge_name',
            'badge_description',
            'points',
            'earned_at',
        ]
        read_only_fields = fields


class UserStatsSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = UserStats
        fields = [
            'user_id',
            'total_points',
            'level',
            'streak_days',
            'last_activity_date',
            'tasks_completed',
            'hours_logged',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class LeaderboardQuerySerializer(serializers.Serializer):
    period = serializers.ChoiceField(choices=list(PERIOD_WINDOW_DAYS), default=PERIOD_ALL)


class LeaderboardEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    full_name = serializers.CharField()
    email = serializers.EmailField()
    total_points = serializers.IntegerField()
    level = serializers.IntegerField()
    streak_days = serializers.IntegerField()
    badge_count = serializers.IntegerField()
