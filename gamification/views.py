from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .actions import parse_action
from .badges import all_badges
from .engine import AchievementEngine
from .leaderboard import build_leaderboard
from .models import Achievement
from .serializers import (
    AchievementSerializer,
    BadgeSerializer,
    BadgeStatusSerializer,
    CheckAchievementsSerializer,
    LeaderboardEntrySerializer,
    LeaderboardQuerySerializer,
    UserStatsSerializer,
)
from .services import get_or_create_stats

User = get_user_model()


class CheckAchievementsView(APIView):
    """
    POST /api/gamification/check-achievements/
    Body: {"userId": 1, "action": "hours_logged", "metadata": {"hour": 7, "hours": 2}}

    Called after the action itself has been saved. Unknown actions and
    missing metadata are not errors, they just award nothing.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CheckAchievementsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        action = parse_action(data["action"], data.get("metadata"))
        awarded = AchievementEngine.evaluate(data["userId"].pk, action)

        return Response({
            "newAchievements": BadgeSerializer([badge.as_dict() for badge in awarded], many=True).data
        })


class UserAchievementsView(generics.ListAPIView):
    """GET /api/gamification/achievements/<user_id>/ (newest first)"""
    serializer_class = AchievementSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        user = get_object_or_404(User, pk=self.kwargs["user_id"])
        return Achievement.objects.filter(user=user).order_by("-earned_at", "-id")


class UserStatsView(APIView):
    """GET /api/gamification/user-stats/<user_id>/"""
    permission_classes = [IsAuthenticated]

    def get(self, request, user_id):
        user = get_object_or_404(User, pk=user_id)
        stats = get_or_create_stats(user.pk)
        return Response(UserStatsSerializer(stats).data)


class LeaderboardView(APIView):
    """GET /api/gamification/leaderboard/?period=all|week|month"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = LeaderboardQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        rows = build_leaderboard(query.validated_data["period"])
        return Response(LeaderboardEntrySerializer(rows, many=True).data)


class BadgeCatalogView(APIView):
    """
    GET /api/gamification/badges/
    Every badge with the requesting user's earned flag, for the badge wall.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        earned = dict(
            Achievement.objects.filter(user=request.user).values_list("badge_type", "earned_at")
        )
        data = [
            {
                **badge.as_dict(),
                "earned": badge.badge_type in earned,
                "earned_at": earned.get(badge.badge_type),
            }
            for badge in all_badges()
        ]
        return Response(BadgeStatusSerializer(data, many=True).data)
