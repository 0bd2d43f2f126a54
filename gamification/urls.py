from django.urls import path

from .views import (
    BadgeCatalogView,
    CheckAchievementsView,
    LeaderboardView,
    UserAchievementsView,
    UserStatsView,
)

urlpatterns = [
    path("check-achievements/", CheckAchievementsView.as_view(), name="check-achievements"),
    path("achievements/<int:user_id>/", UserAchievementsView.as_view(), name="user-achievements"),
    path("user-stats/<int:user_id>/", UserStatsView.as_view(), name="user-stats"),
    path("leaderboard/", LeaderboardView.as_view(), name="leaderboard"),
    path("badges/", BadgeCatalogView.as_view(), name="badge-catalog"),
]
