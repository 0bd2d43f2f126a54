from django.contrib import admin
from .models import Achievement, UserStats

@admin.register(UserStats)
class UserStatsAdmin(admin.ModelAdmin):
    list_display = ('user', 'total_points', 'level', 'streak_days', 'last_activity_date', 'tasks_completed', 'hours_logged')
    search_fields = ('user__username', 'user__full_name')
    # Written only by AchievementEngine; points must equal the sum of badge points
    readonly_fields = ('total_points', 'level', 'streak_days', 'last_activity_date', 'tasks_completed', 'hours_logged')

@admin.register(Achievement)
class AchievementAdmin(admin.ModelAdmin):
    list_display = ('user', 'badge_name', 'points', 'earned_at')
    list_filter = ('badge_type', 'earned_at')
    search_fields = ('user__username', 'badge_name')
    date_hierarchy = 'earned_at'
