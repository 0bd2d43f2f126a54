from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User

@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'full_name', 'role', 'hourly_rate', 'is_staff')
    list_filter = ('role', 'is_staff', 'is_superuser', 'is_active')
    search_fields = ('username', 'email', 'full_name')
    fieldsets = UserAdmin.fieldsets + (
        ('OneFlow', {'fields': ('full_name', 'role', 'hourly_rate')}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('OneFlow', {'fields': ('full_name', 'role')}),
    )
