from django.contrib import admin
from .models import Project, ProjectMember, Task, Timesheet


class ProjectMemberInline(admin.TabularInline):
    model = ProjectMember
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ('name', 'status', 'project_manager', 'budget', 'start_date', 'end_date')
    list_filter = ('status',)
    search_fields = ('name', 'description', 'project_manager__username')
    inlines = [ProjectMemberInline]

@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('title', 'project', 'assigned_to', 'status', 'priority', 'due_date', 'updated_at')
    list_filter = ('status', 'priority', 'project')
    search_fields = ('title', 'assigned_to__username', 'project__name')
    date_hierarchy = 'updated_at'

@admin.register(Timesheet)
class TimesheetAdmin(admin.ModelAdmin):
    list_display = ('user', 'task', 'hours_worked', 'work_date', 'is_billable')
    list_filter = ('is_billable', 'work_date')
    search_fields = ('user__username', 'task__title')
