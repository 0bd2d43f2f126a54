from rest_framework import serializers
from .models import Project, ProjectMember, Task, Timesheet


class ProjectSerializer(serializers.ModelSerializer):
    project_manager_name = serializers.CharField(source='project_manager.full_name', read_only=True)
    member_ids = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id',
            'name',
            'description',
            'status',
            'start_date',
            'end_date',
            'budget',
            'project_manager',
            'project_manager_name',
            'member_ids',
            'created_at',
            'updated_at'
        ]
        read_only_fields = ['created_at', 'updated_at']

    def get_member_ids(self, obj):
        return list(obj.members.values_list('user_id', flat=True))


class ProjectMemberSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProjectMember
        fields = ['id', 'project', 'user', 'joined_at']
        read_only_fields = ['project', 'joined_at']


class TaskSerializer(serializers.ModelSerializer):
    assigned_to_name = serializers.CharField(source='assigned_to.full_name', read_only=True)

    class Meta:
        model = Task
        fields = [
            'id',
            'project',
            'title',
            'description',
            'assigned_to',
            'assigned_to_name',
            'status',
            'priority',
            'due_date',
            'estimated_hours',
            'created_by',
            'created_at',
            'updated_at'
        ]
        read_only_fields = ['created_by', 'created_at', 'updated_at']


class TimesheetSerializer(serializers.ModelSerializer):
    class Meta:
        model = Timesheet
        fields = [
            'id',
            'task',
            'user',
            'hours_worked',
            'work_date',
            'description',
            'is_billable',
            'created_at'
        ]
        read_only_fields = ['user', 'created_at']

    def validate_hours_worked(self, value):
        if value <= 0:
            raise serializers.ValidationError("Hours worked must be positive.")
        return value
