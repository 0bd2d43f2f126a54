from rest_framework import viewsets, permissions, status
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import Project, ProjectMember, Task, Timesheet
from .serializers import (
    ProjectSerializer,
    ProjectMemberSerializer,
    TaskSerializer,
    TimesheetSerializer,
)


class ProjectViewSet(viewsets.ModelViewSet):
    """
    Manage Projects.
    Gamification hooks fire from projects.signals (membership, completion).
    """
    queryset = Project.objects.select_related('project_manager').order_by('-created_at')
    serializer_class = ProjectSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        queryset = super().get_queryset()
        status_filter = self.request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    @action(detail=True, methods=['post'])
    def members(self, request, pk=None):
        """
        POST /api/projects/{pk}/members/
        Body: {"user": <id>}
        """
        project = self.get_object()
        serializer = ProjectMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        membership, created = ProjectMember.objects.get_or_create(
            project=project,
            user=serializer.validated_data['user'],
        )
        return Response(
            ProjectMemberSerializer(membership).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class TaskViewSet(viewsets.ModelViewSet):
    queryset = Task.objects.select_related('assigned_to', 'project').order_by('-updated_at')
    serializer_class = TaskSerializer
    permission_classes = [permissions.IsAuthenticated]

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params
        if params.get('project_id'):
            queryset = queryset.filter(project_id=params['project_id'])
        if params.get('assigned_to'):
            queryset = queryset.filter(assigned_to_id=params['assigned_to'])
        if params.get('status'):
            queryset = queryset.filter(status=params['status'])
        return queryset


class TimesheetViewSet(viewsets.ModelViewSet):
    """
    Hours logged against tasks. Always recorded for the requesting user.
    """
    serializer_class = TimesheetSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        queryset = Timesheet.objects.select_related('task').order_by('-work_date', '-created_at')
        task_id = self.request.query_params.get('task_id')
        if task_id:
            queryset = queryset.filter(task_id=task_id)
        return queryset.filter(user=self.request.user)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)
