# projects/urls.py

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import ProjectViewSet, TaskViewSet, TimesheetViewSet

router = SimpleRouter()
router.register(r'tasks', TaskViewSet, basename='task')
router.register(r'timesheets', TimesheetViewSet, basename='timesheet')
router.register(r'', ProjectViewSet, basename='project')

urlpatterns = [
    path('', include(router.urls)),
]
