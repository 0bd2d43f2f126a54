import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from core.services import ActivityService
from core.constants import ACTION_HOURS_LOGGED
from gamification.actions import TaskCompleted, ProjectAssigned, ProjectCompleted, parse_action
from .models import Project, ProjectMember, Task, Timesheet

logger = logging.getLogger("oneflow.projects")


def _remember_status(sender, instance):
    """Stash the stored status on the instance so post_save can spot transitions."""
    instance._previous_status = None
    if instance.pk:
        instance._previous_status = (
            sender.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
        )


def _became(instance, status):
    return instance.status == status and getattr(instance, "_previous_status", None) != status


@receiver(pre_save, sender=Task)
def cache_task_status(sender, instance, **kwargs):
    _remember_status(sender, instance)


@receiver(pre_save, sender=Project)
def cache_project_status(sender, instance, **kwargs):
    _remember_status(sender, instance)


@receiver(post_save, sender=Task)
def task_completed(sender, instance, created, **kwargs):
    if instance.assigned_to_id and _became(instance, Task.STATUS_DONE):
        logger.info(f"Task {instance.id} done by user {instance.assigned_to_id}")
        ActivityService.record(instance.assigned_to_id, TaskCompleted())


@receiver(post_save, sender=Timesheet)
def hours_logged(sender, instance, created, **kwargs):
    if created:
        # hours_worked keeps whatever type it was assigned with until reloaded
        action = parse_action(
            ACTION_HOURS_LOGGED,
            {"hour": instance.created_at.hour, "hours": instance.hours_worked},
        )
        ActivityService.record(instance.user_id, action)


@receiver(post_save, sender=ProjectMember)
def project_assigned(sender, instance, created, **kwargs):
    if created:
        ActivityService.record(instance.user_id, ProjectAssigned())


@receiver(post_save, sender=Project)
def project_completed(sender, instance, created, **kwargs):
    if instance.project_manager_id and _became(instance, Project.STATUS_COMPLETED):
        logger.info(f"Project {instance.id} completed")
        ActivityService.record(instance.project_manager_id, ProjectCompleted(project_id=instance.pk))
