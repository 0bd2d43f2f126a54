import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from core.services import ActivityService
from gamification.actions import ExpenseApproved, InvoiceCreated
from .models import CustomerInvoice, Expense

logger = logging.getLogger("oneflow.finance")


@receiver(pre_save, sender=Expense)
def cache_expense_status(sender, instance, **kwargs):
    """Cache old status before save to detect approval."""
    instance._previous_status = None
    if instance.pk:
        instance._previous_status = (
            Expense.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
        )


@receiver(post_save, sender=Expense)
def expense_approved(sender, instance, created, **kwargs):
    if (
        instance.status == Expense.STATUS_APPROVED
        and getattr(instance, "_previous_status", None) != Expense.STATUS_APPROVED
        and instance.approved_by_id
    ):
        logger.info(f"Expense {instance.id} approved by user {instance.approved_by_id}")
        ActivityService.record(instance.approved_by_id, ExpenseApproved())


@receiver(post_save, sender=CustomerInvoice)
def invoice_created(sender, instance, created, **kwargs):
    if created and instance.created_by_id:
        ActivityService.record(instance.created_by_id, InvoiceCreated())
