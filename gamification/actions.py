"""
Gamification actions.

The SPA (and the project/finance signal hooks) report what just happened as
an action tag plus a loose metadata dict. `parse_action` turns that into one
of the typed variants below at the API boundary, so the engine only ever
sees the fields an action actually uses. Bad metadata values become None and
the rules depending on them are skipped.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from core.constants import (
    ACTION_TASK_COMPLETED,
    ACTION_HOURS_LOGGED,
    ACTION_PROJECT_ASSIGNED,
    ACTION_PROJECT_COMPLETED,
    ACTION_EXPENSE_APPROVED,
    ACTION_INVOICE_CREATED,
)

# Largest total UserStats.hours_logged can hold (max_digits=10, decimal_places=2)
MAX_HOURS = Decimal("99999999.99")


@dataclass(frozen=True)
class TaskCompleted:
    tag = ACTION_TASK_COMPLETED


@dataclass(frozen=True)
class HoursLogged:
    tag = ACTION_HOURS_LOGGED

    # Local hour (0-23) the work was logged at
    hour: Optional[int] = None
    # Hours worked in this entry
    hours: Optional[Decimal] = None


@dataclass(frozen=True)
class ProjectAssigned:
    tag = ACTION_PROJECT_ASSIGNED


@dataclass(frozen=True)
class ProjectCompleted:
    tag = ACTION_PROJECT_COMPLETED

    project_id: Optional[int] = None


@dataclass(frozen=True)
class ExpenseApproved:
    tag = ACTION_EXPENSE_APPROVED


@dataclass(frozen=True)
class InvoiceCreated:
    tag = ACTION_INVOICE_CREATED


@dataclass(frozen=True)
class UnknownAction:
    tag: str


def _as_int(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _as_hour(value) -> Optional[int]:
    hour = _as_int(value)
    if hour is None or not 0 <= hour <= 23:
        return None
    return hour


def _as_hours(value) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        hours = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not hours.is_finite() or not 0 < hours <= MAX_HOURS:
        return None
    return hours


def parse_action(tag, metadata=None):
    """
    Build the action variant for `tag`.

    Unknown tags give UnknownAction, which the engine ignores.
    """
    metadata = metadata if isinstance(metadata, dict) else {}

    if tag == ACTION_TASK_COMPLETED:
        return TaskCompleted()
    if tag == ACTION_HOURS_LOGGED:
        return HoursLogged(
            hour=_as_hour(metadata.get("hour")),
            hours=_as_hours(metadata.get("hours")),
        )
    if tag == ACTION_PROJECT_ASSIGNED:
        return ProjectAssigned()
    if tag == ACTION_PROJECT_COMPLETED:
        return ProjectCompleted(project_id=_as_int(metadata.get("projectId")))
    if tag == ACTION_EXPENSE_APPROVED:
        return ExpenseApproved()
    if tag == ACTION_INVOICE_CREATED:
        return InvoiceCreated()
    return UnknownAction(tag=str(tag))
