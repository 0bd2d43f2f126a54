import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum

from core import datetime_utils
from finance.models import CustomerInvoice, VendorBill, Expense
from projects.models import Project, ProjectMember, Task

from . import badges
from .actions import (
    MAX_HOURS,
    TaskCompleted,
    HoursLogged,
    ProjectAssigned,
    ProjectCompleted,
    ExpenseApproved,
    InvoiceCreated,
)
from .models import Achievement, UserStats
from .services import get_or_create_stats

logger = logging.getLogger("oneflow.gamification")

# Rule thresholds
EARLY_BIRD_BEFORE_HOUR = 9
NIGHT_OWL_FROM_HOUR = 20
SPEED_DEMON_TASKS_PER_DAY = 5
MARATHON_STREAK_DAYS = 7
TEAM_PLAYER_PROJECTS = 3
PROFIT_MAKER_MIN_MARGIN = Decimal("30")
BIG_SPENDER_APPROVALS = 10
MONEY_MAKER_REVENUE = Decimal("100000")


@dataclass
class RuleContext:
    user_id: int
    action: object
    stats: UserStats
    today: date


def _sum(queryset, field):
    return queryset.aggregate(total=Sum(field))["total"] or Decimal("0")


# --- Rule conditions -------------------------------------------------------
# Each takes a RuleContext and answers "does the badge qualify now?".
# Already-earned badges never reach these.

def _first_steps(ctx):
    return True


def _early_bird(ctx):
    return ctx.action.hour is not None and ctx.action.hour < EARLY_BIRD_BEFORE_HOUR


def _night_owl(ctx):
    return ctx.action.hour is not None and ctx.action.hour >= NIGHT_OWL_FROM_HOUR


def _speed_demon(ctx):
    done_today = Task.objects.filter(
        assigned_to_id=ctx.user_id,
        status=Task.STATUS_DONE,
        updated_at__date=ctx.today,
    ).count()
    return done_today >= SPEED_DEMON_TASKS_PER_DAY


def _marathon_runner(ctx):
    # Streak has already been advanced for this action
    return ctx.stats.streak_days >= MARATHON_STREAK_DAYS


def _team_player(ctx):
    project_count = (
        ProjectMember.objects.filter(user_id=ctx.user_id)
        .values("project_id")
        .distinct()
        .count()
    )
    return project_count >= TEAM_PLAYER_PROJECTS


def _profit_maker(ctx):
    project_id = ctx.action.project_id
    if project_id is None:
        return False

    budget = Project.objects.filter(pk=project_id).values_list("budget", flat=True).first()
    if budget is None or budget <= 0:
        return False

    revenue = _sum(
        CustomerInvoice.objects.filter(project_id=project_id, status=CustomerInvoice.STATUS_PAID),
        "total_amount",
    )
    bills = _sum(
        VendorBill.objects.filter(project_id=project_id, status=VendorBill.STATUS_PAID),
        "total_amount",
    )
    expenses = _sum(
        Expense.objects.filter(project_id=project_id, status=Expense.STATUS_APPROVED),
        "amount",
    )

    margin = (revenue - bills - expenses) / budget * 100
    return margin > PROFIT_MAKER_MIN_MARGIN


def _on_time_hero(ctx):
    project_id = ctx.action.project_id
    if project_id is None or not Project.objects.filter(pk=project_id).exists():
        return False

    # A task is late once it is finished any time after the start of its due day
    done = Task.objects.filter(
        project_id=project_id,
        status=Task.STATUS_DONE,
        due_date__isnull=False,
    ).values_list("due_date", "updated_at")
    return not any(
        datetime.combine(due_date, time.min) < updated_at for due_date, updated_at in done
    )


def _big_spender(ctx):
    approved = Expense.objects.filter(
        approved_by_id=ctx.user_id,
        status=Expense.STATUS_APPROVED,
    ).count()
    return approved >= BIG_SPENDER_APPROVALS


def _money_maker(ctx):
    revenue = _sum(
        CustomerInvoice.objects.filter(created_by_id=ctx.user_id, status=CustomerInvoice.STATUS_PAID),
        "total_amount",
    )
    return revenue >= MONEY_MAKER_REVENUE


# Rules per action, in catalog order
RULES = {
    TaskCompleted: (
        (badges.FIRST_STEPS, _first_steps),
        (badges.SPEED_DEMON, _speed_demon),
    ),
    HoursLogged: (
        (badges.EARLY_BIRD, _early_bird),
        (badges.NIGHT_OWL, _night_owl),
        (badges.MARATHON_RUNNER, _marathon_runner),
    ),
    ProjectAssigned: (
        (badges.TEAM_PLAYER, _team_player),
    ),
    ProjectCompleted: (
        (badges.PROFIT_MAKER, _profit_maker),
        (badges.ON_TIME_HERO, _on_time_hero),
    ),
    ExpenseApproved: (
        (badges.BIG_SPENDER, _big_spender),
    ),
    InvoiceCreated: (
        (badges.MONEY_MAKER, _money_maker),
    ),
}


class AchievementEngine:

    @classmethod
    def evaluate(cls, user_id, action):
        """
        Award every badge `action` newly qualifies `user_id` for.

        Returns the awarded catalog Badges (empty list if none). The stats
        row is locked for the whole evaluation, so concurrent evaluations for
        the same user serialize instead of losing increments. Unknown actions
        return [] without touching the database.
        """
        rules = RULES.get(type(action))
        if rules is None:
            logger.debug("Ignoring unknown action %r for user %s", action.tag, user_id)
            return []

        today = datetime_utils.today()
        awarded = []

        with transaction.atomic():
            stats = get_or_create_stats(user_id, for_update=True)
            earned = set(
                Achievement.objects.filter(user_id=user_id).values_list("badge_type", flat=True)
            )

            if isinstance(action, HoursLogged):
                stats.record_streak_activity(today)

            ctx = RuleContext(user_id=user_id, action=action, stats=stats, today=today)
            for badge_type, qualifies in rules:
                if badge_type in earned or not qualifies(ctx):
                    continue
                badge = badges.get_badge(badge_type)
                if cls._award(user_id, badge):
                    stats.add_points(badge.points)
                    awarded.append(badge)

            # Activity counters, independent of badges
            if isinstance(action, TaskCompleted):
                stats.tasks_completed += 1
            if isinstance(action, HoursLogged) and action.hours is not None:
                stats.hours_logged = min(stats.hours_logged + action.hours, MAX_HOURS)

            stats.save()

        return awarded

    @staticmethod
    def _award(user_id, badge):
        """
        Insert the achievement if absent. False when a concurrent writer got
        there first; the unique (user, badge_type) constraint decides.
        """
        _, created = Achievement.objects.get_or_create(
            user_id=user_id,
            badge_type=badge.badge_type,
            defaults={
                "badge_name": badge.badge_name,
                "badge_description": badge.badge_description,
                "points": badge.points,
            },
        )
        if created:
            logger.info(
                "User %s earned %s (+%s pts)", user_id, badge.badge_type, badge.points
            )
        else:
            logger.debug("User %s already holds %s, skipping", user_id, badge.badge_type)
        return created
