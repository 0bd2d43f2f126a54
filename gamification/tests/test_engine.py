from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db.models import Sum
from django.test import TestCase

from finance.models import CustomerInvoice, VendorBill, Expense
from gamification import badges
from gamification.actions import (
    TaskCompleted,
    HoursLogged,
    ProjectAssigned,
    ProjectCompleted,
    ExpenseApproved,
    InvoiceCreated,
    UnknownAction,
)
from gamification.engine import AchievementEngine
from gamification.models import Achievement, UserStats
from projects.models import Project, ProjectMember, Task

User = get_user_model()


def awarded_types(result):
    return [badge.badge_type for badge in result]


class EngineTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="dev",
            password="pass",
            full_name="Dev One",
        )
        self.project = Project.objects.create(name="Website", budget=Decimal("1000"))

    def evaluate(self, action, user=None):
        return AchievementEngine.evaluate((user or self.user).pk, action)

    def stats(self, user=None):
        return UserStats.objects.get(user=user or self.user)

    def assertPointsMatchBadges(self, user=None):
        user = user or self.user
        badge_points = Achievement.objects.filter(user=user).aggregate(total=Sum("points"))["total"] or 0
        stats = self.stats(user)
        self.assertEqual(stats.total_points, badge_points)
        self.assertEqual(stats.level, stats.total_points // 100 + 1)


class TaskCompletedRulesTest(EngineTestCase):
    def test_first_task_awards_first_steps(self):
        result = self.evaluate(TaskCompleted())

        self.assertEqual(awarded_types(result), [badges.FIRST_STEPS])
        stats = self.stats()
        self.assertEqual(stats.total_points, 10)
        self.assertEqual(stats.level, 1)
        self.assertEqual(stats.tasks_completed, 1)

    def test_badge_is_never_awarded_twice(self):
        for _ in range(4):
            self.evaluate(TaskCompleted())

        self.assertEqual(
            Achievement.objects.filter(user=self.user, badge_type=badges.FIRST_STEPS).count(), 1
        )
        self.assertEqual(self.stats().tasks_completed, 4)
        self.assertPointsMatchBadges()

    def test_speed_demon_on_fifth_task_done_today(self):
        for i in range(1, 6):
            Task.objects.create(
                project=self.project,
                title=f"Task {i}",
                assigned_to=self.user,
                status=Task.STATUS_DONE,
            )
            result = self.evaluate(TaskCompleted())
            if i < 5:
                self.assertNotIn(badges.SPEED_DEMON, awarded_types(result), f"awarded after {i} tasks")

        self.assertIn(badges.SPEED_DEMON, awarded_types(result))
        self.assertEqual(self.stats().total_points, 10 + 50)
        self.assertPointsMatchBadges()

    def test_speed_demon_ignores_tasks_done_on_other_days(self):
        for i in range(5):
            task = Task.objects.create(
                project=self.project,
                title=f"Old {i}",
                assigned_to=self.user,
                status=Task.STATUS_DONE,
            )
            Task.objects.filter(pk=task.pk).update(updated_at=datetime.now() - timedelta(days=2))

        result = self.evaluate(TaskCompleted())

        self.assertEqual(awarded_types(result), [badges.FIRST_STEPS])


class HoursLoggedRulesTest(EngineTestCase):
    def log(self, on, **metadata):
        with mock.patch("core.datetime_utils.today", return_value=on):
            return self.evaluate(HoursLogged(**metadata))

    def test_early_bird_and_night_owl(self):
        day = date(2026, 3, 2)

        self.assertEqual(awarded_types(self.log(day, hour=7)), [badges.EARLY_BIRD])
        self.assertEqual(awarded_types(self.log(day, hour=9)), [])
        self.assertEqual(awarded_types(self.log(day, hour=20)), [badges.NIGHT_OWL])
        self.assertEqual(awarded_types(self.log(day, hour=6)), [])
        self.assertPointsMatchBadges()

    def test_missing_hour_skips_time_of_day_rules(self):
        result = self.log(date(2026, 3, 2))

        self.assertEqual(result, [])
        self.assertEqual(self.stats().streak_days, 1)

    def test_hours_accumulate(self):
        day = date(2026, 3, 2)
        self.log(day, hour=12, hours=Decimal("2.5"))
        self.log(day, hour=13, hours=Decimal("1.25"))
        self.log(day, hour=14)

        self.assertEqual(self.stats().hours_logged, Decimal("3.75"))
        self.assertEqual(self.stats().total_points, 0)

    def test_hours_total_stays_within_column_range(self):
        day = date(2026, 3, 2)
        self.log(day, hours=Decimal("99999999.00"))
        self.log(day, hours=Decimal("5"))

        self.assertEqual(self.stats().hours_logged, Decimal("99999999.99"))

    def test_streak_counts_consecutive_days(self):
        start = date(2026, 3, 2)
        for offset in range(3):
            self.log(start + timedelta(days=offset), hour=12)

        stats = self.stats()
        self.assertEqual(stats.streak_days, 3)
        self.assertEqual(stats.last_activity_date, start + timedelta(days=2))

    def test_same_day_does_not_extend_streak(self):
        day = date(2026, 3, 2)
        self.log(day, hour=10)
        self.log(day, hour=15)

        self.assertEqual(self.stats().streak_days, 1)

    def test_gap_resets_streak(self):
        start = date(2026, 3, 2)
        self.log(start, hour=12)
        self.log(start + timedelta(days=1), hour=12)
        self.log(start + timedelta(days=4), hour=12)

        self.assertEqual(self.stats().streak_days, 1)

    def test_marathon_runner_on_seventh_consecutive_day(self):
        start = date(2026, 3, 2)
        for offset in range(6):
            result = self.log(start + timedelta(days=offset), hour=12)
            self.assertEqual(result, [])

        result = self.log(start + timedelta(days=6), hour=12)

        self.assertEqual(awarded_types(result), [badges.MARATHON_RUNNER])
        stats = self.stats()
        self.assertEqual(stats.streak_days, 7)
        self.assertEqual(stats.total_points, 100)
        self.assertEqual(stats.level, 2)

    def test_several_rules_fire_from_one_action(self):
        start = date(2026, 3, 2)
        for offset in range(6):
            self.log(start + timedelta(days=offset), hour=12)

        result = self.log(start + timedelta(days=6), hour=5)

        self.assertEqual(awarded_types(result), [badges.EARLY_BIRD, badges.MARATHON_RUNNER])
        self.assertEqual(self.stats().total_points, 120)


class ProjectRulesTest(EngineTestCase):
    def test_team_player_needs_three_projects(self):
        for name in ("A", "B"):
            ProjectMember.objects.create(project=Project.objects.create(name=name), user=self.user)
        self.assertEqual(self.evaluate(ProjectAssigned()), [])

        ProjectMember.objects.create(project=Project.objects.create(name="C"), user=self.user)
        result = self.evaluate(ProjectAssigned())

        self.assertEqual(awarded_types(result), [badges.TEAM_PLAYER])

    def test_profit_maker_uses_paid_revenue_and_costs(self):
        CustomerInvoice.objects.create(
            invoice_number="INV-1", project=self.project, customer_name="Acme",
            total_amount=Decimal("2000"), status=CustomerInvoice.STATUS_PAID,
            invoice_date=date(2026, 3, 1),
        )
        CustomerInvoice.objects.create(
            invoice_number="INV-2", project=self.project, customer_name="Acme",
            total_amount=Decimal("5000"), status=CustomerInvoice.STATUS_SENT,
            invoice_date=date(2026, 3, 1),
        )
        VendorBill.objects.create(
            bill_number="BILL-1", project=self.project, vendor_name="Hosting",
            total_amount=Decimal("300"), status=VendorBill.STATUS_PAID,
            bill_date=date(2026, 3, 1),
        )
        Expense.objects.create(
            project=self.project, submitted_by=self.user, expense_type="Travel",
            amount=Decimal("200"), expense_date=date(2026, 3, 1),
            status=Expense.STATUS_APPROVED,
        )

        result = self.evaluate(ProjectCompleted(project_id=self.project.pk))

        # (2000 - 300 - 200) / 1000 = 150%
        self.assertIn(badges.PROFIT_MAKER, awarded_types(result))

    def test_profit_maker_requires_margin_above_thirty_percent(self):
        CustomerInvoice.objects.create(
            invoice_number="INV-1", project=self.project, customer_name="Acme",
            total_amount=Decimal("300"), status=CustomerInvoice.STATUS_PAID,
            invoice_date=date(2026, 3, 1),
        )

        result = self.evaluate(ProjectCompleted(project_id=self.project.pk))

        self.assertNotIn(badges.PROFIT_MAKER, awarded_types(result))

    def test_profit_maker_skips_zero_or_missing_budget(self):
        for budget in (Decimal("0"), None):
            project = Project.objects.create(name=f"No budget {budget}", budget=budget)
            CustomerInvoice.objects.create(
                invoice_number=f"INV-{project.pk}", project=project, customer_name="Acme",
                total_amount=Decimal("50000"), status=CustomerInvoice.STATUS_PAID,
                invoice_date=date(2026, 3, 1),
            )

            result = self.evaluate(ProjectCompleted(project_id=project.pk))

            self.assertNotIn(badges.PROFIT_MAKER, awarded_types(result))

    def test_on_time_hero_when_no_done_task_is_late(self):
        Task.objects.create(
            project=self.project, title="On time", assigned_to=self.user,
            status=Task.STATUS_DONE, due_date=date.today() + timedelta(days=1),
        )
        Task.objects.create(
            project=self.project, title="Overdue but open", assigned_to=self.user,
            status=Task.STATUS_IN_PROGRESS, due_date=date.today() - timedelta(days=10),
        )

        result = self.evaluate(ProjectCompleted(project_id=self.project.pk))

        self.assertIn(badges.ON_TIME_HERO, awarded_types(result))

    def test_on_time_hero_blocked_by_late_task(self):
        Task.objects.create(
            project=self.project, title="Late", assigned_to=self.user,
            status=Task.STATUS_DONE, due_date=date.today() - timedelta(days=1),
        )

        result = self.evaluate(ProjectCompleted(project_id=self.project.pk))

        self.assertNotIn(badges.ON_TIME_HERO, awarded_types(result))

    def test_on_time_hero_blocked_by_task_done_on_its_due_day(self):
        due = date(2026, 10, 19)
        task = Task.objects.create(
            project=self.project, title="Due today", assigned_to=self.user,
            status=Task.STATUS_DONE, due_date=due,
        )
        Task.objects.filter(pk=task.pk).update(updated_at=datetime(2026, 10, 19, 11, 38))

        result = self.evaluate(ProjectCompleted(project_id=self.project.pk))

        self.assertNotIn(badges.ON_TIME_HERO, awarded_types(result))

    def test_on_time_hero_allows_task_done_before_its_due_day(self):
        task = Task.objects.create(
            project=self.project, title="Early", assigned_to=self.user,
            status=Task.STATUS_DONE, due_date=date(2026, 10, 19),
        )
        Task.objects.filter(pk=task.pk).update(updated_at=datetime(2026, 10, 18, 23, 59))

        result = self.evaluate(ProjectCompleted(project_id=self.project.pk))

        self.assertIn(badges.ON_TIME_HERO, awarded_types(result))

    def test_project_rules_skip_without_project_id(self):
        self.assertEqual(self.evaluate(ProjectCompleted()), [])
        self.assertEqual(self.evaluate(ProjectCompleted(project_id=999999)), [])


class FinanceRulesTest(EngineTestCase):
    def test_big_spender_after_ten_approvals(self):
        submitter = User.objects.create_user(username="claimer", password="pass")
        for i in range(10):
            Expense.objects.create(
                submitted_by=submitter, expense_type="Meals", amount=Decimal("10"),
                expense_date=date(2026, 3, 1), status=Expense.STATUS_APPROVED,
                approved_by=self.user,
            )
            result = self.evaluate(ExpenseApproved())
            if i < 9:
                self.assertEqual(result, [])

        self.assertEqual(awarded_types(result), [badges.BIG_SPENDER])

    def test_money_maker_counts_only_paid_invoices(self):
        CustomerInvoice.objects.create(
            invoice_number="INV-1", customer_name="Acme", total_amount=Decimal("99999.50"),
            status=CustomerInvoice.STATUS_PAID, invoice_date=date(2026, 3, 1),
            created_by=self.user,
        )
        CustomerInvoice.objects.create(
            invoice_number="INV-2", customer_name="Acme", total_amount=Decimal("50000"),
            status=CustomerInvoice.STATUS_DRAFT, invoice_date=date(2026, 3, 1),
            created_by=self.user,
        )
        self.assertEqual(self.evaluate(InvoiceCreated()), [])

        CustomerInvoice.objects.create(
            invoice_number="INV-3", customer_name="Acme", total_amount=Decimal("0.50"),
            status=CustomerInvoice.STATUS_PAID, invoice_date=date(2026, 3, 1),
            created_by=self.user,
        )
        result = self.evaluate(InvoiceCreated())

        self.assertEqual(awarded_types(result), [badges.MONEY_MAKER])
        self.assertEqual(self.stats().level, 3)


class EngineInvariantsTest(EngineTestCase):
    def test_unknown_action_touches_nothing(self):
        result = self.evaluate(UnknownAction(tag="nonexistent_action"))

        self.assertEqual(result, [])
        self.assertFalse(UserStats.objects.filter(user=self.user).exists())
        self.assertFalse(Achievement.objects.filter(user=self.user).exists())

    def test_points_and_level_track_badges(self):
        ProjectMember.objects.bulk_create([
            ProjectMember(project=Project.objects.create(name=f"P{i}"), user=self.user)
            for i in range(3)
        ])
        with mock.patch("core.datetime_utils.today", return_value=date(2026, 3, 2)):
            self.evaluate(HoursLogged(hour=6))
            self.evaluate(HoursLogged(hour=22))
        self.evaluate(TaskCompleted())
        self.evaluate(ProjectAssigned())
        self.evaluate(ProjectCompleted(project_id=self.project.pk))

        # 20 + 20 + 10 + 30 + 40 (on time, no tasks)
        self.assertEqual(self.stats().total_points, 120)
        self.assertEqual(self.stats().level, 2)
        self.assertPointsMatchBadges()

    def test_award_is_insert_if_absent(self):
        badge = badges.get_badge(badges.FIRST_STEPS)
        Achievement.objects.create(
            user=self.user,
            badge_type=badge.badge_type,
            badge_name=badge.badge_name,
            badge_description=badge.badge_description,
            points=badge.points,
        )

        self.assertFalse(AchievementEngine._award(self.user.pk, badge))
        self.assertEqual(Achievement.objects.filter(user=self.user).count(), 1)

    def test_achievement_snapshots_catalog_entry(self):
        self.evaluate(TaskCompleted())

        row = Achievement.objects.get(user=self.user, badge_type=badges.FIRST_STEPS)
        self.assertEqual(row.badge_name, "First Steps")
        self.assertEqual(row.badge_description, "Complete your first task")
        self.assertEqual(row.points, 10)
