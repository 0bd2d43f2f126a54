from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from core import datetime_utils
from finance.models import CustomerInvoice, VendorBill, Expense
from gamification.models import Achievement, UserStats
from projects.models import Project, ProjectMember, Task, Timesheet

User = get_user_model()

DEMO_USERS = [
    # username, full name, role, hourly rate, password
    ("admin", "Admin User", User.ROLE_ADMIN, 80, "admin123"),
    ("pm", "Project Manager", User.ROLE_PROJECT_MANAGER, 60, "pm123456"),
    ("member", "Team Member", User.ROLE_TEAM_MEMBER, 35, "member123"),
    ("designer", "Design Lead", User.ROLE_TEAM_MEMBER, 40, "designer123"),
    ("finance", "Finance User", User.ROLE_SALES_FINANCE, 0, "finance123"),
]


class Command(BaseCommand):
    help = "Seeds the database with demo users, projects, timesheets and finance documents"

    def handle(self, *args, **options):
        self.stdout.write("🌱 Seeding data...")

        # Signal hooks evaluate achievements once this block commits
        with transaction.atomic():
            users = self._seed_users()
            projects = self._seed_projects(users)
            self._seed_tasks(users, projects)
            self._seed_finance(users, projects)

        self.stdout.write(
            f"Stats rows: {UserStats.objects.count()}, achievements: {Achievement.objects.count()}"
        )
        self.stdout.write(self.style.SUCCESS("✅ Seeding complete"))

    def _seed_users(self):
        users = {}
        for username, full_name, role, rate, password in DEMO_USERS:
            user, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "email": f"{username}@oneflow.local",
                    "full_name": full_name,
                    "role": role,
                    "hourly_rate": rate,
                    "is_staff": role == User.ROLE_ADMIN,
                    "is_superuser": role == User.ROLE_ADMIN,
                },
            )
            if created:
                user.set_password(password)
                user.save()
            users[username] = user
        self.stdout.write(f"Users ready: {', '.join(users)}")
        return users

    def _seed_projects(self, users):
        today = datetime_utils.today()
        rows = [
            ("Website Revamp", "Revamp corporate website with new branding", Project.STATUS_IN_PROGRESS, -7, 25000),
            ("Mobile App Launch", "Build and launch the customer mobile app", Project.STATUS_PLANNED, 0, 50000),
            ("ERP Integration", "Integrate ERP with internal systems", Project.STATUS_ON_HOLD, -30, 80000),
        ]
        projects = {}
        for name, description, status, offset, budget in rows:
            project, _ = Project.objects.get_or_create(
                name=name,
                defaults={
                    "description": description,
                    "status": status,
                    "start_date": today + timedelta(days=offset),
                    "budget": Decimal(budget),
                    "project_manager": users["pm"],
                },
            )
            projects[name] = project

        memberships = {
            "Website Revamp": ["pm", "member", "designer"],
            "Mobile App Launch": ["pm", "member"],
            "ERP Integration": ["pm", "designer"],
        }
        for name, usernames in memberships.items():
            for username in usernames:
                ProjectMember.objects.get_or_create(project=projects[name], user=users[username])
        self.stdout.write(f"Projects ready: {len(projects)}")
        return projects

    def _seed_tasks(self, users, projects):
        today = datetime_utils.today()
        website = projects["Website Revamp"]
        rows = [
            ("Design new homepage", "member", Task.STATUS_IN_PROGRESS, Task.PRIORITY_HIGH, 7, 12),
            ("Set up analytics", "member", Task.STATUS_DONE, Task.PRIORITY_MEDIUM, 2, 4),
            ("Brand style guide", "designer", Task.STATUS_DONE, Task.PRIORITY_HIGH, 5, 8),
            ("Content migration", "designer", Task.STATUS_NEW, Task.PRIORITY_LOW, 14, 16),
        ]
        for title, assignee, status, priority, due_in, estimate in rows:
            task, created = Task.objects.get_or_create(
                project=website,
                title=title,
                defaults={
                    "assigned_to": users[assignee],
                    "status": status,
                    "priority": priority,
                    "due_date": today + timedelta(days=due_in),
                    "estimated_hours": Decimal(estimate),
                    "created_by": users["pm"],
                },
            )
            if created:
                Timesheet.objects.create(
                    task=task,
                    user=users[assignee],
                    hours_worked=Decimal("3.5"),
                    work_date=today,
                    description=f"Worked on {title.lower()}",
                )
        self.stdout.write("Tasks & timesheets ready")

    def _seed_finance(self, users, projects):
        today = datetime_utils.today()
        website = projects["Website Revamp"]
        CustomerInvoice.objects.get_or_create(
            invoice_number="INV-1001",
            defaults={
                "project": website,
                "customer_name": "Acme Corp",
                "total_amount": Decimal("18000"),
                "status": CustomerInvoice.STATUS_PAID,
                "invoice_date": today - timedelta(days=3),
                "created_by": users["finance"],
            },
        )
        VendorBill.objects.get_or_create(
            bill_number="BILL-2001",
            defaults={
                "project": website,
                "vendor_name": "CloudHost",
                "total_amount": Decimal("2500"),
                "status": VendorBill.STATUS_PAID,
                "bill_date": today - timedelta(days=5),
                "created_by": users["finance"],
            },
        )
        if not Expense.objects.filter(project=website, submitted_by=users["member"]).exists():
            Expense.objects.create(
                project=website,
                submitted_by=users["member"],
                expense_type="Travel",
                amount=Decimal("1200"),
                expense_date=today - timedelta(days=1),
                status=Expense.STATUS_APPROVED,
                approved_by=users["pm"],
            )
        self.stdout.write("Finance documents ready")
