# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    ROLE_ADMIN = 'admin'
    ROLE_PROJECT_MANAGER = 'project_manager'
    ROLE_TEAM_MEMBER = 'team_member'
    ROLE_SALES_FINANCE = 'sales_finance'

    ROLE_CHOICES = (
        (ROLE_ADMIN, 'Admin'),
        (ROLE_PROJECT_MANAGER, 'Project Manager'),
        (ROLE_TEAM_MEMBER, 'Team Member'),
        (ROLE_SALES_FINANCE, 'Sales/Finance'),
    )

    full_name = models.CharField(max_length=255, blank=True)
    role = models.CharField(
        max_length=30,
        choices=ROLE_CHOICES,
        default=ROLE_TEAM_MEMBER
    )
    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    def __str__(self):
        return self.full_name or self.username
