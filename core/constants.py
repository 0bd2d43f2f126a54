# core/constants.py

# --- Gamification Action Tags (Standard Registry) ---
# Sent by the SPA as `action` on /gamification/check-achievements/
# and emitted by the project/finance signal hooks.

# Tasks & Time
ACTION_TASK_COMPLETED = "task_completed"
ACTION_HOURS_LOGGED = "hours_logged"

# Projects
ACTION_PROJECT_ASSIGNED = "project_assigned"
ACTION_PROJECT_COMPLETED = "project_completed"

# Finance
ACTION_EXPENSE_APPROVED = "expense_approved"
ACTION_INVOICE_CREATED = "invoice_created"

# --- Leaderboard periods ---
PERIOD_ALL = "all"
PERIOD_WEEK = "week"
PERIOD_MONTH = "month"

# Days of badge history counted per period (None = lifetime)
PERIOD_WINDOW_DAYS = {
    PERIOD_ALL: None,
    PERIOD_WEEK: 7,
    PERIOD_MONTH: 30,
}
