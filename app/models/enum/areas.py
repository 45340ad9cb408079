from enum import Enum


class AreaStatus(str, Enum):
    pending = "pending"
    saved = "saved"


class UserRole(str, Enum):
    user = "USER"
    admin = "ADMIN"


class NotificationTemplate(str, Enum):
    dashboard_complete = "dashboard-complete"
    preference_change = "subscription-preference-change"
