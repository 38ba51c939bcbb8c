"""Canonical enum values for the CRM schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class NotificationLevel(str, enum.Enum):
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
    INFO = "info"


class CustomerTab(str, enum.Enum):
    ALL = "all"
    MY = "my"
    ARCHIVED = "archived"
