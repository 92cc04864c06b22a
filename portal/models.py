"""
portal/models.py -- Domain dataclasses for the dashboard data screens.

These are pure data containers with zero logic. Seeding, id assignment and
timestamps live in portal/store.py.

Timestamps are timezone-aware UTC datetimes; the API layer serializes them.
id is None before the record is written to the store.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class DeveloperMetric:
    """One day of developer-experience figures for the dashboard charts."""

    date: datetime
    satisfaction_score: int  # 0-100
    active_users: int
    task_completion_rate: int  # percent
    response_time: int  # milliseconds
    id: Optional[int] = None


@dataclass
class Feedback:
    user_id: int
    rating: int  # 1-5
    comment: str
    category: str
    date: datetime
    id: Optional[int] = None


@dataclass
class ActivityLog:
    """An audit-log line: who did what to which resource, and whether it worked."""

    user_id: int
    action: str  # "Created" | "Updated" | "Deleted" | "Deploy" | ...
    resource: str
    status: str  # "Success" | "Failed"
    timestamp: datetime
    details: Optional[str] = None
    id: Optional[int] = None


@dataclass
class GoldenPathTemplate:
    """A reusable delivery template (CI/CD pipeline, deployment, gateway, ...).

    content is an opaque JSON document owned by the frontend editor.
    """

    name: str
    description: str
    category: str
    content: str
    created_by: int
    created_at: datetime
    updated_at: datetime
    is_active: bool = True
    id: Optional[int] = None


@dataclass
class PluginUpdate:
    domain: str
    name: str
    version: str
    release_date: datetime
    status: str  # "stable" | "beta" | "deprecated" | "development"
    description: str
    change_log: str
    updated_by: int
    updated_at: datetime
    id: Optional[int] = None
