"""
portal/store.py -- In-memory store for the dashboard data screens.

Pattern: Repository. PortalStore owns one map per record type, each with its
own monotonic id counter. Routes never touch the maps directly.

The store is seeded at construction with a week of developer metrics and a
handful of feedback, activity, template, and plugin records so a fresh
process renders a populated dashboard. Seeding is skipped with seed=False
(used by tests that need exact contents).

These records have no invariants beyond id assignment; the store is a
pass-through for the frontend.

Layer rule: no imports from api/ or auth/.
"""

from __future__ import annotations

import json
import logging
import random
import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from portal.models import ActivityLog, DeveloperMetric, Feedback, GoldenPathTemplate, PluginUpdate

logger = logging.getLogger("devportal.portal")

_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class PortalStore:
    """Repository for developer metrics, feedback, activity logs, templates, and plugins.

    Usage:
        store = PortalStore()
        store.list_templates()
        store.create_template(GoldenPathTemplate(...))
    """

    def __init__(self, seed: bool = True, seed_user_id: int = 1) -> None:
        self._lock = threading.Lock()
        self._metrics: dict[int, DeveloperMetric] = {}
        self._feedback: dict[int, Feedback] = {}
        self._activity: dict[int, ActivityLog] = {}
        self._templates: dict[int, GoldenPathTemplate] = {}
        self._plugins: dict[int, PluginUpdate] = {}
        self._next_ids = {"metric": 1, "feedback": 1, "activity": 1, "template": 1, "plugin": 1}
        if seed:
            self._seed(seed_user_id)

    def _insert(self, kind: str, table: dict, record):
        with self._lock:
            stored = replace(record, id=self._next_ids[kind])
            self._next_ids[kind] += 1
            table[stored.id] = stored
        return replace(stored)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_developer_metrics(self) -> list[DeveloperMetric]:
        with self._lock:
            return [replace(m) for m in self._metrics.values()]

    def list_feedback(self) -> list[Feedback]:
        with self._lock:
            return [replace(f) for f in self._feedback.values()]

    def list_activity(self) -> list[ActivityLog]:
        with self._lock:
            return [replace(a) for a in self._activity.values()]

    def list_templates(self) -> list[GoldenPathTemplate]:
        with self._lock:
            return [replace(t) for t in self._templates.values()]

    def list_plugins(self) -> list[PluginUpdate]:
        with self._lock:
            return [replace(p) for p in self._plugins.values()]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_developer_metric(self, metric: DeveloperMetric) -> DeveloperMetric:
        return self._insert("metric", self._metrics, metric)

    def add_feedback(self, item: Feedback) -> Feedback:
        return self._insert("feedback", self._feedback, item)

    def add_activity(self, entry: ActivityLog) -> ActivityLog:
        return self._insert("activity", self._activity, entry)

    def create_template(self, template: GoldenPathTemplate) -> GoldenPathTemplate:
        return self._insert("template", self._templates, template)

    def create_plugin(self, plugin: PluginUpdate) -> PluginUpdate:
        return self._insert("plugin", self._plugins, plugin)

    def update_plugin_status(self, plugin_id: int, status: str, updated_by: int) -> Optional[PluginUpdate]:
        """Set a plugin's status. Returns the updated record, or None if not found."""
        with self._lock:
            plugin = self._plugins.get(plugin_id)
            if plugin is None:
                return None
            plugin = replace(plugin, status=status, updated_by=updated_by, updated_at=_now())
            self._plugins[plugin_id] = plugin
        return replace(plugin)

    # ------------------------------------------------------------------
    # Seed data
    # ------------------------------------------------------------------

    def _seed(self, user_id: int) -> None:
        now = _now()

        # Last 7 days of metrics, oldest first
        for days_ago in range(6, -1, -1):
            self.add_developer_metric(
                DeveloperMetric(
                    date=now - days_ago * _DAY,
                    satisfaction_score=80 + random.randrange(15),
                    active_users=100 + random.randrange(50),
                    task_completion_rate=90 + random.randrange(8),
                    response_time=1500 + random.randrange(500),
                )
            )

        feedback = [
            (
                4,
                "The CI/CD pipeline templates are very useful, but I'd like to see more "
                "customization options for deployment strategies.",
                "CI/CD Pipeline",
                2 * _HOUR,
            ),
            (
                5,
                "The API configuration tool has significantly reduced our development time. "
                "Great job on the latest updates!",
                "API Creation",
                _DAY,
            ),
            (
                3,
                "The security scanning feature works well but occasionally gives false positives. "
                "Would be nice to have more configuration options.",
                "Security",
                2 * _DAY,
            ),
        ]
        for rating, comment, category, age in feedback:
            self.add_feedback(Feedback(user_id=user_id, rating=rating, comment=comment, category=category, date=now - age))

        activity = [
            ("Created", "Template", "Success", _HOUR, "Created new CI/CD pipeline template"),
            ("Updated", "Configuration", "Success", 2 * _HOUR, "Updated Kubernetes orchestrator configuration"),
            ("Deleted", "Template", "Success", _DAY, "Removed deprecated template"),
            ("Deploy", "Application", "Failed", 2 * _DAY, "Deployment failed due to resource constraints"),
        ]
        for action, resource, status, age, details in activity:
            self.add_activity(
                ActivityLog(
                    user_id=user_id,
                    action=action,
                    resource=resource,
                    status=status,
                    timestamp=now - age,
                    details=details,
                )
            )

        templates = [
            (
                "Standard CI/CD Pipeline",
                "A comprehensive CI/CD pipeline for web applications with automated testing and deployment",
                "CI/CD",
                {"stages": ["build", "test", "deploy"]},
                30 * _DAY,
                5 * _DAY,
            ),
            (
                "Kubernetes Deployment",
                "Template for deploying applications to Kubernetes clusters",
                "Orchestration",
                {"resources": ["deployment", "service", "ingress"]},
                20 * _DAY,
                2 * _DAY,
            ),
            (
                "Secure API Gateway",
                "Template for setting up a secure API gateway with rate limiting and authentication",
                "API",
                {"security": ["oauth2", "rate-limiting", "waf"]},
                15 * _DAY,
                15 * _DAY,
            ),
        ]
        for name, description, category, content, created_age, updated_age in templates:
            self.create_template(
                GoldenPathTemplate(
                    name=name,
                    description=description,
                    category=category,
                    content=json.dumps(content),
                    created_by=user_id,
                    created_at=now - created_age,
                    updated_at=now - updated_age,
                )
            )

        plugins = [
            ("Build & Deploy", "Pipeline Runner SDK", "2.4.0", "stable", "Runs golden path pipelines on shared build agents."),
            ("Cloud Operations", "Cluster Autoscaler", "1.2.3", "beta", "Scales orchestrator node pools from queue depth."),
            ("Security", "Dependency Scanner", "0.9.1", "development", "Flags vulnerable dependencies during the build stage."),
        ]
        for domain, name, version, status, description in plugins:
            self.create_plugin(
                PluginUpdate(
                    domain=domain,
                    name=name,
                    version=version,
                    release_date=now - 10 * _DAY,
                    status=status,
                    description=description,
                    change_log=f"Release {version}: see the plugin repository for details.",
                    updated_by=user_id,
                    updated_at=now - 10 * _DAY,
                )
            )

        logger.info(
            "Portal store seeded (%d metrics, %d templates, %d plugins)",
            len(self._metrics),
            len(self._templates),
            len(self._plugins),
        )
