"""
api/routes/dashboard.py -- Read-only data behind the dashboard screens.

Routes:
  GET /api/metrics/developer  -- developer-experience metrics (last 7 days)
  GET /api/feedback           -- developer feedback entries
  GET /api/activity           -- activity / audit log

These are plain reads from PortalStore -- no mutations here.
"""

from fastapi import APIRouter, Depends, Request

from api.models import ActivityLogResponse, DeveloperMetricResponse, FeedbackResponse
from auth.dependencies import get_current_user
from portal.store import PortalStore

# Auth policy:
# - every route: requires auth -- dashboard data is internal
# Router-level dependency enforces auth; the handlers do not repeat it.
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/metrics/developer", response_model=list[DeveloperMetricResponse])
def developer_metrics(request: Request) -> list[DeveloperMetricResponse]:
    portal: PortalStore = request.app.state.portal
    return [DeveloperMetricResponse.model_validate(m) for m in portal.list_developer_metrics()]


@router.get("/feedback", response_model=list[FeedbackResponse])
def feedback(request: Request) -> list[FeedbackResponse]:
    portal: PortalStore = request.app.state.portal
    return [FeedbackResponse.model_validate(f) for f in portal.list_feedback()]


@router.get("/activity", response_model=list[ActivityLogResponse])
def activity(request: Request) -> list[ActivityLogResponse]:
    """Return the activity log, newest first."""
    portal: PortalStore = request.app.state.portal
    entries = sorted(portal.list_activity(), key=lambda a: a.timestamp, reverse=True)
    return [ActivityLogResponse.model_validate(a) for a in entries]
