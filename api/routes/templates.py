"""
api/routes/templates.py -- Golden path template catalogue.

Routes:
  GET  /api/templates  -- list templates (requires auth)
  POST /api/templates  -- create a template owned by the caller (requires auth)
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from api.models import TemplateCreate, TemplateResponse
from auth.dependencies import get_current_user
from auth.models import User
from portal.models import GoldenPathTemplate
from portal.store import PortalStore

router = APIRouter()


@router.get("/templates", response_model=list[TemplateResponse])
def list_templates(request: Request, user: User = Depends(get_current_user)) -> list[TemplateResponse]:
    portal: PortalStore = request.app.state.portal
    return [TemplateResponse.model_validate(t) for t in portal.list_templates()]


@router.post("/templates", response_model=TemplateResponse, status_code=201)
def create_template(
    request: Request,
    body: TemplateCreate,
    user: User = Depends(get_current_user),
) -> TemplateResponse:
    """Create a template. created_by is always the authenticated caller, never the body."""
    portal: PortalStore = request.app.state.portal
    now = datetime.now(timezone.utc)
    template = portal.create_template(
        GoldenPathTemplate(
            name=body.name,
            description=body.description,
            category=body.category,
            content=body.content,
            created_by=user.id,
            created_at=now,
            updated_at=now,
            is_active=body.is_active,
        )
    )
    return TemplateResponse.model_validate(template)
