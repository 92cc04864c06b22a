"""
api/routes/plugins.py -- Plugin SDK release tracking.

Routes:
  GET   /api/plugins                     -- list plugin updates (requires auth)
  POST  /api/plugins                     -- publish a plugin update (admin only)
  PATCH /api/plugins/{plugin_id}/status  -- change release status (admin only)
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request

from api.models import PluginCreate, PluginResponse, PluginStatusUpdate
from auth.dependencies import get_current_user, require_admin
from auth.models import User
from portal.models import PluginUpdate
from portal.store import PortalStore

router = APIRouter()


@router.get("/plugins", response_model=list[PluginResponse])
def list_plugins(request: Request, user: User = Depends(get_current_user)) -> list[PluginResponse]:
    portal: PortalStore = request.app.state.portal
    return [PluginResponse.model_validate(p) for p in portal.list_plugins()]


@router.post("/plugins", response_model=PluginResponse, status_code=201)
def create_plugin(
    request: Request,
    body: PluginCreate,
    admin: User = Depends(require_admin),
) -> PluginResponse:
    portal: PortalStore = request.app.state.portal
    plugin = portal.create_plugin(
        PluginUpdate(
            domain=body.domain,
            name=body.name,
            version=body.version,
            release_date=body.release_date,
            status=body.status.value,
            description=body.description,
            change_log=body.change_log,
            updated_by=admin.id,
            updated_at=datetime.now(timezone.utc),
        )
    )
    return PluginResponse.model_validate(plugin)


@router.patch("/plugins/{plugin_id}/status", response_model=PluginResponse)
def update_plugin_status(
    request: Request,
    plugin_id: int,
    body: PluginStatusUpdate,
    admin: User = Depends(require_admin),
) -> PluginResponse:
    portal: PortalStore = request.app.state.portal
    plugin = portal.update_plugin_status(plugin_id, body.status.value, updated_by=admin.id)
    if plugin is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "not_found", "message": "Plugin not found."},
        )
    return PluginResponse.model_validate(plugin)
