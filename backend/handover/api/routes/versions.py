"""Version API Routes - Version selector, history edits and per-version views"""
from typing import Any, Dict, List
from fastapi import APIRouter, BackgroundTasks, Depends, Path
from pydantic import BaseModel, Field

from ..deps import get_correlation_id_dep, get_version_service
from ...services.version_service import VersionService
from ...utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================

class SetCurrentVersionRequest(BaseModel):
    """Request to move the current version pointer"""
    version: int = Field(..., ge=1)


class DeleteVersionResponse(BaseModel):
    """Outcome of a version deletion"""
    deleted: bool
    versions: List[int]
    reason: str = ""


# ============================================================================
# Routes
# ============================================================================

@router.get("/{project_id}/versions")
async def list_versions(
    project_id: str,
    background_tasks: BackgroundTasks,
    service: VersionService = Depends(get_version_service),
    correlation_id: str = Depends(get_correlation_id_dep)
) -> Dict[str, Any]:
    """
    Versions offered by the selector

    A history rebuilt from item data is returned right away and stored
    after the response is sent.
    """
    payload = service.get_available_versions(project_id)
    if payload["backfilled"]:
        background_tasks.add_task(service.persist_history, project_id, payload["versions"])
    return payload


@router.put("/{project_id}/versions/current")
async def set_current_version(
    project_id: str,
    request: SetCurrentVersionRequest,
    service: VersionService = Depends(get_version_service),
    correlation_id: str = Depends(get_correlation_id_dep)
) -> Dict[str, Any]:
    return service.set_current_version(project_id, request.version)


@router.delete("/{project_id}/versions/{version}", response_model=DeleteVersionResponse)
async def delete_version(
    project_id: str,
    version: int = Path(..., ge=1),
    service: VersionService = Depends(get_version_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """
    Remove a version from the history

    Item data tagged with the version stays in place. A refused deletion
    comes back with deleted=false and a reason.
    """
    result = service.delete_version(project_id, version)
    return DeleteVersionResponse(deleted=result.deleted, versions=result.versions, reason=result.reason or "")


@router.get("/{project_id}/versions/{version}")
async def get_version_view(
    project_id: str,
    version: int = Path(..., ge=1),
    service: VersionService = Depends(get_version_service),
    correlation_id: str = Depends(get_correlation_id_dep)
) -> Dict[str, Any]:
    """Launch items (credentials, features, change requests, notes, integrations) of one version"""
    return service.get_version_view(project_id, version)
