"""Project API Routes - Projects, checklists and progress"""
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, Field

from ..deps import get_correlation_id_dep, get_project_service, get_progress_service
from ...domain.models import POC
from ...domain.enums import ChecklistKind, ProjectStatus, PublishingStatus, ReleaseType
from ...engine.progress_aggregator import progress_band
from ...services.project_service import ProjectService
from ...services.progress_service import ProgressService
from ...utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================

class CreateProjectRequest(BaseModel):
    """Request to create a new project"""
    brand_name: str = Field(..., min_length=1, max_length=200)
    store_url_myshopify: str = ""
    store_public_url: str = ""
    collab_code: str = ""
    scope_of_work: str = Field("", max_length=5000)
    release_type: Optional[ReleaseType] = None
    poc: Optional[POC] = None
    handover_date: Optional[str] = None


class UpdateProjectRequest(BaseModel):
    """Partial update of descriptive project fields"""
    brand_name: Optional[str] = Field(None, min_length=1, max_length=200)
    store_url_myshopify: Optional[str] = None
    store_public_url: Optional[str] = None
    collab_code: Optional[str] = None
    scope_of_work: Optional[str] = Field(None, max_length=5000)
    release_type: Optional[ReleaseType] = None
    poc: Optional[POC] = None


class UpdateStatusRequest(BaseModel):
    """Request to change development or publishing status"""
    status: Optional[ProjectStatus] = None
    publishing_status: Optional[PublishingStatus] = None


class UpdateDatesRequest(BaseModel):
    """Set or clear project dates; an empty string clears"""
    handover_date: Optional[str] = None
    completion_date: Optional[str] = None


class SaveChecklistRequest(BaseModel):
    """Full value bag of one checklist form"""
    data: Dict[str, Any] = Field(default_factory=dict)


class ProgressResponse(BaseModel):
    """Completion percentages of a project"""
    project_id: str
    sales_completion: int
    launch_completion: int
    overall: int
    band: str


def _progress_response(project_id: str, snapshot) -> ProgressResponse:
    return ProgressResponse(
        project_id=project_id,
        sales_completion=snapshot.sales_completion,
        launch_completion=snapshot.launch_completion,
        overall=snapshot.overall,
        band=progress_band(snapshot.overall).value,
    )


# ============================================================================
# Projects
# ============================================================================

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    request: CreateProjectRequest,
    service: ProjectService = Depends(get_project_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Create a project at version 1 with empty checklists"""
    project = service.create_project(request.model_dump(exclude_none=True))
    return service.get_project(project["project_id"])


@router.get("")
async def list_projects(
    status: Optional[ProjectStatus] = Query(None),
    publishing_status: Optional[PublishingStatus] = Query(None),
    service: ProjectService = Depends(get_project_service),
    correlation_id: str = Depends(get_correlation_id_dep)
) -> List[Dict[str, Any]]:
    """
    List projects, newest first

    Progress is recomputed against the current checklist config.
    """
    return service.list_projects(status=status, publishing_status=publishing_status)


@router.post("/progress/refresh")
async def refresh_all_progress(
    service: ProgressService = Depends(get_progress_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Recompute and store progress for every project (after a config change)"""
    return {"refreshed": service.refresh_all()}


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    return service.get_project(project_id)


@router.patch("/{project_id}")
async def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    service: ProjectService = Depends(get_project_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Edit brand, store and contact details"""
    return service.update_details(project_id, request.model_dump(exclude_unset=True, mode="json"))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    service.delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{project_id}/status")
async def update_status(
    project_id: str,
    request: UpdateStatusRequest,
    service: ProjectService = Depends(get_project_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """
    Change development and/or publishing status

    Switching publishing status to Live stamps the completion date.
    """
    return service.update_status(
        project_id,
        status=request.status,
        publishing_status=request.publishing_status
    )


@router.patch("/{project_id}/dates")
async def update_dates(
    project_id: str,
    request: UpdateDatesRequest,
    service: ProjectService = Depends(get_project_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    return service.update_dates(project_id, request.model_dump(exclude_unset=True))


# ============================================================================
# Checklists
# ============================================================================

@router.get("/{project_id}/checklists/{kind}")
async def get_checklist(
    project_id: str,
    kind: ChecklistKind,
    service: ProjectService = Depends(get_project_service),
    correlation_id: str = Depends(get_correlation_id_dep)
) -> Dict[str, Any]:
    """Stored form values; launch integrations are pre-filled from sales"""
    return service.get_checklist_data(project_id, kind)


@router.put("/{project_id}/checklists/{kind}", response_model=ProgressResponse)
async def save_checklist(
    project_id: str,
    kind: ChecklistKind,
    request: SaveChecklistRequest,
    service: ProgressService = Depends(get_progress_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Store a checklist and return the updated progress"""
    snapshot = service.save_checklist(project_id, kind, request.data)
    return _progress_response(project_id, snapshot)


@router.get("/{project_id}/checklists/{kind}/verdicts")
async def get_checklist_verdicts(
    project_id: str,
    kind: ChecklistKind,
    service: ProgressService = Depends(get_progress_service),
    correlation_id: str = Depends(get_correlation_id_dep)
) -> Dict[str, Any]:
    """Per-field completion verdicts, missing fields and unmet integration requirements"""
    return service.checklist_summary(project_id, kind)


# ============================================================================
# Progress
# ============================================================================

@router.get("/{project_id}/progress", response_model=ProgressResponse)
async def get_progress(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Progress computed against the current config (not stored)"""
    project = service.get_project(project_id)
    progress = project["progress"]
    return ProgressResponse(project_id=project_id, band=progress_band(progress["overall"]).value, **progress)


@router.post("/{project_id}/progress/refresh", response_model=ProgressResponse)
async def refresh_progress(
    project_id: str,
    service: ProgressService = Depends(get_progress_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Recompute and store a project's progress"""
    snapshot = service.refresh_project(project_id)
    return _progress_response(project_id, snapshot)
