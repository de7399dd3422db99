"""Settings API Routes - Checklist configuration and integrations catalog"""
from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends

from ..deps import get_correlation_id_dep, get_config_service
from ...services.config_service import ConfigService
from ...utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/checklist")
async def get_checklist_config(
    service: ConfigService = Depends(get_config_service),
    correlation_id: str = Depends(get_correlation_id_dep)
) -> Dict[str, Any]:
    """Active checklist config (built-in default when none is stored)"""
    return service.get_config().model_dump(mode="json", by_alias=True, exclude_none=True)


@router.put("/checklist")
async def save_checklist_config(
    config: Any = Body(...),
    service: ConfigService = Depends(get_config_service),
    correlation_id: str = Depends(get_correlation_id_dep)
) -> Dict[str, Any]:
    """
    Replace the checklist config

    Stored progress is not recomputed here; call
    POST /projects/progress/refresh to bring it up to date.
    """
    saved = service.save_config(config)
    logger.info(f"Checklist config saved: version {saved.version}")
    return saved.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.get("/integrations")
async def get_integrations(
    service: ConfigService = Depends(get_config_service),
    correlation_id: str = Depends(get_correlation_id_dep)
) -> List[Dict[str, Any]]:
    return [i.model_dump(mode="json", by_alias=True) for i in service.get_integrations()]


@router.put("/integrations")
async def save_integrations(
    integrations: Any = Body(...),
    service: ConfigService = Depends(get_config_service),
    correlation_id: str = Depends(get_correlation_id_dep)
) -> List[Dict[str, Any]]:
    saved = service.save_integrations(integrations)
    return [i.model_dump(mode="json", by_alias=True) for i in saved]
