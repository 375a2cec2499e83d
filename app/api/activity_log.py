"""
Obras ERP - Activity Log API
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from app.models import ActivityLog
from app.schemas import ActivityLogCreate, ActivityLogResponse
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, get_or_404
from app.services.activity import registrar_atividade, listar_atividades

router = APIRouter(prefix="/activity-log", tags=["Activity Log"])


@router.get("", response_model=List[ActivityLogResponse])
async def list_activity(
    limit: Optional[int] = Query(None, ge=1),
    scope: TenantScope = Depends(get_scope)
):
    """Ultimas acoes da empresa (mais recentes primeiro)"""
    logs = await listar_atividades(scope, limit)
    return [log.to_dict() for log in logs]


@router.get("/{log_id}", response_model=ActivityLogResponse)
async def get_activity(log_id: str, scope: TenantScope = Depends(get_scope)):
    log = await get_or_404(scope, ActivityLog, log_id, "Registro não encontrado.")
    return log.to_dict()


@router.post("", response_model=ActivityLogResponse, status_code=status.HTTP_201_CREATED)
async def create_activity(request: ActivityLogCreate, scope: TenantScope = Depends(get_scope)):
    log = registrar_atividade(
        scope,
        request.action,
        request.entity,
        request.entity_id,
        request.entity_name
    )
    await scope.commit()
    await scope.refresh(log)
    return log.to_dict()
