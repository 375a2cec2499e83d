"""
Obras ERP - Obras API
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from app.models import Obra, Etapa, ActivityAction
from app.schemas import ObraCreate, ObraUpdate, ObraResponse
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, get_or_404, apply_update
from app.services.activity import registrar_atividade
from app.services.guards import validar_exclusao_obra

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/obras", tags=["Obras"])

NOT_FOUND = "Obra não encontrada."


@router.get("", response_model=List[ObraResponse])
async def list_obras(
    status_filter: Optional[str] = Query(None, alias="status"),
    scope: TenantScope = Depends(get_scope)
):
    """Lista obras da empresa (mais recentes primeiro)"""
    criteria = [Obra.status == status_filter] if status_filter else []
    obras = await scope.all(Obra, *criteria, order_by=[Obra.created_at.desc()])
    return [o.to_dict() for o in obras]


@router.get("/{obra_id}", response_model=ObraResponse)
async def get_obra(obra_id: str, scope: TenantScope = Depends(get_scope)):
    obra = await get_or_404(scope, Obra, obra_id, NOT_FOUND)
    return obra.to_dict()


@router.post("", response_model=ObraResponse, status_code=status.HTTP_201_CREATED)
async def create_obra(request: ObraCreate, scope: TenantScope = Depends(get_scope)):
    data = request.model_dump()
    if data.get("total_cost") is None:
        data["total_cost"] = data["materials_cost"] + data["labor_cost"]

    obra = scope.add(Obra(**data))
    await scope.flush()
    registrar_atividade(scope, ActivityAction.CREATE, "obra", obra.id, obra.name)

    await scope.commit()
    await scope.refresh(obra)
    logger.info(f"Obra criada: {obra.name} ({obra.id}) - empresa {scope.company_id}")
    return obra.to_dict()


@router.put("/{obra_id}", response_model=ObraResponse)
async def update_obra(obra_id: str, request: ObraUpdate, scope: TenantScope = Depends(get_scope)):
    """
    Atualiza obra.

    Com etapas cadastradas o progresso e derivado delas; o valor enviado e ignorado.
    Mudando materiais ou mao de obra sem total, o total e recalculado.
    """
    obra = await get_or_404(scope, Obra, obra_id, NOT_FOUND)
    update_data = request.model_dump(exclude_unset=True)

    if "progress" in update_data and await scope.count(Etapa, Etapa.obra_id == obra_id) > 0:
        update_data.pop("progress")

    if update_data.keys() & {"materials_cost", "labor_cost"} and update_data.get("total_cost") is None:
        materials = update_data.get("materials_cost", obra.materials_cost) or 0
        labor = update_data.get("labor_cost", obra.labor_cost) or 0
        update_data["total_cost"] = materials + labor

    apply_update(obra, update_data)
    registrar_atividade(scope, ActivityAction.UPDATE, "obra", obra.id, obra.name)

    await scope.commit()
    await scope.refresh(obra)
    return obra.to_dict()


@router.delete("/{obra_id}")
async def delete_obra(obra_id: str, scope: TenantScope = Depends(get_scope)):
    obra = await get_or_404(scope, Obra, obra_id, NOT_FOUND)
    await validar_exclusao_obra(scope, obra_id)

    registrar_atividade(scope, ActivityAction.DELETE, "obra", obra.id, obra.name)
    await scope.delete(obra)
    await scope.commit()
    return {"success": True}
