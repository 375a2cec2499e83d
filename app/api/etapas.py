"""
Obras ERP - Etapas API
Toda alteracao de etapa recalcula progresso e status da obra
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from app.models import Etapa, ActivityAction
from app.schemas import EtapaCreate, EtapaUpdate, EtapaResponse
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, get_or_404, apply_update
from app.services.activity import registrar_atividade
from app.services.guards import validar_obra
from app.services.etapas import (
    recalcular_progresso_obra,
    validar_percentual_etapa,
    validar_exclusao_etapa,
    soma_percentual_previsto,
)

router = APIRouter(prefix="/etapas", tags=["Etapas"])

NOT_FOUND = "Etapa não encontrada."


@router.get("", response_model=List[EtapaResponse])
async def list_etapas(
    obra_id: Optional[str] = Query(None, alias="obraId"),
    scope: TenantScope = Depends(get_scope)
):
    criteria = [Etapa.obra_id == obra_id] if obra_id else []
    etapas = await scope.all(Etapa, *criteria, order_by=[Etapa.ordem, Etapa.created_at])
    return [e.to_dict() for e in etapas]


@router.get("/soma-percentual")
async def soma_percentual(
    obra_id: str = Query(..., alias="obraId"),
    exclude_id: Optional[str] = Query(None, alias="excludeId"),
    scope: TenantScope = Depends(get_scope)
):
    """Quanto do peso da obra ja foi distribuido entre as etapas"""
    soma = await soma_percentual_previsto(scope, obra_id, exclude_id)
    return {"soma": soma, "disponivel": max(0, 100 - soma)}


@router.get("/{etapa_id}", response_model=EtapaResponse)
async def get_etapa(etapa_id: str, scope: TenantScope = Depends(get_scope)):
    etapa = await get_or_404(scope, Etapa, etapa_id, NOT_FOUND)
    return etapa.to_dict()


@router.post("", response_model=EtapaResponse, status_code=status.HTTP_201_CREATED)
async def create_etapa(request: EtapaCreate, scope: TenantScope = Depends(get_scope)):
    await validar_obra(scope, request.obra_id)
    await validar_percentual_etapa(scope, request.obra_id, request.percentual_previsto)

    etapa = scope.add(Etapa(**request.model_dump()))
    await scope.flush()
    await recalcular_progresso_obra(scope, etapa.obra_id)
    registrar_atividade(scope, ActivityAction.CREATE, "etapa", etapa.id, etapa.nome)

    await scope.commit()
    await scope.refresh(etapa)
    return etapa.to_dict()


@router.put("/{etapa_id}", response_model=EtapaResponse)
async def update_etapa(etapa_id: str, request: EtapaUpdate, scope: TenantScope = Depends(get_scope)):
    etapa = await get_or_404(scope, Etapa, etapa_id, NOT_FOUND)
    update_data = request.model_dump(exclude_unset=True)

    if update_data.get("percentual_previsto") is not None:
        await validar_percentual_etapa(
            scope, etapa.obra_id, update_data["percentual_previsto"], exclude_id=etapa.id
        )

    apply_update(etapa, update_data)
    await scope.flush()
    await recalcular_progresso_obra(scope, etapa.obra_id)
    registrar_atividade(scope, ActivityAction.UPDATE, "etapa", etapa.id, etapa.nome)

    await scope.commit()
    await scope.refresh(etapa)
    return etapa.to_dict()


@router.delete("/{etapa_id}")
async def delete_etapa(etapa_id: str, scope: TenantScope = Depends(get_scope)):
    etapa = await get_or_404(scope, Etapa, etapa_id, NOT_FOUND)
    await validar_exclusao_etapa(scope, etapa_id)

    obra_id = etapa.obra_id
    registrar_atividade(scope, ActivityAction.DELETE, "etapa", etapa.id, etapa.nome)
    await scope.delete(etapa)
    await scope.flush()
    await recalcular_progresso_obra(scope, obra_id)

    await scope.commit()
    return {"success": True}
