"""
Obras ERP - Acompanhamento API
Comentarios da obra e relatorios semanais
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.models import ComentarioObra, RelatorioSemanal, ActivityAction
from app.schemas import (
    ComentarioCreate,
    ComentarioUpdate,
    ComentarioResponse,
    RelatorioSemanalCreate,
    RelatorioSemanalUpdate,
    RelatorioSemanalResponse
)
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, get_or_404, apply_update
from app.services.activity import registrar_atividade
from app.services.guards import validar_obra

comentarios_router = APIRouter(prefix="/comentarios", tags=["Comentarios"])
relatorios_router = APIRouter(prefix="/relatorios", tags=["Relatorios Semanais"])

COMENTARIO_NOT_FOUND = "Comentário não encontrado."
RELATORIO_NOT_FOUND = "Relatório não encontrado."


# ==================== COMENTARIOS ====================

@comentarios_router.get("", response_model=List[ComentarioResponse])
async def list_comentarios(
    obra_id: Optional[str] = Query(None, alias="obraId"),
    include_hidden: bool = Query(False, alias="includeHidden"),
    scope: TenantScope = Depends(get_scope)
):
    criteria = []
    if obra_id:
        criteria.append(ComentarioObra.obra_id == obra_id)
    if not include_hidden:
        criteria.append(ComentarioObra.oculto.is_(False))
    comentarios = await scope.all(ComentarioObra, *criteria, order_by=[ComentarioObra.data_criacao.desc()])
    return [c.to_dict() for c in comentarios]


@comentarios_router.get("/{comentario_id}", response_model=ComentarioResponse)
async def get_comentario(comentario_id: str, scope: TenantScope = Depends(get_scope)):
    comentario = await get_or_404(scope, ComentarioObra, comentario_id, COMENTARIO_NOT_FOUND)
    return comentario.to_dict()


@comentarios_router.post("", response_model=ComentarioResponse, status_code=status.HTTP_201_CREATED)
async def create_comentario(request: ComentarioCreate, scope: TenantScope = Depends(get_scope)):
    await validar_obra(scope, request.obra_id)

    comentario = scope.add(ComentarioObra(
        obra_id=request.obra_id,
        comentario=request.comentario,
        usuario_id=scope.user.id,
        usuario_nome=scope.user.name,
        oculto=False
    ))
    await scope.flush()
    registrar_atividade(scope, ActivityAction.CREATE, "comentario", comentario.id, comentario.comentario[:50])

    await scope.commit()
    await scope.refresh(comentario)
    return comentario.to_dict()


@comentarios_router.put("/{comentario_id}", response_model=ComentarioResponse)
async def update_comentario(
    comentario_id: str,
    request: ComentarioUpdate,
    scope: TenantScope = Depends(get_scope)
):
    comentario = await get_or_404(scope, ComentarioObra, comentario_id, COMENTARIO_NOT_FOUND)

    apply_update(comentario, request.model_dump(exclude_unset=True))
    registrar_atividade(scope, ActivityAction.UPDATE, "comentario", comentario.id, comentario.comentario[:50])

    await scope.commit()
    await scope.refresh(comentario)
    return comentario.to_dict()


@comentarios_router.post("/{comentario_id}/ocultar", response_model=ComentarioResponse)
async def ocultar_comentario(comentario_id: str, scope: TenantScope = Depends(get_scope)):
    """Exclusao logica: o comentario some da listagem padrao"""
    comentario = await get_or_404(scope, ComentarioObra, comentario_id, COMENTARIO_NOT_FOUND)

    comentario.oculto = True
    registrar_atividade(scope, ActivityAction.UPDATE, "comentario", comentario.id, comentario.comentario[:50])

    await scope.commit()
    await scope.refresh(comentario)
    return comentario.to_dict()


@comentarios_router.delete("/{comentario_id}")
async def delete_comentario(comentario_id: str, scope: TenantScope = Depends(get_scope)):
    comentario = await get_or_404(scope, ComentarioObra, comentario_id, COMENTARIO_NOT_FOUND)

    registrar_atividade(scope, ActivityAction.DELETE, "comentario", comentario.id, comentario.comentario[:50])
    await scope.delete(comentario)
    await scope.commit()
    return {"success": True}


# ==================== RELATORIOS SEMANAIS ====================

async def _validar_periodo(scope: TenantScope, obra_id: str, inicio, fim, exclude_id: Optional[str] = None):
    """Um relatorio por periodo: semanas da mesma obra nao podem se sobrepor"""
    if fim < inicio:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Data final da semana anterior à data inicial."
        )

    criteria = [
        RelatorioSemanal.obra_id == obra_id,
        RelatorioSemanal.semana_inicio <= fim,
        RelatorioSemanal.semana_fim >= inicio,
    ]
    if exclude_id:
        criteria.append(RelatorioSemanal.id != exclude_id)

    if await scope.count(RelatorioSemanal, *criteria) > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Já existe um relatório para este período nesta obra."
        )


@relatorios_router.get("", response_model=List[RelatorioSemanalResponse])
async def list_relatorios(
    obra_id: Optional[str] = Query(None, alias="obraId"),
    scope: TenantScope = Depends(get_scope)
):
    criteria = [RelatorioSemanal.obra_id == obra_id] if obra_id else []
    relatorios = await scope.all(RelatorioSemanal, *criteria, order_by=[RelatorioSemanal.semana_inicio.desc()])
    return [r.to_dict() for r in relatorios]


@relatorios_router.get("/{relatorio_id}", response_model=RelatorioSemanalResponse)
async def get_relatorio(relatorio_id: str, scope: TenantScope = Depends(get_scope)):
    relatorio = await get_or_404(scope, RelatorioSemanal, relatorio_id, RELATORIO_NOT_FOUND)
    return relatorio.to_dict()


@relatorios_router.post("", response_model=RelatorioSemanalResponse, status_code=status.HTTP_201_CREATED)
async def create_relatorio(request: RelatorioSemanalCreate, scope: TenantScope = Depends(get_scope)):
    await validar_obra(scope, request.obra_id)
    await _validar_periodo(scope, request.obra_id, request.semana_inicio, request.semana_fim)

    relatorio = scope.add(RelatorioSemanal(
        **request.model_dump(),
        criado_por=scope.user.id,
        criado_por_nome=scope.user.name
    ))
    await scope.flush()
    registrar_atividade(
        scope, ActivityAction.CREATE, "relatorio", relatorio.id,
        f"Semana {relatorio.semana_inicio.isoformat()}"
    )

    await scope.commit()
    await scope.refresh(relatorio)
    return relatorio.to_dict()


@relatorios_router.put("/{relatorio_id}", response_model=RelatorioSemanalResponse)
async def update_relatorio(
    relatorio_id: str,
    request: RelatorioSemanalUpdate,
    scope: TenantScope = Depends(get_scope)
):
    relatorio = await get_or_404(scope, RelatorioSemanal, relatorio_id, RELATORIO_NOT_FOUND)
    update_data = request.model_dump(exclude_unset=True)

    if "semana_inicio" in update_data or "semana_fim" in update_data:
        await _validar_periodo(
            scope,
            relatorio.obra_id,
            update_data.get("semana_inicio") or relatorio.semana_inicio,
            update_data.get("semana_fim") or relatorio.semana_fim,
            exclude_id=relatorio.id
        )

    apply_update(relatorio, update_data)
    registrar_atividade(
        scope, ActivityAction.UPDATE, "relatorio", relatorio.id,
        f"Semana {relatorio.semana_inicio.isoformat()}"
    )

    await scope.commit()
    await scope.refresh(relatorio)
    return relatorio.to_dict()


@relatorios_router.delete("/{relatorio_id}")
async def delete_relatorio(relatorio_id: str, scope: TenantScope = Depends(get_scope)):
    relatorio = await get_or_404(scope, RelatorioSemanal, relatorio_id, RELATORIO_NOT_FOUND)

    registrar_atividade(
        scope, ActivityAction.DELETE, "relatorio", relatorio.id,
        f"Semana {relatorio.semana_inicio.isoformat()}"
    )
    await scope.delete(relatorio)
    await scope.commit()
    return {"success": True}
