"""
Obras ERP - Lista de Compras API
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from app.models import ListaCompra, CompraStatus, ActivityAction
from app.schemas import ListaCompraCreate, ListaCompraUpdate, ListaCompraResponse
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, get_or_404, apply_update
from app.services.activity import registrar_atividade
from app.services.guards import validar_obra
from app.services.financeiro import projecao_compras

router = APIRouter(prefix="/lista-compras", tags=["Lista de Compras"])

NOT_FOUND = "Item não encontrado."


@router.get("", response_model=List[ListaCompraResponse])
async def list_compras(
    obra_id: Optional[str] = Query(None, alias="obraId"),
    scope: TenantScope = Depends(get_scope)
):
    criteria = [ListaCompra.obra_id == obra_id] if obra_id else []
    compras = await scope.all(ListaCompra, *criteria, order_by=[ListaCompra.data_prevista])
    return [c.to_dict() for c in compras]


@router.get("/projecao")
async def projecao(obra_id: str = Query(..., alias="obraId"), scope: TenantScope = Depends(get_scope)):
    """Totais planejado x comprado da obra"""
    return await projecao_compras(scope, obra_id)


@router.get("/{compra_id}", response_model=ListaCompraResponse)
async def get_compra(compra_id: str, scope: TenantScope = Depends(get_scope)):
    compra = await get_or_404(scope, ListaCompra, compra_id, NOT_FOUND)
    return compra.to_dict()


@router.post("", response_model=ListaCompraResponse, status_code=status.HTTP_201_CREATED)
async def create_compra(request: ListaCompraCreate, scope: TenantScope = Depends(get_scope)):
    await validar_obra(scope, request.obra_id)

    compra = scope.add(ListaCompra(**request.model_dump()))
    await scope.flush()
    registrar_atividade(scope, ActivityAction.CREATE, "lista_compra", compra.id, compra.descricao)

    await scope.commit()
    await scope.refresh(compra)
    return compra.to_dict()


@router.put("/{compra_id}", response_model=ListaCompraResponse)
async def update_compra(compra_id: str, request: ListaCompraUpdate, scope: TenantScope = Depends(get_scope)):
    compra = await get_or_404(scope, ListaCompra, compra_id, NOT_FOUND)

    apply_update(compra, request.model_dump(exclude_unset=True))
    registrar_atividade(scope, ActivityAction.UPDATE, "lista_compra", compra.id, compra.descricao)

    await scope.commit()
    await scope.refresh(compra)
    return compra.to_dict()


@router.post("/{compra_id}/comprado", response_model=ListaCompraResponse)
async def marcar_comprado(compra_id: str, scope: TenantScope = Depends(get_scope)):
    compra = await get_or_404(scope, ListaCompra, compra_id, NOT_FOUND)

    compra.status = CompraStatus.PURCHASED.value
    registrar_atividade(scope, ActivityAction.UPDATE, "lista_compra", compra.id, compra.descricao)

    await scope.commit()
    await scope.refresh(compra)
    return compra.to_dict()


@router.delete("/{compra_id}")
async def delete_compra(compra_id: str, scope: TenantScope = Depends(get_scope)):
    compra = await get_or_404(scope, ListaCompra, compra_id, NOT_FOUND)

    registrar_atividade(scope, ActivityAction.DELETE, "lista_compra", compra.id, compra.descricao)
    await scope.delete(compra)
    await scope.commit()
    return {"success": True}
