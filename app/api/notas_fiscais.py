"""
Obras ERP - Notas Fiscais API
Toda nota fiscal e vinculada a um lancamento da mesma empresa
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from app.models import NotaFiscal, ActivityAction
from app.schemas import NotaFiscalCreate, NotaFiscalUpdate, NotaFiscalResponse
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, get_or_404, apply_update
from app.services.activity import registrar_atividade
from app.services.guards import validar_obra, validar_lancamento_nota

router = APIRouter(prefix="/notas-fiscais", tags=["Notas Fiscais"])

NOT_FOUND = "Nota fiscal não encontrada."


@router.get("", response_model=List[NotaFiscalResponse])
async def list_notas(
    obra_id: Optional[str] = Query(None, alias="obraId"),
    scope: TenantScope = Depends(get_scope)
):
    criteria = [NotaFiscal.obra_id == obra_id] if obra_id else []
    notas = await scope.all(NotaFiscal, *criteria, order_by=[NotaFiscal.data_emissao.desc()])
    return [n.to_dict() for n in notas]


@router.get("/{nota_id}", response_model=NotaFiscalResponse)
async def get_nota(nota_id: str, scope: TenantScope = Depends(get_scope)):
    nota = await get_or_404(scope, NotaFiscal, nota_id, NOT_FOUND)
    return nota.to_dict()


@router.post("", response_model=NotaFiscalResponse, status_code=status.HTTP_201_CREATED)
async def create_nota(request: NotaFiscalCreate, scope: TenantScope = Depends(get_scope)):
    await validar_obra(scope, request.obra_id)
    lancamento = await validar_lancamento_nota(scope, request.lancamento_id)

    data = request.model_dump()
    if not data["fornecedor_id"]:
        data["fornecedor_id"] = lancamento.fornecedor_id
    if not data["fornecedor_nome"]:
        data["fornecedor_nome"] = lancamento.fornecedor_nome or ""

    nota = scope.add(NotaFiscal(**data))
    await scope.flush()
    registrar_atividade(scope, ActivityAction.CREATE, "nota_fiscal", nota.id, nota.numero)

    await scope.commit()
    await scope.refresh(nota)
    return nota.to_dict()


@router.put("/{nota_id}", response_model=NotaFiscalResponse)
async def update_nota(nota_id: str, request: NotaFiscalUpdate, scope: TenantScope = Depends(get_scope)):
    nota = await get_or_404(scope, NotaFiscal, nota_id, NOT_FOUND)
    update_data = request.model_dump(exclude_unset=True)

    if "lancamento_id" in update_data:
        await validar_lancamento_nota(scope, update_data["lancamento_id"])

    apply_update(nota, update_data)
    registrar_atividade(scope, ActivityAction.UPDATE, "nota_fiscal", nota.id, nota.numero)

    await scope.commit()
    await scope.refresh(nota)
    return nota.to_dict()


@router.delete("/{nota_id}")
async def delete_nota(nota_id: str, scope: TenantScope = Depends(get_scope)):
    nota = await get_or_404(scope, NotaFiscal, nota_id, NOT_FOUND)

    registrar_atividade(scope, ActivityAction.DELETE, "nota_fiscal", nota.id, nota.numero)
    await scope.delete(nota)
    await scope.commit()
    return {"success": True}
