"""
Obras ERP - Lancamentos API
Contas a pagar/receber por obra
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from app.models import Lancamento, LancamentoStatus, Fornecedor, ActivityAction
from app.schemas import LancamentoCreate, LancamentoUpdate, LancamentoResponse
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, get_or_404, apply_update
from app.services.activity import registrar_atividade
from app.services.guards import validar_obra, validar_exclusao_lancamento
from app.services.financeiro import atualizar_lancamentos_atrasados

router = APIRouter(prefix="/lancamentos", tags=["Lancamentos"])

NOT_FOUND = "Lançamento não encontrado."


def _data_pagamento(data: dict, atual: Optional[date] = None) -> None:
    """Lancamento pago sem data de pagamento recebe a data de hoje"""
    if data.get("status") == LancamentoStatus.PAID.value and not (data.get("data_pagamento") or atual):
        data["data_pagamento"] = date.today()


@router.get("", response_model=List[LancamentoResponse])
async def list_lancamentos(
    obra_id: Optional[str] = Query(None, alias="obraId"),
    tipo: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    scope: TenantScope = Depends(get_scope)
):
    # Vencidos viram Atrasado antes da leitura
    await atualizar_lancamentos_atrasados(scope)
    await scope.commit()

    criteria = []
    if obra_id:
        criteria.append(Lancamento.obra_id == obra_id)
    if tipo:
        criteria.append(Lancamento.tipo == tipo)
    if status_filter:
        criteria.append(Lancamento.status == status_filter)

    lancamentos = await scope.all(Lancamento, *criteria, order_by=[Lancamento.data_vencimento])
    return [l.to_dict() for l in lancamentos]


@router.get("/{lancamento_id}", response_model=LancamentoResponse)
async def get_lancamento(lancamento_id: str, scope: TenantScope = Depends(get_scope)):
    lancamento = await get_or_404(scope, Lancamento, lancamento_id, NOT_FOUND)
    return lancamento.to_dict()


@router.post("", response_model=LancamentoResponse, status_code=status.HTTP_201_CREATED)
async def create_lancamento(request: LancamentoCreate, scope: TenantScope = Depends(get_scope)):
    obra = await validar_obra(scope, request.obra_id)

    data = request.model_dump()
    data["obra_nome"] = obra.name
    if data["fornecedor_id"] and not data["fornecedor_nome"]:
        fornecedor = await scope.get(Fornecedor, data["fornecedor_id"])
        data["fornecedor_nome"] = fornecedor.nome if fornecedor else ""
    _data_pagamento(data)

    lancamento = scope.add(Lancamento(**data))
    await scope.flush()
    registrar_atividade(scope, ActivityAction.CREATE, "lancamento", lancamento.id, lancamento.descricao)

    await scope.commit()
    await scope.refresh(lancamento)
    return lancamento.to_dict()


@router.put("/{lancamento_id}", response_model=LancamentoResponse)
async def update_lancamento(
    lancamento_id: str,
    request: LancamentoUpdate,
    scope: TenantScope = Depends(get_scope)
):
    lancamento = await get_or_404(scope, Lancamento, lancamento_id, NOT_FOUND)
    update_data = request.model_dump(exclude_unset=True)
    _data_pagamento(update_data, lancamento.data_pagamento)

    apply_update(lancamento, update_data)
    registrar_atividade(scope, ActivityAction.UPDATE, "lancamento", lancamento.id, lancamento.descricao)

    await scope.commit()
    await scope.refresh(lancamento)
    return lancamento.to_dict()


@router.delete("/{lancamento_id}")
async def delete_lancamento(lancamento_id: str, scope: TenantScope = Depends(get_scope)):
    lancamento = await get_or_404(scope, Lancamento, lancamento_id, NOT_FOUND)
    await validar_exclusao_lancamento(scope, lancamento_id)

    registrar_atividade(scope, ActivityAction.DELETE, "lancamento", lancamento.id, lancamento.descricao)
    await scope.delete(lancamento)
    await scope.commit()
    return {"success": True}
