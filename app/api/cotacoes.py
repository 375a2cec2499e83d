"""
Obras ERP - Cotacoes API
Aprovar uma cotacao gera lancamento + item comprado na lista de compras
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.models import Cotacao, Fornecedor, ActivityAction
from app.schemas import CotacaoCreate, CotacaoUpdate, CotacaoReceberRequest, CotacaoResponse
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, get_or_404, apply_update
from app.services.activity import registrar_atividade
from app.services.guards import validar_obra
from app.services.workflows import aprovar_cotacao, rejeitar_cotacao, receber_cotacao

router = APIRouter(prefix="/cotacoes", tags=["Cotacoes"])

NOT_FOUND = "Cotação não encontrada."


async def _nome_fornecedor(scope: TenantScope, fornecedor_id: Optional[str], nome: Optional[str]) -> str:
    if nome or not fornecedor_id:
        return nome or ""
    fornecedor = await scope.get(Fornecedor, fornecedor_id)
    return fornecedor.nome if fornecedor else ""


@router.get("", response_model=List[CotacaoResponse])
async def list_cotacoes(
    obra_id: Optional[str] = Query(None, alias="obraId"),
    scope: TenantScope = Depends(get_scope)
):
    criteria = [Cotacao.obra_id == obra_id] if obra_id else []
    cotacoes = await scope.all(Cotacao, *criteria, order_by=[Cotacao.criado_em.desc()])
    return [c.to_dict() for c in cotacoes]


@router.get("/{cotacao_id}", response_model=CotacaoResponse)
async def get_cotacao(cotacao_id: str, scope: TenantScope = Depends(get_scope)):
    cotacao = await get_or_404(scope, Cotacao, cotacao_id, NOT_FOUND)
    return cotacao.to_dict()


@router.post("", response_model=CotacaoResponse, status_code=status.HTTP_201_CREATED)
async def create_cotacao(request: CotacaoCreate, scope: TenantScope = Depends(get_scope)):
    await validar_obra(scope, request.obra_id)

    data = request.model_dump()
    data["fornecedor_nome"] = await _nome_fornecedor(scope, data["fornecedor_id"], data["fornecedor_nome"])

    cotacao = scope.add(Cotacao(**data))
    await scope.flush()
    registrar_atividade(scope, ActivityAction.CREATE, "cotacao", cotacao.id, cotacao.descricao)

    await scope.commit()
    await scope.refresh(cotacao)
    return cotacao.to_dict()


@router.put("/{cotacao_id}", response_model=CotacaoResponse)
async def update_cotacao(cotacao_id: str, request: CotacaoUpdate, scope: TenantScope = Depends(get_scope)):
    cotacao = await get_or_404(scope, Cotacao, cotacao_id, NOT_FOUND)
    update_data = request.model_dump(exclude_unset=True)

    if update_data.get("fornecedor_id") and not update_data.get("fornecedor_nome"):
        update_data["fornecedor_nome"] = await _nome_fornecedor(scope, update_data["fornecedor_id"], None)

    apply_update(cotacao, update_data)
    registrar_atividade(scope, ActivityAction.UPDATE, "cotacao", cotacao.id, cotacao.descricao)

    await scope.commit()
    await scope.refresh(cotacao)
    return cotacao.to_dict()


@router.post("/{cotacao_id}/aprovar")
async def aprovar(cotacao_id: str, scope: TenantScope = Depends(get_scope)):
    """Aprova e gera despesa pendente + compra realizada"""
    result = await aprovar_cotacao(scope, cotacao_id)
    if not result:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    cotacao, lancamento, compra = result["cotacao"], result["lancamento"], result["compra"]
    registrar_atividade(scope, ActivityAction.UPDATE, "cotacao", cotacao.id, cotacao.descricao)
    registrar_atividade(scope, ActivityAction.CREATE, "lancamento", lancamento.id, lancamento.descricao)
    registrar_atividade(scope, ActivityAction.CREATE, "lista_compra", compra.id, compra.descricao)

    await scope.commit()
    for obj in (cotacao, lancamento, compra):
        await scope.refresh(obj)

    return {
        "cotacao": cotacao.to_dict(),
        "lancamento": lancamento.to_dict(),
        "compra": compra.to_dict(),
    }


@router.post("/{cotacao_id}/rejeitar", response_model=CotacaoResponse)
async def rejeitar(cotacao_id: str, scope: TenantScope = Depends(get_scope)):
    cotacao = await rejeitar_cotacao(scope, cotacao_id)
    if not cotacao:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    registrar_atividade(scope, ActivityAction.UPDATE, "cotacao", cotacao.id, cotacao.descricao)
    await scope.commit()
    await scope.refresh(cotacao)
    return cotacao.to_dict()


@router.post("/{cotacao_id}/receber", response_model=CotacaoResponse)
async def receber(
    cotacao_id: str,
    request: Optional[CotacaoReceberRequest] = None,
    scope: TenantScope = Depends(get_scope)
):
    valor = request.valor if request else None
    cotacao = await receber_cotacao(scope, cotacao_id, valor)
    if not cotacao:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    registrar_atividade(scope, ActivityAction.UPDATE, "cotacao", cotacao.id, cotacao.descricao)
    await scope.commit()
    await scope.refresh(cotacao)
    return cotacao.to_dict()


@router.delete("/{cotacao_id}")
async def delete_cotacao(cotacao_id: str, scope: TenantScope = Depends(get_scope)):
    cotacao = await get_or_404(scope, Cotacao, cotacao_id, NOT_FOUND)

    registrar_atividade(scope, ActivityAction.DELETE, "cotacao", cotacao.id, cotacao.descricao)
    await scope.delete(cotacao)
    await scope.commit()
    return {"success": True}
