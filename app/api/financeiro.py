"""
Obras ERP - Financeiro / Alertas / Relatorio Gerencial API
Leituras derivadas por obra (nada e gravado)
"""
from datetime import date
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas import LancamentoResponse
from app.core.tenancy import TenantScope
from app.api.deps import get_scope
from app.services.financeiro import (
    calcular_resumo,
    calcular_desvio,
    calcular_fluxo_caixa_futuro,
    filtrar_por_periodo,
)
from app.services.alertas import gerar_alertas
from app.services.relatorio_gerencial import gerar_relatorio_gerencial

financeiro_router = APIRouter(prefix="/financeiro", tags=["Financeiro"])
alertas_router = APIRouter(prefix="/alertas", tags=["Alertas"])
relatorio_router = APIRouter(prefix="/relatorio-gerencial", tags=["Relatorio Gerencial"])


@financeiro_router.get("/resumo")
async def resumo(obra_id: str = Query(..., alias="obraId"), scope: TenantScope = Depends(get_scope)):
    """Orcado, pago, a pagar, saldo e percentual executado"""
    return await calcular_resumo(scope, obra_id)


@financeiro_router.get("/desvio")
async def desvio(obra_id: str = Query(..., alias="obraId"), scope: TenantScope = Depends(get_scope)):
    return await calcular_desvio(scope, obra_id)


@financeiro_router.get("/fluxo-caixa")
async def fluxo_caixa(obra_id: str = Query(..., alias="obraId"), scope: TenantScope = Depends(get_scope)):
    return await calcular_fluxo_caixa_futuro(scope, obra_id)


@financeiro_router.get("/periodo", response_model=List[LancamentoResponse])
async def periodo(
    obra_id: str = Query(..., alias="obraId"),
    inicio: date = Query(...),
    fim: date = Query(...),
    scope: TenantScope = Depends(get_scope)
):
    """Lancamentos da obra com vencimento entre inicio e fim (inclusive)"""
    lancamentos = await filtrar_por_periodo(scope, obra_id, inicio, fim)
    return [l.to_dict() for l in lancamentos]


@alertas_router.get("")
async def alertas(obra_id: str = Query(..., alias="obraId"), scope: TenantScope = Depends(get_scope)):
    return [a.to_dict() for a in await gerar_alertas(scope, obra_id)]


@relatorio_router.get("")
async def relatorio_gerencial(obra_id: str = Query(..., alias="obraId"), scope: TenantScope = Depends(get_scope)):
    relatorio = await gerar_relatorio_gerencial(scope, obra_id)
    if not relatorio:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Obra não encontrada.")
    return relatorio
