"""
Obras ERP - Financeiro Service
Resumo, desvio orcamentario e fluxo de caixa futuro por obra
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from app.core.tenancy import TenantScope
from app.models import (
    Obra,
    Lancamento,
    LancamentoStatus,
    OPEN_STATUSES,
    ListaCompra,
    CompraStatus,
    Medicao,
    MedicaoStatus,
)
from app.utils import round_half_up, to_decimal, money

logger = logging.getLogger(__name__)

# Tolerancia fixa do desvio (+/- 5%)
DESVIO_TOLERANCIA = 5


class ClassificacaoDesvio:
    ACIMA = "Acima do orçamento"
    ABAIXO = "Abaixo do orçamento"
    DENTRO = "Dentro do orçamento"


class RiscoFluxo:
    ALTO = "Alto"
    MEDIO = "Médio"
    BAIXO = "Baixo"


# Statuses de medição ainda não pagas
MEDICOES_EM_ABERTO = (MedicaoStatus.PENDING.value, MedicaoStatus.APPROVED.value)


async def _total_orcado(scope: TenantScope, obra_id: str) -> Decimal:
    obra = await scope.get(Obra, obra_id)
    return to_decimal(obra.total_cost) if obra else Decimal("0")


async def _totais(scope: TenantScope, obra_id: str) -> Tuple[Decimal, Decimal, Decimal]:
    """(orcado, pago, pendente) da obra"""
    total_orcado = await _total_orcado(scope, obra_id)
    total_pago = await scope.sum(
        Lancamento.valor,
        Lancamento.obra_id == obra_id,
        Lancamento.status == LancamentoStatus.PAID.value
    )
    total_pendente = await scope.sum(
        Lancamento.valor,
        Lancamento.obra_id == obra_id,
        Lancamento.status.in_(OPEN_STATUSES)
    )
    return total_orcado, total_pago, total_pendente


async def calcular_resumo(scope: TenantScope, obra_id: str) -> dict:
    total_orcado, total_pago, total_pendente = await _totais(scope, obra_id)
    saldo_restante = total_orcado - total_pago - total_pendente
    percentual_executado = round_half_up(total_pago / total_orcado * 100) if total_orcado > 0 else 0

    return {
        "total_orcado": money(total_orcado),
        "total_pago": money(total_pago),
        "total_a_pagar": money(total_pendente),
        "saldo_restante": money(saldo_restante),
        "percentual_executado": percentual_executado,
    }


def classificar_desvio(desvio_percent: int) -> str:
    if desvio_percent > DESVIO_TOLERANCIA:
        return ClassificacaoDesvio.ACIMA
    if desvio_percent < -DESVIO_TOLERANCIA:
        return ClassificacaoDesvio.ABAIXO
    return ClassificacaoDesvio.DENTRO


async def calcular_desvio(scope: TenantScope, obra_id: str) -> dict:
    total_orcado, total_pago, total_pendente = await _totais(scope, obra_id)
    total_realizado = total_pago + total_pendente
    desvio = total_realizado - total_orcado
    desvio_percent = round_half_up(desvio / total_orcado * 100) if total_orcado > 0 else 0

    return {
        "desvio": money(desvio),
        "desvio_percent": desvio_percent,
        "classificacao": classificar_desvio(desvio_percent),
        "total_realizado": money(total_realizado),
    }


def classificar_risco(projecao_total: Decimal, orcamento: Decimal) -> str:
    if orcamento <= 0:
        return RiscoFluxo.BAIXO
    razao = projecao_total / orcamento
    if razao > Decimal("0.9"):
        return RiscoFluxo.ALTO
    if razao > Decimal("0.6"):
        return RiscoFluxo.MEDIO
    return RiscoFluxo.BAIXO


async def calcular_fluxo_caixa_futuro(scope: TenantScope, obra_id: str) -> dict:
    total_a_pagar = await scope.sum(
        Lancamento.valor,
        Lancamento.obra_id == obra_id,
        Lancamento.status.in_(OPEN_STATUSES)
    )
    compras_planejadas = await scope.sum(
        ListaCompra.valor_previsto,
        ListaCompra.obra_id == obra_id,
        ListaCompra.status == CompraStatus.PLANNED.value
    )
    medicoes_pendentes = await scope.sum(
        Medicao.valor_medido,
        Medicao.obra_id == obra_id,
        Medicao.status.in_(MEDICOES_EM_ABERTO)
    )
    projecao_total = total_a_pagar + compras_planejadas + medicoes_pendentes
    orcamento = await _total_orcado(scope, obra_id)

    return {
        "total_a_pagar": money(total_a_pagar),
        "compras_planejadas": money(compras_planejadas),
        "medicoes_pendentes": money(medicoes_pendentes),
        "projecao_total": money(projecao_total),
        "risco": classificar_risco(projecao_total, orcamento),
    }


async def atualizar_lancamentos_atrasados(scope: TenantScope, today: Optional[date] = None) -> int:
    """
    Pendente com vencimento anterior a hoje -> Atrasado, para a empresa inteira.
    Idempotente: uma segunda execucao nao encontra mais nada pendente vencido.
    """
    today = today or date.today()
    changed = await scope.update_where(
        Lancamento,
        {"status": LancamentoStatus.OVERDUE.value},
        Lancamento.status == LancamentoStatus.PENDING.value,
        Lancamento.data_vencimento < today
    )
    if changed:
        logger.info(f"Company {scope.company_id}: {changed} lançamento(s) marcados como atrasados")
    return changed


async def filtrar_por_periodo(scope: TenantScope, obra_id: str, inicio: date, fim: date) -> List[Lancamento]:
    return await scope.all(
        Lancamento,
        Lancamento.obra_id == obra_id,
        Lancamento.data_vencimento >= inicio,
        Lancamento.data_vencimento <= fim,
        order_by=[Lancamento.data_vencimento.desc()]
    )


async def projecao_compras(scope: TenantScope, obra_id: str) -> dict:
    total_planejado = await scope.sum(
        ListaCompra.valor_previsto,
        ListaCompra.obra_id == obra_id,
        ListaCompra.status == CompraStatus.PLANNED.value
    )
    total_comprado = await scope.sum(
        ListaCompra.valor_previsto,
        ListaCompra.obra_id == obra_id,
        ListaCompra.status == CompraStatus.PURCHASED.value
    )
    return {
        "total_planejado": money(total_planejado),
        "total_comprado": money(total_comprado),
        "total": money(total_planejado + total_comprado),
    }
