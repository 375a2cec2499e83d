"""
Obras ERP - Workflows Service
Efeitos colaterais de aprovacao de cotacao e pagamento de medicao

Cada gatilho grava tudo na mesma sessao (flush) e deixa o commit para a
rota que chamou: ou todos os registros entram, ou nenhum entra.
"""
import logging
from datetime import date
from typing import Optional

from app.core.tenancy import TenantScope
from app.core.exceptions import BusinessRuleError
from app.models import (
    Obra,
    Cotacao,
    CotacaoStatus,
    ListaCompra,
    CompraStatus,
    Lancamento,
    LancamentoTipo,
    LancamentoStatus,
    Medicao,
    MedicaoStatus,
)

logger = logging.getLogger(__name__)

CATEGORIA_COTACAO = "Cotação"
CATEGORIA_MEDICAO = "Medição"


async def _obra_nome(scope: TenantScope, obra_id: str) -> str:
    obra = await scope.get(Obra, obra_id)
    return obra.name if obra else ""


async def aprovar_cotacao(scope: TenantScope, cotacao_id: str, today: Optional[date] = None) -> Optional[dict]:
    """
    Aprova a cotação gerando um lançamento (despesa pendente, vence hoje)
    e um item comprado na lista de compras.

    Não é idempotente: aprovar duas vezes gera lançamentos duplicados.
    """
    today = today or date.today()
    cotacao = await scope.get(Cotacao, cotacao_id)
    if not cotacao:
        return None

    obra_nome = await _obra_nome(scope, cotacao.obra_id)

    lancamento = scope.add(Lancamento(
        obra_id=cotacao.obra_id,
        obra_nome=obra_nome,
        tipo=LancamentoTipo.EXPENSE.value,
        fornecedor_id=cotacao.fornecedor_id,
        fornecedor_nome=cotacao.fornecedor_nome or "",
        descricao=f"Cotação aprovada: {cotacao.descricao}",
        valor=cotacao.valor,
        data_vencimento=today,
        status=LancamentoStatus.PENDING.value,
        categoria=CATEGORIA_COTACAO,
    ))

    compra = scope.add(ListaCompra(
        obra_id=cotacao.obra_id,
        descricao=f"Cotação: {cotacao.descricao} ({cotacao.fornecedor_nome or ''})",
        valor_previsto=cotacao.valor,
        data_prevista=today,
        status=CompraStatus.PURCHASED.value,
    ))

    cotacao.status = CotacaoStatus.APPROVED.value
    await scope.flush()

    logger.info(f"Cotação {cotacao.id} aprovada: lançamento {lancamento.id}, compra {compra.id}")
    return {"cotacao": cotacao, "lancamento": lancamento, "compra": compra}


async def rejeitar_cotacao(scope: TenantScope, cotacao_id: str) -> Optional[Cotacao]:
    cotacao = await scope.get(Cotacao, cotacao_id)
    if not cotacao:
        return None
    cotacao.status = CotacaoStatus.REJECTED.value
    await scope.flush()
    return cotacao


async def receber_cotacao(scope: TenantScope, cotacao_id: str, valor=None) -> Optional[Cotacao]:
    """Fornecedor respondeu: status Recebido e valor informado"""
    cotacao = await scope.get(Cotacao, cotacao_id)
    if not cotacao:
        return None
    cotacao.status = CotacaoStatus.RECEIVED.value
    if valor is not None:
        cotacao.valor = valor
    await scope.flush()
    return cotacao


async def aprovar_medicao(scope: TenantScope, medicao_id: str) -> Optional[Medicao]:
    medicao = await scope.get(Medicao, medicao_id)
    if not medicao:
        return None
    if medicao.status == MedicaoStatus.PAID.value:
        raise BusinessRuleError("Medição já paga não pode voltar para aprovada.")
    medicao.status = MedicaoStatus.APPROVED.value
    await scope.flush()
    return medicao


async def pagar_medicao(scope: TenantScope, medicao_id: str, today: Optional[date] = None) -> Optional[dict]:
    """
    Paga a medição gerando um lançamento já pago.
    Retorna None (sem gravar nada) se não existir ou já estiver paga.
    """
    today = today or date.today()
    medicao = await scope.get(Medicao, medicao_id)
    if not medicao or medicao.status == MedicaoStatus.PAID.value:
        return None

    obra_nome = await _obra_nome(scope, medicao.obra_id)

    lancamento = scope.add(Lancamento(
        obra_id=medicao.obra_id,
        obra_nome=obra_nome,
        tipo=LancamentoTipo.EXPENSE.value,
        descricao=f"Medição: {medicao.descricao}",
        valor=medicao.valor_medido,
        data_vencimento=medicao.data_medicao,
        data_pagamento=today,
        status=LancamentoStatus.PAID.value,
        categoria=CATEGORIA_MEDICAO,
    ))
    await scope.flush()

    medicao.status = MedicaoStatus.PAID.value
    medicao.lancamento_gerado_id = lancamento.id
    await scope.flush()

    logger.info(f"Medição {medicao.id} paga: lançamento {lancamento.id}")
    return {"medicao": medicao, "lancamento": lancamento}
