from datetime import date
from decimal import Decimal

import pytest

from app.core.exceptions import BusinessRuleError
from app.models import (
    Lancamento,
    LancamentoTipo,
    LancamentoStatus,
    ListaCompra,
    CompraStatus,
    CotacaoStatus,
    MedicaoStatus,
)
from app.services.workflows import (
    aprovar_cotacao,
    rejeitar_cotacao,
    receber_cotacao,
    aprovar_medicao,
    pagar_medicao,
    CATEGORIA_COTACAO,
    CATEGORIA_MEDICAO,
)
from tests.factories import criar_obra, criar_cotacao, criar_fornecedor, criar_medicao

TODAY = date(2024, 6, 15)


async def test_aprovar_cotacao_gera_despesa_e_compra(scope):
    obra = await criar_obra(scope, name="Edifício Solar")
    fornecedor = await criar_fornecedor(scope, "Aço Forte")
    cotacao = await criar_cotacao(scope, obra, 5000, fornecedor=fornecedor, descricao="Vergalhões")

    result = await aprovar_cotacao(scope, cotacao.id, today=TODAY)

    assert result["cotacao"].status == CotacaoStatus.APPROVED.value

    lancamento = result["lancamento"]
    assert lancamento.tipo == LancamentoTipo.EXPENSE.value
    assert lancamento.status == LancamentoStatus.PENDING.value
    assert lancamento.categoria == CATEGORIA_COTACAO
    assert lancamento.valor == Decimal("5000")
    assert lancamento.data_vencimento == TODAY
    assert lancamento.fornecedor_id == fornecedor.id
    assert lancamento.obra_nome == "Edifício Solar"
    assert lancamento.company_id == scope.company_id

    compra = result["compra"]
    assert compra.status == CompraStatus.PURCHASED.value
    assert compra.valor_previsto == Decimal("5000")
    assert compra.data_prevista == TODAY

    assert await scope.count(Lancamento) == 1
    assert await scope.count(ListaCompra) == 1


async def test_aprovar_cotacao_inexistente(scope):
    assert await aprovar_cotacao(scope, "nao-existe") is None
    assert await scope.count(Lancamento) == 0


async def test_aprovar_cotacao_de_outra_empresa(scope, other_scope):
    obra = await criar_obra(other_scope)
    cotacao = await criar_cotacao(other_scope, obra, 800)

    assert await aprovar_cotacao(scope, cotacao.id) is None
    assert cotacao.status == CotacaoStatus.REQUESTED.value


async def test_rejeitar_cotacao_nao_gera_registros(scope):
    obra = await criar_obra(scope)
    cotacao = await criar_cotacao(scope, obra, 5000)

    cotacao = await rejeitar_cotacao(scope, cotacao.id)

    assert cotacao.status == CotacaoStatus.REJECTED.value
    assert await scope.count(Lancamento) == 0
    assert await scope.count(ListaCompra) == 0


async def test_receber_cotacao_atualiza_valor(scope):
    obra = await criar_obra(scope)
    cotacao = await criar_cotacao(scope, obra, 0)

    cotacao = await receber_cotacao(scope, cotacao.id, Decimal("4200.50"))

    assert cotacao.status == CotacaoStatus.RECEIVED.value
    assert cotacao.valor == Decimal("4200.50")


async def test_pagar_medicao_gera_lancamento_pago(scope):
    obra = await criar_obra(scope)
    medicao = await criar_medicao(scope, obra, 12000, data_medicao=date(2024, 6, 1))

    result = await pagar_medicao(scope, medicao.id, today=TODAY)

    lancamento = result["lancamento"]
    assert lancamento.status == LancamentoStatus.PAID.value
    assert lancamento.tipo == LancamentoTipo.EXPENSE.value
    assert lancamento.categoria == CATEGORIA_MEDICAO
    assert lancamento.valor == Decimal("12000")
    assert lancamento.data_vencimento == date(2024, 6, 1)
    assert lancamento.data_pagamento == TODAY

    medicao = result["medicao"]
    assert medicao.status == MedicaoStatus.PAID.value
    assert medicao.lancamento_gerado_id == lancamento.id


async def test_pagar_medicao_duas_vezes(scope):
    obra = await criar_obra(scope)
    medicao = await criar_medicao(scope, obra, 12000)

    assert await pagar_medicao(scope, medicao.id) is not None
    assert await pagar_medicao(scope, medicao.id) is None
    assert await scope.count(Lancamento) == 1


async def test_aprovar_medicao(scope):
    obra = await criar_obra(scope)
    medicao = await criar_medicao(scope, obra, 3000)

    medicao = await aprovar_medicao(scope, medicao.id)

    assert medicao.status == MedicaoStatus.APPROVED.value
    assert await scope.count(Lancamento) == 0


async def test_medicao_paga_nao_volta_para_aprovada(scope):
    obra = await criar_obra(scope)
    medicao = await criar_medicao(scope, obra, 3000, status=MedicaoStatus.PAID)

    with pytest.raises(BusinessRuleError):
        await aprovar_medicao(scope, medicao.id)
