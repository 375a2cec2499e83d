from datetime import date
from decimal import Decimal

from app.models import Lancamento, LancamentoStatus, CompraStatus, MedicaoStatus
from app.services.financeiro import (
    calcular_resumo,
    calcular_desvio,
    classificar_desvio,
    classificar_risco,
    calcular_fluxo_caixa_futuro,
    atualizar_lancamentos_atrasados,
    filtrar_por_periodo,
    projecao_compras,
    ClassificacaoDesvio,
    RiscoFluxo,
)
from tests.factories import criar_obra, criar_lancamento, criar_compra, criar_medicao

TODAY = date(2024, 6, 15)


async def test_resumo_financeiro(scope):
    obra = await criar_obra(scope, total_cost=Decimal("100000"))
    await criar_lancamento(scope, obra, 40000, status=LancamentoStatus.PAID)
    await criar_lancamento(scope, obra, 20000, status=LancamentoStatus.PENDING)

    resumo = await calcular_resumo(scope, obra.id)

    assert resumo == {
        "total_orcado": 100000.0,
        "total_pago": 40000.0,
        "total_a_pagar": 20000.0,
        "saldo_restante": 40000.0,
        "percentual_executado": 40,
    }


async def test_resumo_conta_atrasados_como_a_pagar(scope):
    obra = await criar_obra(scope)
    await criar_lancamento(scope, obra, 1500, status=LancamentoStatus.OVERDUE)

    resumo = await calcular_resumo(scope, obra.id)

    assert resumo["total_a_pagar"] == 1500.0


async def test_resumo_sem_orcamento(scope):
    obra = await criar_obra(scope, total_cost=Decimal("0"))
    await criar_lancamento(scope, obra, 500, status=LancamentoStatus.PAID)

    resumo = await calcular_resumo(scope, obra.id)

    assert resumo["percentual_executado"] == 0
    assert resumo["saldo_restante"] == -500.0


async def test_resumo_ignora_outra_empresa(scope, other_scope):
    obra = await criar_obra(scope)
    outra = await criar_obra(other_scope)
    await criar_lancamento(other_scope, outra, 99999, status=LancamentoStatus.PAID, obra_id=obra.id)

    resumo = await calcular_resumo(scope, obra.id)

    assert resumo["total_pago"] == 0.0


def test_classificacao_desvio_limites():
    assert classificar_desvio(5) == ClassificacaoDesvio.DENTRO
    assert classificar_desvio(-5) == ClassificacaoDesvio.DENTRO
    assert classificar_desvio(0) == ClassificacaoDesvio.DENTRO
    assert classificar_desvio(6) == ClassificacaoDesvio.ACIMA
    assert classificar_desvio(-6) == ClassificacaoDesvio.ABAIXO


async def test_desvio_abaixo_do_orcamento(scope):
    obra = await criar_obra(scope, total_cost=Decimal("100000"))
    await criar_lancamento(scope, obra, 40000, status=LancamentoStatus.PAID)
    await criar_lancamento(scope, obra, 20000)

    desvio = await calcular_desvio(scope, obra.id)

    assert desvio == {
        "desvio": -40000.0,
        "desvio_percent": -40,
        "classificacao": ClassificacaoDesvio.ABAIXO,
        "total_realizado": 60000.0,
    }


async def test_desvio_acima_do_orcamento(scope):
    obra = await criar_obra(scope, total_cost=Decimal("10000"))
    await criar_lancamento(scope, obra, 11000, status=LancamentoStatus.PAID)

    desvio = await calcular_desvio(scope, obra.id)

    assert desvio["desvio_percent"] == 10
    assert desvio["classificacao"] == ClassificacaoDesvio.ACIMA


def test_classificacao_risco():
    orcamento = Decimal("100000")
    assert classificar_risco(Decimal("95000"), orcamento) == RiscoFluxo.ALTO
    assert classificar_risco(Decimal("90000"), orcamento) == RiscoFluxo.MEDIO
    assert classificar_risco(Decimal("70000"), orcamento) == RiscoFluxo.MEDIO
    assert classificar_risco(Decimal("60000"), orcamento) == RiscoFluxo.BAIXO
    assert classificar_risco(Decimal("5000"), Decimal("0")) == RiscoFluxo.BAIXO


async def test_fluxo_caixa_futuro(scope):
    obra = await criar_obra(scope, total_cost=Decimal("100000"))
    await criar_lancamento(scope, obra, 30000)
    await criar_lancamento(scope, obra, 10000, status=LancamentoStatus.PAID)
    await criar_compra(scope, obra, 25000)
    await criar_compra(scope, obra, 8000, status=CompraStatus.PURCHASED)
    await criar_medicao(scope, obra, 15000, status=MedicaoStatus.APPROVED)
    await criar_medicao(scope, obra, 4000, status=MedicaoStatus.PAID)

    fluxo = await calcular_fluxo_caixa_futuro(scope, obra.id)

    assert fluxo == {
        "total_a_pagar": 30000.0,
        "compras_planejadas": 25000.0,
        "medicoes_pendentes": 15000.0,
        "projecao_total": 70000.0,
        "risco": RiscoFluxo.MEDIO,
    }


async def test_atualiza_lancamentos_atrasados(scope):
    obra = await criar_obra(scope)
    vencido = await criar_lancamento(scope, obra, 100, data_vencimento=date(2024, 6, 14))
    await criar_lancamento(scope, obra, 200, data_vencimento=TODAY)
    await criar_lancamento(scope, obra, 300, data_vencimento=date(2024, 6, 1), status=LancamentoStatus.PAID)

    assert await atualizar_lancamentos_atrasados(scope, today=TODAY) == 1
    # segunda passada nao altera nada
    assert await atualizar_lancamentos_atrasados(scope, today=TODAY) == 0

    atrasados = await scope.all(Lancamento, Lancamento.status == LancamentoStatus.OVERDUE.value)
    assert [l.id for l in atrasados] == [vencido.id]


async def test_atualizacao_de_atrasados_isolada_por_empresa(scope, other_scope):
    obra = await criar_obra(scope)
    outra = await criar_obra(other_scope)
    await criar_lancamento(scope, obra, 100, data_vencimento=date(2024, 1, 1))
    await criar_lancamento(other_scope, outra, 100, data_vencimento=date(2024, 1, 1))

    assert await atualizar_lancamentos_atrasados(scope, today=TODAY) == 1
    assert await other_scope.count(Lancamento, Lancamento.status == LancamentoStatus.PENDING.value) == 1


async def test_filtrar_por_periodo_inclusivo(scope):
    obra = await criar_obra(scope)
    await criar_lancamento(scope, obra, 100, descricao="maio", data_vencimento=date(2024, 5, 31))
    await criar_lancamento(scope, obra, 200, descricao="inicio", data_vencimento=date(2024, 6, 1))
    await criar_lancamento(scope, obra, 300, descricao="fim", data_vencimento=date(2024, 6, 30))

    lancamentos = await filtrar_por_periodo(scope, obra.id, date(2024, 6, 1), date(2024, 6, 30))

    assert [l.descricao for l in lancamentos] == ["fim", "inicio"]


async def test_projecao_compras(scope):
    obra = await criar_obra(scope)
    await criar_compra(scope, obra, 1000)
    await criar_compra(scope, obra, 250.5, status=CompraStatus.PURCHASED)

    assert await projecao_compras(scope, obra.id) == {
        "total_planejado": 1000.0,
        "total_comprado": 250.5,
        "total": 1250.5,
    }
