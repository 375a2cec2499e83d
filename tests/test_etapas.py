from datetime import date

import pytest

from app.core.exceptions import BusinessRuleError
from app.models import Etapa, ObraStatus
from app.services.etapas import (
    calcular_progresso,
    recalcular_progresso_obra,
    validar_percentual_etapa,
    validar_exclusao_etapa,
    soma_percentual_previsto,
)
from tests.factories import criar_obra, criar_etapa, criar_medicao

TODAY = date(2024, 6, 15)


def test_progresso_ponderado_pelo_previsto():
    etapas = [
        Etapa(percentual_previsto=60, percentual_executado=100),
        Etapa(percentual_previsto=40, percentual_executado=50),
    ]
    assert calcular_progresso(etapas) == 80


def test_progresso_sem_etapas_e_zero():
    assert calcular_progresso([]) == 0


def test_progresso_normaliza_soma_abaixo_de_100():
    etapas = [
        Etapa(percentual_previsto=30, percentual_executado=100),
        Etapa(percentual_previsto=20, percentual_executado=0),
    ]
    assert calcular_progresso(etapas) == 60


def test_progresso_arredonda_meio_para_cima():
    etapas = [
        Etapa(percentual_previsto=50, percentual_executado=25),
        Etapa(percentual_previsto=50, percentual_executado=0),
    ]
    # 12.5 -> 13
    assert calcular_progresso(etapas) == 13


async def test_recalcula_progresso_da_obra(scope):
    obra = await criar_obra(scope)
    await criar_etapa(scope, obra, nome="Fundação", percentual_previsto=60, percentual_executado=100, ordem=1)
    await criar_etapa(scope, obra, nome="Estrutura", percentual_previsto=40, percentual_executado=50, ordem=2)

    obra = await recalcular_progresso_obra(scope, obra.id, today=TODAY)

    assert obra.progress == 80
    assert obra.status == ObraStatus.IN_PROGRESS.value


async def test_obra_concluida_quando_todas_etapas_completas(scope):
    obra = await criar_obra(scope)
    await criar_etapa(scope, obra, percentual_previsto=70, percentual_executado=100)
    await criar_etapa(scope, obra, percentual_previsto=30, percentual_executado=100)

    obra = await recalcular_progresso_obra(scope, obra.id, today=TODAY)

    assert obra.progress == 100
    assert obra.status == ObraStatus.COMPLETED.value


async def test_obra_atrasada_com_prazo_vencido(scope):
    obra = await criar_obra(scope, end_date=date(2024, 6, 1))
    await criar_etapa(scope, obra, percentual_previsto=100, percentual_executado=40)

    obra = await recalcular_progresso_obra(scope, obra.id, today=TODAY)

    assert obra.status == ObraStatus.LATE.value


async def test_obra_pausada_nao_vira_atrasada(scope):
    obra = await criar_obra(scope, end_date=date(2024, 6, 1), status=ObraStatus.PAUSED.value)
    await criar_etapa(scope, obra, percentual_previsto=100, percentual_executado=40)

    obra = await recalcular_progresso_obra(scope, obra.id, today=TODAY)

    assert obra.status == ObraStatus.PAUSED.value


async def test_obra_concluida_volta_para_andamento(scope):
    obra = await criar_obra(scope, status=ObraStatus.COMPLETED.value, progress=100)
    await criar_etapa(scope, obra, percentual_previsto=100, percentual_executado=90)

    obra = await recalcular_progresso_obra(scope, obra.id, today=TODAY)

    assert obra.progress == 90
    assert obra.status == ObraStatus.IN_PROGRESS.value


async def test_obra_atrasada_volta_para_andamento_com_prazo_estendido(scope):
    obra = await criar_obra(scope, status=ObraStatus.LATE.value, end_date=date(2024, 12, 31))
    await criar_etapa(scope, obra, percentual_previsto=100, percentual_executado=10)

    obra = await recalcular_progresso_obra(scope, obra.id, today=TODAY)

    assert obra.status == ObraStatus.IN_PROGRESS.value


async def test_soma_percentual_previsto(scope):
    obra = await criar_obra(scope)
    fundacao = await criar_etapa(scope, obra, percentual_previsto=60)
    await criar_etapa(scope, obra, percentual_previsto=25)

    assert await soma_percentual_previsto(scope, obra.id) == 85
    assert await soma_percentual_previsto(scope, obra.id, exclude_id=fundacao.id) == 25


async def test_percentual_previsto_nao_excede_100(scope):
    obra = await criar_obra(scope)
    await criar_etapa(scope, obra, percentual_previsto=60)

    with pytest.raises(BusinessRuleError) as exc:
        await validar_percentual_etapa(scope, obra.id, 50)

    assert exc.value.status_code == 400
    assert "Disponível: 40%" in exc.value.message


async def test_percentual_previsto_ignora_etapa_editada(scope):
    obra = await criar_obra(scope)
    etapa = await criar_etapa(scope, obra, percentual_previsto=60)

    await validar_percentual_etapa(scope, obra.id, 100, exclude_id=etapa.id)


async def test_etapa_com_medicao_nao_pode_ser_excluida(scope):
    obra = await criar_obra(scope)
    etapa = await criar_etapa(scope, obra, percentual_previsto=50)
    await criar_medicao(scope, obra, 1000, etapa_id=etapa.id)

    with pytest.raises(BusinessRuleError) as exc:
        await validar_exclusao_etapa(scope, etapa.id)

    assert "1 medição(ões)" in exc.value.message


async def test_recalculo_nao_enxerga_outra_empresa(scope, other_scope):
    obra = await criar_obra(scope)
    await criar_etapa(scope, obra, percentual_previsto=100, percentual_executado=50)

    assert await recalcular_progresso_obra(other_scope, obra.id, today=TODAY) is None
