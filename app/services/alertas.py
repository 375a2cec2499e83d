"""
Obras ERP - Alertas Service
Alertas operacionais da obra, recalculados a cada chamada (nada e persistido)

Ordem dos alertas = ordem das verificacoes:
proxima etapa, etapas atrasadas, obra atrasada, compras, medicoes,
desvio financeiro, risco de fluxo de caixa.
"""
import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import List, Optional

from app.core.tenancy import TenantScope
from app.models import Obra, ObraStatus, Etapa, ListaCompra, CompraStatus, Medicao
from app.services.financeiro import (
    calcular_desvio,
    calcular_fluxo_caixa_futuro,
    ClassificacaoDesvio,
    RiscoFluxo,
    MEDICOES_EM_ABERTO,
)
from app.utils import days_between, round_half_up, money

logger = logging.getLogger(__name__)


class Severidade:
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class Alerta:
    tipo: str
    titulo: str
    descricao: str
    severidade: str

    def to_dict(self):
        return asdict(self)


def brl(value) -> str:
    return f"R$ {money(value):.2f}"


def _proxima_etapa(etapas: List[Etapa], now: datetime) -> Optional[Alerta]:
    today = now.date()
    proxima = next(
        (
            e for e in etapas
            if e.data_inicio is not None and e.data_inicio >= today and (e.percentual_executado or 0) == 0
        ),
        None
    )
    if not proxima:
        return None

    dias_ate = days_between(now, proxima.data_inicio)
    descricao = (
        "Deveria ter iniciado hoje" if dias_ate <= 0
        else f"Inicia em {dias_ate} dia(s) - {proxima.data_inicio.isoformat()}"
    )
    return Alerta(
        tipo="etapa",
        titulo=f"Próxima etapa: {proxima.nome}",
        descricao=descricao,
        severidade=Severidade.WARNING if dias_ate <= 3 else Severidade.INFO,
    )


def _etapas_atrasadas(etapas: List[Etapa], now: datetime) -> List[Alerta]:
    today = now.date()
    alertas = []
    for e in etapas:
        if e.data_fim is None or e.data_fim >= today or (e.percentual_executado or 0) >= 100:
            continue
        dias_atraso = days_between(e.data_fim, now)
        alertas.append(Alerta(
            tipo="atraso",
            titulo=f"Etapa atrasada: {e.nome}",
            descricao=(
                f"Prazo: {e.data_fim.isoformat()} | Atraso: {dias_atraso} dia(s) | "
                f"Executado: {_pct(e.percentual_executado)}%"
            ),
            severidade=Severidade.CRITICAL,
        ))
    return alertas


def _obra_atrasada(obra: Obra, now: datetime) -> Optional[Alerta]:
    if obra.end_date is None or obra.end_date >= now.date():
        return None
    if (obra.progress or 0) >= 100:
        return None
    if obra.status in (ObraStatus.CANCELLED.value, ObraStatus.PAUSED.value):
        return None

    dias_atraso = days_between(obra.end_date, now)
    return Alerta(
        tipo="obra",
        titulo=f"Obra atrasada: {dias_atraso} dia(s) além do prazo",
        descricao=f"Previsão: {obra.end_date.isoformat()} | Progresso: {obra.progress or 0}%",
        severidade=Severidade.CRITICAL,
    )


def _compras(compras: List[ListaCompra], now: datetime) -> List[Alerta]:
    alertas = []
    for c in compras:
        diff = days_between(now, c.data_prevista)
        detalhe = f"Data: {c.data_prevista.isoformat()} | Valor: {brl(c.valor_previsto)}"
        if 0 <= diff <= 3:
            alertas.append(Alerta(
                tipo="compra",
                titulo=f"Compra urgente: {c.descricao}",
                descricao=detalhe,
                severidade=Severidade.CRITICAL if diff <= 1 else Severidade.WARNING,
            ))
        elif 3 < diff <= 7:
            alertas.append(Alerta(
                tipo="compra",
                titulo=f"Compra prevista: {c.descricao}",
                descricao=detalhe,
                severidade=Severidade.INFO,
            ))
    return alertas


def _medicoes(medicoes: List[Medicao], now: datetime) -> List[Alerta]:
    alertas = []
    for m in medicoes:
        dias_pendente = days_between(m.data_medicao, now)
        if dias_pendente <= 15:
            continue
        alertas.append(Alerta(
            tipo="medicao",
            titulo=f"Medição pendente: {m.descricao}",
            descricao=(
                f"Há {dias_pendente} dias sem pagamento | Valor: {brl(m.valor_medido)} | "
                f"Status: {m.status}"
            ),
            severidade=Severidade.CRITICAL if dias_pendente > 30 else Severidade.WARNING,
        ))
    return alertas


async def gerar_alertas(scope: TenantScope, obra_id: str, now: Optional[datetime] = None) -> List[Alerta]:
    now = now or datetime.now()
    today = now.date()
    alertas: List[Alerta] = []

    etapas = await scope.all(Etapa, Etapa.obra_id == obra_id, order_by=[Etapa.ordem])

    # 1. Próxima etapa a iniciar
    proxima = _proxima_etapa(etapas, now)
    if proxima:
        alertas.append(proxima)

    # 2. Etapas atrasadas
    alertas.extend(_etapas_atrasadas(etapas, now))

    # 3. Obra globalmente atrasada
    obra = await scope.get(Obra, obra_id)
    if obra:
        atraso = _obra_atrasada(obra, now)
        if atraso:
            alertas.append(atraso)

    # 4. Compras urgentes (0-3 dias) e previstas (4-7 dias)
    compras = await scope.all(
        ListaCompra,
        ListaCompra.obra_id == obra_id,
        ListaCompra.status == CompraStatus.PLANNED.value,
        ListaCompra.data_prevista >= today,
        order_by=[ListaCompra.data_prevista]
    )
    alertas.extend(_compras(compras, now))

    # 5. Medições sem pagamento há mais de 15 dias
    medicoes = await scope.all(
        Medicao,
        Medicao.obra_id == obra_id,
        Medicao.status.in_(MEDICOES_EM_ABERTO),
        order_by=[Medicao.data_medicao]
    )
    alertas.extend(_medicoes(medicoes, now))

    # 6. Desvio financeiro
    desvio = await calcular_desvio(scope, obra_id)
    if desvio["classificacao"] == ClassificacaoDesvio.ACIMA:
        orcado = desvio["total_realizado"] - desvio["desvio"]
        alertas.append(Alerta(
            tipo="desvio",
            titulo=f"Desvio financeiro: +{desvio['desvio_percent']}%",
            descricao=f"Orçado: {brl(orcado)} | Realizado: {brl(desvio['total_realizado'])}",
            severidade=Severidade.CRITICAL if desvio["desvio_percent"] > 25 else Severidade.WARNING,
        ))

    # 7. Risco de fluxo de caixa
    fluxo = await calcular_fluxo_caixa_futuro(scope, obra_id)
    if fluxo["risco"] == RiscoFluxo.ALTO:
        orcamento = money(obra.total_cost) if obra else 0
        percentual = round_half_up(fluxo["projecao_total"] / (orcamento or 1) * 100)
        alertas.append(Alerta(
            tipo="desvio",
            titulo="Risco financeiro ALTO",
            descricao=f"Projeção total: {brl(fluxo['projecao_total'])} ({percentual}% do orçamento)",
            severidade=Severidade.CRITICAL,
        ))

    logger.debug(f"Obra {obra_id}: {len(alertas)} alerta(s) gerados")
    return alertas


def _pct(value) -> str:
    value = value or 0
    return str(int(value)) if float(value).is_integer() else f"{value:g}"
