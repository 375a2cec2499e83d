"""
Obras ERP - Etapas Service
Progresso ponderado da obra e validacoes de etapa
"""
import logging
from datetime import date
from typing import List, Optional

from app.core.exceptions import BusinessRuleError
from app.core.tenancy import TenantScope
from app.models import Obra, ObraStatus, Etapa, Medicao
from app.utils import round_half_up

logger = logging.getLogger(__name__)


def calcular_progresso(etapas: List[Etapa]) -> int:
    """
    Media dos percentuais executados ponderada pelo previsto.

    Os pesos sao normalizados pela soma real, que pode ficar abaixo de 100
    enquanto as etapas estao sendo cadastradas.
    """
    soma_previsto = sum(e.percentual_previsto or 0 for e in etapas)
    if soma_previsto <= 0:
        return 0
    ponderado = sum(
        ((e.percentual_previsto or 0) / soma_previsto) * (e.percentual_executado or 0)
        for e in etapas
    )
    return round_half_up(ponderado)


def definir_status(obra: Obra, etapas: List[Etapa], progress: int, today: date) -> str:
    """Regras de transição de status (a primeira que casar vence)"""
    status = obra.status
    atrasada = obra.end_date is not None and obra.end_date < today

    if all((e.percentual_executado or 0) >= 100 for e in etapas) and progress >= 100:
        return ObraStatus.COMPLETED.value
    if atrasada and progress < 100 and status not in (ObraStatus.PAUSED.value, ObraStatus.CANCELLED.value):
        return ObraStatus.LATE.value
    if status == ObraStatus.COMPLETED.value and progress < 100:
        return ObraStatus.IN_PROGRESS.value
    if status == ObraStatus.LATE.value and obra.end_date is not None and not atrasada:
        return ObraStatus.IN_PROGRESS.value
    return status


async def recalcular_progresso_obra(scope: TenantScope, obra_id: str, today: Optional[date] = None) -> Optional[Obra]:
    """
    Recalcula progresso e status da obra a partir das etapas.
    Chamado depois de criar, alterar ou excluir etapa.
    """
    today = today or date.today()
    obra = await scope.get(Obra, obra_id)
    if not obra:
        return None

    etapas = await scope.all(Etapa, Etapa.obra_id == obra_id, order_by=[Etapa.ordem])

    if not etapas:
        obra.progress = 0
        await scope.flush()
        return obra

    progress = calcular_progresso(etapas)
    status = definir_status(obra, etapas, progress, today)

    if status != obra.status:
        logger.info(f"Obra {obra.id}: status {obra.status} -> {status} (progresso {progress}%)")

    obra.progress = progress
    obra.status = status
    await scope.flush()
    return obra


async def soma_percentual_previsto(scope: TenantScope, obra_id: str, exclude_id: Optional[str] = None) -> float:
    criteria = [Etapa.obra_id == obra_id]
    if exclude_id:
        criteria.append(Etapa.id != exclude_id)
    etapas = await scope.all(Etapa, *criteria)
    return sum(e.percentual_previsto or 0 for e in etapas)


async def validar_percentual_etapa(
    scope: TenantScope,
    obra_id: str,
    percentual_previsto: float,
    exclude_id: Optional[str] = None
) -> None:
    """Soma dos previstos da obra (sem a etapa editada) + novo valor <= 100"""
    soma_atual = await soma_percentual_previsto(scope, obra_id, exclude_id)
    if soma_atual + (percentual_previsto or 0) > 100:
        disponivel = _format_percent(100 - soma_atual)
        logger.warning(f"Obra {obra_id}: percentual previsto excedido (soma atual {soma_atual})")
        raise BusinessRuleError(
            f"Soma dos percentuais previstos excede 100%. Disponível: {disponivel}%"
        )


async def validar_exclusao_etapa(scope: TenantScope, etapa_id: str) -> None:
    count = await scope.count(Medicao, Medicao.etapa_id == etapa_id)
    if count > 0:
        raise BusinessRuleError(
            f"Não é possível excluir. Etapa possui {count} medição(ões) vinculada(s)."
        )


async def etapas_atrasadas(scope: TenantScope, obra_id: str, today: Optional[date] = None) -> List[Etapa]:
    today = today or date.today()
    return await scope.all(
        Etapa,
        Etapa.obra_id == obra_id,
        Etapa.data_fim < today,
        Etapa.percentual_executado < 100,
        order_by=[Etapa.ordem]
    )


def _format_percent(value: float):
    """40.0 -> 40, 12.5 -> 12.5"""
    return int(value) if float(value).is_integer() else round(value, 2)
