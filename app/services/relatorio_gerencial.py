"""
Obras ERP - Relatorio Gerencial
Consolidado de uma obra: fisico, financeiro, compras e alertas
"""
import logging
from datetime import datetime
from typing import Optional

from app.core.tenancy import TenantScope
from app.models import Obra, Etapa, Medicao, ListaCompra, CompraStatus
from app.services.financeiro import calcular_resumo, calcular_desvio, calcular_fluxo_caixa_futuro
from app.services.alertas import gerar_alertas, Severidade
from app.utils import money

logger = logging.getLogger(__name__)


async def gerar_relatorio_gerencial(scope: TenantScope, obra_id: str, now: Optional[datetime] = None) -> Optional[dict]:
    now = now or datetime.now()
    today = now.date()

    obra = await scope.get(Obra, obra_id)
    if not obra:
        return None

    resumo = await calcular_resumo(scope, obra_id)
    desvio = await calcular_desvio(scope, obra_id)
    fluxo = await calcular_fluxo_caixa_futuro(scope, obra_id)

    etapas = await scope.all(Etapa, Etapa.obra_id == obra_id)
    atrasadas = [
        e for e in etapas
        if e.data_fim is not None and e.data_fim < today and (e.percentual_executado or 0) < 100
    ]

    total_medido = await scope.sum(Medicao.valor_medido, Medicao.obra_id == obra_id)
    compras_futuras = await scope.sum(
        ListaCompra.valor_previsto,
        ListaCompra.obra_id == obra_id,
        ListaCompra.status == CompraStatus.PLANNED.value
    )

    alertas = await gerar_alertas(scope, obra_id, now=now)

    return {
        "obra_id": obra.id,
        "obra_nome": obra.name,
        "progresso_fisico": obra.progress or 0,
        "progresso_financeiro": resumo["percentual_executado"],
        "desvio_orcamentario": desvio["desvio"],
        "desvio_percent": desvio["desvio_percent"],
        "classificacao_desvio": desvio["classificacao"],
        "total_orcado": resumo["total_orcado"],
        "total_medido": money(total_medido),
        "total_pago": resumo["total_pago"],
        "total_pendente": resumo["total_a_pagar"],
        "compras_futuras": money(compras_futuras),
        "projecao_fluxo": fluxo["projecao_total"],
        "risco_financeiro": fluxo["risco"],
        "total_etapas": len(etapas),
        "etapas_atrasadas": len(atrasadas),
        "status_geral": obra.status,
        "total_alertas": len(alertas),
        "alertas_criticos": sum(1 for a in alertas if a.severidade == Severidade.CRITICAL),
    }
