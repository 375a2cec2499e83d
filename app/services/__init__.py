from .etapas import recalcular_progresso_obra, validar_percentual_etapa, validar_exclusao_etapa
from .financeiro import (
    calcular_resumo,
    calcular_desvio,
    calcular_fluxo_caixa_futuro,
    atualizar_lancamentos_atrasados,
    filtrar_por_periodo,
    projecao_compras,
)
from .alertas import gerar_alertas, Alerta
from .workflows import aprovar_cotacao, rejeitar_cotacao, receber_cotacao, aprovar_medicao, pagar_medicao
from .relatorio_gerencial import gerar_relatorio_gerencial
from .activity import registrar_atividade, listar_atividades

__all__ = [
    "recalcular_progresso_obra",
    "validar_percentual_etapa",
    "validar_exclusao_etapa",
    "calcular_resumo",
    "calcular_desvio",
    "calcular_fluxo_caixa_futuro",
    "atualizar_lancamentos_atrasados",
    "filtrar_por_periodo",
    "projecao_compras",
    "gerar_alertas",
    "Alerta",
    "aprovar_cotacao",
    "rejeitar_cotacao",
    "receber_cotacao",
    "aprovar_medicao",
    "pagar_medicao",
    "gerar_relatorio_gerencial",
    "registrar_atividade",
    "listar_atividades"
]
