"""
Obras ERP - Integridade referencial
Bloqueia exclusoes que deixariam registros orfaos
"""
from sqlalchemy import or_

from app.core.exceptions import BusinessRuleError, NotFoundError
from app.core.tenancy import TenantScope
from app.models import (
    Obra,
    Etapa,
    Medicao,
    Lancamento,
    Cotacao,
    CotacaoStatus,
    Cliente,
    NotaFiscal,
)


async def validar_exclusao_obra(scope: TenantScope, obra_id: str) -> None:
    lancamentos = await scope.count(Lancamento, Lancamento.obra_id == obra_id)
    if lancamentos > 0:
        raise BusinessRuleError(
            f"Não é possível excluir. Obra possui {lancamentos} lançamento(s) financeiro(s)."
        )

    etapas = await scope.count(Etapa, Etapa.obra_id == obra_id)
    if etapas > 0:
        raise BusinessRuleError(
            f"Não é possível excluir. Obra possui {etapas} etapa(s) cadastrada(s)."
        )

    medicoes = await scope.count(Medicao, Medicao.obra_id == obra_id)
    if medicoes > 0:
        raise BusinessRuleError(
            f"Não é possível excluir. Obra possui {medicoes} medição(ões)."
        )


async def validar_exclusao_fornecedor(scope: TenantScope, fornecedor_id: str) -> None:
    cotacoes = await scope.count(
        Cotacao,
        Cotacao.fornecedor_id == fornecedor_id,
        Cotacao.status == CotacaoStatus.APPROVED.value
    )
    if cotacoes > 0:
        raise BusinessRuleError(
            f"Não é possível excluir. Fornecedor possui {cotacoes} cotação(ões) aprovada(s)."
        )

    despesas = await scope.count(Lancamento, Lancamento.fornecedor_id == fornecedor_id)
    if despesas > 0:
        raise BusinessRuleError(
            f"Não é possível excluir. Fornecedor possui {despesas} despesa(s) vinculada(s)."
        )


async def validar_exclusao_cliente(scope: TenantScope, cliente: Cliente) -> None:
    obras = await scope.count(
        Obra,
        or_(Obra.client == cliente.nome, Obra.cliente_id == cliente.id)
    )
    if obras > 0:
        raise BusinessRuleError(
            f"Não é possível excluir. Cliente possui {obras} obra(s) vinculada(s)."
        )


async def validar_obra(scope: TenantScope, obra_id: str) -> Obra:
    """Obra precisa existir na empresa para receber registros filhos"""
    obra = await scope.get(Obra, obra_id)
    if not obra:
        raise NotFoundError("Obra não encontrada")
    return obra


async def validar_lancamento_nota(scope: TenantScope, lancamento_id) -> Lancamento:
    if not lancamento_id:
        raise BusinessRuleError("Nota Fiscal deve ser vinculada a um lançamento financeiro.")
    lancamento = await scope.get(Lancamento, lancamento_id)
    if not lancamento:
        raise BusinessRuleError("Lançamento financeiro vinculado não encontrado.")
    return lancamento


async def validar_exclusao_lancamento(scope: TenantScope, lancamento_id: str) -> None:
    notas = await scope.count(NotaFiscal, NotaFiscal.lancamento_id == lancamento_id)
    if notas > 0:
        raise BusinessRuleError(
            f"Não é possível excluir. Lançamento possui {notas} nota(s) fiscal(is) vinculada(s)."
        )
