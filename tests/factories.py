"""Registros de teste gravados direto pelo TenantScope"""
from datetime import date
from decimal import Decimal

from app.models import (
    Obra,
    Etapa,
    Medicao,
    MedicaoStatus,
    Lancamento,
    LancamentoTipo,
    LancamentoStatus,
    Cotacao,
    CotacaoStatus,
    ListaCompra,
    CompraStatus,
    Fornecedor,
    Cliente,
)


async def _save(scope, obj):
    scope.add(obj)
    await scope.flush()
    return obj


async def criar_obra(scope, **kwargs):
    data = {"name": "Residencial Aurora", "total_cost": Decimal("100000"), "progress": 0}
    data.update(kwargs)
    return await _save(scope, Obra(**data))


async def criar_etapa(scope, obra, **kwargs):
    data = {"obra_id": obra.id, "nome": "Fundação", "percentual_previsto": 0, "percentual_executado": 0, "ordem": 0}
    data.update(kwargs)
    return await _save(scope, Etapa(**data))


async def criar_lancamento(scope, obra, valor, status=LancamentoStatus.PENDING, **kwargs):
    data = {
        "obra_id": obra.id,
        "obra_nome": obra.name,
        "tipo": LancamentoTipo.EXPENSE.value,
        "descricao": "Concreto usinado",
        "valor": Decimal(str(valor)),
        "data_vencimento": date(2030, 1, 1),
        "status": status.value,
    }
    data.update(kwargs)
    return await _save(scope, Lancamento(**data))


async def criar_medicao(scope, obra, valor, status=MedicaoStatus.PENDING, **kwargs):
    data = {
        "obra_id": obra.id,
        "descricao": "Medição 01",
        "valor_medido": Decimal(str(valor)),
        "data_medicao": date(2030, 1, 1),
        "status": status.value,
    }
    data.update(kwargs)
    return await _save(scope, Medicao(**data))


async def criar_compra(scope, obra, valor, status=CompraStatus.PLANNED, **kwargs):
    data = {
        "obra_id": obra.id,
        "descricao": "Cimento CP-II",
        "valor_previsto": Decimal(str(valor)),
        "data_prevista": date(2030, 1, 1),
        "status": status.value,
    }
    data.update(kwargs)
    return await _save(scope, ListaCompra(**data))


async def criar_fornecedor(scope, nome="Casa do Construtor"):
    return await _save(scope, Fornecedor(nome=nome))


async def criar_cliente(scope, nome="João da Silva"):
    return await _save(scope, Cliente(nome=nome))


async def criar_cotacao(scope, obra, valor, fornecedor=None, status=CotacaoStatus.REQUESTED, **kwargs):
    data = {
        "obra_id": obra.id,
        "fornecedor_id": fornecedor.id if fornecedor else None,
        "fornecedor_nome": fornecedor.nome if fornecedor else "",
        "descricao": "Aço CA-50",
        "valor": Decimal(str(valor)),
        "status": status.value,
    }
    data.update(kwargs)
    return await _save(scope, Cotacao(**data))
