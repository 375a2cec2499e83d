import pytest

from app.core.exceptions import BusinessRuleError, NotFoundError
from app.models import CotacaoStatus, NotaFiscal
from app.services.guards import (
    validar_exclusao_obra,
    validar_exclusao_fornecedor,
    validar_exclusao_cliente,
    validar_exclusao_lancamento,
    validar_lancamento_nota,
    validar_obra,
)
from tests.factories import (
    criar_obra,
    criar_etapa,
    criar_lancamento,
    criar_fornecedor,
    criar_cliente,
    criar_cotacao,
)


async def test_obra_com_lancamentos_nao_pode_ser_excluida(scope):
    obra = await criar_obra(scope)
    await criar_lancamento(scope, obra, 100)
    await criar_lancamento(scope, obra, 200)

    with pytest.raises(BusinessRuleError) as exc:
        await validar_exclusao_obra(scope, obra.id)

    assert exc.value.message == "Não é possível excluir. Obra possui 2 lançamento(s) financeiro(s)."


async def test_obra_com_etapas_nao_pode_ser_excluida(scope):
    obra = await criar_obra(scope)
    await criar_etapa(scope, obra)

    with pytest.raises(BusinessRuleError) as exc:
        await validar_exclusao_obra(scope, obra.id)

    assert "1 etapa(s)" in exc.value.message


async def test_obra_sem_dependencias_pode_ser_excluida(scope):
    obra = await criar_obra(scope)

    await validar_exclusao_obra(scope, obra.id)


async def test_fornecedor_com_cotacao_aprovada(scope):
    obra = await criar_obra(scope)
    fornecedor = await criar_fornecedor(scope)
    await criar_cotacao(scope, obra, 100, fornecedor=fornecedor, status=CotacaoStatus.APPROVED)
    await criar_cotacao(scope, obra, 100, fornecedor=fornecedor, status=CotacaoStatus.REJECTED)

    with pytest.raises(BusinessRuleError) as exc:
        await validar_exclusao_fornecedor(scope, fornecedor.id)

    assert "1 cotação(ões) aprovada(s)" in exc.value.message


async def test_fornecedor_com_despesa(scope):
    obra = await criar_obra(scope)
    fornecedor = await criar_fornecedor(scope)
    await criar_lancamento(scope, obra, 100, fornecedor_id=fornecedor.id)

    with pytest.raises(BusinessRuleError) as exc:
        await validar_exclusao_fornecedor(scope, fornecedor.id)

    assert "1 despesa(s)" in exc.value.message


async def test_cliente_com_obra_vinculada(scope):
    cliente = await criar_cliente(scope, "Maria Souza")
    await criar_obra(scope, client="Maria Souza")

    with pytest.raises(BusinessRuleError) as exc:
        await validar_exclusao_cliente(scope, cliente)

    assert exc.value.message == "Não é possível excluir. Cliente possui 1 obra(s) vinculada(s)."


async def test_cliente_com_obra_de_outra_empresa(scope, other_scope):
    cliente = await criar_cliente(scope, "Maria Souza")
    await criar_obra(other_scope, client="Maria Souza")

    await validar_exclusao_cliente(scope, cliente)


async def test_lancamento_com_nota_fiscal(scope):
    obra = await criar_obra(scope)
    lancamento = await criar_lancamento(scope, obra, 100)
    scope.add(NotaFiscal(obra_id=obra.id, lancamento_id=lancamento.id, numero="NF-001"))
    await scope.flush()

    with pytest.raises(BusinessRuleError):
        await validar_exclusao_lancamento(scope, lancamento.id)


async def test_nota_fiscal_exige_lancamento(scope, other_scope):
    with pytest.raises(BusinessRuleError) as exc:
        await validar_lancamento_nota(scope, None)
    assert exc.value.message == "Nota Fiscal deve ser vinculada a um lançamento financeiro."

    obra = await criar_obra(other_scope)
    lancamento = await criar_lancamento(other_scope, obra, 100)
    with pytest.raises(BusinessRuleError) as exc:
        await validar_lancamento_nota(scope, lancamento.id)
    assert exc.value.message == "Lançamento financeiro vinculado não encontrado."


async def test_validar_obra(scope, other_scope):
    obra = await criar_obra(scope)

    assert (await validar_obra(scope, obra.id)).id == obra.id
    with pytest.raises(NotFoundError):
        await validar_obra(other_scope, obra.id)
