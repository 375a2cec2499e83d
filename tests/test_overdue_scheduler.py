from datetime import date

from app.core.overdue_scheduler import run_once
from app.core.tenancy import TenantScope
from app.models import Lancamento, LancamentoStatus
from tests.factories import criar_obra, criar_lancamento


async def test_run_once_atualiza_todas_as_empresas(db_session, scope, other_scope):
    for s in (scope, other_scope):
        obra = await criar_obra(s)
        await criar_lancamento(s, obra, 100, data_vencimento=date(2024, 6, 1))
        await criar_lancamento(s, obra, 100, data_vencimento=date(2024, 7, 1))
    await db_session.commit()

    assert await run_once(today=date(2024, 6, 15)) == 2
    assert await run_once(today=date(2024, 6, 15)) == 0

    db_session.expire_all()
    for company_id in (scope.company_id, other_scope.company_id):
        fresh = TenantScope(db_session, company_id)
        assert await fresh.count(Lancamento, Lancamento.status == LancamentoStatus.OVERDUE.value) == 1
