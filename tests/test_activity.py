from app.models import ActivityAction, User, UserRole
from app.services.activity import registrar_atividade, listar_atividades
from app.core.tenancy import TenantScope


async def test_registra_usuario_da_sessao(db_session, scope):
    user = scope.add(User(name="Carlos", email="carlos@alfa.com.br", hashed_password="x", role=UserRole.ADMIN.value))
    await scope.flush()
    scoped = TenantScope(db_session, scope.company_id, user)

    log = registrar_atividade(scoped, ActivityAction.CREATE, "obra", "obra-1", "Residencial Aurora")
    await scoped.flush()

    assert log.user_id == user.id
    assert log.user_name == "Carlos"
    assert log.action == "create"
    assert log.company_id == scope.company_id


async def test_lista_apenas_da_empresa(scope, other_scope):
    registrar_atividade(scope, ActivityAction.CREATE, "obra", "a")
    registrar_atividade(scope, ActivityAction.DELETE, "obra", "b")
    registrar_atividade(other_scope, ActivityAction.CREATE, "obra", "c")
    await scope.flush()

    logs = await listar_atividades(scope)

    assert sorted(l.entity_id for l in logs) == ["a", "b"]
    assert len(await listar_atividades(scope, limit=1)) == 1
