import os
import tempfile

# Banco temporario e limites desligados antes de importar a aplicacao
_tmp_dir = tempfile.mkdtemp(prefix="obras-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp_dir}/test.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["EMAIL_VERIFICATION_REQUIRED"] = "false"
os.environ["OVERDUE_SCHEDULER_ENABLED"] = "false"
os.environ["ERROR_NOTIFICATION_ENABLED"] = "false"

import httpx
import pytest

from app.database import engine, Base, AsyncSessionLocal
from app.core.tenancy import TenantScope
from app.models import Company


@pytest.fixture
async def db_engine():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    async with AsyncSessionLocal() as session:
        yield session


async def _company_scope(session, name: str) -> TenantScope:
    company = Company(name=name)
    session.add(company)
    await session.flush()
    return TenantScope(session, company.id)


@pytest.fixture
async def scope(db_session):
    return await _company_scope(db_session, "Construtora Alfa")


@pytest.fixture
async def other_scope(db_session):
    return await _company_scope(db_session, "Construtora Beta")


@pytest.fixture
async def client(db_engine):
    from app.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register(client, email: str, company: str = "Construtora Alfa", password: str = "senha123") -> dict:
    """Cadastra empresa + admin e devolve headers de autenticacao"""
    response = await client.post("/auth/register", json={
        "name": "Admin " + company,
        "email": email,
        "password": password,
        "company_name": company,
    })
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
async def auth_headers(client):
    return await register(client, "admin@alfa.com.br")


@pytest.fixture
async def other_headers(client):
    return await register(client, "admin@beta.com.br", company="Construtora Beta")
