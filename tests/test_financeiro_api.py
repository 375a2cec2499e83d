import pytest


@pytest.fixture
async def obra(client, auth_headers):
    response = await client.post("/api/obras", headers=auth_headers, json={
        "name": "Galpão Norte", "total_cost": 100000,
    })
    obra = response.json()
    for valor, status in ((40000, "Pago"), (20000, "Pendente")):
        await client.post("/api/lancamentos", headers=auth_headers, json={
            "obra_id": obra["id"], "descricao": f"Parcela {status}", "valor": valor,
            "data_vencimento": "2030-01-10", "status": status,
        })
    return obra


async def test_resumo(client, auth_headers, obra):
    response = await client.get("/api/financeiro/resumo", params={"obraId": obra["id"]}, headers=auth_headers)

    assert response.json() == {
        "total_orcado": 100000.0,
        "total_pago": 40000.0,
        "total_a_pagar": 20000.0,
        "saldo_restante": 40000.0,
        "percentual_executado": 40,
    }


async def test_desvio_e_fluxo(client, auth_headers, obra):
    desvio = (await client.get("/api/financeiro/desvio", params={"obraId": obra["id"]}, headers=auth_headers)).json()
    assert desvio["classificacao"] == "Abaixo do orçamento"
    assert desvio["desvio_percent"] == -40

    fluxo = (await client.get("/api/financeiro/fluxo-caixa", params={"obraId": obra["id"]}, headers=auth_headers)).json()
    assert fluxo["projecao_total"] == 20000.0
    assert fluxo["risco"] == "Baixo"


async def test_periodo(client, auth_headers, obra):
    response = await client.get("/api/financeiro/periodo", headers=auth_headers, params={
        "obraId": obra["id"], "inicio": "2030-01-01", "fim": "2030-01-31",
    })

    assert len(response.json()) == 2


async def test_resumo_de_obra_de_outra_empresa(client, other_headers, obra):
    response = await client.get("/api/financeiro/resumo", params={"obraId": obra["id"]}, headers=other_headers)

    assert response.json()["total_pago"] == 0.0
    assert response.json()["total_orcado"] == 0.0


async def test_resumo_exige_obra(client, auth_headers):
    response = await client.get("/api/financeiro/resumo", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Dados inválidos"


async def test_alertas(client, auth_headers, obra):
    response = await client.get("/api/alertas", params={"obraId": obra["id"]}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == []


async def test_relatorio_gerencial(client, auth_headers, obra):
    response = await client.get("/api/relatorio-gerencial", params={"obraId": obra["id"]}, headers=auth_headers)

    data = response.json()
    assert data["obra_nome"] == "Galpão Norte"
    assert data["progresso_financeiro"] == 40
    assert data["total_pendente"] == 20000.0
    assert data["status_geral"] == "Em andamento"


async def test_relatorio_gerencial_obra_inexistente(client, auth_headers):
    response = await client.get("/api/relatorio-gerencial", params={"obraId": "nao-existe"}, headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Obra não encontrada."}
