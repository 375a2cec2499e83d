from datetime import date, timedelta

import pytest


@pytest.fixture
async def obra(client, auth_headers):
    response = await client.post("/api/obras", headers=auth_headers, json={
        "name": "Edifício Solar", "total_cost": 100000,
    })
    return response.json()


async def test_aprovar_cotacao(client, auth_headers, obra):
    fornecedor = (await client.post("/api/fornecedores", headers=auth_headers, json={"nome": "Aço Forte"})).json()
    cotacao = (await client.post("/api/cotacoes", headers=auth_headers, json={
        "obra_id": obra["id"], "fornecedor_id": fornecedor["id"], "descricao": "Vergalhões", "valor": 5000,
    })).json()
    assert cotacao["fornecedor_nome"] == "Aço Forte"

    response = await client.post(f"/api/cotacoes/{cotacao['id']}/aprovar", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["cotacao"]["status"] == "Aprovado"
    assert data["lancamento"]["tipo"] == "Despesa"
    assert data["lancamento"]["status"] == "Pendente"
    assert data["lancamento"]["categoria"] == "Cotação"
    assert data["lancamento"]["valor"] == 5000.0
    assert data["compra"]["status"] == "Comprado"

    lancamentos = (await client.get("/api/lancamentos", params={"obraId": obra["id"]}, headers=auth_headers)).json()
    assert len(lancamentos) == 1

    response = await client.delete(f"/api/fornecedores/{fornecedor['id']}", headers=auth_headers)
    assert response.status_code == 400
    assert "1 cotação(ões) aprovada(s)" in response.json()["error"]


async def test_rejeitar_e_receber_cotacao(client, auth_headers, obra):
    cotacao = (await client.post("/api/cotacoes", headers=auth_headers, json={
        "obra_id": obra["id"], "descricao": "Areia",
    })).json()

    response = await client.post(f"/api/cotacoes/{cotacao['id']}/receber", headers=auth_headers, json={"valor": 750})
    assert response.json()["status"] == "Recebido"
    assert response.json()["valor"] == 750.0

    response = await client.post(f"/api/cotacoes/{cotacao['id']}/rejeitar", headers=auth_headers)
    assert response.json()["status"] == "Rejeitado"

    lancamentos = (await client.get("/api/lancamentos", headers=auth_headers)).json()
    assert lancamentos == []


async def test_aprovar_cotacao_inexistente(client, auth_headers):
    response = await client.post("/api/cotacoes/nao-existe/aprovar", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Cotação não encontrada."}


async def test_pagar_medicao_uma_vez(client, auth_headers, obra):
    medicao = (await client.post("/api/medicoes", headers=auth_headers, json={
        "obra_id": obra["id"], "descricao": "Medição 01", "valor_medido": 12000, "data_medicao": "2024-06-01",
    })).json()

    response = await client.post(f"/api/medicoes/{medicao['id']}/aprovar", headers=auth_headers)
    assert response.json()["status"] == "Aprovado"

    response = await client.post(f"/api/medicoes/{medicao['id']}/pagar", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["medicao"]["status"] == "Pago"
    assert data["medicao"]["lancamento_gerado_id"] == data["lancamento"]["id"]
    assert data["lancamento"]["status"] == "Pago"
    assert data["lancamento"]["categoria"] == "Medição"

    response = await client.post(f"/api/medicoes/{medicao['id']}/pagar", headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Medição já paga ou não encontrada."}

    response = await client.post(f"/api/medicoes/{medicao['id']}/aprovar", headers=auth_headers)
    assert response.status_code == 400

    lancamentos = (await client.get("/api/lancamentos", headers=auth_headers)).json()
    assert len(lancamentos) == 1


async def test_medicao_sempre_nasce_pendente(client, auth_headers, obra):
    medicao = (await client.post("/api/medicoes", headers=auth_headers, json={
        "obra_id": obra["id"], "descricao": "Medição 02", "valor_medido": 8000, "data_medicao": "2024-06-15",
        "status": "Pago",
    })).json()
    assert medicao["status"] == "Pendente"
    assert medicao["lancamento_gerado_id"] is None

    response = await client.post(f"/api/medicoes/{medicao['id']}/pagar", headers=auth_headers)
    assert response.status_code == 200

    lancamentos = (await client.get("/api/lancamentos", headers=auth_headers)).json()
    assert [l["valor"] for l in lancamentos] == [8000.0]


async def test_listagem_marca_lancamentos_atrasados(client, auth_headers, obra):
    ontem = (date.today() - timedelta(days=1)).isoformat()
    amanha = (date.today() + timedelta(days=1)).isoformat()
    for descricao, vencimento in (("Vencido", ontem), ("A vencer", amanha)):
        await client.post("/api/lancamentos", headers=auth_headers, json={
            "obra_id": obra["id"], "descricao": descricao, "valor": 100, "data_vencimento": vencimento,
        })

    response = await client.get("/api/lancamentos", headers=auth_headers)

    status = {l["descricao"]: l["status"] for l in response.json()}
    assert status == {"Vencido": "Atrasado", "A vencer": "Pendente"}

    response = await client.get("/api/lancamentos", params={"status": "Atrasado"}, headers=auth_headers)
    assert [l["descricao"] for l in response.json()] == ["Vencido"]


async def test_lancamento_pago_recebe_data_de_pagamento(client, auth_headers, obra):
    response = await client.post("/api/lancamentos", headers=auth_headers, json={
        "obra_id": obra["id"], "descricao": "Projeto", "valor": 900, "data_vencimento": "2030-01-01",
        "status": "Pago",
    })

    assert response.json()["data_pagamento"] == date.today().isoformat()


async def test_nota_fiscal_exige_lancamento(client, auth_headers, obra):
    response = await client.post("/api/notas-fiscais", headers=auth_headers, json={
        "obra_id": obra["id"], "numero": "NF-100",
    })

    assert response.status_code == 400
    assert response.json() == {"error": "Nota Fiscal deve ser vinculada a um lançamento financeiro."}


async def test_lancamento_com_nota_nao_pode_ser_excluido(client, auth_headers, obra):
    lancamento = (await client.post("/api/lancamentos", headers=auth_headers, json={
        "obra_id": obra["id"], "descricao": "Cimento", "valor": 300, "data_vencimento": "2030-01-01",
    })).json()
    response = await client.post("/api/notas-fiscais", headers=auth_headers, json={
        "obra_id": obra["id"], "numero": "NF-101", "lancamento_id": lancamento["id"], "valor": 300,
    })
    assert response.status_code == 201

    response = await client.delete(f"/api/lancamentos/{lancamento['id']}", headers=auth_headers)

    assert response.status_code == 400
