import pytest


@pytest.fixture
async def obra(client, auth_headers):
    response = await client.post("/api/obras", headers=auth_headers, json={"name": "Casa Jardim"})
    return response.json()


async def test_ocultar_comentario(client, auth_headers, obra):
    comentario = (await client.post("/api/comentarios", headers=auth_headers, json={
        "obra_id": obra["id"], "comentario": "Concretagem da laje adiada",
    })).json()
    assert comentario["usuario_nome"] == "Admin Construtora Alfa"

    response = await client.post(f"/api/comentarios/{comentario['id']}/ocultar", headers=auth_headers)
    assert response.json()["oculto"] is True

    params = {"obraId": obra["id"]}
    assert (await client.get("/api/comentarios", params=params, headers=auth_headers)).json() == []

    params["includeHidden"] = "true"
    visiveis = (await client.get("/api/comentarios", params=params, headers=auth_headers)).json()
    assert [c["id"] for c in visiveis] == [comentario["id"]]


async def test_relatorio_semanal_sem_sobreposicao(client, auth_headers, obra):
    response = await client.post("/api/relatorios", headers=auth_headers, json={
        "obra_id": obra["id"], "semana_inicio": "2024-06-03", "semana_fim": "2024-06-09",
        "descricao_atividades": "Fundação concluída",
    })
    assert response.status_code == 201

    response = await client.post("/api/relatorios", headers=auth_headers, json={
        "obra_id": obra["id"], "semana_inicio": "2024-06-07", "semana_fim": "2024-06-13",
    })
    assert response.status_code == 400
    assert response.json() == {"error": "Já existe um relatório para este período nesta obra."}

    response = await client.post("/api/relatorios", headers=auth_headers, json={
        "obra_id": obra["id"], "semana_inicio": "2024-06-10", "semana_fim": "2024-06-16",
    })
    assert response.status_code == 201


async def test_cliente_com_obra_nao_pode_ser_excluido(client, auth_headers):
    cliente = (await client.post("/api/clientes", headers=auth_headers, json={"nome": "Maria Souza"})).json()
    await client.post("/api/obras", headers=auth_headers, json={"name": "Casa da Maria", "client": "Maria Souza"})

    response = await client.delete(f"/api/clientes/{cliente['id']}", headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Não é possível excluir. Cliente possui 1 obra(s) vinculada(s)."}


async def test_lista_compras_marcar_comprado(client, auth_headers, obra):
    item = (await client.post("/api/lista-compras", headers=auth_headers, json={
        "obra_id": obra["id"], "descricao": "Telhas", "valor_previsto": 2500, "data_prevista": "2030-02-01",
    })).json()
    assert item["status"] == "Planejado"

    response = await client.post(f"/api/lista-compras/{item['id']}/comprado", headers=auth_headers)
    assert response.json()["status"] == "Comprado"

    response = await client.get("/api/lista-compras/projecao", params={"obraId": obra["id"]}, headers=auth_headers)
    assert response.json() == {"total_planejado": 0.0, "total_comprado": 2500.0, "total": 2500.0}
