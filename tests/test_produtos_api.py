# tests/test_produtos_api.py
PARAFUSO = {"name": "Parafuso", "quantity": 5, "category": "Ferramentas", "unit": "Caixa", "minStock": 10}


def test_lista_vazia(client):
    r = client.get("/products")
    assert r.status_code == 200
    assert r.json() == []


def test_cria_produto_com_id_gerado(client):
    r = client.post("/products", json=PARAFUSO)
    assert r.status_code == 200
    body = r.json()
    assert isinstance(body["id"], int)
    assert body["name"] == "Parafuso"
    assert body["minStock"] == 10
    assert "minstock" not in body


def test_lista_ordenada_por_id(client):
    ids = [client.post("/products", json={**PARAFUSO, "name": nome}).json()["id"] for nome in ("A", "B", "C")]
    r = client.get("/products")
    assert [p["id"] for p in r.json()] == sorted(ids)
    assert [p["name"] for p in r.json()] == ["A", "B", "C"]


def test_aceita_minstock_em_minusculas(client):
    r = client.post("/products", json={"name": "Luva", "minstock": 3})
    assert r.status_code == 200
    assert r.json()["minStock"] == 3


def test_campos_sao_opcionais_e_vazios_viram_nulo(client):
    r = client.post("/products", json={"name": "Rascunho", "quantity": "", "minStock": ""})
    assert r.status_code == 200
    body = r.json()
    assert body["quantity"] is None
    assert body["minStock"] is None
    assert body["category"] is None


def test_put_substitui_o_registro_inteiro(client):
    produto = client.post("/products", json=PARAFUSO).json()
    r = client.put(f"/products/{produto['id']}", json={"name": "Parafuso M6", "quantity": 2})
    assert r.status_code == 200
    body = r.json()
    assert body == {
        "id": produto["id"],
        "name": "Parafuso M6",
        "quantity": 2,
        "category": None,
        "unit": None,
        "minStock": None,
    }
    assert client.get("/products").json() == [body]


def test_put_de_id_inexistente_responde_404(client):
    r = client.put("/products/999", json=PARAFUSO)
    assert r.status_code == 404
    assert r.json() == {"detail": "Produto não encontrado"}


def test_delete_remove_e_responde_204(client):
    produto = client.post("/products", json=PARAFUSO).json()
    r = client.delete(f"/products/{produto['id']}")
    assert r.status_code == 204
    assert r.content == b""
    assert client.get("/products").json() == []


def test_delete_de_id_inexistente_e_idempotente(client):
    assert client.delete("/products/999").status_code == 204


def test_cors_liberado_para_qualquer_origem(client):
    r = client.get("/products", headers={"Origin": "http://qualquer.exemplo"})
    assert r.status_code == 200
    assert "access-control-allow-origin" in r.headers
