# tests/integration/test_api_analise_export.py
from fastapi.testclient import TestClient


def test_analise_gestores(client: TestClient) -> None:
    client.post("/api/realocacoes", json={"associado_ids": ["a-PFI-001"], "gestor_destino_id": "b"})
    data = {g["gestor_id"]: g for g in client.get("/api/analise/gestores").json()}
    assert data["a"]["status"] == "atencao"
    assert data["a"]["perdas_periodo"] == 1
    assert data["b"]["ganhos_periodo"] == 1


def test_analise_sobrecarregadas(client: TestClient) -> None:
    data = client.get("/api/analise/sobrecarregadas").json()
    assert [g["id"] for g in data] == ["a"]


def test_analise_segmentos_e_resumo(client: TestClient) -> None:
    segmentos = {s["segmento"]: s for s in client.get("/api/analise/segmentos").json()}
    assert segmentos["PF"]["associados"] == 12
    assert segmentos["PJ"]["capacidade_total"] == 500

    resumo = client.get("/api/analise/resumo").json()
    assert resumo == {"total_associados": 13, "total_gestores": 3, "total_agencias": 2, "carteiras_problema": 1}


def test_export_gestores_csv(client: TestClient) -> None:
    response = client.get("/api/export/gestores?formato=csv")
    assert response.status_code == 200
    assert "text/csv" in response.headers["content-type"]
    assert response.text.startswith("Nome,Agencia,Segmento")


def test_export_associados_json_de_um_gestor(client: TestClient) -> None:
    response = client.get("/api/export/associados", params={"formato": "json", "gestor_id": "b"})
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert [r["Gestor"] for r in response.json()] == ["B", "B"]


def test_export_gestor_inexistente_retorna_404(client: TestClient) -> None:
    response = client.get("/api/export/associados", params={"formato": "json", "gestor_id": "zzz"})
    assert response.status_code == 404


def test_export_recurso_ou_formato_invalido_retorna_422(client: TestClient) -> None:
    assert client.get("/api/export/contratos?formato=csv").status_code == 422
    assert client.get("/api/export/gestores?formato=xml").status_code == 422
