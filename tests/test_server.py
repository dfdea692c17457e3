from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from clinica import routes
from clinica.api_main import SECURITY_HEADERS, app


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "OK", "message": "API is running"}


def test_unknown_route_is_404(client):
    r = client.get("/api/inexistente")
    assert r.status_code == 404
    assert r.json() == {"error": "Route not found"}


def test_unknown_method_is_route_not_found(client):
    for r in (client.patch("/api/pacientes/1", json={}), client.delete("/api/pacientes")):
        assert r.status_code == 404
        assert r.json() == {"error": "Route not found"}


def test_security_headers_on_every_response(db, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(routes, "busca_paciente", explode)

    with TestClient(app, raise_server_exceptions=False) as c:
        respostas = [c.get(path) for path in ("/health", "/api/pacientes", "/nada", "/api/pacientes/1")]

    assert respostas[-1].status_code == 500
    for r in respostas:
        for nome, valor in SECURITY_HEADERS.items():
            assert r.headers[nome] == valor


def test_cors_allowed_origin(client):
    r = client.get("/health", headers={"Origin": "http://localhost:8080"})
    assert r.headers["access-control-allow-origin"] == "http://localhost:8080"
    assert r.headers["access-control-allow-credentials"] == "true"


def test_cors_rejects_unknown_origin(client):
    r = client.get("/health", headers={"Origin": "http://evil.example.com"})
    assert "access-control-allow-origin" not in r.headers

    r = client.options(
        "/api/pacientes",
        headers={"Origin": "http://evil.example.com", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 400


def test_cors_preflight_allowed(client):
    r = client.options(
        "/api/pacientes",
        headers={"Origin": "http://127.0.0.1:8080", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://127.0.0.1:8080"


def test_database_failure_is_generic_500(client, monkeypatch):
    def quebra(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(routes, "lista_pacientes", quebra)
    monkeypatch.setattr(routes, "cria_paciente", quebra)

    r = client.get("/api/pacientes")
    assert r.status_code == 500
    assert r.json() == {"error": "Falha ao buscar pacientes"}

    r = client.post("/api/pacientes", json={"nome": "A", "cpf": "1", "data_nascimento": "2000-01-01"})
    assert r.status_code == 500
    assert r.json() == {"error": "Falha ao criar paciente"}
    assert "connection refused" not in r.text


def test_unhandled_exception_is_500(db, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(routes, "busca_paciente", explode)

    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/api/pacientes/1")
    assert r.status_code == 500
    assert r.json() == {"error": "Something went wrong!"}


def test_docs_are_served(client):
    assert client.get("/api-docs").status_code == 200
    spec = client.get("/openapi.json").json()
    assert "/api/pacientes" in spec["paths"]
    assert "/api/pacientes/{id_paciente}" in spec["paths"]
    assert "/health" in spec["paths"]
