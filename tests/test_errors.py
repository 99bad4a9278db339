import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
from sqlalchemy.exc import OperationalError

from core.error_handlers import format_validation_errors, register_error_handlers


class Strict(BaseModel):
    count: int


@pytest.fixture
def failing_client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("secret internals")

    @app.get("/db")
    def db_error():
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    @app.get("/model")
    def model_error():
        Strict(count="many")

    return TestClient(app, raise_server_exceptions=False)


def test_unhandled_error_hides_internals(failing_client):
    resp = failing_client.get("/boom")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Erro interno do servidor", "code": 500}
    assert "secret" not in resp.text


def test_database_error_envelope(failing_client):
    resp = failing_client.get("/db")
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Erro de banco de dados"
    assert body["code"] == 400
    assert body["details"] == "OperationalError"


def test_model_validation_error_envelope(failing_client):
    resp = failing_client.get("/model")
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Erro de validação"
    assert body["details"][0]["field"] == "count"


def test_unknown_route_uses_envelope(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Not Found", "code": 404}


def test_malformed_json_body(client, admin_headers):
    resp = client.post(
        "/api/courses",
        content="{not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Erro de validação"


def test_format_validation_errors():
    errors = [
        {"type": "missing", "loc": ("body", "email"), "msg": "Field required"},
        {
            "type": "value_error",
            "loc": ("body", "password"),
            "msg": "Value error, Senha deve ter pelo menos 6 caracteres",
        },
        {"type": "int_parsing", "loc": ("query", "page"), "msg": "Input should be a valid integer"},
    ]
    assert format_validation_errors(errors) == [
        {"field": "email", "message": "Campo obrigatório"},
        {"field": "password", "message": "Senha deve ter pelo menos 6 caracteres"},
        {"field": "page", "message": "Input should be a valid integer"},
    ]
