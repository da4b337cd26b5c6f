from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from app.core.config import Settings
from app.core.errors import summarize_validation_errors
from app.core.exceptions import PersistenceError
from app.main import create_app


def test_404_not_found(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "error" in data
    assert data["code"] == "HTTP_ERROR"


def test_405_wrong_method(client):
    response = client.get("/api/register")
    assert response.status_code == 405
    assert response.json()["code"] == "HTTP_ERROR"


def test_malformed_json_is_a_400(client, store):
    response = client.post(
        "/api/register",
        content=b'{"name": "Asha", "phone": ',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["error"] == "Invalid JSON body"
    assert store.users.docs == []


def test_missing_body_is_a_400(client):
    response = client.post("/api/payment-proof")
    assert response.status_code == 400
    assert response.json()["error"] == "Request body required"


def test_validation_details_do_not_echo_input(client, payment_body):
    payment_body["amount"] = "not-a-number"
    response = client.post("/api/payment-proof", json=payment_body)
    for detail in response.json()["details"]:
        assert "input" not in detail


def test_store_failure_on_register_passes_message_through(client, store):
    store.users.fail_with = PyMongoError("connection refused")
    response = client.post("/api/register", json={"name": "Asha", "phone": "555-0100"})
    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "PERSISTENCE_ERROR"
    assert data["error"] == "connection refused"


def test_store_failure_on_list_payments(client, store):
    store.payments.fail_with = PyMongoError("cursor killed")
    response = client.get("/api/payments")
    assert response.status_code == 500
    assert response.json()["error"] == "cursor killed"


def test_store_failure_on_payment_proof(client, store, payment_body):
    store.payments.fail_with = PyMongoError("disk full")
    response = client.post("/api/payment-proof", json=payment_body)
    assert response.status_code == 500
    assert response.json() == {"error": "disk full", "code": "PERSISTENCE_ERROR", "details": None}


def test_custom_exception(client):
    app = client.app

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise PersistenceError(message="Item not stored")

    response = client.get("/test-custom-error")
    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "PERSISTENCE_ERROR"
    assert data["error"] == "Item not stored"


def test_summarize_validation_errors_groups_fields():
    error = summarize_validation_errors([
        {"type": "missing", "loc": ("body", "name"), "msg": "Field required"},
        {"type": "string_too_short", "loc": ("body", "phone"), "msg": "too short"},
        {"type": "float_parsing", "loc": ("body", "amount", "float"), "msg": "bad"},
        {"type": "int_parsing", "loc": ("body", "amount", "int"), "msg": "bad"},
    ])
    assert error.status_code == 400
    assert error.message == "name, phone required; invalid value for amount"
    assert len(error.details) == 4


def test_production_hides_unhandled_error_text(store):
    config = Settings(
        _env_file=None,
        MONGO_URL="mongodb://localhost:27017",
        ENVIRONMENT="production",
    )
    app = create_app(store=store, config=config)

    @app.get("/test-crash")
    def crash():
        raise RuntimeError("secret connection string leaked")

    response = TestClient(app, raise_server_exceptions=False).get("/test-crash")
    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "INTERNAL_ERROR"
    assert "secret" not in data["error"]


def test_development_shows_unhandled_error_text(client):
    app = client.app

    @app.get("/test-crash")
    def crash():
        raise RuntimeError("boom")

    response = TestClient(app, raise_server_exceptions=False).get("/test-crash")
    assert response.status_code == 500
    assert response.json()["error"] == "boom"
