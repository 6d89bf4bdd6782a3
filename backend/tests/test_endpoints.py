# python
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from encryptor.auth import require_api_key
from encryptor.errors import KeyNotReady
from encryptor.main import create_app
from encryptor.settings import Settings

from conftest import KEY_HEX

HEADERS = {"X-API-Key": "dummy"}


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


def test_health_reports_ready(client, backend):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "encryptor": "ready", "backend": backend}
    assert client.get("/healthz").json() == response.json()


def test_encrypt_decrypt_round_trip(client):
    # Act
    sealed = client.post("/encrypt", json={"plaintext": "PESEL 44051401359"}, headers=HEADERS)
    envelope = sealed.json()["envelope"]
    opened = client.post("/decrypt", json={"envelope": envelope}, headers=HEADERS)

    # Assert
    assert sealed.status_code == 200
    assert len(envelope.split(":")) == 3
    assert opened.status_code == 200
    assert opened.json() == {"plaintext": "PESEL 44051401359"}


@pytest.mark.parametrize("headers", [{}, {"X-API-Key": "wrong"}])
def test_requires_api_key(client, headers):
    response = client.post("/encrypt", json={"plaintext": "x"}, headers=headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized"


def test_api_key_not_configured_rejects_everyone():
    app = create_app(Settings(encryptor_key=KEY_HEX, api_key=""))
    with TestClient(app) as c:
        response = c.post("/encrypt", json={"plaintext": "x"}, headers={"X-API-Key": ""})
    assert response.status_code == 401


def test_empty_plaintext_maps_to_generic_400(client):
    response = client.post("/encrypt", json={"plaintext": ""}, headers=HEADERS)
    assert response.status_code == 400
    assert response.json() == {"detail": "Operation failed", "kind": "input_error"}


def test_malformed_envelope_maps_to_generic_400(client):
    response = client.post("/decrypt", json={"envelope": "abc"}, headers=HEADERS)
    assert response.status_code == 400
    assert response.json() == {"detail": "Operation failed", "kind": "format_error"}


def test_tampered_envelope_maps_to_generic_400(client):
    envelope = client.post("/encrypt", json={"plaintext": "iban"}, headers=HEADERS).json()["envelope"]
    tampered = envelope[:-1] + ("0" if envelope[-1] != "0" else "1")
    response = client.post("/decrypt", json={"envelope": tampered}, headers=HEADERS)
    assert response.status_code == 400
    body = response.json()
    assert body == {"detail": "Operation failed", "kind": "crypto_error"}
    assert "tag" not in response.text


def test_key_not_ready_maps_to_503_with_retry_after(client):
    with patch.object(client.app.state.encryptor, "encrypt", side_effect=KeyNotReady()):
        response = client.post("/encrypt", json={"plaintext": "x"}, headers=HEADERS)
    assert response.status_code == 503
    assert response.headers["Retry-After"] == "1"
    assert response.json()["kind"] == "key_not_ready"


def test_bad_master_key_is_startup_fatal():
    app = create_app(Settings(encryptor_key="00" * 16, api_key="dummy"))
    with pytest.raises(Exception):
        with TestClient(app):
            pass
    assert app.state.encryptor.state.value == "failed"


def test_require_api_key_only_gates_access():
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(settings=Settings(api_key="k"))))
    assert require_api_key(request, x_api_key="k") is None
    with pytest.raises(HTTPException) as ei:
        require_api_key(request, x_api_key="nope")
    assert ei.value.status_code == 401


def test_create_app_factory_reads_environment(monkeypatch):
    monkeypatch.setenv("ENCRYPTOR_KEY", KEY_HEX)
    monkeypatch.setenv("ENCRYPTOR_BACKEND", "async")
    monkeypatch.setenv("API_KEY", "from-env")
    app = create_app()
    with TestClient(app) as c:
        assert c.get("/health").json()["backend"] == "async"
        sealed = c.post("/encrypt", json={"plaintext": "x"}, headers={"X-API-Key": "from-env"})
    assert sealed.status_code == 200
