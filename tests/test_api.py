import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from jose import jwt

from walletpay.main import app as fastapi_app
from walletpay.models import AuthorizationResult, AuthorizationError
import walletpay.auth
import walletpay.routes

PAYLOAD = {
    "payment": {
        "token": {
            "payment_data": "eyJkYXRhIjoiLi4uIn0=",
            "transaction_identifier": "txn_1",
            "payment_method": {"display_name": "Visa 1234", "network": "Visa", "type": "credit"},
        }
    },
    "return_url": "myapp://stripe-redirect",
    "order": {"order_id": "ORDER-100", "amount": 5000, "currency": "eur"},
}


@pytest.fixture
def client():
    # Mock auth verification
    fastapi_app.dependency_overrides[walletpay.auth.verify_token] = lambda: {"sub": "wallet-client"}
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


def test_complete_success(client, mocker):
    provider = mocker.AsyncMock(return_value="pi_123_secret_abc")
    build_provider = mocker.patch("walletpay.routes.merchant_client_secret_provider", return_value=provider)
    complete = mocker.patch.object(
        walletpay.routes.orchestrator, "complete", mocker.AsyncMock(return_value=AuthorizationResult.success())
    )

    response = client.post("/wallet/complete", json=PAYLOAD)

    assert response.status_code == 200
    assert response.json() == {"status": "success", "errors": []}
    build_provider.assert_called_once_with(PAYLOAD["order"])
    payment, passed_provider, return_url = complete.await_args.args
    assert payment.token.transaction_identifier == "txn_1"
    assert passed_provider is provider
    assert return_url == "myapp://stripe-redirect"


def test_complete_failure_lists_errors(client, mocker):
    mocker.patch("walletpay.routes.merchant_client_secret_provider", return_value=mocker.AsyncMock())
    result = AuthorizationResult.failure([AuthorizationError(code="unknown", message="Your card was declined.")])
    mocker.patch.object(walletpay.routes.orchestrator, "complete", mocker.AsyncMock(return_value=result))

    response = client.post("/wallet/complete", json=PAYLOAD)

    assert response.status_code == 200
    assert response.json() == {
        "status": "failure",
        "errors": [{"code": "unknown", "message": "Your card was declined.", "contact_field": None}],
    }


def test_complete_rejects_malformed_payment(client):
    response = client.post("/wallet/complete", json={"payment": {"token": {}}})
    assert response.status_code == 422


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_missing_token_rejected():
    with TestClient(fastapi_app) as c:
        response = c.post("/wallet/complete", json=PAYLOAD, headers={"Authorization": "Basic abc"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or missing token"


def test_valid_token_accepted(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    token = jwt.encode({"sub": "wallet-client"}, "test-secret", algorithm="HS256")

    assert walletpay.auth.verify_token(f"Bearer {token}") == {"sub": "wallet-client"}


def test_token_signed_with_other_secret_rejected(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    token = jwt.encode({"sub": "wallet-client"}, "other-secret", algorithm="HS256")

    with pytest.raises(HTTPException) as exc_info:
        walletpay.auth.verify_token(f"Bearer {token}")
    assert exc_info.value.status_code == 401
