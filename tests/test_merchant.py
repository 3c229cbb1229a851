import httpx
import pytest

from walletpay.errors import ClientSecretUnavailable
from walletpay.merchant import merchant_client_secret_provider

BACKEND_URL = "https://merchant.example.com/payments"


def mock_backend(mocker, response):
    post = mocker.AsyncMock(return_value=response)
    mocker.patch.object(httpx.AsyncClient, "post", post)
    return post


@pytest.mark.asyncio
async def test_provider_returns_client_secret(mocker):
    post = mock_backend(
        mocker, httpx.Response(200, json={"client_secret": "pi_1_secret_2"}, request=httpx.Request("POST", BACKEND_URL))
    )

    provide = merchant_client_secret_provider({"order_id": "ORDER-1"}, backend_url=BACKEND_URL)

    assert await provide() == "pi_1_secret_2"
    post.assert_awaited_once_with(BACKEND_URL, json={"order_id": "ORDER-1"})


@pytest.mark.asyncio
async def test_provider_without_client_secret(mocker):
    mock_backend(mocker, httpx.Response(200, json={"payment_id": "pi_1"}, request=httpx.Request("POST", BACKEND_URL)))

    provide = merchant_client_secret_provider({}, backend_url=BACKEND_URL)

    with pytest.raises(ClientSecretUnavailable):
        await provide()


@pytest.mark.asyncio
async def test_provider_backend_error(mocker):
    mock_backend(mocker, httpx.Response(503, request=httpx.Request("POST", BACKEND_URL)))

    provide = merchant_client_secret_provider({}, backend_url=BACKEND_URL)

    with pytest.raises(httpx.HTTPStatusError):
        await provide()


@pytest.mark.asyncio
async def test_provider_requires_backend_url(monkeypatch, mocker):
    monkeypatch.delenv("MERCHANT_BACKEND_URL", raising=False)
    post = mocker.patch.object(httpx.AsyncClient, "post", mocker.AsyncMock())

    provide = merchant_client_secret_provider({})

    with pytest.raises(ClientSecretUnavailable):
        await provide()
    post.assert_not_awaited()
