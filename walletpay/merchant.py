import os
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv

from walletpay.errors import ClientSecretUnavailable
from walletpay.logging import logger
from walletpay.orchestrator import ClientSecretProvider

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


def merchant_client_secret_provider(
    order: Dict[str, Any],
    backend_url: Optional[str] = None,
) -> ClientSecretProvider:
    """Build a provider that asks the merchant backend to create an intent for `order`.

    The backend answers with ``{"client_secret": ...}``. No timeout is added
    beyond httpx's own; wrap the provider to bound latency.
    """

    async def provide() -> str:
        url = backend_url or os.getenv("MERCHANT_BACKEND_URL")
        if not url:
            logger.error("MERCHANT_BACKEND_URL is not set. Check your .env file.")
            raise ClientSecretUnavailable()

        async with httpx.AsyncClient() as client:
            response = await client.post(url, json=order)
            response.raise_for_status()
            data = response.json()

        client_secret = data.get("client_secret")
        if not client_secret:
            logger.warning("merchant backend response has no client_secret url=%s", url)
            raise ClientSecretUnavailable()
        return client_secret

    return provide
