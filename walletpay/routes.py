from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from walletpay.auth import verify_token
from walletpay.merchant import merchant_client_secret_provider
from walletpay.models import AuthorizationResult, WalletPayment
from walletpay.orchestrator import IntentCompletionOrchestrator
from walletpay.stripe_service import StripeGateway

router = APIRouter()

orchestrator = IntentCompletionOrchestrator(StripeGateway())


class CompletionRequest(BaseModel):
    payment: WalletPayment
    return_url: Optional[str] = None
    order: Dict[str, Any] = {}


@router.post("/wallet/complete", response_model=AuthorizationResult)
async def complete_wallet_payment(
    request: CompletionRequest,
    auth=Depends(verify_token)
):
    provider = merchant_client_secret_provider(request.order)
    return await orchestrator.complete(request.payment, provider, request.return_url)


@router.get("/health")
def health():
    return {"ok": True}
