"""Payment API gateway interface consumed by the completion orchestrator."""

from abc import ABC, abstractmethod

from walletpay.models import (
    PaymentIntent,
    PaymentIntentConfirmParams,
    PaymentMethod,
    SetupIntent,
    SetupIntentConfirmParams,
    WalletPayment,
)


class PaymentGateway(ABC):
    """Remote operations needed to complete a wallet payment.

    Implementations raise on failure and must be safe to share between
    concurrent completion attempts.
    """

    @abstractmethod
    async def create_payment_method(self, payment: WalletPayment) -> PaymentMethod:
        """Tokenize the wallet payment into a payment method."""

    @abstractmethod
    async def get_setup_intent(self, client_secret: str) -> SetupIntent:
        pass

    @abstractmethod
    async def confirm_setup_intent(self, params: SetupIntentConfirmParams) -> SetupIntent:
        pass

    @abstractmethod
    async def get_payment_intent(self, client_secret: str) -> PaymentIntent:
        pass

    @abstractmethod
    async def confirm_payment_intent(self, params: PaymentIntentConfirmParams) -> PaymentIntent:
        pass
