"""Drive a wallet payment through the intent confirmation lifecycle.

One call to :meth:`IntentCompletionOrchestrator.complete` creates a payment
method, asks the merchant for a client secret, fetches the intent it names and
confirms it when needed. Nothing is retried; any failure ends the attempt.
"""

from typing import Awaitable, Callable, Optional

from walletpay.client_secret import PaymentSecret, Sentinel, SetupSecret, parse_client_secret
from walletpay.errors import (
    ErrorMapper,
    InvalidClientSecret,
    PaymentIntentConfirmationNotSucceeded,
    PaymentIntentInvalidState,
    SetupIntentConfirmationNotSucceeded,
    SetupIntentInvalidState,
    map_error,
)
from walletpay.gateway import PaymentGateway
from walletpay.logging import intent_id_ctx, logger
from walletpay.models import (
    AuthorizationResult,
    PaymentIntent,
    PaymentIntentConfirmParams,
    PaymentIntentStatus,
    PaymentMethod,
    SetupIntent,
    SetupIntentConfirmParams,
    SetupIntentStatus,
    ShippingAddress,
    ShippingDetails,
    WalletPayment,
)
from walletpay.stripe_service import StripeGateway

ClientSecretProvider = Callable[[], Awaitable[str]]

SETUP_CONFIRMABLE = {
    SetupIntentStatus.REQUIRES_CONFIRMATION,
    SetupIntentStatus.REQUIRES_ACTION,
    SetupIntentStatus.REQUIRES_PAYMENT_METHOD,
}
PAYMENT_CONFIRMABLE = {
    PaymentIntentStatus.REQUIRES_PAYMENT_METHOD,
    PaymentIntentStatus.REQUIRES_CONFIRMATION,
}
PAYMENT_COMPLETED = {
    PaymentIntentStatus.SUCCEEDED,
    PaymentIntentStatus.REQUIRES_CAPTURE,
}


def shipping_details_from(payment: WalletPayment) -> Optional[ShippingDetails]:
    contact = payment.shipping_contact
    if contact is None or contact.postal_address is None or contact.name is None:
        return None

    address = contact.postal_address
    return ShippingDetails(
        address=ShippingAddress(
            city=address.city,
            country=address.iso_country_code,
            line1=address.street,
            postal_code=address.postal_code,
            state=address.state,
        ),
        name=contact.name.long_format(),
        phone=contact.phone_number,
    )


def is_confirmation_required(intent: PaymentIntent) -> bool:
    return intent.confirmation_method.is_automatic and intent.status in PAYMENT_CONFIRMABLE


class IntentCompletionOrchestrator:
    def __init__(self, gateway: PaymentGateway, error_mapper: ErrorMapper = map_error):
        self.gateway = gateway
        self.error_mapper = error_mapper

    async def complete(
        self,
        payment: WalletPayment,
        client_secret_provider: ClientSecretProvider,
        return_url: Optional[str] = None,
    ) -> AuthorizationResult:
        token = None
        try:
            payment_method = await self.gateway.create_payment_method(payment)
            secret = parse_client_secret(await client_secret_provider())

            if isinstance(secret, Sentinel):
                logger.warning("sentinel client secret reached completion; complete without confirming before calling")
                raise InvalidClientSecret()

            token = intent_id_ctx.set(secret.intent_id)
            if isinstance(secret, SetupSecret):
                intent = await self.gateway.get_setup_intent(secret.value)
                await self._complete_setup_intent(intent, payment_method, secret, return_url)
            else:
                intent = await self.gateway.get_payment_intent(secret.value)
                await self._complete_payment_intent(intent, payment_method, payment, secret)
        except Exception as exc:
            logger.warning("wallet payment failed error=%s", type(exc).__name__)
            mapped = self.error_mapper(exc)
            return AuthorizationResult.failure([mapped] if mapped is not None else [])
        else:
            logger.info("wallet payment completed")
            return AuthorizationResult.success()
        finally:
            if token is not None:
                intent_id_ctx.reset(token)

    async def _complete_setup_intent(
        self,
        intent: SetupIntent,
        payment_method: PaymentMethod,
        secret: SetupSecret,
        return_url: Optional[str],
    ) -> None:
        if intent.status == SetupIntentStatus.SUCCEEDED:
            return
        if intent.status not in SETUP_CONFIRMABLE:
            logger.warning("setup intent not completable status=%s", intent.raw_status)
            raise SetupIntentInvalidState()

        params = SetupIntentConfirmParams(
            client_secret=secret.value,
            payment_method=payment_method.id,
            use_stripe_sdk=True,
            return_url=return_url,
        )
        confirmed = await self.gateway.confirm_setup_intent(params)
        if confirmed.status != SetupIntentStatus.SUCCEEDED:
            raise SetupIntentConfirmationNotSucceeded()

    async def _complete_payment_intent(
        self,
        intent: PaymentIntent,
        payment_method: PaymentMethod,
        payment: WalletPayment,
        secret: PaymentSecret,
    ) -> None:
        if is_confirmation_required(intent):
            params = PaymentIntentConfirmParams(
                client_secret=secret.value,
                payment_method=payment_method.id,
                use_stripe_sdk=True,
            )
            # Confirm rejects a shipping update once the merchant set shipping server-side.
            shipping = shipping_details_from(payment)
            if shipping is not None and shipping != intent.shipping:
                params.shipping = shipping

            confirmed = await self.gateway.confirm_payment_intent(params)
            if confirmed.status not in PAYMENT_COMPLETED:
                raise PaymentIntentConfirmationNotSucceeded()
        elif intent.status not in PAYMENT_COMPLETED:
            logger.error(
                "The PaymentIntent is in an unexpected state. If you pass confirmation_method = manual "
                "when creating the PaymentIntent, also pass confirm = true. If server-side confirmation "
                "fails, double check you are passing the error back to the client. status=%s",
                intent.raw_status,
            )
            raise PaymentIntentInvalidState()


async def complete(
    payment: WalletPayment,
    client_secret_provider: ClientSecretProvider,
    return_url: Optional[str] = None,
    gateway: Optional[PaymentGateway] = None,
) -> AuthorizationResult:
    if gateway is None:
        gateway = StripeGateway()
    return await IntentCompletionOrchestrator(gateway).complete(payment, client_secret_provider, return_url)
