import os
from pathlib import Path
from typing import Any, Dict, Optional

import stripe
from dotenv import load_dotenv

from walletpay.client_secret import intent_id_from
from walletpay.gateway import PaymentGateway
from walletpay.logging import logger
from walletpay.models import (
    ConfirmationMethod,
    Contact,
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

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")

stripe.api_key = os.getenv("STRIPE_API_KEY")


def shipping_from_stripe(shipping: Any) -> Optional[ShippingDetails]:
    if not shipping:
        return None
    address = getattr(shipping, "address", None)
    return ShippingDetails(
        address=ShippingAddress(
            city=getattr(address, "city", None),
            country=getattr(address, "country", None),
            line1=getattr(address, "line1", None),
            line2=getattr(address, "line2", None),
            postal_code=getattr(address, "postal_code", None),
            state=getattr(address, "state", None),
        ),
        name=getattr(shipping, "name", None),
        phone=getattr(shipping, "phone", None),
        carrier=getattr(shipping, "carrier", None),
        tracking_number=getattr(shipping, "tracking_number", None),
    )


def setup_intent_from_stripe(intent: Any) -> SetupIntent:
    raw_status = getattr(intent, "status", None)
    return SetupIntent(id=intent.id, status=SetupIntentStatus.parse(raw_status), raw_status=raw_status)


def payment_intent_from_stripe(intent: Any) -> PaymentIntent:
    raw_status = getattr(intent, "status", None)
    return PaymentIntent(
        id=intent.id,
        status=PaymentIntentStatus.parse(raw_status),
        raw_status=raw_status,
        confirmation_method=ConfirmationMethod.parse(getattr(intent, "confirmation_method", None)),
        shipping=shipping_from_stripe(getattr(intent, "shipping", None)),
    )


def billing_details(payment: WalletPayment) -> Dict[str, Any]:
    """Billing details for the payment method, falling back to the shipping
    contact for email and phone like the wallet sheet does."""
    billing = payment.billing_contact or Contact()
    shipping = payment.shipping_contact or Contact()
    details: Dict[str, Any] = {}

    if billing.name and billing.name.long_format():
        details["name"] = billing.name.long_format()
    email = billing.email_address or shipping.email_address
    if email:
        details["email"] = email
    phone = billing.phone_number or shipping.phone_number
    if phone:
        details["phone"] = phone
    if billing.postal_address:
        address = {
            "line1": billing.postal_address.street,
            "city": billing.postal_address.city,
            "state": billing.postal_address.state,
            "postal_code": billing.postal_address.postal_code,
            "country": billing.postal_address.iso_country_code,
        }
        details["address"] = {k: v for k, v in address.items() if v}
    return details


class StripeGateway(PaymentGateway):
    """Payment gateway backed by the Stripe API, authenticated with client secrets."""

    async def create_payment_method(self, payment: WalletPayment) -> PaymentMethod:
        token = payment.token
        card_token = await stripe.Token.create_async(
            pk_token=token.payment_data,
            pk_token_instrument_name=token.payment_method.display_name,
            pk_token_payment_network=token.payment_method.network,
            pk_token_transaction_id=token.transaction_identifier,
        )
        method = await stripe.PaymentMethod.create_async(
            type="card",
            card={"token": card_token.id},
            billing_details=billing_details(payment),
        )
        logger.info("payment method created payment_method=%s", method.id)
        return PaymentMethod(id=method.id, type=getattr(method, "type", None))

    async def get_setup_intent(self, client_secret: str) -> SetupIntent:
        intent = await stripe.SetupIntent.retrieve_async(
            intent_id_from(client_secret), client_secret=client_secret
        )
        return setup_intent_from_stripe(intent)

    async def confirm_setup_intent(self, params: SetupIntentConfirmParams) -> SetupIntent:
        intent = await stripe.SetupIntent.confirm_async(
            intent_id_from(params.client_secret),
            **params.model_dump(exclude_none=True),
        )
        return setup_intent_from_stripe(intent)

    async def get_payment_intent(self, client_secret: str) -> PaymentIntent:
        intent = await stripe.PaymentIntent.retrieve_async(
            intent_id_from(client_secret), client_secret=client_secret
        )
        return payment_intent_from_stripe(intent)

    async def confirm_payment_intent(self, params: PaymentIntentConfirmParams) -> PaymentIntent:
        intent = await stripe.PaymentIntent.confirm_async(
            intent_id_from(params.client_secret),
            **params.model_dump(exclude_none=True),
        )
        return payment_intent_from_stripe(intent)
