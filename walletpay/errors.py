from typing import Callable, Optional

import stripe

from walletpay.logging import logger
from walletpay.models import AuthorizationError


class WalletPaymentError(Exception):
    """Base class for failures raised while completing a wallet payment."""

    message = "The payment could not be completed."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class InvalidClientSecret(WalletPaymentError):
    message = "The client secret is not valid for completing an intent."


class ClientSecretUnavailable(WalletPaymentError):
    message = "The merchant backend did not return a client secret."


class SetupIntentConfirmationNotSucceeded(WalletPaymentError):
    message = "The SetupIntent confirmation did not succeed."


class SetupIntentInvalidState(WalletPaymentError):
    message = "The SetupIntent is in a state that cannot be completed."


class PaymentIntentConfirmationNotSucceeded(WalletPaymentError):
    message = "The PaymentIntent confirmation did not succeed."


class PaymentIntentInvalidState(WalletPaymentError):
    message = "The PaymentIntent is in a state that cannot be completed."


ErrorMapper = Callable[[Exception], Optional[AuthorizationError]]


def _contact_field(param: str) -> Optional[str]:
    if "[address]" in param:
        return "postal_address"
    if "[name]" in param:
        return "name"
    if "[phone]" in param:
        return "phone_number"
    if "[email]" in param:
        return "email_address"
    return None


def map_error(error: Exception) -> Optional[AuthorizationError]:
    """Translate a completion failure into the error shown in the wallet sheet.

    Stripe errors pointing at a shipping or billing parameter are reported
    against the matching contact so the sheet can highlight the field.
    """
    if isinstance(error, stripe.StripeError):
        message = error.user_message or str(error)
        param = getattr(error, "param", None) or ""
        if param.startswith("shipping"):
            return AuthorizationError(
                code="shipping_contact_invalid", message=message, contact_field=_contact_field(param)
            )
        if param.startswith("billing_details"):
            return AuthorizationError(
                code="billing_contact_invalid", message=message, contact_field=_contact_field(param)
            )
        return AuthorizationError(code="unknown", message=message)

    if isinstance(error, WalletPaymentError):
        return AuthorizationError(code="unknown", message=str(error))

    # Anything else may carry internal detail such as backend URLs.
    logger.warning("unexpected completion failure error=%s detail=%s", type(error).__name__, error)
    return AuthorizationError(code="unknown", message=WalletPaymentError.message)
