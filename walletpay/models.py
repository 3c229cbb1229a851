from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class PersonName(BaseModel):
    model_config = ConfigDict(frozen=True)

    name_prefix: Optional[str] = None
    given_name: Optional[str] = None
    middle_name: Optional[str] = None
    family_name: Optional[str] = None
    name_suffix: Optional[str] = None
    nickname: Optional[str] = None

    def long_format(self) -> str:
        parts = [self.name_prefix, self.given_name, self.middle_name, self.family_name, self.name_suffix]
        return " ".join(p for p in parts if p)


class PostalAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    iso_country_code: Optional[str] = None


class Contact(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[PersonName] = None
    postal_address: Optional[PostalAddress] = None
    phone_number: Optional[str] = None
    email_address: Optional[str] = None


class WalletPaymentMethod(BaseModel):
    model_config = ConfigDict(frozen=True)

    display_name: Optional[str] = None
    network: Optional[str] = None
    type: Optional[str] = None


class WalletPaymentToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    payment_data: str                   # encrypted wallet payload, passed through as-is
    transaction_identifier: str
    payment_method: WalletPaymentMethod = WalletPaymentMethod()


class WalletPayment(BaseModel):
    """Payment authorized by the user in the wallet sheet."""

    model_config = ConfigDict(frozen=True)

    token: WalletPaymentToken
    billing_contact: Optional[Contact] = None
    shipping_contact: Optional[Contact] = None


class ShippingAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: Optional[str] = None
    country: Optional[str] = None
    line1: Optional[str] = None
    line2: Optional[str] = None
    postal_code: Optional[str] = None
    state: Optional[str] = None


class ShippingDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: ShippingAddress
    name: Optional[str] = None
    phone: Optional[str] = None
    carrier: Optional[str] = None
    tracking_number: Optional[str] = None


class PaymentMethod(BaseModel):
    id: str
    type: Optional[str] = None


class SetupIntentStatus(str, Enum):
    REQUIRES_PAYMENT_METHOD = "requires_payment_method"
    REQUIRES_CONFIRMATION = "requires_confirmation"
    REQUIRES_ACTION = "requires_action"
    PROCESSING = "processing"
    CANCELED = "canceled"
    SUCCEEDED = "succeeded"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["SetupIntentStatus"]:
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


class PaymentIntentStatus(str, Enum):
    REQUIRES_PAYMENT_METHOD = "requires_payment_method"
    REQUIRES_CONFIRMATION = "requires_confirmation"
    REQUIRES_ACTION = "requires_action"
    REQUIRES_CAPTURE = "requires_capture"
    PROCESSING = "processing"
    CANCELED = "canceled"
    SUCCEEDED = "succeeded"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["PaymentIntentStatus"]:
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


class ConfirmationMethod(str, Enum):
    AUTOMATIC = "automatic"
    AUTOMATIC_ASYNC = "automatic_async"
    MANUAL = "manual"
    UNKNOWN = "unknown"

    @property
    def is_automatic(self) -> bool:
        return self in (ConfirmationMethod.AUTOMATIC, ConfirmationMethod.AUTOMATIC_ASYNC)

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ConfirmationMethod":
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


class SetupIntent(BaseModel):
    id: str
    status: Optional[SetupIntentStatus] = None
    raw_status: Optional[str] = None    # original value when status is UNKNOWN


class PaymentIntent(BaseModel):
    id: str
    status: Optional[PaymentIntentStatus] = None
    raw_status: Optional[str] = None
    confirmation_method: ConfirmationMethod = ConfirmationMethod.AUTOMATIC
    shipping: Optional[ShippingDetails] = None


class SetupIntentConfirmParams(BaseModel):
    client_secret: str
    payment_method: str
    use_stripe_sdk: bool = True
    return_url: Optional[str] = None


class PaymentIntentConfirmParams(BaseModel):
    client_secret: str
    payment_method: str
    use_stripe_sdk: bool = True
    shipping: Optional[ShippingDetails] = None


class AuthorizationStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class AuthorizationError(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str                           # unknown | shipping_contact_invalid | billing_contact_invalid
    message: str
    contact_field: Optional[str] = None


class AuthorizationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: AuthorizationStatus
    errors: List[AuthorizationError] = []

    @classmethod
    def success(cls) -> "AuthorizationResult":
        return cls(status=AuthorizationStatus.SUCCESS)

    @classmethod
    def failure(cls, errors: List[AuthorizationError]) -> "AuthorizationResult":
        return cls(status=AuthorizationStatus.FAILURE, errors=errors)
