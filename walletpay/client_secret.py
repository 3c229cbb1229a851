"""Client secret variants, decided once when the merchant backend hands one over."""

import re
from dataclasses import dataclass
from typing import Union

# Passed instead of a real secret when the merchant completed the payment on its own.
COMPLETE_WITHOUT_CONFIRMING_INTENT = "COMPLETE_WITHOUT_CONFIRMING_INTENT"

_SETUP_SECRET_RE = re.compile(r"^seti_[^_]+_secret_[^_]+$")


@dataclass(frozen=True)
class Sentinel:
    value: str = COMPLETE_WITHOUT_CONFIRMING_INTENT


@dataclass(frozen=True)
class SetupSecret:
    value: str

    @property
    def intent_id(self) -> str:
        return intent_id_from(self.value)


@dataclass(frozen=True)
class PaymentSecret:
    value: str

    @property
    def intent_id(self) -> str:
        return intent_id_from(self.value)


ClientSecret = Union[Sentinel, SetupSecret, PaymentSecret]


def intent_id_from(secret: str) -> str:
    return secret.split("_secret_", 1)[0]


def parse_client_secret(raw: str) -> ClientSecret:
    if raw == COMPLETE_WITHOUT_CONFIRMING_INTENT:
        return Sentinel()
    if _SETUP_SECRET_RE.match(raw):
        return SetupSecret(raw)
    return PaymentSecret(raw)
