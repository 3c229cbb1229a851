import httpx
import stripe

from walletpay.errors import PaymentIntentInvalidState, map_error


def test_wallet_payment_error_maps_to_unknown():
    error = map_error(PaymentIntentInvalidState())
    assert error.code == "unknown"
    assert error.message == "The PaymentIntent is in a state that cannot be completed."
    assert error.contact_field is None


def test_shipping_param_maps_to_shipping_contact():
    error = map_error(stripe.InvalidRequestError("Invalid postal code", "shipping[address][postal_code]"))
    assert error.code == "shipping_contact_invalid"
    assert error.contact_field == "postal_address"
    assert error.message == "Invalid postal code"


def test_billing_param_maps_to_billing_contact():
    error = map_error(stripe.InvalidRequestError("Invalid phone", "billing_details[phone]"))
    assert error.code == "billing_contact_invalid"
    assert error.contact_field == "phone_number"


def test_card_error_keeps_user_message():
    error = map_error(stripe.CardError("Your card has expired.", "exp_month", "expired_card"))
    assert error.code == "unknown"
    assert error.message == "Your card has expired."


def test_plain_exception_gets_generic_message():
    assert map_error(TimeoutError()).message == "The payment could not be completed."


def test_backend_error_detail_not_shown_to_wallet():
    url = "https://internal-merchant.local/payments"
    response = httpx.Response(503, request=httpx.Request("POST", url))
    exc = httpx.HTTPStatusError("Server error for url " + url, request=response.request, response=response)

    error = map_error(exc)

    assert error.code == "unknown"
    assert error.message == "The payment could not be completed."
    assert "internal-merchant" not in error.message
