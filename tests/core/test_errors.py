"""Error Hierarchy — status codes, categories and response bodies."""

import pytest

from storefront.core.errors import (
    GENERIC_CHECKOUT_FAILURE,
    CheckoutFailedError,
    ClientInputError,
    ConfigurationError,
    EmptyCartError,
    ErrorCategory,
    FeatureDisabledError,
    MethodNotAllowedError,
    MissingCredentialError,
    PaymentProviderError,
    StorefrontError,
    UnresolvableDomainError,
    UpstreamError,
)


@pytest.mark.parametrize(
    "error, status, parent",
    [
        (EmptyCartError(), 400, ClientInputError),
        (MethodNotAllowedError("GET"), 405, ClientInputError),
        (MissingCredentialError(), 500, ConfigurationError),
        (UnresolvableDomainError(), 500, ConfigurationError),
        (PaymentProviderError("boom"), 500, UpstreamError),
        (FeatureDisabledError(), 503, StorefrontError),
        (CheckoutFailedError(), 500, StorefrontError),
    ],
)
def test_status_and_parent(error, status, parent):
    assert error.http_status == status
    assert isinstance(error, parent)


def test_client_messages_are_verbatim():
    assert EmptyCartError().to_response() == {"error": "Cart is empty."}
    assert MethodNotAllowedError().to_response() == {"error": "Method Not Allowed"}
    assert FeatureDisabledError().to_response() == {
        "error": "Checkout is temporarily disabled.",
    }


def test_missing_credential_names_the_setting():
    body = MissingCredentialError().to_response()
    assert "STRIPE_SECRET_KEY" in body["error"]
    assert MissingCredentialError().category is ErrorCategory.CONFIGURATION


def test_provider_error_exposes_only_classification():
    error = PaymentProviderError(
        "Your card was declined (internal detail)",
        provider_type="card_error", provider_code="card_declined",
    )
    assert error.to_response() == {
        "error": GENERIC_CHECKOUT_FAILURE,
        "type": "card_error",
        "code": "card_declined",
    }


def test_provider_error_without_classification_is_generic():
    assert PaymentProviderError("x").to_response() == {"error": GENERIC_CHECKOUT_FAILURE}
