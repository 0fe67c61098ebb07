"""Tests for the exception hierarchy."""

import pytest

from crossnegatives.core.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    CrossNegativesError,
    CurrencyLookupError,
    DuplicateNegativeError,
    EmailDeliveryError,
    RateLimitError,
    SpreadsheetError,
)


@pytest.mark.parametrize(
    "exc_class",
    [
        APIError,
        AuthenticationError,
        RateLimitError,
        ConfigurationError,
        SpreadsheetError,
        CurrencyLookupError,
    ],
)
def test_inherit_from_base(exc_class):
    assert issubclass(exc_class, CrossNegativesError)


def test_platform_errors_are_api_errors():
    assert issubclass(AuthenticationError, APIError)
    assert issubclass(RateLimitError, APIError)
    assert issubclass(DuplicateNegativeError, APIError)


def test_duplicate_negative_error():
    error = DuplicateNegativeError("[shoes]", "Campaign: Brand")
    assert error.literal == "[shoes]"
    assert error.entity == "Campaign: Brand"
    assert str(error) == "Negative keyword [shoes] already exists on Campaign: Brand"


def test_email_delivery_error():
    error = EmailDeliveryError(["a@example.com", "b@example.com"], "timed out")
    assert error.recipients == ["a@example.com", "b@example.com"]
    assert error.original_error == "timed out"
    assert "a@example.com, b@example.com" in str(error)
    assert isinstance(error, CrossNegativesError)
