"""Custom exceptions for crossnegatives."""


class CrossNegativesError(Exception):
    """Base exception for all crossnegatives errors."""

    pass


class APIError(CrossNegativesError):
    """Raised when advertising platform calls fail."""

    pass


class AuthenticationError(APIError):
    """Raised when authentication fails."""

    pass


class RateLimitError(APIError):
    """Raised when API rate limits are exceeded."""

    pass


class DuplicateNegativeError(APIError):
    """Raised when a negative keyword already exists on the target entity."""

    def __init__(self, literal: str, entity: str):
        """Initialize duplicate negative error.

        Args:
            literal: Formatted negative keyword that was rejected
            entity: Descriptor of the entity that already holds it
        """
        self.literal = literal
        self.entity = entity
        super().__init__(f"Negative keyword {literal} already exists on {entity}")


class ConfigurationError(CrossNegativesError):
    """Raised when configuration is invalid."""

    pass


class SpreadsheetError(CrossNegativesError):
    """Raised when the report workbook cannot be created or written."""

    pass


class EmailDeliveryError(CrossNegativesError):
    """Raised when the run summary email cannot be sent."""

    def __init__(self, recipients: list[str], error: str):
        """Initialize email delivery error.

        Args:
            recipients: Addresses the email was meant for
            error: Original error message
        """
        self.recipients = recipients
        self.original_error = error
        super().__init__(
            f"Failed to send the run summary to {', '.join(recipients)}: {error}"
        )


class CurrencyLookupError(CrossNegativesError):
    """Raised when a currency code or account currency cannot be resolved."""

    pass
