class SaccoError(Exception):
    """Base exception for SDK errors."""

    error: str = "Request failed"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(SaccoError):
    """Required configuration is missing or unusable."""

    error = "Configuration error"

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        self.missing = missing or []
        super().__init__(message)


class ValidationError(SaccoError):
    """Input was rejected before any request was sent to Bitnob."""

    def __init__(self, message: str, error: str = "Validation failed") -> None:
        self.error = error
        super().__init__(message)


class SignatureVerificationFailed(SaccoError):
    """Webhook payload was not signed with the shared secret."""

    error = "Invalid webhook signature"


class BitnobApiError(SaccoError):
    """Bitnob answered with an error, or with a body we could not read."""

    error = "Payment provider request failed"
    retryable = False

    def __init__(self, status_code: int | None, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message

        return f"HTTP {self.status_code}: {self.message}"


class TransportError(BitnobApiError):
    """Bitnob could not be reached, timed out, or failed server-side."""

    error = "Payment provider unavailable"
    retryable = True


class RecipientValidationFailed(BitnobApiError):
    error = "Recipient validation failed"


class TransferInitiationFailed(BitnobApiError):
    error = "Transfer initiation failed"


class OtpVerificationFailed(BitnobApiError):
    error = "OTP verification failed"


class TransferFinalizationFailed(BitnobApiError):
    error = "Transfer finalization failed"


class CredentialsRejected(BitnobApiError):
    """Bitnob refused our secret key (401/403); a server-side fault, not the caller's."""

    error = "Payment provider unavailable"
