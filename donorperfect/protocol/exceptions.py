# ============================================================================
# SCOPE: PROTOCOL LAYER (DonorPerfect)
# Description: Exception types for DonorPerfect API operations.
# ============================================================================
"""
DonorPerfect Exceptions.

Single Responsibility: Define the error taxonomy shared by the encoder,
the request builder, the transport and the response decoder.

Every error carries a machine-readable ``error_code`` and a human-readable
``error_message``, so callers can tell "your request was rejected"
(RemoteError) apart from "the reply could not be understood" (DecodeError).
"""


class DonorPerfectError(Exception):
    """
    Base exception for DonorPerfect errors.

    Attributes:
        error_code: Machine-readable error code (e.g., REMOTE_ERROR, DECODE_ERROR)
        error_message: Human-readable error description
    """

    def __init__(self, error_code: str, error_message: str):
        self.error_code = error_code
        self.error_message = error_message
        super().__init__(f"[{error_code}] {error_message}")


class ValidationError(DonorPerfectError):
    """A value cannot be represented in the form the endpoint expects."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__("VALIDATION_ERROR", f"Validation error in '{field}': {message}")


class RequestTooLargeError(DonorPerfectError):
    """The assembled request URL exceeds the endpoint's length limit."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            "REQUEST_TOO_LARGE",
            f"The DonorPerfect API call exceeds the maximum length permitted "
            f"({length} > {limit} characters)",
        )


class TransportError(DonorPerfectError):
    """Network, timeout or HTTP status failure reported by the transport."""

    def __init__(self, message: str):
        super().__init__("TRANSPORT_ERROR", message)


class RemoteError(DonorPerfectError):
    """The endpoint itself reported a failure (error element or false/reason field)."""

    def __init__(self, message: str):
        super().__init__("REMOTE_ERROR", message)


class DecodeError(DonorPerfectError):
    """The response violates the decoder's structural invariants."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__("DECODE_ERROR", reason)
