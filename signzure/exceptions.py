"""
Exceptions raised by the signzure signing helpers.

Every error is local to the call that raised it; nothing is retried.
"""


class SignzureError(Exception):
    """Base exception for signing and encoding errors."""

    def __init__(self, message: str, error_code: str = "SignzureError"):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class InvalidArgumentError(SignzureError, ValueError):
    """Raised when a required argument is empty or has an unknown value."""

    def __init__(self, message: str = "Invalid argument"):
        super().__init__(message, "InvalidArgument")


class DecodeError(SignzureError, ValueError):
    """Raised when base64 or percent-encoded input is malformed."""

    def __init__(self, message: str = "Malformed encoded input", error_code: str = "DecodeError"):
        super().__init__(message, error_code)


class InvalidTokenError(DecodeError):
    """Raised when a JWT fails structural or signature validation."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, "InvalidToken")


class UnsupportedAlgorithmError(SignzureError):
    """Raised when a digest algorithm is not recognized by the provider."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(
            f"Unknown or unsupported digest type: {algorithm}",
            "UnsupportedAlgorithm"
        )


class ProviderFailureError(SignzureError):
    """Raised when the underlying cryptographic provider fails."""

    def __init__(self, message: str = "Cryptographic provider failure"):
        super().__init__(message, "ProviderFailure")


def require(value, name: str, operation: str) -> None:
    """
    Raise InvalidArgumentError if a required argument is empty.

    Args:
        value: Argument value (str or bytes)
        name: Argument name used in the error message
        operation: Name of the calling operation

    Raises:
        InvalidArgumentError: If value is None or empty
    """
    if value is None or len(value) == 0:
        raise InvalidArgumentError(f"{operation}: {name} may not be empty")
