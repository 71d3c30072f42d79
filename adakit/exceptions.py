"""adakit exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
    "AdakitError",
    "ValidationError",
    "InputContractViolation",
    "ScriptDepthError",
    "AddressError",
    "CryptoError",
    "CredentialDecodingError",
    "SerializationError",
]


class AdakitError(Exception):
    """Base exception for all adakit errors."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(AdakitError):
    """Raised when validation fails."""
    pass


class InputContractViolation(ValidationError):
    """Raised when a caller passes an argument outside the function contract."""
    pass


class ScriptDepthError(ValidationError):
    """Raised when a native script tree is nested beyond the supported depth."""

    def __init__(self, max_depth: int, message: Optional[str] = None) -> None:
        if message is None:
            message = f"Native script nesting exceeds maximum depth of {max_depth}"
        super().__init__(message)
        self.max_depth = max_depth


class AddressError(AdakitError):
    """Raised when address operation fails."""
    pass


class CryptoError(AdakitError):
    """Raised when cryptographic operation fails."""
    pass


class CredentialDecodingError(CryptoError):
    """Raised when a mnemonic or encoded private key cannot be decoded."""
    pass


class SerializationError(AdakitError):
    """Raised when serialization/deserialization fails."""
    pass
