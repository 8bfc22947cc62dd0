"""
Error types raised by the Play Integrity verifier.

Every failure of a verification call surfaces as a single exception type,
VerificationError, tagged with a VerificationErrorKind.
"""

from enum import Enum
from typing import Optional

ERROR_PREFIX = "Play Integrity verification failed"


class VerificationErrorKind(Enum):
    """Category of a verification failure."""
    INVALID_INPUT = "invalid_input"
    AUTHENTICATION = "authentication"
    TRANSPORT = "transport"
    API_ERROR = "api_error"
    EMPTY_PAYLOAD = "empty_payload"
    INVALID_PAYLOAD = "invalid_payload"
    PACKAGE_MISMATCH = "package_mismatch"


class VerificationError(Exception):
    """
    Raised when a Play Integrity token cannot be trusted.

    The message always starts with ERROR_PREFIX followed by the cause text.
    Callers should treat any instance as "do not trust this install".
    """

    def __init__(self, cause: str,
                 kind: VerificationErrorKind = VerificationErrorKind.TRANSPORT,
                 status_code: Optional[int] = None,
                 expected: Optional[str] = None,
                 actual: Optional[str] = None):
        self.cause = cause
        self.kind = kind
        self.status_code = status_code
        self.expected = expected
        self.actual = actual
        super().__init__(f"{ERROR_PREFIX}: {cause}")

    @classmethod
    def package_mismatch(cls, field: str, expected: str, actual: str) -> "VerificationError":
        """Build the error for a decoded package name that differs from the expected one."""
        return cls(
            f"Package name mismatch in {field}: expected {expected}, got {actual}",
            kind=VerificationErrorKind.PACKAGE_MISMATCH,
            expected=expected,
            actual=actual,
        )

    @property
    def is_mismatch(self) -> bool:
        return self.kind == VerificationErrorKind.PACKAGE_MISMATCH

    def __repr__(self) -> str:
        return f"VerificationError(kind={self.kind.value!r}, cause={self.cause!r})"
