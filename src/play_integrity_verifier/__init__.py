"""
Play Integrity Verifier Package

Server-side verification of Google Play Integrity tokens. Tokens are decoded
by Google's decodeIntegrityToken endpoint using service account credentials,
then the decoded package name is checked against the expected app.

Features:
- Async verification with a fresh HTTP client per call
- Package name cross-check against token replay from other apps
- Single error type tagged with a failure kind
- Environment-driven configuration
"""

from .config import VerifierConfig, PLAY_INTEGRITY_SCOPE
from .errors import VerificationError, VerificationErrorKind
from .models import (
    PlayIntegrityCredentials,
    PlayIntegrityResponse,
    RequestDetails,
    AppIntegrity,
    DeviceIntegrity,
    AccountDetails,
    AppRecognitionVerdict,
    DeviceRecognitionVerdict,
    AppLicensingVerdict,
)
from .verifier import PlayIntegrityVerifier, verify_play_integrity

__all__ = [
    # Verification
    "PlayIntegrityVerifier",
    "verify_play_integrity",
    "VerifierConfig",
    "PLAY_INTEGRITY_SCOPE",

    # Errors
    "VerificationError",
    "VerificationErrorKind",

    # Models
    "PlayIntegrityCredentials",
    "PlayIntegrityResponse",
    "RequestDetails",
    "AppIntegrity",
    "DeviceIntegrity",
    "AccountDetails",
    "AppRecognitionVerdict",
    "DeviceRecognitionVerdict",
    "AppLicensingVerdict",
]
