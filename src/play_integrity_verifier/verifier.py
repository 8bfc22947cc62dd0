"""
Play Integrity token verifier.

Decodes Play Integrity tokens through Google's decodeIntegrityToken endpoint
and checks that the decoded package identity matches the app the caller
expects. Cryptographic verification of the token is done by Google; the
only local trust decision is the package name cross-check.
"""

import hashlib
import logging
from typing import Optional, Dict, Any, Union

import httpx
from pydantic import ValidationError

from .auth import get_access_token
from .config import VerifierConfig
from .errors import VerificationError, VerificationErrorKind
from .models import PlayIntegrityCredentials, PlayIntegrityResponse

logger = logging.getLogger(__name__)

PAYLOAD_FIELD = "tokenPayloadExternal"

CredentialsInput = Union[PlayIntegrityCredentials, Dict[str, Any]]


class PlayIntegrityVerifier:
    """
    Verifier for Android Play Integrity tokens.

    Holds configuration only. Each verify() call builds its own credentials
    and HTTP client, so one instance can serve concurrent calls with
    different service accounts.
    """

    def __init__(self, config: Optional[VerifierConfig] = None):
        self.config = config or VerifierConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def verify(self, token: str, credentials: CredentialsInput,
                     expected_package_name: str) -> PlayIntegrityResponse:
        """
        Verify a Play Integrity token.

        Args:
            token: The integrity token produced on the device
            credentials: Service account credentials (model or key file dict)
            expected_package_name: Package name the token must have been issued for

        Returns:
            The decoded verdict payload, unchanged

        Raises:
            VerificationError: on any failure; nothing is returned partially
        """
        token_hash = self._calculate_token_hash(token or "")

        try:
            if not expected_package_name or not expected_package_name.strip():
                raise VerificationError(
                    "Expected package name is required",
                    kind=VerificationErrorKind.INVALID_INPUT,
                )

            self._log_verification_attempt(token_hash, expected_package_name)
            service_credentials = self._coerce_credentials(credentials)

            access_token = await get_access_token(service_credentials, self.config)
            decoded = await self._decode_integrity_token(token, expected_package_name, access_token)
            result = self._validate_decoded_token(decoded, expected_package_name)

        except VerificationError as e:
            self.logger.error(
                f"Verification failed - Kind: {e.kind.value}, "
                f"Token hash: {token_hash[:8]}..., "
                f"Cause: {e.cause}"
            )
            raise
        except Exception as e:
            self.logger.error(f"Unexpected verification error - Token hash: {token_hash[:8]}...",
                              exc_info=True)
            raise VerificationError(str(e) or "Unknown error") from e

        self.logger.info(
            f"Verification succeeded - Package: {expected_package_name}, "
            f"Token hash: {token_hash[:8]}..."
        )
        return result

    def _coerce_credentials(self, credentials: CredentialsInput) -> PlayIntegrityCredentials:
        if isinstance(credentials, PlayIntegrityCredentials):
            return credentials
        if isinstance(credentials, dict):
            try:
                return PlayIntegrityCredentials.from_service_account_info(credentials)
            except ValueError as e:
                raise VerificationError(str(e), kind=VerificationErrorKind.INVALID_INPUT) from e
        raise VerificationError(
            "Credentials must be PlayIntegrityCredentials or a service account dict",
            kind=VerificationErrorKind.INVALID_INPUT,
        )

    async def _decode_integrity_token(self, token: str, package_name: str,
                                      access_token: str) -> Dict[str, Any]:
        """
        Decode the integrity token using Google's API.

        Args:
            token: The Play Integrity token
            package_name: Package name used as the API path parameter
            access_token: OAuth access token

        Returns:
            Parsed JSON response body
        """
        url = self.config.decode_url(package_name)

        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json"
        }

        payload = {
            "integrityToken": token
        }

        try:
            async with httpx.AsyncClient(timeout=self.config.api_timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise VerificationError(
                f"Play Integrity API request failed: {str(e) or e.__class__.__name__}",
                kind=VerificationErrorKind.TRANSPORT,
            ) from e

        if not response.is_success:
            message = self._extract_api_error(response)
            self.logger.warning(f"Play Integrity API error: {response.status_code} - {message}")
            raise VerificationError(
                message,
                kind=VerificationErrorKind.API_ERROR,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise VerificationError(
                "Play Integrity API returned a non-JSON response",
                kind=VerificationErrorKind.INVALID_PAYLOAD,
            ) from e

    @staticmethod
    def _extract_api_error(response: httpx.Response) -> str:
        """Return the Google API error message, or the HTTP status when the body has none."""
        try:
            message = response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            message = None
        return message or f"HTTP {response.status_code}"

    def _validate_decoded_token(self, decoded_token: Any,
                                expected_package_name: str) -> PlayIntegrityResponse:
        """
        Extract the verdict payload and cross-check its package names.

        Raises:
            VerificationError: if the payload is missing, malformed, or issued
                for another package
        """
        payload = decoded_token.get(PAYLOAD_FIELD) if isinstance(decoded_token, dict) else None
        if not payload:
            raise VerificationError(
                "No payload received from Play Integrity API",
                kind=VerificationErrorKind.EMPTY_PAYLOAD,
            )

        try:
            result = PlayIntegrityResponse.model_validate(payload)
        except ValidationError as e:
            raise VerificationError(
                f"Malformed Play Integrity payload: {str(e)}",
                kind=VerificationErrorKind.INVALID_PAYLOAD,
            ) from e

        if result.app_integrity is not None:
            self._check_package_name("appIntegrity.packageName",
                                     result.app_integrity.package_name,
                                     expected_package_name)

        if result.request_details is not None:
            self._check_package_name("requestDetails.requestPackageName",
                                     result.request_details.request_package_name,
                                     expected_package_name)

        return result

    def _check_package_name(self, field: str, actual: Optional[str], expected: str):
        # Absent fields are not checked; present ones must match exactly
        if actual is None or actual == expected:
            return
        self.logger.warning(f"Package name mismatch in {field} - Expected: {expected}, Got: {actual}")
        raise VerificationError.package_mismatch(field, expected, actual)

    def _calculate_token_hash(self, token: str) -> str:
        """Calculate SHA-256 hash of token for logging."""
        return hashlib.sha256(token.encode('utf-8')).hexdigest()

    def _log_verification_attempt(self, token_hash: str, package_name: str):
        self.logger.info(
            f"Verification attempt - Package: {package_name}, "
            f"Token hash: {token_hash[:8]}..."
        )

    def get_configuration_status(self) -> Dict[str, Any]:
        """
        Get configuration status without secrets.

        Returns:
            Dictionary with configuration status details
        """
        return {
            "api_base_url": self.config.api_base_url,
            "scope": self.config.scope,
            "token_uri": self.config.token_uri,
            "api_timeout": self.config.api_timeout,
            "has_credentials_file": bool(self.config.credentials_file),
            "issues": self.config.validate_config(),
        }


async def verify_play_integrity(token: str, credentials: CredentialsInput,
                                expected_package_name: str,
                                config: Optional[VerifierConfig] = None) -> PlayIntegrityResponse:
    """Verify a Play Integrity token with a one-off verifier."""
    return await PlayIntegrityVerifier(config).verify(token, credentials, expected_package_name)
