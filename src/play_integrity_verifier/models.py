"""
Pydantic models for Play Integrity credentials and decoded verdicts.

Verdict models mirror the `tokenPayloadExternal` object returned by
Google's decodeIntegrityToken endpoint. Field names are snake_case with the
wire (camelCase) names as aliases.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Optional, List, Dict, Any, Union

from pydantic import BaseModel, ConfigDict, Field


class AppRecognitionVerdict(str, Enum):
    """Known values of appIntegrity.appRecognitionVerdict."""
    PLAY_RECOGNIZED = "PLAY_RECOGNIZED"
    UNRECOGNIZED_VERSION = "UNRECOGNIZED_VERSION"
    UNEVALUATED = "UNEVALUATED"


class DeviceRecognitionVerdict(str, Enum):
    """Known values of deviceIntegrity.deviceRecognitionVerdict."""
    MEETS_STRONG_INTEGRITY = "MEETS_STRONG_INTEGRITY"
    MEETS_DEVICE_INTEGRITY = "MEETS_DEVICE_INTEGRITY"
    MEETS_BASIC_INTEGRITY = "MEETS_BASIC_INTEGRITY"
    MEETS_VIRTUAL_INTEGRITY = "MEETS_VIRTUAL_INTEGRITY"


class AppLicensingVerdict(str, Enum):
    """Known values of accountDetails.appLicensingVerdict."""
    LICENSED = "LICENSED"
    UNLICENSED = "UNLICENSED"
    UNEVALUATED = "UNEVALUATED"


class PlayIntegrityCredentials(BaseModel):
    """Google service account credentials used to call the Play Integrity API."""

    model_config = ConfigDict(frozen=True)

    client_email: str = Field(..., description="Service account email")
    private_key: str = Field(..., repr=False, description="PEM encoded private key")
    token_uri: Optional[str] = Field(None, description="OAuth token endpoint from the key file")

    @classmethod
    def from_service_account_info(cls, info: Dict[str, Any]) -> "PlayIntegrityCredentials":
        """
        Build credentials from a parsed service account JSON document.

        Raises:
            ValueError: if client_email or private_key is missing
        """
        missing = [key for key in ("client_email", "private_key") if not info.get(key)]
        if missing:
            raise ValueError(f"Service account info is missing: {', '.join(missing)}")
        return cls(
            client_email=info["client_email"],
            private_key=info["private_key"],
            token_uri=info.get("token_uri"),
        )

    @classmethod
    def from_service_account_file(cls, path: Union[str, Path]) -> "PlayIntegrityCredentials":
        """Load credentials from a service account JSON key file."""
        with open(path, "r", encoding="utf-8") as fh:
            info = json.load(fh)
        return cls.from_service_account_info(info)


class _VerdictModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")


class RequestDetails(_VerdictModel):
    """Details about the integrity request."""

    request_package_name: Optional[str] = Field(None, alias="requestPackageName")
    timestamp_millis: Optional[Union[str, int]] = Field(None, alias="timestampMillis")
    nonce: Optional[str] = Field(None, alias="nonce")
    request_hash: Optional[str] = Field(None, alias="requestHash")


class AppIntegrity(_VerdictModel):
    """Verdict about the calling app binary."""

    app_recognition_verdict: Optional[str] = Field(None, alias="appRecognitionVerdict")
    package_name: Optional[str] = Field(None, alias="packageName")
    certificate_sha256_digest: Optional[List[str]] = Field(None, alias="certificateSha256Digest")
    version_code: Optional[Union[str, int]] = Field(None, alias="versionCode")


class DeviceIntegrity(_VerdictModel):
    device_recognition_verdict: Optional[List[str]] = Field(None, alias="deviceRecognitionVerdict")


class AccountDetails(_VerdictModel):
    app_licensing_verdict: Optional[str] = Field(None, alias="appLicensingVerdict")


class PlayIntegrityResponse(_VerdictModel):
    """
    Decoded Play Integrity verdict.

    Every group is optional: Google omits groups depending on the token and
    the app's Play Console configuration. Unknown fields are kept as extras,
    so to_payload() reproduces the payload as received.
    """

    request_details: Optional[RequestDetails] = Field(None, alias="requestDetails")
    app_integrity: Optional[AppIntegrity] = Field(None, alias="appIntegrity")
    device_integrity: Optional[DeviceIntegrity] = Field(None, alias="deviceIntegrity")
    account_details: Optional[AccountDetails] = Field(None, alias="accountDetails")

    @property
    def is_play_recognized(self) -> bool:
        """True if Google Play recognises the app binary."""
        if self.app_integrity is None:
            return False
        return self.app_integrity.app_recognition_verdict == AppRecognitionVerdict.PLAY_RECOGNIZED.value

    @property
    def meets_device_integrity(self) -> bool:
        """True if the device reported MEETS_DEVICE_INTEGRITY."""
        if self.device_integrity is None or not self.device_integrity.device_recognition_verdict:
            return False
        return DeviceRecognitionVerdict.MEETS_DEVICE_INTEGRITY.value in self.device_integrity.device_recognition_verdict

    def to_payload(self) -> Dict[str, Any]:
        """Dump back to the wire representation."""
        return self.model_dump(by_alias=True, exclude_unset=True)
