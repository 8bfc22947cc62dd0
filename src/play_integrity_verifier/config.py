"""
Configuration management for the Play Integrity verifier.
"""

import logging
from typing import Optional
from urllib.parse import quote

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import PlayIntegrityCredentials

logger = logging.getLogger(__name__)

PLAY_INTEGRITY_SCOPE = "https://www.googleapis.com/auth/playintegrity"
PLAY_INTEGRITY_API_BASE_URL = "https://playintegrity.googleapis.com/v1"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class VerifierConfig(BaseSettings):
    """
    Configuration for Play Integrity verification.

    Loads from PLAY_INTEGRITY_* environment variables with defaults that
    target Google's production endpoints.
    """

    model_config = SettingsConfigDict(
        env_prefix="PLAY_INTEGRITY_",
        env_file=None,
        case_sensitive=False,
        populate_by_name=True,
    )

    api_base_url: str = Field(default=PLAY_INTEGRITY_API_BASE_URL)
    scope: str = Field(default=PLAY_INTEGRITY_SCOPE)
    token_uri: str = Field(default=GOOGLE_TOKEN_URI)

    # Handed to the HTTP transport; the verifier itself never retries
    api_timeout: float = Field(default=30.0)

    credentials_file: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "PLAY_INTEGRITY_CREDENTIALS_FILE",
            "GOOGLE_APPLICATION_CREDENTIALS",
        ),
    )
    package_name: Optional[str] = Field(default=None)

    def decode_url(self, package_name: str) -> str:
        """Build the decodeIntegrityToken URL for a package."""
        base = self.api_base_url.rstrip("/")
        return f"{base}/{quote(package_name, safe='')}:decodeIntegrityToken"

    def load_credentials(self) -> PlayIntegrityCredentials:
        """
        Load service account credentials from the configured key file.

        Raises:
            ValueError: if no credentials file is configured
        """
        if not self.credentials_file:
            raise ValueError(
                "No credentials file configured; set PLAY_INTEGRITY_CREDENTIALS_FILE "
                "or GOOGLE_APPLICATION_CREDENTIALS"
            )
        return PlayIntegrityCredentials.from_service_account_file(self.credentials_file)

    def validate_config(self) -> list[str]:
        """
        Validate configuration and return list of issues.

        Returns:
            List of configuration issues (empty if valid)
        """
        issues = []

        if not self.api_base_url.startswith("https://"):
            issues.append("PLAY_INTEGRITY_API_BASE_URL must use https")
        if not self.token_uri.startswith("https://"):
            issues.append("PLAY_INTEGRITY_TOKEN_URI must use https")
        if self.scope != PLAY_INTEGRITY_SCOPE:
            issues.append(f"PLAY_INTEGRITY_SCOPE should be {PLAY_INTEGRITY_SCOPE}")
        if self.api_timeout <= 0:
            issues.append("PLAY_INTEGRITY_API_TIMEOUT must be positive")

        return issues

    def log_config_summary(self):
        """Log configuration summary for debugging."""
        logger.info(f"Play Integrity config - API: {self.api_base_url}, "
                    f"Scope: {self.scope}, "
                    f"Timeout: {self.api_timeout}s, "
                    f"Credentials file: {'configured' if self.credentials_file else 'not configured'}")
