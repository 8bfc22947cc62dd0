"""
Service account authentication for the Play Integrity API.

Exchanges service account keys for a short-lived OAuth access token using
google-auth. A fresh credentials object is built on every call; nothing is
cached between calls.
"""

import asyncio
import logging

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import service_account

from .config import VerifierConfig
from .errors import VerificationError, VerificationErrorKind
from .models import PlayIntegrityCredentials

logger = logging.getLogger(__name__)


def build_service_account_credentials(credentials: PlayIntegrityCredentials,
                                      config: VerifierConfig) -> service_account.Credentials:
    """
    Build google-auth service account credentials scoped to Play Integrity only.

    Raises:
        VerificationError: if the key material cannot be loaded
    """
    info = {
        "type": "service_account",
        "client_email": credentials.client_email,
        "private_key": credentials.private_key,
        "token_uri": credentials.token_uri or config.token_uri,
    }
    try:
        return service_account.Credentials.from_service_account_info(info, scopes=[config.scope])
    except (ValueError, google_exceptions.GoogleAuthError) as e:
        raise VerificationError(
            f"Invalid service account credentials: {str(e)}",
            kind=VerificationErrorKind.AUTHENTICATION,
        ) from e


async def get_access_token(credentials: PlayIntegrityCredentials, config: VerifierConfig) -> str:
    """
    Obtain an access token for the Play Integrity API.

    The token refresh is a blocking HTTP call inside google-auth, so it runs
    in a worker thread.

    Returns:
        Bearer access token

    Raises:
        VerificationError: if the exchange fails or yields no token
    """
    sa_credentials = build_service_account_credentials(credentials, config)

    try:
        await asyncio.to_thread(sa_credentials.refresh, google_requests.Request())
    except google_exceptions.GoogleAuthError as e:
        raise VerificationError(
            f"Failed to obtain access token: {str(e)}",
            kind=VerificationErrorKind.AUTHENTICATION,
        ) from e

    if not sa_credentials.token:
        raise VerificationError(
            "Failed to obtain access token",
            kind=VerificationErrorKind.AUTHENTICATION,
        )

    logger.debug(f"Obtained Play Integrity access token for {credentials.client_email}")
    return sa_credentials.token
