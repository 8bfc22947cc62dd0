#!/usr/bin/env python3
"""
Example verification of a Play Integrity token.

Reads the token from PLAY_INTEGRITY_TOKEN, the expected package name from
PLAY_INTEGRITY_PACKAGE_NAME and the service account key file from
PLAY_INTEGRITY_CREDENTIALS_FILE (or GOOGLE_APPLICATION_CREDENTIALS), then
prints the decoded verdicts.
"""

import asyncio
import logging
import os
import sys

from play_integrity_verifier import (
    VerificationError,
    VerifierConfig,
    verify_play_integrity,
)

HINTS = {
    "INVALID_ARGUMENT": "Check that your token is valid and not expired",
    "PERMISSION_DENIED": "Check your service account permissions",
    "QUOTA_EXCEEDED": "API quota exceeded, try again later",
}


async def demo_verification() -> int:
    """Run one verification and print the result."""
    config = VerifierConfig()
    for issue in config.validate_config():
        print(f"⚠️  Config issue: {issue}")

    token = os.environ.get("PLAY_INTEGRITY_TOKEN")
    if not token or not config.package_name:
        print("Set PLAY_INTEGRITY_TOKEN and PLAY_INTEGRITY_PACKAGE_NAME to run this example")
        return 2

    try:
        credentials = config.load_credentials()
    except (ValueError, OSError) as e:
        print(f"❌ Could not load credentials: {e}")
        return 2

    print("Verifying Play Integrity token...")
    try:
        result = await verify_play_integrity(token, credentials, config.package_name, config)
    except VerificationError as e:
        print(f"❌ {e}")
        for marker, hint in HINTS.items():
            if marker in e.cause:
                print(f"💡 {hint}")
        return 1

    print("✅ Verification successful!")

    request_details = result.request_details
    if request_details:
        print("\n📱 Request Details:")
        print(f"  Package: {request_details.request_package_name}")
        print(f"  Timestamp: {request_details.timestamp_millis}")
        print(f"  Nonce: {request_details.nonce}")

    app_integrity = result.app_integrity
    if app_integrity:
        print("\n🔐 App Integrity:")
        print(f"  Verdict: {app_integrity.app_recognition_verdict}")
        print(f"  Package: {app_integrity.package_name}")
        print(f"  Version: {app_integrity.version_code}")

    device_integrity = result.device_integrity
    if device_integrity:
        print("\n📱 Device Integrity:")
        print(f"  Verdict: {', '.join(device_integrity.device_recognition_verdict or [])}")

    account_details = result.account_details
    if account_details:
        print("\n📄 Account Details:")
        print(f"  Licensing: {account_details.app_licensing_verdict}")

    if result.is_play_recognized and result.meets_device_integrity:
        print("\n✅ App and device are legitimate!")
    else:
        print("\n⚠️  Warning: App or device may not be legitimate")
        if not result.is_play_recognized:
            print("   - App not recognized by Play Store")
        if not result.meets_device_integrity:
            print("   - Device integrity check failed")

    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    sys.exit(asyncio.run(demo_verification()))
