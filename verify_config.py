#!/usr/bin/env python3
"""Simple script to verify a .env file before starting the server."""

import sys
from pathlib import Path

from dotenv import dotenv_values

REQUIRED_KEYS = ["SMTP_USER", "SMTP_PASS"]
INTEGER_KEYS = ["SMTP_PORT", "PORT"]
KNOWN_KEYS = REQUIRED_KEYS + INTEGER_KEYS + [
    "SMTP_HOST",
    "SMTP_SENDER_NAME",
    "SMTP_USE_TLS",
    "SMTP_TIMEOUT",
    "HOST",
    "ALLOWED_ORIGIN",
    "UPLOAD_DIR",
    "APPLY_BASE_URL",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "ENVIRONMENT",
]


def verify_env_file(env_file: Path) -> bool:
    """Verify the env file defines the settings the server needs."""
    if not env_file.exists():
        print(f"✗ {env_file} not found (copy .env.example to get started)")
        return False

    values = dotenv_values(env_file)
    errors = []
    warnings = []

    for key in REQUIRED_KEYS:
        if not (values.get(key) or "").strip():
            errors.append(f"Missing required key: {key}")

    for key in INTEGER_KEYS:
        raw = values.get(key)
        if raw and not raw.strip().isdigit():
            errors.append(f"'{key}' must be an integer, got {raw!r}")

    if "@" not in (values.get("SMTP_USER") or "@"):
        errors.append("SMTP_USER must be an email address (it is used as the sender)")

    origin = values.get("ALLOWED_ORIGIN")
    if origin and not origin.startswith(("http://", "https://")):
        errors.append(f"ALLOWED_ORIGIN must start with http:// or https://, got {origin!r}")

    for key in values:
        if key not in KNOWN_KEYS:
            warnings.append(f"Unknown key (ignored by the server): {key}")

    for warning in warnings:
        print(f"! {warning}")

    if errors:
        print(f"✗ {env_file} validation failed:")
        for error in errors:
            print(f"  - {error}")
        return False

    print(f"✓ {env_file} is valid")
    print(f"  - SMTP server: {values.get('SMTP_HOST') or 'smtp.gmail.com'}:{values.get('SMTP_PORT') or 587}")
    print(f"  - Sender: {values.get('SMTP_SENDER_NAME') or 'Careervalore'} <{values['SMTP_USER']}>")
    print(f"  - Allowed origin: {origin or 'default'}")
    print(f"  - Upload directory: {values.get('UPLOAD_DIR') or './uploads'}")
    return True


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(".env")
    success = verify_env_file(path)
    sys.exit(0 if success else 1)
