"""Environment variable loading and validation."""

import os
from pathlib import Path
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email

from .exceptions import ConfigurationError
from .models import LogFormat, LogLevel

DEFAULT_SMTP_HOST = "smtp.gmail.com"
DEFAULT_SMTP_PORT = 587
DEFAULT_SENDER_NAME = "Careervalore"
DEFAULT_ALLOWED_ORIGIN = "https://mailingservices-fe-qu5a.vercel.app"
DEFAULT_APPLY_BASE_URL = "https://www.careervalore.com/"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        smtp_user: str,
        smtp_pass: str,
        smtp_host: str = DEFAULT_SMTP_HOST,
        smtp_port: int = DEFAULT_SMTP_PORT,
        smtp_sender_name: Optional[str] = None,
        smtp_use_tls: bool = True,
        smtp_timeout: float = 30.0,
        host: str = "0.0.0.0",
        port: int = 3001,
        allowed_origin: str = DEFAULT_ALLOWED_ORIGIN,
        upload_dir: Optional[Path] = None,
        apply_base_url: str = DEFAULT_APPLY_BASE_URL,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.smtp_user = smtp_user
        self.smtp_pass = smtp_pass
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_sender_name = smtp_sender_name or DEFAULT_SENDER_NAME
        self.smtp_use_tls = smtp_use_tls
        self.smtp_timeout = smtp_timeout
        self.host = host
        self.port = port
        self.allowed_origin = allowed_origin
        self.upload_dir = Path(upload_dir) if upload_dir else Path("./uploads")
        self.apply_base_url = apply_base_url
        self.log_level = (log_level or LogLevel.INFO.value).upper()
        self.log_format = log_format or LogFormat.KEY_VALUE.value
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Required environment variables:
    - SMTP_USER: SMTP login, also used as the sender address
    - SMTP_PASS: SMTP password (an app password for Gmail)

    Optional environment variables:
    - SMTP_HOST, SMTP_PORT: mail server (default smtp.gmail.com:587)
    - SMTP_SENDER_NAME: display name for the sender
    - SMTP_USE_TLS: STARTTLS on non-465 ports (default true)
    - SMTP_TIMEOUT: per-connection timeout in seconds (default 30)
    - HOST, PORT: listening address (default 0.0.0.0:3001)
    - ALLOWED_ORIGIN: the single origin allowed by CORS
    - UPLOAD_DIR: transient storage for uploaded spreadsheets
    - APPLY_BASE_URL: prefix of the "Apply Now" link
    - LOG_LEVEL, LOG_FORMAT, ENVIRONMENT: logging setup

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    errors: List[str] = []

    smtp_user = os.getenv("SMTP_USER")
    smtp_pass = os.getenv("SMTP_PASS")

    if not smtp_user:
        errors.append("Missing required environment variable: SMTP_USER")
    else:
        try:
            smtp_user = validate_email(smtp_user, check_deliverability=False).normalized
        except EmailNotValidError as e:
            errors.append(f"Invalid email address in SMTP_USER: '{smtp_user}' - {e}")

    if not smtp_pass:
        errors.append("Missing required environment variable: SMTP_PASS")

    smtp_port = _parse_port("SMTP_PORT", DEFAULT_SMTP_PORT, errors)
    port = _parse_port("PORT", 3001, errors)

    smtp_timeout_str = os.getenv("SMTP_TIMEOUT", "30")
    smtp_timeout = 30.0
    try:
        smtp_timeout = float(smtp_timeout_str)
        if smtp_timeout <= 0:
            errors.append(f"Invalid SMTP_TIMEOUT: {smtp_timeout_str}. Must be positive.")
    except ValueError:
        errors.append(f"Invalid SMTP_TIMEOUT: '{smtp_timeout_str}'. Must be a number.")

    smtp_use_tls = True
    use_tls_str = os.getenv("SMTP_USE_TLS")
    if use_tls_str:
        lowered = use_tls_str.strip().lower()
        if lowered in _TRUE_VALUES:
            smtp_use_tls = True
        elif lowered in _FALSE_VALUES:
            smtp_use_tls = False
        else:
            errors.append(f"Invalid SMTP_USE_TLS: '{use_tls_str}'. Use true or false.")

    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        valid_levels = [level.value for level in LogLevel]
        if log_level.upper() not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )

    log_format = os.getenv("LOG_FORMAT")
    if log_format:
        valid_formats = [fmt.value for fmt in LogFormat]
        if log_format not in valid_formats:
            errors.append(
                f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(valid_formats)}"
            )

    allowed_origin = os.getenv("ALLOWED_ORIGIN", DEFAULT_ALLOWED_ORIGIN).strip()
    if not allowed_origin.startswith(("http://", "https://")):
        errors.append(f"Invalid ALLOWED_ORIGIN: '{allowed_origin}'. Must be an http(s) origin.")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Ensure SMTP_USER and SMTP_PASS are set",
                "Verify ports are numbers between 1 and 65535",
            ],
        )

    return EnvironmentConfig(
        smtp_user=smtp_user,
        smtp_pass=smtp_pass,
        smtp_host=os.getenv("SMTP_HOST") or DEFAULT_SMTP_HOST,
        smtp_port=smtp_port,
        smtp_sender_name=os.getenv("SMTP_SENDER_NAME"),
        smtp_use_tls=smtp_use_tls,
        smtp_timeout=smtp_timeout,
        host=os.getenv("HOST") or "0.0.0.0",
        port=port,
        allowed_origin=allowed_origin,
        upload_dir=os.getenv("UPLOAD_DIR"),
        apply_base_url=os.getenv("APPLY_BASE_URL") or DEFAULT_APPLY_BASE_URL,
        log_level=log_level,
        log_format=log_format,
        environment=os.getenv("ENVIRONMENT"),
    )


def _parse_port(name: str, default: int, errors: List[str]) -> int:
    """Read a port variable, appending to ``errors`` instead of raising."""
    raw = os.getenv(name)
    if not raw:
        return default

    try:
        port = int(raw)
    except ValueError:
        errors.append(f"Invalid {name}: '{raw}'. Must be a valid integer.")
        return default

    if port < 1 or port > 65535:
        errors.append(f"Invalid {name}: {port}. Must be between 1 and 65535.")
    return port
