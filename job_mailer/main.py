"""Main entry point for the Job Mailer service."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from job_mailer import __version__
from job_mailer.api import register_exception_handlers, router
from job_mailer.api.uploads import ensure_upload_dir
from job_mailer.config.environment import EnvironmentConfig, load_environment_config
from job_mailer.config.exceptions import ConfigurationError
from job_mailer.config.models import LogFormat, LogLevel
from job_mailer.logging import get_logger
from job_mailer.logging.config import configure_logging
from job_mailer.notifications import NotificationDispatcher

logger = get_logger(__name__, component="cli")


def create_app(
    env_config: Optional[EnvironmentConfig] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        env_config: Settings (loaded from the environment if None)
        dispatcher: Notification dispatcher (built from env_config if None)

    Raises:
        ConfigurationError: If env_config is None and the environment is invalid
    """
    env_config = env_config or load_environment_config()
    ensure_upload_dir(env_config.upload_dir)

    app = FastAPI(title="Job Mailer API", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[env_config.allowed_origin],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.state.env_config = env_config
    app.state.dispatcher = dispatcher or NotificationDispatcher(env_config)

    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict:
        """Simple health probe for liveness checks."""
        return {"status": "ok"}

    return app


def main() -> int:
    """
    Run the HTTP server.

    Returns:
        Exit code (0 for clean shutdown, non-zero for failure).
    """
    parser = argparse.ArgumentParser(
        description="Job Mailer - email a job posting to every contact in a spreadsheet"
    )
    parser.add_argument("--host", default=None, help="Listen address (overrides HOST)")
    parser.add_argument("--port", type=int, default=None, help="Listen port (overrides PORT)")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=[level.value for level in LogLevel],
        help="Log level (overrides LOG_LEVEL)",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=[fmt.value for fmt in LogFormat],
        help="Log format (overrides LOG_FORMAT)",
    )
    args = parser.parse_args()

    try:
        env_config = load_environment_config()
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1

    # CLI > environment
    if args.log_level:
        env_config.log_level = args.log_level
    if args.log_format:
        env_config.log_format = args.log_format
    host = args.host or env_config.host
    port = args.port or env_config.port

    configure_logging(
        level=env_config.log_level,
        format_type=env_config.log_format,
        environment=env_config.environment,
    )

    try:
        app = create_app(env_config)
    except Exception as e:
        logger.critical(
            "Fatal error during startup",
            exc_info=True,
            extra={
                "event": "service.startup.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
        )
        return 1

    logger.info(
        f"Server running on port {port}",
        extra={
            "event": "service.starting",
            "host": host,
            "port": port,
            "allowed_origin": env_config.allowed_origin,
            "upload_dir": str(env_config.upload_dir),
        },
    )

    # log_config=None keeps uvicorn on the handlers configured above
    uvicorn.run(app, host=host, port=port, log_config=None)

    logger.info("Job Mailer stopped", extra={"event": "service.stopping"})
    return 0


if __name__ == "__main__":
    sys.exit(main())
