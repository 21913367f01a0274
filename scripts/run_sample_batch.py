#!/usr/bin/env python3
"""Sample batch harness for end-to-end validation.

This script runs the same steps as POST /api/send-emails against a local
spreadsheet and job file, without starting the HTTP server. It can operate
in two modes:

1. Dry-run mode (default): SMTP delivery is stubbed out, nothing is sent
2. Real send mode: messages go to the configured SMTP server

Usage:
    # Dry run (no email leaves the machine)
    python scripts/run_sample_batch.py --spreadsheet contacts.xlsx --job job.json

    # Really send (requires SMTP_USER / SMTP_PASS)
    SAMPLE_BATCH_REAL_SEND=1 python scripts/run_sample_batch.py --spreadsheet contacts.xlsx --job job.json
"""

import argparse
import asyncio
import os
import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from job_mailer.api.validation import parse_job_payload
from job_mailer.config.environment import EnvironmentConfig, load_environment_config
from job_mailer.config.exceptions import ConfigurationError
from job_mailer.domain.exceptions import RequestRejectedError
from job_mailer.logging.config import configure_logging
from job_mailer.notifications import NotificationDispatcher
from job_mailer.recipients import is_supported_spreadsheet, read_first_sheet, recipients_from_table


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_results_table(results):
    """Print one line per recipient followed by totals."""
    print_header("Batch Results")

    width = max([len(r.email) for r in results] + [len("Email")])

    print("┌" + "─" * (width + 2) + "┬" + "─" * 10 + "┬" + "─" * 42 + "┐")
    print(f"│ {'Email':<{width}} │ {'Status':<8} │ {'Error':<40} │")
    print("├" + "─" * (width + 2) + "┼" + "─" * 10 + "┼" + "─" * 42 + "┤")

    for result in results:
        error = (result.error or "")[:40]
        print(f"│ {result.email:<{width}} │ {result.status:<8} │ {error:<40} │")

    print("└" + "─" * (width + 2) + "┴" + "─" * 10 + "┴" + "─" * 42 + "┘")

    sent = sum(1 for r in results if r.is_success())
    print(f"\nSent: {sent}  Failed: {len(results) - sent}  Total: {len(results)}")


def dry_run_config() -> EnvironmentConfig:
    """Settings for dry runs when no SMTP credentials are configured."""
    return EnvironmentConfig(smtp_user="dry-run@example.com", smtp_pass="dry-run")


def main():
    """Main entry point for the sample batch harness."""
    parser = argparse.ArgumentParser(
        description="Run a sample notification batch for end-to-end validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--spreadsheet", type=Path, required=True, help="Path to .xlsx/.xls contacts file")
    parser.add_argument("--job", type=Path, required=True, help="Path to the job posting JSON file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: INFO)",
    )

    args = parser.parse_args()

    load_dotenv()

    real_send = os.environ.get("SAMPLE_BATCH_REAL_SEND", "0") == "1"

    print_header("Job Mailer - Sample Batch Harness")

    print(f"Spreadsheet: {args.spreadsheet}")
    print(f"Job file: {args.job}")
    print(f"Log level: {args.log_level}")

    if real_send:
        print(f"\n⚠️  REAL SEND MODE ENABLED")
        print(f"   Every valid recipient in the spreadsheet will receive an email.")
        response = input("\nContinue? [y/N]: ")
        if response.lower() != "y":
            print("Aborted.")
            return 1
    else:
        print(f"\nDry-run mode (SMTP delivery is stubbed, no email will be sent)")

    for path in (args.spreadsheet, args.job):
        if not path.exists():
            print(f"\n❌ Error: File not found: {path}")
            return 1

    try:
        env_config = load_environment_config()
    except ConfigurationError as e:
        if real_send:
            print(f"\n❌ Configuration Error: {e}")
            return 1
        env_config = dry_run_config()

    configure_logging(level=args.log_level, format_type=env_config.log_format, environment="validation")

    try:
        print("\n📋 Validating inputs...")
        if not is_supported_spreadsheet(args.spreadsheet.name):
            print(f"\n❌ Error: Only .xlsx and .xls files are supported: {args.spreadsheet}")
            return 1
        job = parse_job_payload(args.job.read_text(encoding="utf-8"))
        print(f"✓ Job: {job.title}" + (f" at {job.company}" if job.company else ""))

        recipients = recipients_from_table(read_first_sheet(args.spreadsheet))
        print(f"✓ {len(recipients)} recipients found")

        dispatcher = NotificationDispatcher(env_config)

        print("\n🚀 Dispatching notifications...")
        print(f"   Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

        if real_send:
            results = asyncio.run(dispatcher.dispatch(job, recipients))
        else:
            with patch("job_mailer.notifications.smtp_client.SMTPClient.send") as mock_send:
                mock_send.return_value = None
                results = asyncio.run(dispatcher.dispatch(job, recipients))

        print(f"   Completed at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

        print_results_table(results)

        return 0 if all(r.is_success() for r in results) else 1

    except RequestRejectedError as e:
        print(f"\n❌ Rejected ({e.code}): {e.message}")
        return 1
    except Exception as e:
        print(f"\n❌ Fatal error: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
