"""Command-line entry point that mails a Cybis print to the address found in it."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from pydantic import ValidationError

from .config import DEFAULT_OPERATOR_PROMPT, Settings
from .dispatcher import MailDispatcher
from .errors import ConfigError, PrintMailerError
from .models import NotFound
from .scanner import scan_file
from .sendgrid_client import SendGridClient
from .utils import resolve_display_path

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mail-print",
        description="Mail a TUTOR/CODE print to the address placed near the top of block 1-b.",
    )
    parser.add_argument("file", help="Print file to mail")
    parser.add_argument("app_path", help="Path of the invoking application (used for the diagnostic path)")
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Skip the startup wait that lets the producer finish writing the file",
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Scan the print and send it once; return the process exit code."""
    if not args.no_delay and settings.startup_delay_seconds:
        time.sleep(settings.startup_delay_seconds)

    logger.info("Mailing: %s", args.file)
    logger.info("Full path: %s", resolve_display_path(args.app_path, args.file))

    result = scan_file(
        Path(args.file),
        max_lines=settings.scan_line_limit,
        encoding=settings.print_file_encoding,
    )
    if isinstance(result, NotFound):
        logger.info(
            "No recipient address in %s (%s, %s lines read); nothing sent",
            args.file,
            result.reason,
            result.lines_read,
        )
        return 0

    logger.info("Recipient: %s", result.address)

    sender = settings.sender_config()
    client = SendGridClient(sender.api_key, base_url=settings.api_base_url)
    dispatcher = MailDispatcher(
        sender,
        client,
        subject=settings.mail_subject,
        body=settings.mail_body,
        encoding=settings.print_file_encoding,
    )
    receipt = dispatcher.dispatch(args.file, result.address)
    logger.info(
        "Sent %s to %s (message id %s)",
        receipt.attachment_name,
        receipt.recipient,
        receipt.message_id,
    )
    return 0


def echo_prompt(prompt: str) -> None:
    if prompt:
        sys.stdout.write(f"\n{prompt}")
        sys.stdout.flush()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        echo_prompt(DEFAULT_OPERATOR_PROMPT)
        raise

    try:
        settings = load_settings()
    except ConfigError as exc:
        configure_logging("INFO")
        logger.error("%s", exc)
        echo_prompt(DEFAULT_OPERATOR_PROMPT)
        return 1

    configure_logging(settings.log_level)
    try:
        return run(args, settings)
    except PrintMailerError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        echo_prompt(settings.operator_prompt)


if __name__ == "__main__":
    sys.exit(main())
