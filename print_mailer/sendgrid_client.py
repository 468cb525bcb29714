"""SendGrid mail sender."""

from __future__ import annotations

import logging

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import (
    Attachment,
    Disposition,
    FileContent,
    FileName,
    FileType,
    From,
    Mail,
    To,
)

from .errors import ProviderError
from .models import OutboundMessage

logger = logging.getLogger(__name__)


def _decode_body(body) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body or ""


class SendGridClient:
    """Send single messages through the SendGrid v3 API."""

    DEFAULT_BASE_URL = "https://api.sendgrid.com"

    def __init__(self, api_key: str, *, base_url: str = DEFAULT_BASE_URL) -> None:
        self.api = SendGridAPIClient(api_key=api_key, host=base_url.rstrip("/"))

    def send(self, message: OutboundMessage) -> str | None:
        """Send one message and return SendGrid's message id (if provided)."""
        mail = self.build_mail(message)

        logger.info("Sending '%s' to %s via SendGrid", message.subject, message.to_email)
        try:
            response = self.api.send(mail)
        except HTTPError as exc:
            body = _decode_body(exc.body)
            logger.error("SendGrid send failed (%s): %s", exc.status_code, body)
            raise ProviderError(
                f"SendGrid rejected the message with status {exc.status_code}",
                status_code=exc.status_code,
                body=body,
            ) from exc
        except OSError as exc:
            logger.error("SendGrid request failed: %s", exc)
            raise ProviderError(f"SendGrid request failed: {exc}") from exc

        if response.status_code >= 300:
            body = _decode_body(response.body)
            logger.error("SendGrid send failed (%s): %s", response.status_code, body)
            raise ProviderError(
                f"SendGrid rejected the message with status {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        message_id = (response.headers or {}).get("X-Message-Id")
        if message_id is None:
            logger.warning("SendGrid accepted the message without returning a message id")
        return message_id

    @staticmethod
    def build_mail(message: OutboundMessage) -> Mail:
        mail = Mail(
            from_email=From(message.from_email, message.from_name),
            to_emails=To(message.to_email),
            subject=message.subject,
            plain_text_content=message.body,
        )
        attachment = message.attachment
        mail.add_attachment(
            Attachment(
                FileContent(attachment.content),
                FileName(attachment.filename),
                FileType(attachment.content_type),
                Disposition("attachment"),
            )
        )
        return mail
