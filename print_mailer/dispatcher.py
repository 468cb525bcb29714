"""Turn a scanned print file into one outbound email."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from .models import DispatchReceipt, OutboundMessage, PrintAttachment, SenderConfig
from .utils import attachment_filename, encode_base64, read_print_file

logger = logging.getLogger(__name__)


class MailSender(Protocol):
    def send(self, message: OutboundMessage) -> str | None: ...


class MailDispatcher:
    """Attach the full print to a message and hand it to the provider once."""

    def __init__(
        self,
        sender: SenderConfig,
        client: MailSender,
        *,
        subject: str,
        body: str,
        encoding: str = "utf-8",
    ) -> None:
        self.sender = sender
        self.client = client
        self.subject = subject
        self.body = body
        self.encoding = encoding

    def build_message(self, path: Path | str, recipient: str) -> OutboundMessage:
        text = read_print_file(path, encoding=self.encoding)
        attachment = PrintAttachment(
            filename=attachment_filename(str(path)),
            content=encode_base64(text),
        )
        return OutboundMessage(
            from_email=self.sender.email,
            from_name=self.sender.name,
            to_email=recipient,
            subject=self.subject,
            body=self.body,
            attachment=attachment,
        )

    def dispatch(self, path: Path | str, recipient: str) -> DispatchReceipt:
        """Send ``path`` to ``recipient``; provider errors propagate unchanged."""
        message = self.build_message(path, recipient)
        logger.debug(
            "Attachment %s carries %s base64 characters",
            message.attachment.filename,
            len(message.attachment.content),
        )
        message_id = self.client.send(message)
        return DispatchReceipt(
            recipient=recipient,
            attachment_name=message.attachment.filename,
            message_id=message_id,
        )
