"""Typed containers shared across the mailer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union


@dataclass(frozen=True)
class Found:
    """The scanner located a recipient address."""

    address: str
    line_number: int


@dataclass(frozen=True)
class NotFound:
    """The scanner gave up without an address."""

    reason: Literal["marker-missing", "address-missing"]
    lines_read: int


ScanResult = Union[Found, NotFound]


@dataclass(frozen=True)
class SenderConfig:
    """Credentials and identity used for outbound mail."""

    api_key: str
    email: str
    name: str


@dataclass
class PrintAttachment:
    """Base64 payload of the print file plus its sanitised name."""

    filename: str
    content: str
    content_type: str = "text/plain"


@dataclass
class OutboundMessage:
    """A single plain-text email carrying one attachment."""

    from_email: str
    from_name: Optional[str]
    to_email: str
    subject: str
    body: str
    attachment: PrintAttachment


@dataclass
class DispatchReceipt:
    """What was handed to the provider."""

    recipient: str
    attachment_name: str
    message_id: Optional[str]
