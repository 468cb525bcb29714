"""
Unit tests for the SendGrid client wrapper.
"""

from unittest.mock import Mock, patch
from urllib.error import URLError

import pytest
from python_http_client.exceptions import HTTPError

from print_mailer.errors import ProviderError
from print_mailer.models import OutboundMessage, PrintAttachment
from print_mailer.sendgrid_client import SendGridClient


def make_message(**overrides) -> OutboundMessage:
    fields = dict(
        from_email="cybis@example.org",
        from_name="Cybis Operator",
        to_email="someone@example.com",
        subject="PLATO print",
        body="See attached file.",
        attachment=PrintAttachment(filename="report.txt", content="aGVsbG8="),
    )
    fields.update(overrides)
    return OutboundMessage(**fields)


@pytest.fixture()
def sendgrid_api():
    with patch("print_mailer.sendgrid_client.SendGridAPIClient") as api_cls:
        yield api_cls


class TestBuildMail:
    def test_mail_fields(self):
        payload = SendGridClient.build_mail(make_message()).get()

        assert payload["from"] == {"email": "cybis@example.org", "name": "Cybis Operator"}
        assert payload["subject"] == "PLATO print"
        assert payload["personalizations"][0]["to"] == [{"email": "someone@example.com"}]
        assert payload["content"] == [{"type": "text/plain", "value": "See attached file."}]
        assert payload["attachments"] == [
            {
                "content": "aGVsbG8=",
                "filename": "report.txt",
                "type": "text/plain",
                "disposition": "attachment",
            }
        ]

    def test_sender_name_omitted_when_empty(self):
        payload = SendGridClient.build_mail(make_message(from_name=None)).get()
        assert payload["from"] == {"email": "cybis@example.org"}


class TestSend:
    def test_client_built_with_key_and_host(self, sendgrid_api):
        SendGridClient("SG.test-key", base_url="https://api.sendgrid.test/")
        sendgrid_api.assert_called_once_with(api_key="SG.test-key", host="https://api.sendgrid.test")

    def test_returns_message_id(self, sendgrid_api):
        sendgrid_api.return_value.send.return_value = Mock(
            status_code=202, headers={"X-Message-Id": "abc123"}, body=b""
        )
        client = SendGridClient("SG.test-key")

        assert client.send(make_message()) == "abc123"

        sent = sendgrid_api.return_value.send.call_args[0][0].get()
        assert sent["personalizations"][0]["to"] == [{"email": "someone@example.com"}]

    def test_missing_message_id_returns_none(self, sendgrid_api):
        sendgrid_api.return_value.send.return_value = Mock(status_code=202, headers={}, body=b"")
        assert SendGridClient("SG.test-key").send(make_message()) is None

    def test_rejection_raises_provider_error(self, sendgrid_api):
        error = HTTPError(401, "Unauthorized", b'{"errors":[{"message":"denied"}]}', {})
        sendgrid_api.return_value.send.side_effect = error

        with pytest.raises(ProviderError) as excinfo:
            SendGridClient("SG.test-key").send(make_message())

        assert excinfo.value.status_code == 401
        assert "denied" in excinfo.value.body

    def test_unexpected_status_raises_provider_error(self, sendgrid_api):
        sendgrid_api.return_value.send.return_value = Mock(status_code=302, headers={}, body=b"moved")

        with pytest.raises(ProviderError) as excinfo:
            SendGridClient("SG.test-key").send(make_message())

        assert excinfo.value.status_code == 302

    def test_transport_failure_raises_provider_error(self, sendgrid_api):
        sendgrid_api.return_value.send.side_effect = URLError("connection refused")

        with pytest.raises(ProviderError, match="connection refused"):
            SendGridClient("SG.test-key").send(make_message())

        assert sendgrid_api.return_value.send.call_count == 1
