"""Tests for SMTP delivery."""

import smtplib
from unittest.mock import patch

import pytest

from crossnegatives.core.config import EmailConfig
from crossnegatives.core.exceptions import EmailDeliveryError
from crossnegatives.reporting.mailer import SmtpMailer


@pytest.fixture
def config():
    return EmailConfig(
        smtp_host="smtp.example.com",
        smtp_port=2525,
        smtp_username="bot",
        smtp_password="secret",
        from_email="bot@example.com",
    )


class TestSmtpMailer:
    """Message building and delivery errors."""

    def test_send_with_attachment(self, config, tmp_path):
        attachment = tmp_path / "report.xlsx"
        attachment.write_bytes(b"xlsx")

        with patch("crossnegatives.reporting.mailer.smtplib.SMTP") as mock_smtp:
            SmtpMailer(config).send(
                ["a@example.com", "b@example.com"],
                "Report",
                "Body text",
                attachments=[attachment],
            )

        mock_smtp.assert_called_once_with("smtp.example.com", 2525, timeout=30.0)
        server = mock_smtp.return_value.__enter__.return_value
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("bot", "secret")
        msg = server.send_message.call_args.args[0]
        assert msg["Subject"] == "Report"
        assert msg["To"] == "a@example.com, b@example.com"
        assert msg["From"] == "bot@example.com"
        filenames = [part.get_filename() for part in msg.walk() if part.get_filename()]
        assert filenames == ["report.xlsx"]
        assert server.send_message.call_args.kwargs["to_addrs"] == [
            "a@example.com",
            "b@example.com",
        ]

    def test_no_tls_no_login(self, tmp_path):
        config = EmailConfig(use_tls=False)
        with patch("crossnegatives.reporting.mailer.smtplib.SMTP") as mock_smtp:
            SmtpMailer(config).send(["a@example.com"], "S", "B")
        server = mock_smtp.return_value.__enter__.return_value
        server.starttls.assert_not_called()
        server.login.assert_not_called()

    def test_smtp_failure_names_recipients(self, config):
        with patch("crossnegatives.reporting.mailer.smtplib.SMTP") as mock_smtp:
            mock_smtp.side_effect = smtplib.SMTPConnectError(421, "unavailable")
            with pytest.raises(EmailDeliveryError) as exc_info:
                SmtpMailer(config).send(["ppc@example.com"], "S", "B")

        assert exc_info.value.recipients == ["ppc@example.com"]
        assert "ppc@example.com" in str(exc_info.value)

    def test_missing_attachment(self, config, tmp_path):
        with patch("crossnegatives.reporting.mailer.smtplib.SMTP"):
            with pytest.raises(EmailDeliveryError):
                SmtpMailer(config).send(
                    ["a@example.com"], "S", "B", attachments=[tmp_path / "nope.xlsx"]
                )

    def test_no_recipients(self, config):
        with pytest.raises(EmailDeliveryError, match="no recipients"):
            SmtpMailer(config).send([], "S", "B")
