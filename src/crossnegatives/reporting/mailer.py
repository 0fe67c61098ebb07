"""SMTP delivery of the run summary."""

import logging
import smtplib
from collections.abc import Sequence
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

from crossnegatives.core.config import EmailConfig
from crossnegatives.core.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


class SmtpMailer:
    """Send plain-text emails with optional file attachments."""

    def __init__(self, config: EmailConfig):
        self.config = config

    def send(
        self,
        recipients: Sequence[str],
        subject: str,
        body: str,
        attachments: Sequence[Path] = (),
    ) -> None:
        """Send an email.

        Args:
            recipients: Recipient addresses
            subject: Email subject
            body: Plain-text body
            attachments: Files attached to the message

        Raises:
            EmailDeliveryError: If the message cannot be built or delivered
        """
        recipients = list(recipients)
        if not recipients:
            raise EmailDeliveryError(recipients, "no recipients configured")

        try:
            msg = MIMEMultipart()
            msg["Subject"] = subject
            msg["From"] = self.config.from_email
            msg["To"] = ", ".join(recipients)
            msg.attach(MIMEText(body, "plain"))

            for path in attachments:
                part = MIMEApplication(Path(path).read_bytes(), Name=Path(path).name)
                part["Content-Disposition"] = (
                    f'attachment; filename="{Path(path).name}"'
                )
                msg.attach(part)

            with smtplib.SMTP(
                self.config.smtp_host, self.config.smtp_port, timeout=self.config.timeout
            ) as server:
                if self.config.use_tls:
                    server.starttls()
                if self.config.smtp_username and self.config.smtp_password:
                    server.login(
                        self.config.smtp_username,
                        self.config.smtp_password.get_secret_value(),
                    )
                server.send_message(msg, to_addrs=recipients)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {', '.join(recipients)}: {e}")
            raise EmailDeliveryError(recipients, str(e)) from e

        logger.info(f"Sent '{subject}' to {', '.join(recipients)}")
