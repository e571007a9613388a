"""
SMTP email sender adapter - Implements Notifier protocol.

Sends the confirmation message as an HTML email over SMTP.
"""

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr

from onboarding.domain.notification import CONFIRMATION_SUBJECT

logger = logging.getLogger(__name__)


@dataclass
class SMTPEmailSender:
    """
    Implements Notifier protocol via smtplib.

    A new SMTP connection is opened per message; sends happen on
    dispatcher threads, so no connection is shared between them.
    """

    host: str
    port: int
    from_address: str
    from_name: str
    username: str | None = None
    password: str | None = None
    starttls: bool = True
    timeout: float = 10.0

    def send_confirmation(self, to_email: str, html_body: str) -> None:
        """
        Send the confirmation message.

        Raises:
            smtplib.SMTPException, OSError: if delivery fails
        """
        message = self._build_message(to_email, html_body)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
            if self.starttls:
                client.starttls()
            if self.username:
                client.login(self.username, self.password or "")
            client.send_message(message)

        logger.info("Confirmation mail sent via SMTP to %s", to_email)

    def _build_message(self, to_email: str, html_body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self.from_name, self.from_address), charset="utf-8")
        message["To"] = to_email
        message["Subject"] = CONFIRMATION_SUBJECT
        message.set_content(html_body, subtype="html", charset="utf-8")
        return message
