"""
Console email sender adapter - Implements Notifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging confirmation messages for development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements Notifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - the confirmation link shows up in the logs.
    """

    def send_confirmation(self, to_email: str, html_body: str) -> None:
        """
        Log the confirmation message (simulates email delivery).

        Args:
            to_email: Recipient email address
            html_body: HTML body with the activation link
        """
        logger.info("[CONFIRMATION] Email: %s Body: %s", to_email, html_body)
