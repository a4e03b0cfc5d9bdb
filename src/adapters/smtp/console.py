"""
Console mail transport adapter - Implements MailTransport protocol.

This module provides a console-based implementation of the domain's
mail transport port, logging messages instead of delivering them.
Selected with MAIL_BACKEND=console for local development.
"""

import logging

from src.domain.ports import SendResult

logger = logging.getLogger(__name__)


class ConsoleMailTransport:
    """
    Implements MailTransport protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints messages to stdout.
    """

    def send(self, recipient: str, subject: str, body: str) -> SendResult:
        """
        Log the message to console (simulates email delivery).

        Logged at INFO level so the code is visible in container logs.

        Args:
            recipient: Recipient email address
            subject: Message subject line
            body: Plaintext message body

        Returns:
            Always SendResult.success()
        """
        logger.info("[MAIL] To: %s Subject: %s\n%s", recipient, subject, body)
        return SendResult.success()

    def close(self) -> None:
        """Nothing to release."""
