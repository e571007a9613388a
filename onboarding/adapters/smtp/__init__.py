"""Mail adapters - Notifier implementations."""

from .console import ConsoleEmailSender
from .smtp import SMTPEmailSender

__all__ = ["ConsoleEmailSender", "SMTPEmailSender"]
