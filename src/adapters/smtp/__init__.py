"""Mail transport adapters - SMTP delivery and console logging."""

from .console import ConsoleMailTransport
from .smtp import SmtpMailTransport

__all__ = ["ConsoleMailTransport", "SmtpMailTransport"]
