"""
SMTP mail transport adapter - Implements MailTransport protocol.

Sends plaintext verification emails over SMTP with TLS required:
implicit TLS on port 465, STARTTLS on any other port.

Lifecycle
---------
The transport owns one shared TLS context created on first use (or by
an explicit open()). Initialization runs at most once per instance; if
it fails, the error is cached and every later send() reports it until
the process restarts. close() releases the context at shutdown.

Delivery problems (missing credentials, connection errors, timeouts,
rejections) are returned as SendResult failures, never raised.
"""

import logging
import smtplib
import ssl
import threading
from collections.abc import Callable
from email.message import EmailMessage
from email.utils import formataddr

from src.config.settings import Settings
from src.domain.ports import SendResult

logger = logging.getLogger(__name__)

IMPLICIT_TLS_PORT = 465


class SmtpMailTransport:
    """
    Implements MailTransport protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Safe to share between worker threads; each send() opens its own
    SMTP connection.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str | None,
        password: str | None,
        from_address: str | None = None,
        from_name: str | None = None,
        timeout: float = 30.0,
        ssl_context_factory: Callable[[], ssl.SSLContext] = ssl.create_default_context,
    ) -> None:
        """
        Initialize transport configuration. No network activity happens here.

        Args:
            host: SMTP server host
            port: SMTP server port (465 selects implicit TLS)
            username: SMTP login (mandatory for sending)
            password: SMTP password (mandatory for sending)
            from_address: Envelope and header sender, defaults to username
            from_name: Optional display name for the From header
            timeout: Per-connection timeout in seconds
            ssl_context_factory: Builds the shared TLS context on first use
        """
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_address = from_address or username
        self._from_name = from_name
        self._timeout = timeout
        self._ssl_context_factory = ssl_context_factory

        self._init_lock = threading.Lock()
        self._initialized = False
        self._init_error: str | None = None
        self._ssl_context: ssl.SSLContext | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailTransport":
        """Build a transport from application settings."""
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            from_address=settings.smtp_from,
            from_name=settings.smtp_from_name,
            timeout=settings.smtp_timeout_seconds,
        )

    @property
    def from_header(self) -> str:
        if self._from_name:
            return formataddr((self._from_name, self._from_address or ""))
        return self._from_address or ""

    def open(self) -> bool:
        """
        Run one-time initialization.

        Concurrent callers block until the first one finishes. A failure
        is cached and never retried.

        Returns:
            True if the transport is usable
        """
        with self._init_lock:
            if not self._initialized:
                self._initialized = True
                try:
                    self._ssl_context = self._ssl_context_factory()
                except OSError as e:
                    self._init_error = str(e) or "failed to initialize mail transport"
                    logger.error("Mail transport initialization failed: %s", self._init_error)
            return self._ssl_context is not None

    def close(self) -> None:
        """Release the shared TLS context. Later sends fail."""
        with self._init_lock:
            self._initialized = True
            self._ssl_context = None
            if self._init_error is None:
                self._init_error = "mail transport closed"
        logger.info("Mail transport closed")

    def __enter__(self) -> "SmtpMailTransport":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def send(self, recipient: str, subject: str, body: str) -> SendResult:
        """
        Deliver a plaintext message, blocking until accepted, rejected or timed out.

        Returns:
            SendResult.success() or SendResult.failure(reason)
        """
        if not self._username or not self._password:
            return SendResult.failure("SMTP credentials not configured")

        if not self.open():
            return SendResult.failure(self._init_error or "failed to initialize mail transport")

        try:
            # Header values containing CR/LF raise ValueError.
            message = EmailMessage()
            message["To"] = recipient
            message["From"] = self.from_header
            message["Subject"] = subject
            message.set_content(body, charset="utf-8")

            with self._connect() as server:
                server.login(self._username, self._password)
                server.send_message(message, from_addr=self._from_address, to_addrs=[recipient])
        except (smtplib.SMTPException, OSError, ValueError) as e:
            return SendResult.failure(str(e) or e.__class__.__name__)

        return SendResult.success()

    def _connect(self) -> smtplib.SMTP:
        if self._port == IMPLICIT_TLS_PORT:
            return smtplib.SMTP_SSL(
                self._host, self._port, timeout=self._timeout, context=self._ssl_context
            )
        server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
        try:
            server.starttls(context=self._ssl_context)
        except (smtplib.SMTPException, OSError):
            server.close()
            raise
        return server
