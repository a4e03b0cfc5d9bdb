"""
Unit tests for SmtpMailTransport adapter.

smtplib is patched throughout; no network connections are made.
"""

import smtplib
import ssl
import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, Mock, patch

import pytest

from src.adapters.smtp.smtp import SmtpMailTransport
from src.config.settings import Settings


def make_transport(**overrides) -> SmtpMailTransport:
    options = {
        "host": "smtp.example.com",
        "port": 587,
        "username": "mailer@example.com",
        "password": "secret",
        "ssl_context_factory": Mock(return_value=Mock(spec=ssl.SSLContext)),
    }
    options.update(overrides)
    return SmtpMailTransport(**options)


@pytest.fixture
def smtp_class():
    with patch("src.adapters.smtp.smtp.smtplib.SMTP") as smtp:
        server = MagicMock()
        smtp.return_value = server
        server.__enter__.return_value = server
        yield smtp


class TestConfiguration:
    @pytest.mark.parametrize(("username", "password"), [(None, "secret"), ("user", None), ("", "")])
    def test_missing_credentials_fail(self, smtp_class, username, password) -> None:
        transport = make_transport(username=username, password=password)

        result = transport.send("a@x.com", "Subject", "Body")

        assert not result.ok
        assert result.reason == "SMTP credentials not configured"
        smtp_class.assert_not_called()

    def test_from_defaults_to_username(self) -> None:
        assert make_transport().from_header == "mailer@example.com"

    def test_from_header_with_display_name(self) -> None:
        transport = make_transport(from_address="noreply@example.com", from_name="RateMyLandlord")
        assert transport.from_header == "RateMyLandlord <noreply@example.com>"

    def test_from_settings(self) -> None:
        settings = Settings(
            _env_file=None,
            smtp_host="mail.example.com",
            smtp_port=2525,
            smtp_username="u",
            smtp_password="p",
            smtp_from_name="Team",
            smtp_timeout_seconds=5,
        )
        transport = SmtpMailTransport.from_settings(settings)
        assert transport.from_header == "Team <u>"


class TestSend:
    def test_sends_with_starttls_and_login(self, smtp_class) -> None:
        transport = make_transport(timeout=30.0)

        result = transport.send("a@x.com", "Your code", "Code: 123456")

        assert result.ok
        smtp_class.assert_called_once_with("smtp.example.com", 587, timeout=30.0)
        server = smtp_class.return_value
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer@example.com", "secret")
        message = server.send_message.call_args[0][0]
        assert message["To"] == "a@x.com"
        assert message["From"] == "mailer@example.com"
        assert message["Subject"] == "Your code"
        assert "Code: 123456" in message.get_content()
        assert server.send_message.call_args.kwargs["to_addrs"] == ["a@x.com"]

    def test_port_465_uses_implicit_tls(self) -> None:
        transport = make_transport(port=465)
        with patch("src.adapters.smtp.smtp.smtplib.SMTP_SSL") as smtp_ssl:
            server = MagicMock()
            smtp_ssl.return_value = server
            server.__enter__.return_value = server

            result = transport.send("a@x.com", "S", "B")

        assert result.ok
        assert smtp_ssl.call_args.args == ("smtp.example.com", 465)
        server.starttls.assert_not_called()

    def test_rejection_is_reported_not_raised(self, smtp_class) -> None:
        smtp_class.return_value.send_message.side_effect = smtplib.SMTPRecipientsRefused(
            {"a@x.com": (550, b"no such user")}
        )

        result = make_transport().send("a@x.com", "S", "B")

        assert not result.ok
        assert "a@x.com" in result.reason

    def test_auth_failure_is_reported(self, smtp_class) -> None:
        smtp_class.return_value.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad auth")

        result = make_transport().send("a@x.com", "S", "B")

        assert not result.ok
        assert "bad auth" in result.reason

    def test_timeout_is_reported(self, smtp_class) -> None:
        smtp_class.side_effect = TimeoutError("timed out")

        result = make_transport().send("a@x.com", "S", "B")

        assert not result.ok
        assert result.reason == "timed out"

    def test_header_injection_is_reported_not_raised(self, smtp_class) -> None:
        """A recipient containing a line break fails without connecting."""
        result = make_transport().send("a@x.com\nBcc: evil@y.com", "S", "B")

        assert not result.ok
        assert "linefeed" in result.reason
        smtp_class.assert_not_called()

    def test_starttls_failure_closes_connection(self, smtp_class) -> None:
        server = smtp_class.return_value
        server.starttls.side_effect = smtplib.SMTPNotSupportedError("STARTTLS extension not supported")

        result = make_transport().send("a@x.com", "S", "B")

        assert not result.ok
        server.close.assert_called_once()
        server.login.assert_not_called()


class TestLifecycle:
    def test_initializes_once(self, smtp_class) -> None:
        factory = Mock(return_value=Mock(spec=ssl.SSLContext))
        transport = make_transport(ssl_context_factory=factory)

        transport.open()
        transport.send("a@x.com", "S", "B")
        transport.send("b@x.com", "S", "B")

        factory.assert_called_once()

    def test_concurrent_first_use_initializes_once(self, smtp_class) -> None:
        calls = []
        barrier = threading.Barrier(8)

        def factory():
            calls.append(1)
            return Mock(spec=ssl.SSLContext)

        transport = make_transport(ssl_context_factory=factory)

        def first_send(i: int):
            barrier.wait()
            return transport.send(f"user{i}@x.com", "S", "B")

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(first_send, range(8)))

        assert len(calls) == 1
        assert all(r.ok for r in results)

    def test_init_failure_is_cached(self, smtp_class) -> None:
        factory = Mock(side_effect=ssl.SSLError("no certificates"))
        transport = make_transport(ssl_context_factory=factory)

        assert transport.open() is False
        first = transport.send("a@x.com", "S", "B")
        second = transport.send("a@x.com", "S", "B")

        assert not first.ok and not second.ok
        assert first.reason == second.reason
        assert "no certificates" in first.reason
        factory.assert_called_once()
        smtp_class.assert_not_called()

    def test_send_after_close_fails(self, smtp_class) -> None:
        transport = make_transport()
        transport.open()
        transport.close()

        result = transport.send("a@x.com", "S", "B")

        assert not result.ok
        assert result.reason == "mail transport closed"
        smtp_class.assert_not_called()

    def test_context_manager(self, smtp_class) -> None:
        with make_transport() as transport:
            assert transport.send("a@x.com", "S", "B").ok
        assert not transport.send("a@x.com", "S", "B").ok
