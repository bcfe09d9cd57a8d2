"""
Tests for the error hierarchy and error logging helpers.
"""

from unittest.mock import patch

import pytest

from ircwire.errors import (
    AlreadyConnected,
    ConnectFailure,
    DecodeFailure,
    InternalError,
    InvalidHostname,
    MalformedLine,
    log_error,
)
from ircwire.errors.handling import classify_error


class TestInternalErrors:
    def test_data_is_copied(self):
        data = {"a": 1}
        error = InternalError("msg", data=data)
        data["a"] = 2
        assert error.data == {"a": 1}
        assert str(error) == "msg"

    def test_subclasses_carry_context(self):
        error = ConnectFailure("irc.example.net", 6667, "refused")
        assert error.host == "irc.example.net"
        assert error.port == 6667
        assert error.data["cause"] == "refused"
        assert "irc.example.net:6667" in str(error)

    def test_malformed_line(self):
        error = MalformedLine("NOTICE x", "missing prefix")
        assert error.reason == "missing prefix"
        assert error.line == "NOTICE x"

    def test_invalid_hostname_default_reason(self):
        error = InvalidHostname("h:x")
        assert error.data == {"hostname": "h:x", "reason": "invalid port"}

    @pytest.mark.parametrize(
        "error",
        [
            InvalidHostname("h:x"),
            AlreadyConnected(),
            ConnectFailure("h", 1, "x"),
            MalformedLine("l", "r"),
            DecodeFailure(3, ("utf-8", "latin-1")),
        ],
    )
    def test_all_are_internal_errors(self, error):
        assert isinstance(error, InternalError)


class TestClassifyError:
    @pytest.mark.parametrize(
        ("error", "category"),
        [
            (ConnectFailure("h", 1, "x"), "network"),
            (ConnectionResetError(), "network"),
            (OSError("x"), "network"),
            (MalformedLine("l", "r"), "protocol"),
            (DecodeFailure(1, ("ascii",)), "decode"),
            (UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"), "decode"),
            (InvalidHostname("h:x"), "config"),
            (ValueError("x"), "config"),
            (AlreadyConnected(), "state"),
            (InternalError("x"), "internal"),
            (RuntimeError("x"), "unknown"),
        ],
    )
    def test_categories(self, error, category):
        assert classify_error(error) == category


class TestLogError:
    def test_merges_error_data_and_context(self):
        error = ConnectFailure("h", 7000, "refused")
        with patch("ircwire.errors.handling.log_structured_error") as mock_log:
            log_error("Connection failed", error, {"attempt": 1})
        mock_log.assert_called_once()
        kwargs = mock_log.call_args.kwargs
        assert kwargs["error_type"] == "network"
        assert kwargs["message"] == f"Connection failed: {error}"
        assert kwargs["exception"] is error
        assert kwargs["context"] == {"host": "h", "port": 7000, "cause": "refused", "attempt": 1}

    def test_plain_exception_without_context(self):
        with patch("ircwire.errors.handling.log_structured_error") as mock_log:
            log_error("Oops", RuntimeError("bad"))
        kwargs = mock_log.call_args.kwargs
        assert kwargs["error_type"] == "unknown"
        assert kwargs["context"] is None
