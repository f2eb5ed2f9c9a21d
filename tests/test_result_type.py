"""Tests for the Result type and error codes."""

from services import error_codes
from services.result import Result


def test_ok_without_value():
    result = Result.ok()
    assert result.success is True
    assert result.value is None
    assert result.error is None
    assert bool(result) is True


def test_ok_with_value():
    result = Result.ok("2500.12")
    assert result.value == "2500.12"
    assert str(result) == "ok('2500.12')"


def test_fail_carries_message_and_code():
    result = Result.fail("HTTP 500", code=error_codes.EXTERNAL_API_FAILURE)
    assert result.success is False
    assert bool(result) is False
    assert result.error == "HTTP 500"
    assert result.error_code == "external_api_failure"
    assert str(result) == "[external_api_failure] HTTP 500"


def test_fail_defaults_to_handler_error():
    result = Result.fail("Could not deliver reply")
    assert result.error_code == error_codes.HANDLER_ERROR


def test_error_codes_are_distinct():
    codes = [
        error_codes.CONFIG_MISSING,
        error_codes.UNKNOWN_COMMAND,
        error_codes.RATE_LIMITED,
        error_codes.HANDLER_ERROR,
        error_codes.EXTERNAL_API_FAILURE,
    ]
    assert len(set(codes)) == len(codes)
