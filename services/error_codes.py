"""
Error codes shared by the dispatcher and services.

Usage:
    from services.error_codes import EXTERNAL_API_FAILURE
    from services.result import Result

    return Result.fail("Price API returned HTTP 503", code=EXTERNAL_API_FAILURE)
"""

# Startup
CONFIG_MISSING = "config_missing"

# Dispatch
UNKNOWN_COMMAND = "unknown_command"
RATE_LIMITED = "rate_limited"
HANDLER_ERROR = "handler_error"

# External services
EXTERNAL_API_FAILURE = "external_api_failure"
