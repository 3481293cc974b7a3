"""Custom exceptions and error handling utilities."""

import logging
from typing import Optional

import dns.exception
import dns.resolver
import sentry_sdk

from hostlookup.core.config import get_settings

logger = logging.getLogger(__name__)


class HostLookupError(Exception):
    """Base exception for hostlookup errors."""


class AddressConversionError(HostLookupError, ValueError):
    """An address could not be turned into a reverse-lookup name."""


class DecodeMismatchError(HostLookupError):
    """A resource record does not match the type that was queried."""


# Expected DNS errors that shouldn't be reported to Sentry
EXPECTED_DNS_ERRORS = (
    dns.resolver.NoAnswer,
    dns.resolver.NXDOMAIN,
    dns.exception.Timeout,
)


def capture_exception(
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "error",
) -> None:
    """
    Capture exception to Sentry if configured, otherwise log it.

    Args:
        exception: The exception to capture
        context: Additional context to include
        level: Log level ('error', 'warning', 'info')
    """
    settings = get_settings()

    log_func = getattr(logger, level, logger.error)
    log_func("%s: %s", type(exception).__name__, exception, exc_info=exception)

    if settings.sentry_enabled:
        if context:
            with sentry_sdk.new_scope() as scope:
                for key, value in context.items():
                    scope.set_extra(key, value)
                sentry_sdk.capture_exception(exception)
        else:
            sentry_sdk.capture_exception(exception)


def is_expected_dns_error(exception: BaseException) -> bool:
    """Check if exception is an expected DNS error (NXDOMAIN, NoAnswer, Timeout)."""
    return isinstance(exception, EXPECTED_DNS_ERRORS)
