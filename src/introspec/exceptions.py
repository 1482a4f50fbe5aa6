"""Exception hierarchy for introspec.

All exceptions inherit from :class:`IntrospecError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`introspec.exit_codes`.
The top-level error handler in :func:`introspec.app.main` catches
``IntrospecError`` and exits with the appropriate code.

Missing metadata is never signalled with an exception: enrichers return
``None`` and managers leave the field unset. Only misconfiguration (a
required collaborator that is absent) is escalated.

Subclass hierarchy::

    IntrospecError (exit 1)
    +-- InvalidUsageError        (exit 2)
    +-- ArgumentValidationError  (exit 2, also ValueError)
    +-- HostLoadError            (exit 4)
    +-- ConfigError              (exit 1)
"""

from typing import Optional, TypeVar

from introspec.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_HOST_LOAD_ERROR,
    EXIT_INVALID_USAGE,
)


T = TypeVar("T")


class IntrospecError(Exception):
    """Base exception for all introspec errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(IntrospecError):
    """Raised for invalid CLI arguments (unknown setting key, bad value)."""

    exit_code = EXIT_INVALID_USAGE


class ArgumentValidationError(IntrospecError, ValueError):
    """Raised at construction time when a required collaborator is missing."""

    exit_code = EXIT_INVALID_USAGE


class HostLoadError(IntrospecError):
    """Raised when a ``module:attribute`` service host target cannot be loaded."""

    exit_code = EXIT_HOST_LOAD_ERROR


class ConfigError(IntrospecError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


def require(value: Optional[T], name: str) -> T:
    """Return *value*, raising :class:`ArgumentValidationError` if it is ``None``.

    Args:
        value: The collaborator to check.
        name: Parameter name used in the error message.
    """
    if value is None:
        raise ArgumentValidationError(f"'{name}' must not be None")
    return value
