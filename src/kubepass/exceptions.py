"""Exception hierarchy for kubepass.

All exceptions inherit from :class:`KubepassError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`kubepass.exit_codes`.
Commands in :mod:`kubepass.app` catch ``KubepassError``, print the message
to stderr and exit with the error's code, so nothing reaches stdout unless
a complete credential document was produced.

Subclass hierarchy::

    KubepassError (exit 1)
    +-- InvalidUsageError
    |   +-- MissingModeError      (exit 2)
    |   +-- MissingEntryError     (exit 3)
    +-- SecretUnreadableError     (exit 4)
    +-- UnknownModeError          (exit 5)
    +-- MissingFieldsError        (exit 6)
    +-- SecretFormatError         (exit 7)
    +-- PrerequisiteError         (exit 8)
    +-- ConfigError               (exit 9)
"""

from __future__ import annotations

from typing import Sequence

from kubepass.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_MISSING_ENTRY,
    EXIT_MISSING_FIELDS,
    EXIT_MISSING_MODE,
    EXIT_PREREQUISITE_MISSING,
    EXIT_SECRET_FORMAT,
    EXIT_SECRET_UNREADABLE,
    EXIT_UNKNOWN_MODE,
)


class KubepassError(Exception):
    """Base exception for all kubepass errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`kubepass.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(KubepassError):
    """Raised for invalid or missing CLI arguments."""


class MissingModeError(InvalidUsageError):
    """Raised when ``auth`` is invoked without ``pem`` or ``token``."""

    exit_code = EXIT_MISSING_MODE


class MissingEntryError(InvalidUsageError):
    """Raised when ``auth`` is invoked without a password-store entry path."""

    exit_code = EXIT_MISSING_ENTRY


class SecretUnreadableError(KubepassError):
    """Raised when ``pass`` fails to decrypt an entry or returns nothing."""

    exit_code = EXIT_SECRET_UNREADABLE


class UnknownModeError(KubepassError):
    """Raised when the auth mode is not one of ``pem`` or ``token``."""

    exit_code = EXIT_UNKNOWN_MODE

    def __init__(self, mode: str):
        super().__init__(f"Unknown auth mode '{mode}' (expected 'pem' or 'token')")
        self.mode = mode


class MissingFieldsError(KubepassError):
    """Raised when a secret lacks a field the selected mode requires.

    Args:
        mode: The auth mode whose requirements were not met.
        fields: The full set of keys the mode requires, in document order.
    """

    exit_code = EXIT_MISSING_FIELDS

    def __init__(self, mode: str, fields: Sequence[str]):
        self.mode = mode
        self.fields = list(fields)
        super().__init__(
            f"Secret is missing required {mode} fields: {', '.join(self.fields)}"
        )


class SecretFormatError(KubepassError):
    """Raised when a field value is not valid base64 or not UTF-8 text.

    The message names the key only; the offending value is never echoed.
    """

    exit_code = EXIT_SECRET_FORMAT

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Field '{key}' is not valid base64-encoded text: {reason}")


class PrerequisiteError(KubepassError):
    """Raised when required external binaries are not on ``PATH``."""

    exit_code = EXIT_PREREQUISITE_MISSING

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(f"Required programs not found on PATH: {', '.join(self.missing)}")


class ConfigError(KubepassError):
    """Raised for configuration problems (invalid JSON, bad environment values)."""

    exit_code = EXIT_CONFIG_ERROR
