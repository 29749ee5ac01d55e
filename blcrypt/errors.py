"""Exceptions raised by the BitLocker cryptography routines."""

from __future__ import annotations


class DislockerError(Exception):
    """Base class for every error raised by this package.

    ``code`` holds the numeric return value that identifies the error
    category, or ``None`` when the failure has no dedicated code.
    """

    code: int | None = None

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__doc__.strip().splitlines()[0])


class InvalidArgumentError(DislockerError, ValueError):
    """An argument given to a cryptographic routine is invalid."""

    code = -103


class AlgorithmUnsupportedError(DislockerError):
    """The requested encryption algorithm is not supported."""

    code = -41


class MacMismatchError(DislockerError):
    """The computed authentication tag does not match the expected one."""