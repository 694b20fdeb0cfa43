# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/12 20:51:36
# @Author : Kariko Lin

"""Exceptions raised by `inidoc`.

Every exception derives from `InidocError`, and also from the builtin one
a caller would naturally catch (`ValueError`, `KeyError`, ...).
"""

from typing import Any


class InidocError(Exception):
    pass


class PreconditionViolation(InidocError, ValueError):
    """A required string argument is None, empty or blank."""
    pass


class InvalidArgumentError(InidocError, ValueError):
    """Impermissible constructor input, e.g. a `None` property key."""
    pass


class TypeMismatchError(InidocError, TypeError):
    """Two properties of different kinds got compared."""
    pass


class DuplicateKeyError(InidocError, KeyError):
    def __init__(self, key: Any, message: str | None = None) -> None:
        super().__init__(message or f'duplicate key: {key!r}')
        self.key = key

    # KeyError.__str__ would repr() the message.
    def __str__(self) -> str:
        return str(self.args[0])


class InvalidFileFormatError(InidocError, ValueError):
    def __init__(self, source_id: str, message: str) -> None:
        super().__init__(message)
        self.source_id = source_id
        self.message = message


class IniFileFormatError(InvalidFileFormatError):
    """Malformed INI input.

    Carries the source and the offending line, so that the caller could
    report it without reading the source again.
    """

    def __init__(
        self, source_id: str, message: str, *,
        line_number: int = 0, line: str = ''
    ) -> None:
        super().__init__(source_id, message)
        self.line_number = line_number
        self.line = line

    def __str__(self) -> str:
        return f'{self.source_id}:{self.line_number}: {self.message}'

    def format(self) -> str:
        """Multi-line diagnostic, e.g. for CLI output."""
        return (
            f'{self.message}\n'
            f'  INI file: {self.source_id}\n'
            f'  line {self.line_number}: {self.line}')


class FileAlreadyLoadedError(InidocError, OSError):
    def __init__(self, source_id: str) -> None:
        super().__init__(f'already loaded: {source_id}')
        self.source_id = source_id

    def __str__(self) -> str:
        return str(self.args[0])
