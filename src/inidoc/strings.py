# -*- encoding: utf-8 -*-
# @File   : strings.py
# @Time   : 2026/10/12 21:04:17
# @Author : Kariko Lin

"""Tiny string guards, used to validate section and key names."""

from .errors import PreconditionViolation


def require_non_empty(s: str | None, message: str | None = None) -> str:
    if s is None or len(s) == 0:
        raise PreconditionViolation(
            'isEmpty' + (f': {message}' if message else '.'))
    return s


def require_non_blank(s: str | None, message: str | None = None) -> str:
    """Like `require_non_empty()`, but whitespace-only strings fail too."""
    if s is None or not s.strip():
        raise PreconditionViolation(
            'isBlank' + (f': {message}' if message else '.'))
    return s


def is_single_line(s: str) -> bool:
    return not any(c in s for c in '\r\n')
