# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/13 01:20:44
# @Author : Kariko Lin

"""INI document as an ordered property collection.

Each `key = value` line is one `Property` of kind `PropertyKind.INI`,
keyed by `IniKey(section, name)`. Entries before the first section header
live in the default section `''`, which is never written as a header.

Full-line comments are kept apart from the entries (see
`IniDocument.leading_comments()`), while an inline comment belongs to the
entry, i.e. `Property.comment`.
"""

from collections.abc import Iterable
from typing import Any, Callable, NamedTuple, TypeVar
from warnings import warn

from ..errors import InvalidArgumentError, PreconditionViolation
from ..property import Property, PropertyCollection, PropertyKind
from ..strings import is_single_line, require_non_blank

__all__ = ['DEFAULT_SECTION', 'IniKey', 'IniDocument', 'ini_property']

DEFAULT_SECTION = ''
COMMENT_PREFIXES = (';', '#')

_T = TypeVar('_T')

_BOOLEAN_STATES = {
    '1': True, 'yes': True, 'true': True, 'on': True,
    '0': False, 'no': False, 'false': False, 'off': False,
}


class IniKey(NamedTuple):
    section: str
    name: str

    def __str__(self) -> str:
        return f'[{self.section}] {self.name}' if self.section else self.name


def check_section(section: str) -> str:
    """Stripped `section`, if it could be written as `[section]`.

    Raises:
        PreconditionViolation: `section` is None.
        InvalidArgumentError: it holds `]` or a line break.
    """
    if section is None:
        raise PreconditionViolation('isNull: section')
    if ']' in section or not is_single_line(section):
        raise InvalidArgumentError(f'Not a valid section name: {section!r}')
    return section.strip()


def check_name(name: str) -> str:
    """Stripped `name`, if it could be written as `name = ...`.

    Raises:
        PreconditionViolation: `name` is None or blank.
        InvalidArgumentError: it holds `=` or a line break,
            or starts like a header or a comment.
    """
    require_non_blank(name, 'key')
    if not is_single_line(name):
        raise InvalidArgumentError(f'Not a valid key: {name!r}')
    name = name.strip()
    if '=' in name or name.startswith(('[', *COMMENT_PREFIXES)):
        raise InvalidArgumentError(f'Not a valid key: {name!r}')
    return name


def ini_property(
    section: str, name: str, value: str, comment: str | None = None
) -> Property[IniKey, str]:
    """Create an INI entry. Both names get stripped.

    Raises:
        PreconditionViolation: `name` is None or blank,
            or `section` is None.
        InvalidArgumentError: any part would not read back as the same
            entry, e.g. a multi-line value or a key holding `=`.
    """
    key = IniKey(check_section(section), check_name(name))
    return Property(key, value, comment, kind=PropertyKind.INI)


def parse_bool(text: str) -> bool:
    try:
        return _BOOLEAN_STATES[text.strip().lower()]
    except KeyError:
        raise ValueError(f'Not a boolean: {text!r}') from None


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


# target of leading comments: a section name or an entry key.
_CommentTarget = str | IniKey


class IniDocument(PropertyCollection[IniKey]):
    """`PropertyCollection` that also knows about sections.

    Sections keep their first-seen order (empty ones included), and
    entries are grouped by section when written.
    """

    def __init__(self, properties: Iterable[Property] = ()) -> None:
        self.__sections: dict[str, None] = {}
        self.__comments: dict[_CommentTarget, list[str]] = {}
        self.trailing_comments: list[str] = []
        super().__init__(properties)

    # --- PropertyCollection -----------------------------------------

    @staticmethod
    def _check_key(prop: Property) -> None:
        if not isinstance(prop.key, IniKey):
            raise InvalidArgumentError(
                f'INI entries must be keyed by IniKey, got {prop.key!r}.')

    def insert(self, prop: Property) -> None:
        self._check_key(prop)
        with self._lock:
            super().insert(prop)
            self.__touch(prop.key.section)

    def remove(self, key: IniKey) -> Property | None:
        with self._lock:
            self.__comments.pop(key, None)
            return super().remove(key)

    def merge(self, other: Iterable[Property]) -> None:
        """See `PropertyCollection.merge()`.

        When `other` is an `IniDocument`, its empty sections and comments
        come along.
        """
        props = list(
            other.iterate() if isinstance(other, PropertyCollection) else other)
        for i in props:
            self._check_key(i)
        with self._lock:
            super().merge(props)
            if isinstance(other, IniDocument):
                for i in other.sections():
                    self.__touch(i)
                for target, lines in other.__comments.items():
                    self.__comments.setdefault(target, []).extend(lines)
                self.trailing_comments.extend(other.trailing_comments)
            else:
                for i in props:
                    self.__touch(i.key.section)

    def clear(self) -> None:
        with self._lock:
            super().clear()
            self.__sections.clear()
            self.__comments.clear()
            self.trailing_comments.clear()

    # --- sections ----------------------------------------------------

    def __touch(self, section: str) -> None:
        if section != DEFAULT_SECTION:
            self.__sections.setdefault(section, None)

    def sections(self) -> list[str]:
        """Named sections, in first-seen order."""
        return list(self.__sections)

    def has_section(self, section: str) -> bool:
        return section.strip() in self.__sections

    def add_section(self, section: str, comment: str | None = None) -> None:
        """Add `section` if missing. `comment` replaces its leading comment."""
        section = check_section(require_non_blank(section, 'section'))
        with self._lock:
            self.__touch(section)
            if comment is not None:
                self.set_leading_comments(section, [comment])

    def section(self, section: str) -> list[Property]:
        """Entries of `section` in order; empty if there is no such section."""
        section = section.strip()
        return [i for i in self.iterate() if i.key.section == section]

    def section_comment(self, section: str) -> str | None:
        lines = self.__comments.get(section.strip())
        return '\n'.join(lines) if lines else None

    def remove_section(self, section: str) -> None:
        section = section.strip()
        with self._lock:
            if self.__comments.get(section):
                warn(f'Comments of [{section}] got removed as well.')
            self.__comments.pop(section, None)
            for i in self.section(section):
                self.remove(i.key)
            self.__sections.pop(section, None)

    # --- comments ----------------------------------------------------

    def leading_comments(self, target: _CommentTarget) -> list[str]:
        """Full-line comments written right before a section header
        (`target` as section name) or an entry (`target` as `IniKey`)."""
        return list(self.__comments.get(target, ()))

    def set_leading_comments(
        self, target: _CommentTarget, lines: Iterable[str]
    ) -> None:
        """Replace the full-line comments before `target`.

        Raises:
            KeyError: no such section or entry, so the comments
                would have nowhere to be written.
        """
        lines = [self.as_comment_line(i) for i in lines]
        with self._lock:
            if not lines:
                self.__comments.pop(target, None)
            elif target in self.__sections or (
                    isinstance(target, IniKey) and target in self):
                self.__comments[target] = lines
            else:
                raise KeyError(target)

    @staticmethod
    def validate_comment(comment: str | None) -> bool:
        """A comment must stay on one line."""
        return comment is None or is_single_line(comment)

    @classmethod
    def as_comment_line(cls, text: str) -> str:
        if not cls.validate_comment(text):
            raise InvalidArgumentError(
                f'Not a valid INI comment: {text!r}')
        text = text.strip()
        return text if text.startswith(COMMENT_PREFIXES) else f'; {text}'

    # --- values ------------------------------------------------------

    @staticmethod
    def _key(section: str, key: str) -> IniKey:
        # stripped like `ini_property()` does.
        return IniKey(section.strip(), key.strip())

    def contains(self, section: str, key: str) -> bool:
        return self._key(section, key) in self

    def get_value(
        self, section: str, key: str, default: str | None = None
    ) -> str | None:
        prop = self.get(self._key(section, key))
        return default if prop is None else prop.value

    def get_as(
        self, section: str, key: str,
        converter: Callable[[str], _T] = str,
        default: _T | None = None
    ) -> _T | None:
        """Value converted by `converter`, or `default` if missing.

        Raises:
            ValueError: the conversion failed.
        """
        if converter is bool:
            converter = parse_bool
        raw = self.get_value(section, key)
        return default if raw is None else converter(raw)

    def get_int(self, section: str, key: str,
                default: int | None = None) -> int | None:
        return self.get_as(section, key, int, default)

    def get_float(self, section: str, key: str,
                  default: float | None = None) -> float | None:
        return self.get_as(section, key, float, default)

    def get_bool(self, section: str, key: str,
                 default: bool | None = None) -> bool | None:
        return self.get_as(section, key, parse_bool, default)

    def get_comment(self, section: str, key: str) -> str | None:
        prop = self.get(self._key(section, key))
        return None if prop is None else prop.comment

    def set_value(
        self, section: str, key: str, value: Any,
        comment: str | None = None
    ) -> str | None:
        """Update (or append) an entry. Returns the old value, if any.

        Non-string values are stored as text, `True` as `true`.
        A `None` comment keeps the current one.
        """
        if not self.validate_comment(comment):
            raise InvalidArgumentError(
                f'[{section}] {key}: not a valid INI comment: {comment!r}')
        new = ini_property(section, key, format_value(value), comment)
        with self._lock:
            if (old := self.get(new.key)) is None:
                self.insert(new)
                return None
            ret = old.value
            old.value = new.value
            if comment is not None:
                old.comment = comment
            return ret

    def set_comment(self, section: str, key: str, comment: str | None) -> None:
        """Replace the inline comment of an existing entry.

        Raises:
            KeyError: no such entry.
        """
        if not self.validate_comment(comment):
            raise InvalidArgumentError(
                f'[{section}] {key}: not a valid INI comment: {comment!r}')
        self[self._key(section, key)].comment = comment
