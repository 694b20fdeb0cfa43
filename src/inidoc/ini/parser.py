# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/13 02:47:10
# @Author : Kariko Lin

"""INI reading and writing.

Grammar, line by line (surrounding whitespace ignored):

    ; comment            full-line comment, `;` or `#`
    [section]            header, may carry a trailing `; comment`
    key = value ; note   assignment, `note` goes to `Property.comment`

An inline comment starts at the first `;` in the value part that is
preceded by whitespace (or opens the value part), so `url=a;b` keeps its
value. `#` is only a full-line comment prefix. Anything else is an error.

Writing normalizes the document: keys, values and section names are
stripped, blank lines are dropped (`blank_lines` of them go between
sections), a header comment moves to its own line above the header, and
entries are grouped under the first header of their section. Hence
`dumps(loads(dumps(loads(text)))) == dumps(loads(text))`.
"""

import logging
import re
from io import StringIO
from os import PathLike, fspath
from os.path import realpath
from typing import Iterable, TextIO
from warnings import warn

import chardet
import yaml

from ..abstract import FileHandler
from ..errors import (
    DuplicateKeyError,
    IniFileFormatError,
    InvalidArgumentError,
    InvalidFileFormatError,
    PreconditionViolation,
)
from ..property import PropertyCollection
from ..strings import require_non_blank
from .model import (
    COMMENT_PREFIXES,
    DEFAULT_SECTION,
    IniDocument,
    IniKey,
    format_value,
    ini_property,
)

__all__ = [
    'parse', 'loads', 'serialize', 'dumps', 'dump', 'load',
    'IniParser', 'IniYamlParser'
]

# below this `chardet` guess is not trusted.
ENCODING_CONFIDENCE = 0.8

_SECTION = re.compile(
    r"""
    ^\[ (?P<section>[^\]]*) \]
    \s* (?P<comment>[;\#].*)? $
    """,
    re.VERBOSE)
_INLINE_COMMENT = re.compile(r'(?:^|\s);')


def _format_error(
    source_id: str, message: str, line_number: int, line: str
) -> IniFileFormatError:
    return IniFileFormatError(
        source_id, f'{message} (line# {line_number}): {line}',
        line_number=line_number, line=line)


def parse(
    stream: Iterable[str], source_id: str = '<stream>'
) -> IniDocument:
    """Read an INI text stream (any iterable of lines) into a new document.

    Raises:
        IniFileFormatError: a malformed line, or a key repeated within
            its section. Nothing is returned in that case.
    """
    doc = IniDocument()
    section = DEFAULT_SECTION
    # full-line comments waiting for the next header or entry.
    pending: list[str] = []
    for n, raw in enumerate(stream, 1):
        line = raw.strip()
        if not line:
            continue
        if line.startswith(COMMENT_PREFIXES):
            pending.append(line)
        elif line.startswith('['):
            m = _SECTION.match(line)
            if m is None:
                raise _format_error(source_id, 'Bad section header', n, line)
            try:
                section = require_non_blank(m['section'], 'section').strip()
            except PreconditionViolation as e:
                raise _format_error(
                    source_id, 'Empty section name', n, line) from e
            if m['comment']:
                pending.append(m['comment'].strip())
            doc.add_section(section)
            if pending:
                doc.set_leading_comments(
                    section, doc.leading_comments(section) + pending)
                pending = []
        elif '=' in line:
            key, rest = line.split('=', 1)
            if m := _INLINE_COMMENT.search(rest):
                value, comment = rest[:m.start()], rest[m.end():].strip()
            else:
                value, comment = rest, ''
            try:
                prop = ini_property(
                    section, key, value.strip(), comment or None)
                doc.insert(prop)
            except PreconditionViolation as e:
                raise _format_error(source_id, 'Empty key', n, line) from e
            except InvalidArgumentError as e:
                # line breaks inside a line handed over by the caller.
                raise _format_error(source_id, 'Bad entry', n, line) from e
            except DuplicateKeyError as e:
                raise _format_error(
                    source_id, f'Duplicate key "{IniKey(section, key.strip())}"',
                    n, line) from e
            if pending:
                doc.set_leading_comments(prop.key, pending)
                pending = []
        else:
            raise _format_error(source_id, 'Unknown entry', n, line)
    doc.trailing_comments.extend(pending)
    logging.debug(f'{source_id}: {len(doc)} entries, '
                  f'{len(doc.sections())} sections parsed.')
    return doc


def loads(text: str, source_id: str = '<string>') -> IniDocument:
    # universal newlines, the same lines a file read would give.
    return parse(StringIO(text, newline=None), source_id)


def _entry_line(key: str, value: object, comment: str | None,
                padded: bool) -> str:
    separator = ' = ' if padded else '='
    value = format_value(value)
    if _INLINE_COMMENT.search(value):
        warn(f'The value of "{key}" would be read back '
             f'as a comment: {value!r}')
    ret = (key + separator).rstrip() if not value else key + separator + value
    if comment:
        ret += f' ; {comment}'
    return ret


def serialize(
    doc: PropertyCollection, *,
    padded: bool = True,
    blank_lines: int = 1
) -> str:
    """Write `doc` as INI text.

    Entries of the default section come first, without a header.
    `padded` puts spaces around `=`.
    """
    if not isinstance(doc, IniDocument):
        ini = IniDocument()
        ini.merge(doc)
        doc = ini
    groups: dict[str, list] = {DEFAULT_SECTION: []}
    groups.update((i, []) for i in doc.sections())
    for i in doc.iterate():
        groups[i.key.section].append(i)

    out: list[str] = []
    for section, props in groups.items():
        if section != DEFAULT_SECTION:
            if out:
                out.extend([''] * blank_lines)
            out.extend(doc.leading_comments(section))
            out.append(f'[{section}]')
        for i in props:
            out.extend(doc.leading_comments(i.key))
            out.append(_entry_line(i.key.name, i.value, i.comment, padded))
    if doc.trailing_comments:
        if out:
            out.extend([''] * blank_lines)
        out.extend(doc.trailing_comments)
    logging.debug(f'{len(doc)} entries serialized.')
    return '\n'.join(out) + '\n' if out else ''


def dumps(doc: PropertyCollection, **kwargs) -> str:
    """Same as `serialize()`."""
    return serialize(doc, **kwargs)


def dump(doc: PropertyCollection, file: TextIO, **kwargs) -> None:
    file.write(serialize(doc, **kwargs))


def _source_id_of(stream: object) -> str:
    name = getattr(stream, 'name', None)
    if isinstance(name, str) and name:
        return realpath(name)
    return f'<stream:{id(stream):#x}>'


def load(
    source: str | PathLike[str] | TextIO,
    collection: PropertyCollection,
    *,
    source_id: str | None = None,
    encoding: str | None = None
) -> None:
    """Parse `source` (a path or a text stream) into `collection`.

    Each source is loaded at most once per collection. Paths are
    identified by their real path; streams by `source_id`, or their
    `name`. If parsing or merging fails, `collection` is left untouched
    and the source could be loaded again.

    Raises:
        FileAlreadyLoadedError: `source` has been loaded into `collection`.
        IniFileFormatError: malformed INI.
        DuplicateKeyError: some entry already exists in `collection`.
    """
    is_path = isinstance(source, (str, PathLike))
    if source_id is None:
        source_id = (realpath(fspath(source)) if is_path
                     else _source_id_of(source))
    collection.guard.register(source_id)
    try:
        doc = (IniParser(source, encoding).read_as(source_id) if is_path
               else parse(source, source_id))
        collection.merge(doc)
    except BaseException:
        collection.guard.discard(source_id)
        raise
    logging.info(f'Loaded {len(doc)} entries from {source_id}.')


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or \
                codec['confidence'] < ENCODING_CONFIDENCE:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            logging.warning(
                f'{filename}: neither declared nor detected encoding works, '
                'decoding as latin-1.')
            buf = raw.decode('latin-1')
        return StringIO(buf)

    def read_as(self, source_id: str) -> IniDocument:
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong, fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return parse(fp, source_id)
        except UnicodeDecodeError:
            logging.warning(f'{self._fn}: cannot decode as '
                            f'{self._codec or "default encoding"}, guessing.')
            return parse(self._decode_file(self._fn), source_id)

    def read(self) -> IniDocument:
        """Read the file into a new document."""
        return self.read_as(self._fn)

    def read_into(self, doc: PropertyCollection) -> None:
        """Load the file into `doc`; see `load()`."""
        load(self._fn, doc, encoding=self._codec)

    def write(
        self, instance: PropertyCollection, *,
        padded: bool = True,
        blank_lines: int = 1
    ) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            dump(instance, fp, padded=padded, blank_lines=blank_lines)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f" ({self._codec})"


class IniYamlParser(FileHandler[IniDocument]):
    """INI document as YAML, handy to diff or to feed other tools:

        ```yaml
        '':                 # entries before any header
          key: value
        db:
          host:
            value: localhost
            comment: primary
          port: '5432'
        ```

    Full-line comments are not kept.
    """

    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> IniDocument:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            data = yaml.safe_load(fp)
        if data is None:
            return IniDocument()
        if not isinstance(data, dict):
            raise InvalidFileFormatError(
                self._fn, 'Top level of an INI YAML must be a mapping.')

        ret = IniDocument()
        for section, pairs in data.items():
            section = str(section)
            if pairs is not None and not isinstance(pairs, dict):
                raise InvalidFileFormatError(
                    self._fn, f'Section "{section}" must be a mapping.')
            try:
                if section != DEFAULT_SECTION:
                    ret.add_section(section)
                for k, v in (pairs or {}).items():
                    comment = None
                    if isinstance(v, dict):
                        v, comment = v.get('value'), v.get('comment')
                    ret.insert(ini_property(
                        section, str(k),
                        '' if v is None else format_value(v),
                        None if comment is None else str(comment)))
            except (PreconditionViolation, InvalidArgumentError,
                    DuplicateKeyError) as e:
                raise InvalidFileFormatError(
                    self._fn, f'Bad entry in section "{section}": {e}') from e
        return ret

    def write(self, instance: IniDocument, indent: int = 2) -> None:
        if instance.trailing_comments or any(
                instance.leading_comments(i)
                for i in (*instance.sections(), *instance.keys())):
            warn(f'{self._fn}: full-line comments are not kept in YAML.')

        data: dict[str, dict[str, str | dict[str, str]]] = {}
        if any(i.section == DEFAULT_SECTION for i in instance.keys()):
            data[DEFAULT_SECTION] = {}
        data.update((i, {}) for i in instance.sections())
        for i in instance.iterate():
            data[i.key.section][i.key.name] = (
                i.value if i.comment is None
                else {'value': i.value, 'comment': i.comment})
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(data, fp, allow_unicode=True,
                           sort_keys=False, indent=indent)
