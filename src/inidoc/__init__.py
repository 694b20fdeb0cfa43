# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 20:40:55
# @Author : Kariko Lin

import logging

from .errors import (
    InidocError,
    PreconditionViolation,
    InvalidArgumentError,
    TypeMismatchError,
    DuplicateKeyError,
    InvalidFileFormatError,
    IniFileFormatError,
    FileAlreadyLoadedError,
)
from .guard import LoadGuard
from .property import Property, PropertyKind, PropertyCollection, compare
from .ini import (
    IniKey, IniDocument, ini_property,
    parse, loads, serialize, dumps, dump, load,
    IniParser, IniYamlParser
)

__all__ = [
    'InidocError', 'PreconditionViolation', 'InvalidArgumentError',
    'TypeMismatchError', 'DuplicateKeyError', 'InvalidFileFormatError',
    'IniFileFormatError', 'FileAlreadyLoadedError',
    'LoadGuard',
    'Property', 'PropertyKind', 'PropertyCollection', 'compare',
    'IniKey', 'IniDocument', 'ini_property',
    'parse', 'loads', 'serialize', 'dumps', 'dump', 'load',
    'IniParser', 'IniYamlParser'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
