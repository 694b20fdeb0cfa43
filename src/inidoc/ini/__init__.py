# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/13 01:16:09
# @Author : Kariko Lin

from .model import DEFAULT_SECTION, IniKey, IniDocument, ini_property
from .parser import (
    parse, loads, serialize, dumps, dump, load,
    IniParser, IniYamlParser
)
