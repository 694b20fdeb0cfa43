# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 22:08:30
# @Author : Kariko Lin

from .model import Property, PropertyKind, PropertyListener, compare
from .collection import PropertyCollection
