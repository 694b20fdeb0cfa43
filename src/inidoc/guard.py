# -*- encoding: utf-8 -*-
# @File   : guard.py
# @Time   : 2026/10/13 00:32:19
# @Author : Kariko Lin

from threading import Lock
from typing import Iterator

from .errors import FileAlreadyLoadedError


class LoadGuard:
    """Sources (usually real paths) already consumed by one collection.

    `register()` is an atomic check-and-set, so of two loads racing on the
    same source exactly one goes on and the other gets
    `FileAlreadyLoadedError`.
    """

    def __init__(self) -> None:
        self.__lock = Lock()
        self.__loaded: dict[str, None] = {}

    def is_loaded(self, source_id: str) -> bool:
        with self.__lock:
            return source_id in self.__loaded

    def register(self, source_id: str) -> None:
        with self.__lock:
            if source_id in self.__loaded:
                raise FileAlreadyLoadedError(source_id)
            self.__loaded[source_id] = None

    def discard(self, source_id: str) -> None:
        """Forget `source_id`, e.g. after its load failed."""
        with self.__lock:
            self.__loaded.pop(source_id, None)

    def reset(self) -> None:
        with self.__lock:
            self.__loaded.clear()

    def __contains__(self, source_id: object) -> bool:
        with self.__lock:
            return source_id in self.__loaded

    def __len__(self) -> int:
        return len(self.__loaded)

    def __iter__(self) -> Iterator[str]:
        with self.__lock:
            return iter(list(self.__loaded))

    def __repr__(self) -> str:
        return 'LoadGuard { .cnt = %d }' % len(self)
