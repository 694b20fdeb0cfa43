import threading

import pytest

from inidoc import FileAlreadyLoadedError, LoadGuard


def test_guard_register():
    guard = LoadGuard()
    assert not guard.is_loaded("a.ini")

    guard.register("a.ini")
    assert guard.is_loaded("a.ini")
    assert "a.ini" in guard

    with pytest.raises(FileAlreadyLoadedError) as e:
        guard.register("a.ini")
    assert e.value.source_id == "a.ini"
    # it is an IOError, like any other failed file operation.
    assert isinstance(e.value, OSError)


def test_guard_discard_and_reset():
    guard = LoadGuard()
    guard.register("a.ini")
    guard.register("b.ini")

    guard.discard("a.ini")
    guard.discard("never.ini")
    assert list(guard) == ["b.ini"]

    guard.reset()
    assert len(guard) == 0


def test_guard_concurrent_register():
    guard = LoadGuard()
    barrier = threading.Barrier(8)
    winners = []

    def worker():
        barrier.wait()
        try:
            guard.register("race.ini")
            winners.append(threading.current_thread().name)
        except FileAlreadyLoadedError:
            pass

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(winners) == 1
