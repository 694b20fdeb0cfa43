import io
import threading

import pytest

from inidoc import (
    DuplicateKeyError,
    FileAlreadyLoadedError,
    IniDocument,
    IniFileFormatError,
    IniParser,
    PropertyCollection,
    load,
    loads,
)


@pytest.fixture
def ini_file(tmp_path):
    path = tmp_path / "app.ini"
    path.write_text("[db]\nhost = localhost ; primary\nport = 5432\n",
                    encoding="utf-8")
    return path


def test_load_file(ini_file):
    doc = IniDocument()
    load(ini_file, doc)

    assert doc.get_value("db", "host") == "localhost"
    assert doc.guard.is_loaded(str(ini_file.resolve()))


def test_load_twice(ini_file):
    doc = IniDocument()
    load(ini_file, doc)

    with pytest.raises(FileAlreadyLoadedError):
        load(str(ini_file), doc)
    # the same file behind another spelling of its path
    with pytest.raises(FileAlreadyLoadedError):
        load(ini_file.parent / "." / "app.ini", doc)
    assert len(doc) == 2


def test_load_into_another_collection(ini_file):
    load(ini_file, IniDocument())

    other = IniDocument()
    load(ini_file, other)
    assert len(other) == 2


def test_load_format_error_not_registered(tmp_path):
    path = tmp_path / "broken.ini"
    path.write_text("[db]\nthis is broken\n", encoding="utf-8")
    doc = IniDocument()

    with pytest.raises(IniFileFormatError) as e:
        load(path, doc)
    assert e.value.source_id == str(path.resolve())
    assert e.value.line_number == 2
    assert len(doc) == 0
    assert not doc.guard.is_loaded(str(path.resolve()))

    # fixed, then retried under the same name
    path.write_text("[db]\nthis = fixed\n", encoding="utf-8")
    load(path, doc)
    assert doc.get_value("db", "this") == "fixed"


def test_load_conflicting_sources(tmp_path, ini_file):
    other = tmp_path / "other.ini"
    other.write_text("[db]\nuser = admin\nport = 1\n", encoding="utf-8")
    doc = IniDocument()
    load(ini_file, doc)

    with pytest.raises(DuplicateKeyError):
        load(other, doc)
    assert doc.get_value("db", "user") is None
    assert not doc.guard.is_loaded(str(other.resolve()))


def test_load_stream():
    doc = IniDocument()
    load(io.StringIO("[a]\nk = v\n"), doc, source_id="memory")

    assert doc.get_value("a", "k") == "v"
    with pytest.raises(FileAlreadyLoadedError):
        load(io.StringIO("[b]\nk = v\n"), doc, source_id="memory")


def test_load_plain_collection(ini_file):
    props = PropertyCollection()
    load(ini_file, props)
    assert len(props) == 2


def test_parser_read_write(ini_file, tmp_path):
    doc = IniParser(ini_file).read()
    doc.set_value("db", "port", 6543)

    out = tmp_path / "out.ini"
    IniParser(out, "utf-8").write(doc)

    assert out.read_text(encoding="utf-8") == (
        "[db]\nhost = localhost ; primary\nport = 6543\n")


def test_parser_read_into(ini_file):
    doc = IniDocument()
    parser = IniParser(ini_file, "utf-8")
    parser.read_into(doc)

    with pytest.raises(FileAlreadyLoadedError):
        parser.read_into(doc)


def test_parser_encoding_fallback(tmp_path, monkeypatch):
    # no trustworthy guess either, so the last resort applies.
    monkeypatch.setattr(
        "inidoc.ini.parser.chardet.detect",
        lambda raw: {"encoding": None, "confidence": 0.0})
    path = tmp_path / "latin.ini"
    path.write_bytes("[café]\nname = crème brûlée\n"
                     .encode("latin-1"))

    doc = IniParser(path, "utf-8").read()

    assert doc.sections() == ["café"]
    assert doc.get_value("café", "name") == "crème brûlée"


def test_load_concurrent_same_source():
    doc = IniDocument()
    barrier = threading.Barrier(8)
    outcomes = []

    def worker():
        barrier.wait()
        try:
            load(io.StringIO("[a]\nk = v\nj = w\n"), doc, source_id="shared")
            outcomes.append("loaded")
        except FileAlreadyLoadedError:
            outcomes.append("refused")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("loaded") == 1
    assert outcomes.count("refused") == 7
    assert len(doc) == 2
    assert doc.guard.is_loaded("shared")


def test_loads_universal_newlines():
    doc = loads("[a]\r\nk = v\rj = w\n")

    assert [p.key.name for p in doc.section("a")] == ["k", "j"]
    assert doc.get_value("a", "k") == "v"
