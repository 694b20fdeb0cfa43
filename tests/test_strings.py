import pytest

from inidoc import PreconditionViolation
from inidoc.strings import (
    is_single_line,
    require_non_blank,
    require_non_empty,
)


def test_require_non_empty():
    assert require_non_empty(" ") == " "

    with pytest.raises(PreconditionViolation):
        require_non_empty("")
    with pytest.raises(PreconditionViolation):
        require_non_empty(None)


def test_require_non_blank():
    assert require_non_blank("key") == "key"

    with pytest.raises(PreconditionViolation, match="section"):
        require_non_blank(" \t", "section")
    with pytest.raises(ValueError):
        require_non_blank(None)


def test_is_single_line():
    assert is_single_line("a = b ; c")
    assert is_single_line("")
    assert not is_single_line("a\nb")
    assert not is_single_line("a\r")
