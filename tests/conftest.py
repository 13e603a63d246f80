"""Shared fixtures for sectini tests."""

import pytest

from sectini import ConfigStore

HEADERLESS_TEXT = """\
a=1
b=true
c=1.5
d=hello world
e=4,5,6
"""

SECTIONED_TEXT = """\
# sample configuration

[abc]
a = 1
c=2.5

[de]
e=1,2,3
f=not a number
"""


@pytest.fixture
def headerless_text():
    return HEADERLESS_TEXT


@pytest.fixture
def sectioned_text():
    return SECTIONED_TEXT


@pytest.fixture
def write_text(tmp_path):
    """Writes text to a file under tmp_path and returns its path."""
    def _write(text, name="config.ini", encoding="utf-8"):
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return str(path)
    return _write


@pytest.fixture
def store():
    """A store filled through set() only."""
    ret = ConfigStore()
    ret.set("o21", "str21", "sec1")
    ret.set("o22", True, "sec1")
    ret.set("o23", 23, "sec2")
    ret.set("o24", 24.5, "sec2")
    ret.set("v", [4, 5, 6], "sec2")
    return ret
