# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 22:15:03
# @Author : sectini contributors

"""Section-organized option/value store.

    ```ini
    # pairs before any header are kept in `DEFAULT_SECTION`.
    key=val

    [section]
    key233=val666
    ```

All values are kept as their canonical strings (see `sectini.convert`),
typed access decodes them on demand.
"""

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterator, NamedTuple, Sequence, TextIO

from .convert import convert, decode, encode

__all__ = [
    'DEFAULT_SECTION', 'ConfigEntry', 'FindResult', 'Value', 'ConfigStore'
]

DEFAULT_SECTION = 'default_'

logger = logging.getLogger(__name__)


@dataclass
class ConfigEntry:
    option: str
    value: str


class FindResult(NamedTuple):
    """Outcome of `ConfigStore.find()`.

    `section_found` and `entry_found` are independent flags: a section may
    exist without the option. `section`, `entry` and `index` are only
    meaningful when the matching flag is set.
    """
    section_found: bool
    entry_found: bool
    section: list[ConfigEntry] | None = None
    entry: ConfigEntry | None = None
    index: int = -1


class Value:
    """A looked-up canonical string, decoded only when asked to."""

    __slots__ = ('_raw',)

    def __init__(self, raw: str = '') -> None:
        self._raw = raw

    def to_string(self) -> str:
        return self._raw

    def to_int(self) -> int:
        return decode(self._raw, int)

    def to_float(self) -> float:
        return decode(self._raw, float)

    def to_bool(self) -> bool:
        return decode(self._raw, bool)

    def to_list(self, tp: type = str) -> list:
        return decode(self._raw, list[tp])

    def to(self, tp: Any) -> Any:
        return decode(self._raw, tp)

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f'Value({self._raw!r})'

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Value):
            return self._raw == other._raw
        if isinstance(other, str):
            return self._raw == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._raw)


class ConfigStore(Mapping[str, Sequence[ConfigEntry]]):
    """... is a group of ordered entry lists, keyed by section name.

    Sections iterate in sorted order, entries in insertion order.
    As a `Mapping` it is read-only; mutate through `set()`, `remove()`,
    `read()` and `reset()` so that an option stays unique in its section
    and `set()`/`remove()` never leave a section empty behind.

    Note: `get()` looks up an *option*, not a section as `Mapping.get()`
    would. Use `store[section]` or `has_section()` for sections.
    """

    def __init__(
        self, path: str | None = None, *,
        default_section: str = DEFAULT_SECTION,
        encoding: str | None = None
    ) -> None:
        self.__sections: dict[str, list[ConfigEntry]] = {}
        self.default_section = default_section
        if path is not None:
            self.read(path, encoding)

    def __getitem__(self, key: str) -> Sequence[ConfigEntry]:
        # a tuple, in case callers append behind our back.
        return tuple(self.__sections[key])

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.__sections))

    def __len__(self) -> int:
        return len(self.__sections)

    def __contains__(self, key: object) -> bool:
        return key in self.__sections

    def __repr__(self) -> str:
        return '<ConfigStore { .sections = %d }>' % len(self)

    def _section(self, section: str) -> list[ConfigEntry]:
        """Register `section` (if missing) and return its live entry list.

        For parsers only: this is the one way to create an empty section.
        """
        return self.__sections.setdefault(section, [])

    def _resolve(self, section: str | None) -> str:
        return self.default_section if section is None else section

    def find(self, option: str, section: str | None = None) -> FindResult:
        """Exact, case-sensitive lookup of `option` in `section`."""
        entries = self.__sections.get(self._resolve(section))
        if entries is None:
            return FindResult(False, False)
        for idx, entry in enumerate(entries):
            if entry.option == option:
                return FindResult(True, True, entries, entry, idx)
        return FindResult(True, False, entries)

    def get(
        self, option: str, default: Any = '', section: str | None = None
    ) -> Value:
        """Raw value of `option`, or the canonical string of `default`.

        Never fails: decoding happens later through the returned `Value`.
        """
        found = self.find(option, section)
        if found.entry_found:
            return Value(found.entry.value)
        return Value(encode(default))

    def get_typed(
        self, option: str, tp: Any, default: Any,
        section: str | None = None
    ) -> Any:
        """Like `get()`, but decoded straight into `tp`.

        A present-but-malformed value raises `ConfigDecodeError`,
        `default` only stands in for an absent option.
        """
        found = self.find(option, section)
        if found.entry_found:
            return decode(found.entry.value, tp)
        return convert(default, tp)

    def set(self, option: str, value: Any, section: str | None = None) -> None:
        text = encode(value)
        found = self.find(option, section)
        if found.entry_found:
            found.entry.value = text
        elif found.section_found:
            found.section.append(ConfigEntry(option, text))
        else:
            self.__sections[self._resolve(section)] = [
                ConfigEntry(option, text)]

    def remove(self, option: str, section: str | None = None) -> None:
        found = self.find(option, section)
        if not found.entry_found:
            return
        del found.section[found.index]
        if not found.section:
            del self.__sections[self._resolve(section)]

    def has_section(self, section: str) -> bool:
        return section in self.__sections

    def has_option(self, option: str, section: str | None = None) -> bool:
        return self.find(option, section).entry_found

    def sections(self) -> list[str]:
        return list(self)

    def options(self, section: str | None = None) -> list[str]:
        return [i.option for i in self.__sections.get(
            self._resolve(section), [])]

    def items(self, section: str | None = None) -> Any:
        """Without `section`: the `Mapping` items view.
        Otherwise the `(option, value)` pairs of that section."""
        if section is None:
            return super().items()
        return [(i.option, i.value) for i in self.__sections.get(section, [])]

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            sect: {i.option: i.value for i in self.__sections[sect]}
            for sect in self
        }

    def update(self, data: Mapping[str, Mapping[str, Any]]) -> None:
        """Merge `{section: {option: value}}` through `set()`."""
        for sect, pairs in data.items():
            for option, value in pairs.items():
                self.set(option, value, sect)

    def reset(self) -> None:
        self.__sections.clear()

    def read(self, path: str, encoding: str | None = None) -> None:
        """Replace contents with those of the INI file at `path`.

        An unreadable file is logged and leaves the store empty.
        """
        from .parser import IniParser

        self.reset()
        try:
            IniParser(path, encoding).read(self)
        except (OSError, LookupError) as e:
            logger.error('error opening config file: %s (%s)', path, e)
            self.reset()

    def write(
        self, path: str, encoding: str | None = None, **fmt: Any
    ) -> None:
        """Save as an INI file. See `IniParser.dumps()` for `fmt`.

        An unwritable target is logged and nothing gets written.
        """
        from .parser import IniParser

        try:
            IniParser(path, encoding).write(self, **fmt)
        except (OSError, LookupError) as e:
            logger.error('error writing config file: %s (%s)', path, e)

    def dumps(self, **fmt: Any) -> str:
        from .parser import IniParser

        return IniParser.dumps(self, **fmt)

    def print(self, file: TextIO | None = None, **fmt: Any) -> None:
        (sys.stdout if file is None else file).write(self.dumps(**fmt))
