# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/13 00:04:51
# @Author : sectini contributors

"""Note: the INI dialect handled here is a *simplified* one.

    ```ini
    # full line comments only
    leading=pairs belong to the default section

    [section]
    option1=value1
    option2=4,5,6
    ```

- no inline comments, no quoting or escaping, no multi-line values;
- whatever follows the first `=` is the value, up to the end of line;
- lines that are neither a header nor a pair are skipped *silently*.
"""

import codecs
import logging
import warnings
from io import StringIO
from typing import Any, Iterable

import chardet
import yaml

from .abstract import FileHandler
from .model import ConfigEntry, ConfigStore

__all__ = ['IniParser', 'YamlParser', 'InvalidConfigDocument']

# what C `isspace()` takes, nothing more.
WHITESPACE = ' \t\n\r\f\v'

logger = logging.getLogger(__name__)


class InvalidConfigDocument(Exception):
    """To record documents that do not describe a section tree."""
    pass


class IniParser(FileHandler[ConfigStore]):
    def __init__(self, filename: str, encoding: str | None = None) -> None:
        super().__init__(filename, encoding)

    @staticmethod
    def readstream(
        buf: Iterable[str], ins: ConfigStore | None = None
    ) -> ConfigStore:
        """读取解码好的字符串流（或者任意的行序列）。

        Pairs go into `ins` (a new store if `None`) without clearing it.
        """
        if ins is None:
            ins = ConfigStore()
        current = ins.default_section
        first = True
        for line in buf:
            line = line.strip(WHITESPACE)
            if not line or line[0] == '#':
                continue
            lbr, rbr = line.find('['), line.find(']')
            is_header = lbr >= 0 and rbr >= 0
            if first and not is_header:
                ins._section(current)
            first = False

            if is_header:
                name = line[lbr + 1:rbr].strip(WHITESPACE)
                if name:
                    current = name
                ins._section(current)
                continue

            option, eq, value = line.partition('=')
            if not eq:
                continue
            option = option.rstrip(WHITESPACE)
            if not option:
                continue
            IniParser.__put(
                ins._section(current), option, value.lstrip(WHITESPACE))
        return ins

    @staticmethod
    def __put(entries: list[ConfigEntry], option: str, value: str) -> None:
        # repeated options: the last one wins, at the first one's place.
        for i in entries:
            if i.option == option:
                i.value = value
                return
        entries.append(ConfigEntry(option, value))

    @staticmethod
    def loads(text: str, ins: ConfigStore | None = None) -> ConfigStore:
        return IniParser.readstream(StringIO(text), ins)

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        guess = chardet.detect(raw)
        codec = guess['encoding']
        if codec is None or guess['confidence'] < 0.8:
            codec = 'utf-8'
        logger.debug('decoding %s as %s (chardet: %s)', filename, codec, guess)

        # fallbacks
        try:
            buf = raw.decode(codec)
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode('latin-1')
        return StringIO(buf)

    def read(self, ins: ConfigStore | None = None) -> ConfigStore:
        """读取`IniParser`实例指定的文件。

        May raise `OSError`; `ConfigStore.read()` is the forgiving way.
        """
        try:
            # when the requested codec is wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec or 'utf-8') as fp:
                return self.readstream(fp.readlines(), ins)
        except UnicodeDecodeError:
            return self.readstream(self._decode_file(self._fn), ins)

    @staticmethod
    def dumps(
        instance: ConfigStore, *,
        delimiter: str = '=',
        blank_lines: int = 1,
        bare_default: bool = False
    ) -> str:
        """Serialize `instance`, sections sorted by name.

        Every section (the last one included) is followed by
        `blank_lines` empty lines. With `bare_default=True` the default
        section is written first and *without* its `[header]`, the way a
        headerless file would look.
        """
        ret: list[str] = []
        default = instance.default_section
        if bare_default and default in instance:
            for i in instance[default]:
                ret.append(f'{i.option}{delimiter}{i.value}\n')
            ret.append('\n' * blank_lines)
        for sect, entries in instance.items():
            if bare_default and sect == default:
                continue
            ret.append(f'[{sect}]\n')
            for i in entries:
                ret.append(f'{i.option}{delimiter}{i.value}\n')
            ret.append('\n' * blank_lines)
        return ''.join(ret)

    def write(self, instance: ConfigStore, **fmt: Any) -> None:
        """保存到*一个* INI 文件。May raise `OSError` or `LookupError`."""
        buffer = self.dumps(instance, **fmt)
        # an unknown codec must fail before the target gets truncated.
        codecs.lookup(self._codec or 'utf-8')
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            fp.write(buffer)

    def __str__(self) -> str:
        return "INI: " + super().__str__() + f"({self._codec})"


class YamlParser(FileHandler[ConfigStore]):
    """Store <-> YAML mapping of `{section: {option: value}}`.

    Top level scalars and lists are options of the default section.
    YAML typed scalars are stored by their canonical strings, so
    `enabled: yes` comes in as `true`.
    """

    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename, encoding)

    @staticmethod
    def __put(ins: ConfigStore, option: Any, value: Any, section: str) -> None:
        if value is None:
            value = ''
        try:
            ins.set(str(option), value, section)
        except TypeError:
            warnings.warn(
                f'[{section}] {option}: {value!r} '
                'is not a scalar or a list of scalars, skipped.')

    @staticmethod
    def load(data: Any, ins: ConfigStore | None = None) -> ConfigStore:
        if ins is None:
            ins = ConfigStore()
        if data is None:
            return ins
        if not isinstance(data, dict):
            raise InvalidConfigDocument(
                f'expect a mapping at top level, got {type(data).__name__}.')
        for key, val in data.items():
            if not isinstance(val, dict):
                YamlParser.__put(ins, key, val, ins.default_section)
                continue
            for option, value in val.items():
                YamlParser.__put(ins, option, value, str(key))
        return ins

    def read(self, ins: ConfigStore | None = None) -> ConfigStore:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return self.load(yaml.safe_load(fp), ins)

    def write(self, instance: ConfigStore, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(
                instance.to_dict(), fp,
                allow_unicode=True, sort_keys=False,
                default_flow_style=False, indent=indent)

    def __str__(self) -> str:
        return "YAML: " + super().__str__()
