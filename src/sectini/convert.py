# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2024/10/12 21:40:18
# @Author : sectini contributors

"""Canonical string <-> value conversion.

Every value kept by a `ConfigStore` is a string. This module decides how
Python values are turned into that string and back:

    ```ini
    # int, float
    count=23
    ratio=24.5
    # bool, only `true` or `false`
    enabled=true
    # str, kept verbatim
    name=str21
    # list[int], no spaces and no trailing comma
    sizes=4,5,6
    ```

Nested lists are not representable and get rejected with `TypeError`.
"""

from typing import Any, get_args, get_origin

from .abstract import ValueCodec

__all__ = [
    'ConfigDecodeError', 'StrCodec', 'IntCodec', 'FloatCodec', 'BoolCodec',
    'ListCodec', 'codec_for', 'codec_of', 'encode', 'decode', 'convert'
]

LIST_DELIMITER = ','


class ConfigDecodeError(ValueError):
    """Stored text cannot be read as the requested type."""

    def __init__(self, text: str, target: str) -> None:
        super().__init__(f'cannot decode {text!r} as {target}')
        self.text = text
        self.target = target


class StrCodec(ValueCodec[str]):
    def encode(self, value: str) -> str:
        return str(value)

    def decode(self, text: str) -> str:
        return text


class IntCodec(ValueCodec[int]):
    def encode(self, value: int) -> str:
        return str(value)

    def decode(self, text: str) -> int:
        try:
            ret = int(text)
        except ValueError:
            raise ConfigDecodeError(text, 'int') from None
        # `1_000`, ` 7` or non-ASCII digits are not canonical.
        if str(ret) != text:
            raise ConfigDecodeError(text, 'int')
        return ret


class FloatCodec(ValueCodec[float]):
    def encode(self, value: float) -> str:
        return str(value)

    def decode(self, text: str) -> float:
        try:
            return float(text)
        except ValueError:
            raise ConfigDecodeError(text, 'float') from None


class BoolCodec(ValueCodec[bool]):
    TRUE, FALSE = 'true', 'false'

    def encode(self, value: bool) -> str:
        return self.TRUE if value else self.FALSE

    def decode(self, text: str) -> bool:
        if text == self.TRUE:
            return True
        if text == self.FALSE:
            return False
        raise ConfigDecodeError(text, 'bool')


class ListCodec(ValueCodec[list]):
    """Comma-joined sequence of scalars.

    An empty string is an empty list, and a single trailing delimiter
    (`1,2,`) is dropped instead of producing an empty last element.
    Empty segments in the middle are handed to the element codec as-is.
    """

    def __init__(self, element: ValueCodec, container: type = list) -> None:
        if isinstance(element, ListCodec):
            raise TypeError('nested lists are not supported')
        self._elem = element
        self._container = container

    @property
    def element(self) -> ValueCodec:
        return self._elem

    def encode(self, value: Any) -> str:
        return LIST_DELIMITER.join(self._elem.encode(i) for i in value)

    def decode(self, text: str) -> Any:
        if not text:
            return self._container()
        segments = text.split(LIST_DELIMITER)
        if len(segments) > 1 and segments[-1] == '':
            segments.pop()
        return self._container(self._elem.decode(i) for i in segments)

    def __repr__(self) -> str:
        return f'ListCodec({self._elem!r}, {self._container.__name__})'


# codecs keep no state, share them.
_SCALARS: dict[type, ValueCodec] = {
    str: StrCodec(),
    int: IntCodec(),
    float: FloatCodec(),
    bool: BoolCodec(),
}


def codec_for(tp: Any) -> ValueCodec:
    """Resolve the codec of a type: a scalar, `list[T]` or `tuple[T, ...]`.

    A bare `list` (or `tuple`) is read as a sequence of strings.
    """
    if tp is list or tp is tuple:
        return ListCodec(_SCALARS[str], tp)
    origin = get_origin(tp)
    if origin is list or origin is tuple:
        args = [i for i in get_args(tp) if i is not Ellipsis]
        elem = args[0] if args else str
        if elem is list or elem is tuple or get_origin(elem) is not None:
            raise TypeError(f'nested sequence type {tp!r} is not supported')
        return ListCodec(codec_for(elem), origin)
    try:
        return _SCALARS[tp]
    except (KeyError, TypeError):
        raise TypeError(f'unsupported config value type: {tp!r}') from None


def codec_of(value: Any) -> ValueCodec:
    """Resolve the codec of a runtime value."""
    # bool first, as it is also an int.
    if isinstance(value, bool):
        return _SCALARS[bool]
    if isinstance(value, (list, tuple)):
        if not value:
            return ListCodec(_SCALARS[str], type(value))
        elem = codec_of(value[0])
        for i in value[1:]:
            if type(codec_of(i)) is not type(elem):
                raise TypeError(
                    f'mixed element types in list: {value!r}')
        return ListCodec(elem, type(value))
    for tp in (int, float, str):
        if isinstance(value, tp):
            return _SCALARS[tp]
    raise TypeError(
        f'unsupported config value type: {type(value).__name__}')


def encode(value: Any) -> str:
    """Canonical string of `value`."""
    return codec_of(value).encode(value)


def decode(text: str, tp: Any = str) -> Any:
    """Read `text` as `tp`. Raises `ConfigDecodeError` on malformed text."""
    return codec_for(tp).decode(text)


def convert(value: Any, tp: Any) -> Any:
    """Convert `value` to `tp` through its canonical string.

    No conversion happens at all if `value` already is a `tp`.
    """
    if type(value) is tp:
        return value
    origin = get_origin(tp)
    if origin is not None and type(value) is origin:
        args = [i for i in get_args(tp) if i is not Ellipsis]
        if args and all(type(i) is args[0] for i in value):
            return value
    return decode(encode(value), tp)
