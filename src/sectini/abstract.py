# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : sectini contributors

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

T = TypeVar('T')


class ValueCodec(Generic[T], metaclass=ABCMeta):
    """Two-way conversion between a value and its canonical string."""

    @abstractmethod
    def encode(self, value: T) -> str:
        raise NotImplementedError

    @abstractmethod
    def decode(self, text: str) -> T:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str, encoding: str | None = None) -> None:
        self._fn = filename
        self._codec = encoding

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
