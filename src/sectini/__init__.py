# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:31:07
# @Author : sectini contributors

import logging

from .convert import ConfigDecodeError, codec_for, convert, decode, encode
from .model import DEFAULT_SECTION, ConfigEntry, ConfigStore, FindResult, Value
from .parser import IniParser, InvalidConfigDocument, YamlParser

__all__ = [
    'DEFAULT_SECTION', 'ConfigEntry', 'ConfigStore', 'FindResult', 'Value',
    'IniParser', 'YamlParser', 'InvalidConfigDocument',
    'ConfigDecodeError', 'codec_for', 'convert', 'decode', 'encode'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
