"""
lto_core.config
---------------
Environment driven defaults. LTO_DEFAULT_ENCODING is read on every call, so
a process (or a test) can change it without reloading the package. The log
settings are read once, when the package logger is first configured.

- LTO_DEFAULT_ENCODING: encoding for keys, addresses and signatures (base58)
- LTO_LOG_LEVEL:        package log level (INFO)
- LTO_LOG_FILE:         optional extra log file
"""

from __future__ import annotations
import logging, os
from typing import Optional, Union
from .constants import DEFAULT_ENCODING, DEFAULT_LOG_LEVEL
from .utils import Encoding


def default_encoding() -> Encoding:
    return Encoding.parse(os.getenv("LTO_DEFAULT_ENCODING", DEFAULT_ENCODING))


def resolve_encoding(encoding: Optional[Union[Encoding, str]]) -> Encoding:
    if encoding is None:
        return default_encoding()
    return Encoding.parse(encoding)


def log_level() -> int:
    name = os.getenv("LTO_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.INFO


def log_file() -> Optional[str]:
    return os.getenv("LTO_LOG_FILE") or None
