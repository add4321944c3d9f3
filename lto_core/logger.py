"""
lto_core.logger
---------------
One JSON object per line, UTC timestamps. Handlers are attached to the
package logger ("lto_core") the first time any module asks for a logger;
modules log through children such as "lto_core.crypto" that propagate to it.

LTO_LOG_LEVEL and LTO_LOG_FILE are read at that first configuration only.
"""

import json, logging, os, sys, time
from . import config

PACKAGE_LOGGER = "lto_core"

_FORMAT = json.dumps({
    "ts": "%(asctime)s",
    "level": "%(levelname)s",
    "name": "%(name)s",
    "msg": "%(message)s",
})


def _formatter() -> logging.Formatter:
    formatter = logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%SZ")
    formatter.converter = time.gmtime
    return formatter


def _add_file_handler(logger: logging.Logger, path: str) -> None:
    path = os.path.abspath(path)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == path:
            return
    os.makedirs(os.path.dirname(path), exist_ok=True)
    file_handler = logging.FileHandler(path)
    file_handler.setFormatter(_formatter())
    logger.addHandler(file_handler)


def _configure_package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if root.handlers:
        return root

    root.setLevel(config.log_level())
    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(_formatter())
    root.addHandler(stream)

    env_file = config.log_file()
    if env_file:
        _add_file_handler(root, env_file)
    return root


def get_logger(name=PACKAGE_LOGGER, level=None, to_file=None):
    """
    Logger for an lto_core module.

    `level` overrides the level of this logger only. `to_file` adds a file
    sink to this logger (once per path) on top of the package handlers.
    """
    _configure_package_logger()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    if to_file:
        _add_file_handler(logger, to_file)
    return logger
