# Copyright 2019 The Johns Hopkins University Applied Physics Laboratory
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
A library for writing messages to the user's terminal or the Lambda log.

The level functions (error, warning, info, debug) print a fixed width prefix
and, when color is enabled, wrap the message in colorama escape codes. Color
is turned off for output that is piped or redirected and inside Lambda, where
the escape codes would end up in CloudWatch.

Library modules log through the logging module. setup_logging() installs a
ConsoleHandler that routes those records through the same level functions.
"""

import sys
import logging
import colorama
from colorama import Fore, Style

from . import constants as const
from .exceptions import ConfigurationError

COLOR = True
_COLORAMA_INIT = False

def init(color=True):
    global COLOR, _COLORAMA_INIT
    COLOR = color
    if color and not _COLORAMA_INIT:
        colorama.init()
        _COLORAMA_INIT = True

def _colorize(*style_msg, **kwargs):
    if not COLOR:
        # Drop the escape codes, keep the message
        style_msg = style_msg[1:-1]
    print(*style_msg, sep='', **kwargs)

def red(msg, **kwargs):
    return _colorize(Fore.RED, msg, Style.RESET_ALL, **kwargs)

def yellow(msg, **kwargs):
    return _colorize(Fore.YELLOW, msg, Style.RESET_ALL, **kwargs)

def green(msg, **kwargs):
    return _colorize(Fore.GREEN, msg, Style.RESET_ALL, **kwargs)

def blue(msg, **kwargs):
    return _colorize(Fore.BLUE, msg, Style.RESET_ALL, **kwargs)

def error(msg, **kwargs):
    return red('ERROR: ' + msg, **kwargs)

def warning(msg, **kwargs):
    return yellow(' WARN: ' + msg, **kwargs)

def info(msg, **kwargs):
    return blue(' INFO: ' + msg, **kwargs)

def debug(msg, **kwargs):
    return green('DEBUG: ' + msg, **kwargs)

class ConsoleHandler(logging.Handler):
    """Logging handler that writes records using the console level functions"""

    def __init__(self, stream=None, level=logging.NOTSET):
        super().__init__(level)
        self.stream = stream

    def _writer(self, levelno):
        if levelno >= logging.ERROR:
            return error
        elif levelno >= logging.WARNING:
            return warning
        elif levelno >= logging.INFO:
            return info
        else:
            return debug

    def emit(self, record):
        try:
            msg = self.format(record)
            stream = self.stream if self.stream is not None else sys.stderr
            self._writer(record.levelno)(msg, file=stream, flush=True)
        except Exception:
            self.handleError(record)

def get_level(level):
    """Convert a level name or number into a logging level number

    Raises:
        ConfigurationError: If the name is not a known level
    """
    if isinstance(level, int):
        return level

    name = str(level).strip().upper()
    if name not in const.LOG_LEVELS:
        raise ConfigurationError("Unknown log level '{}'".format(level))
    return getattr(logging, name)

def setup_logging(level='INFO', color=True, stream=None, aws_debug=False):
    """Send the lambdupdate loggers to the console

    Safe to call more than once, Lambda reuses the process between
    invocations and the previous handler is replaced.

    Args:
        level (str|int): Level for the lambdupdate loggers
        color (bool): If the output should be colored
        stream (optional[file]): Where to write, defaults to stderr
        aws_debug (bool): Also show boto3 / botocore debug messages

    Returns:
        logging.Logger: The lambdupdate root logger
    """
    init(color)

    handler = ConsoleHandler(stream)
    handler.setFormatter(logging.Formatter('%(name)s: %(message)s'))

    logger = logging.getLogger(const.APP_NAME)
    for old in list(logger.handlers):
        if isinstance(old, ConsoleHandler):
            logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(get_level(level))
    logger.propagate = False

    for name in const.AWS_LOGGERS:
        aws_logger = logging.getLogger(name)
        for old in list(aws_logger.handlers):
            if isinstance(old, ConsoleHandler):
                aws_logger.removeHandler(old)
        if aws_debug:
            aws_logger.addHandler(handler)
            aws_logger.setLevel(logging.DEBUG)
            aws_logger.propagate = False

    return logger
