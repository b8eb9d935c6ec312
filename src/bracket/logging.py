"""
    Copyright 2018 Inmanta

    Licensed under the Apache License, Version 2.0 (the "License");
    you may not use this file except in compliance with the License.
    You may obtain a copy of the License at

        http://www.apache.org/licenses/LICENSE-2.0

    Unless required by applicable law or agreed to in writing, software
    distributed under the License is distributed on an "AS IS" BASIS,
    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
    See the License for the specific language governing permissions and
    limitations under the License.

    Contact: code@inmanta.com
"""

import logging
import os
import sys
from typing import Dict, Optional, TextIO

import colorlog
from colorlog.formatter import LogColors

from bracket import const


def _is_on_tty() -> bool:
    return (hasattr(sys.stdout, "isatty") and sys.stdout.isatty()) or const.ENVIRON_FORCE_TTY in os.environ


"""
This dictionary maps the number of -v flags on the command line to the corresponding Python log levels
"""
log_levels: Dict[int, int] = {
    0: const.LogLevel.WARNING.to_int,
    1: const.LogLevel.INFO.to_int,
    2: const.LogLevel.DEBUG.to_int,
    3: const.LogLevel.TRACE.to_int,
}

logging.addLevelName(const.LogLevel.TRACE.to_int, const.LogLevel.TRACE.value)


def convert_verbosity(verbose: int) -> int:
    """
    Convert the number of -v flags to a Python log level. The minimal log level on the CLI is always WARNING.
    """
    return log_levels[max(0, min(verbose, max(log_levels)))]


class MultiLineFormatter(colorlog.ColoredFormatter):
    """
    Formatter for multi-line log records.

    This class extends the `colorlog.ColoredFormatter` class to indent every continuation line of a record to the
    width of its header, so diagnostics that span several lines stay readable.
    """

    def __init__(
        self,
        fmt: Optional[str] = None,
        *,
        log_colors: Optional[LogColors] = None,
        reset: bool = True,
        no_color: bool = False,
    ):
        """
        Initialize a new `MultiLineFormatter` instance.

        :param fmt: Optional string specifying the log record format.
        :param log_colors: Optional `LogColors` object mapping log level names to color codes.
        :param reset: Boolean indicating whether to reset terminal colors at the end of each log record.
        :param no_color: Boolean indicating whether to disable colors in the output.
        """
        super().__init__(fmt, log_colors=log_colors, reset=reset, no_color=no_color)
        self.fmt = fmt

    def get_header_length(self, record: logging.LogRecord) -> int:
        """
        Get the header length of a given log record.

        :param record: The `logging.LogRecord` object for which to calculate the header length.
        :return: The length of the header in the log record, without color codes.
        """
        # to get the length of the header we want to get the header without the color codes
        formatter = colorlog.ColoredFormatter(
            fmt=self.fmt,
            log_colors=self.log_colors,
            reset=False,
            no_color=True,
        )
        header = formatter.format(
            logging.LogRecord(
                record.name,
                record.levelno,
                record.pathname,
                record.lineno,
                "",
                (),
                None,
            )
        )
        return len(header)

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record with added indentation.

        :param record: The `logging.LogRecord` object to format.
        :return: The formatted log record as a string.
        """
        indent: str = " " * self.get_header_length(record)
        head, *tail = super().format(record).splitlines(True)
        return head + "".join(indent + line for line in tail)


class BracketLoggerConfig:
    """
    This class is the entry-point for configuring the Python logging framework.

    Usage:
    To use this class, you first need to call the `get_instance`. This method takes a `stream` argument
    that specifies where the log messages should be sent to. If no `stream` is provided,
    the log messages will be sent to standard error.

    You can then call the `set_log_level` method once the command line options are known.
    """

    _instance: Optional["BracketLoggerConfig"] = None

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        self._stream = stream
        self._handler: Optional[logging.Handler] = None
        self._apply_logging_config(logging.INFO)

    @classmethod
    def get_instance(cls, stream: TextIO = sys.stderr) -> "BracketLoggerConfig":
        """
        This method should be used to obtain an instance of this class, because this class is a singleton.

        :param stream: The stream to send log messages to. Default is standard error (sys.stderr)
        """
        if cls._instance:
            if cls._instance._stream != stream:
                raise Exception("Instance already exists with a different stream")
        else:
            cls._instance = cls(stream)
        return cls._instance

    @classmethod
    def clean_instance(cls) -> None:
        """
        This method should be used to clean up an instance of this class.
        """
        if cls._instance is not None and cls._instance._handler is not None:
            logging.root.removeHandler(cls._instance._handler)
        cls._instance = None

    def get_handler(self) -> logging.Handler:
        assert self._handler is not None
        return self._handler

    def set_log_level(self, python_log_level: int) -> None:
        """
        Set the level of the console handler and of the root logger.
        """
        self._apply_logging_config(python_log_level)

    def _get_multiline_formatter(self) -> MultiLineFormatter:
        """
        Returns the formatter for logs that will be sent to the console.
        """
        if _is_on_tty():
            log_format = "%(log_color)s%(name)-25s%(levelname)-8s%(reset)s%(blue)s%(message)s"
            log_colors = {
                "TRACE": "cyan",
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red",
            }
        else:
            log_format = "%(name)-25s%(levelname)-8s%(message)s"
            log_colors = None

        return MultiLineFormatter(fmt=log_format, log_colors=log_colors, reset=_is_on_tty(), no_color=not _is_on_tty())

    def _apply_logging_config(self, python_log_level: int) -> None:
        """
        Install a single console handler on the root logger, replacing the one installed before.
        """
        if self._handler is not None:
            logging.root.removeHandler(self._handler)

        handler = logging.StreamHandler(self._stream)
        handler.setFormatter(self._get_multiline_formatter())
        handler.setLevel(python_log_level)
        logging.root.addHandler(handler)
        logging.root.setLevel(python_log_level)
        self._handler = handler
