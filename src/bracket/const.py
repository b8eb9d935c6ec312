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

from enum import Enum

SUB_OPEN = "["
SUB_CLOSE = "]"
BACK_REFERENCE_MARKER = "&"

# CRLF is a single grapheme cluster
WHITESPACE = frozenset([" ", "\t", "\n", "\r", "\r\n"])
NEWLINES = frozenset(["\n", "\r\n"])

# The user's code is parsed as the body of a synthetic program sub, itself the only child of a synthetic root sub
WRAPPER_PREFIX = SUB_OPEN * 4
WRAPPER_SUFFIX = SUB_CLOSE * 4

ROOT_INDEX = 0
PROGRAM_INDEX = 1

# Values an Integer literal must fit in
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

ENVIRON_FORCE_TTY = "BRACKET_FORCE_TTY"
ENVIRON_PREFIX = "BRACKET"


class LogLevel(str, Enum):
    """
    Log levels used by the command line tool.
    """

    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"
    TRACE = "TRACE"

    @property
    def to_int(self) -> int:
        return LOG_LEVEL_AS_INTEGER[self]


# Mapping each log level to its integer value
LOG_LEVEL_AS_INTEGER = {
    LogLevel.CRITICAL: 50,
    LogLevel.ERROR: 40,
    LogLevel.WARNING: 30,
    LogLevel.INFO: 20,
    LogLevel.DEBUG: 10,
    LogLevel.TRACE: 3,
}
