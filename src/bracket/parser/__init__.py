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

from bracket.ast import CompilerException, Location, export


class ParserException(CompilerException):
    """Exception occurring during the parsing of the code"""

    category = export.ErrorCategory.parser

    def __init__(self, location: Location, description: str) -> None:
        CompilerException.__init__(self, description)
        self.set_location(location)

    @property
    def description(self) -> str:
        return self.msg

    @property
    def index(self) -> int:
        return self.get_location().index

    @property
    def line(self) -> int:
        return self.get_location().lnr

    @property
    def column(self) -> int:
        return self.get_location().column

    @property
    def file(self) -> str:
        return self.get_location().file

    def get_location(self) -> Location:
        assert self.location is not None
        return self.location

    def format(self) -> str:
        return "ParserError on line %d:%d: %s" % (self.line, self.column, self.description)


class ParserInternalError(CompilerException):
    """
    The parser was driven into a state its callers guarantee never happens. This is not a problem with the parsed code
    and is never reported as a syntax error.
    """

    category = export.ErrorCategory.internal

    def __init__(self, location: Location, msg: str) -> None:
        CompilerException.__init__(self, msg)
        self.set_location(location)

    def format(self) -> str:
        return "Internal parser error: %s (%s)" % (self.get_message(), self.get_location())
