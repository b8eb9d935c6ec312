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

from typing import Optional

from bracket.ast import export


class Location(export.Exportable):
    """
    A single position in a source text.

    :param file: the file the position is in, "<string>" for code that was not read from a file
    :param lnr: the line number, 1-based
    :param column: the number of graphemes before this position on its line, 0-based
    :param index: the absolute grapheme offset in the source text, 0-based
    """

    __slots__ = ("file", "lnr", "column", "index")

    def __init__(self, file: str, lnr: int, column: int, index: int) -> None:
        self.file = file
        self.lnr = lnr
        self.column = column
        self.index = index

    def shift(self, index: int, column: int) -> "Location":
        """
        Return a copy of this location moved back by the given amounts. The column is only moved on the first line.
        """
        return Location(self.file, self.lnr, self.column - column if self.lnr == 1 else self.column, self.index - index)

    def export(self) -> export.Location:
        # Location is 1-based for lines, export.Position spec is 0-based
        start: export.Position = export.Position(line=self.lnr - 1, character=self.column)
        end: export.Position = export.Position(line=self.lnr - 1, character=self.column + 1)
        return export.Location(uri=self.file, range=export.Range(start=start, end=end))

    def __str__(self) -> str:
        return "%s:%d:%d" % (self.file, self.lnr, self.column)

    def __repr__(self) -> str:
        return "Location(%r, %d, %d, %d)" % (self.file, self.lnr, self.column, self.index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Location):
            return False
        return (
            self.file == other.file and self.lnr == other.lnr and self.column == other.column and self.index == other.index
        )

    def __hash__(self) -> int:
        return hash((self.file, self.lnr, self.column, self.index))


class CompilerException(Exception, export.Exportable):
    """Base class for exceptions generated by the parser"""

    category: export.ErrorCategory = export.ErrorCategory.parser

    def __init__(self, msg: str) -> None:
        Exception.__init__(self, msg)
        self.location: Optional[Location] = None
        self.msg = msg

    def set_location(self, location: Location) -> None:
        if self.location is None:
            self.location = location

    def get_message(self) -> str:
        return self.msg

    def get_location(self) -> Optional[Location]:
        return self.location

    def format(self) -> str:
        """Make a string representation of this particular exception"""
        location = self.get_location()
        if location is not None:
            return "%s (%s)" % (self.get_message(), location)
        else:
            return self.get_message()

    def export(self) -> export.Error:
        location: Optional[Location] = self.get_location()
        module: Optional[str] = self.__class__.__module__
        name: str = self.__class__.__qualname__
        return export.Error(
            category=self.category,
            type=name if module is None else "%s.%s" % (module, name),
            message=self.get_message(),
            location=location.export() if location is not None else None,
        )

    def __str__(self) -> str:
        return self.format()
