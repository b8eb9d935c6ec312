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
from typing import Iterator, List, Union

from bracket import config, const
from bracket.ast import CompilerException, Location
from bracket.ast.tree import BackReference, NodeRef, Sub
from bracket.parser import ParserException, ParserInternalError
from bracket.parser.graphemes import split_graphemes
from bracket.parser.machine import Parser, ParseResult

LOGGER = logging.getLogger(__name__)

# The synthetic subs sit above the user's top-level subs, which are at depth 1
WRAPPER_DEPTH = 1


class Program(object):
    """
    The arena of a parsed program. Subs are stored in the order their opening brackets appear in the code and are
    never removed or reordered, so indices stay valid for the lifetime of the program.

    Index 0 is the synthetic root, its only child is the synthetic program sub at index 1. The children of the
    program sub are the top-level items of the user's code.
    """

    def __init__(self, subs: List[Sub]) -> None:
        self.subs = subs

    @classmethod
    def from_code(cls, code: str, file: str = "<string>") -> "Program":
        return parse(code, file)

    @property
    def root(self) -> Sub:
        return self.subs[const.ROOT_INDEX]

    @property
    def body(self) -> Sub:
        return self.subs[const.PROGRAM_INDEX]

    def resolve(self, value: Union[NodeRef, BackReference]) -> Sub:
        """
        Look up the sub a reference points to.

        :raises IndexError: a back reference points outside of the arena
        """
        if value.index < 0 or value.index >= len(self.subs):
            raise IndexError("Reference %r points outside of the program (%d subs)" % (value, len(self.subs)))
        return self.subs[value.index]

    def __getitem__(self, index: int) -> Sub:
        return self.subs[index]

    def __iter__(self) -> Iterator[Sub]:
        return iter(self.subs)

    def __len__(self) -> int:
        return len(self.subs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return False
        return self.subs == other.subs

    def __repr__(self) -> str:
        return "Program(%d subs)" % len(self.subs)


def _end_location(code: List[str], file: str) -> Location:
    """The position right after the last grapheme of the code"""
    line = 1
    column = 0
    for char in code:
        column += 1
        if char in const.NEWLINES:
            line += 1
            column = 0
    return Location(file, line, column, len(code))


def _to_user_location(location: Location, user_length: int, end: Location) -> Location:
    """Translate a location in the wrapped code to the user's code"""
    shifted = location.shift(len(const.WRAPPER_PREFIX), len(const.WRAPPER_PREFIX))
    if shifted.index > user_length:
        # inside the synthetic suffix
        return end
    return shifted


def _relocate(exception: CompilerException, user_length: int, end: Location) -> None:
    location = exception.get_location()
    if location is not None:
        exception.location = _to_user_location(location, user_length, end)


def _run(parser: Parser) -> ParseResult:
    try:
        return parser.parse(depth=-WRAPPER_DEPTH)
    except RecursionError:
        # the sub opened last is the deepest one
        location = parser.subs[-1].location
        assert location is not None
        raise ParserException(location, "nesting too deep for the interpreter's recursion limit") from None


def parse(code: str, file: str = "<string>") -> Program:
    """
    Parse the given code into a program.

    :param code: The source code.
    :param file: The name of the file the code was read from, used in locations.
    :raises ParserException: The code is not a valid program.
    """
    user_code = split_graphemes(code)
    end = _end_location(user_code, file)
    wrapped = split_graphemes(const.WRAPPER_PREFIX) + user_code + split_graphemes(const.WRAPPER_SUFFIX)

    parser = Parser(wrapped, file, config.parser_max_depth.get(), len(const.WRAPPER_PREFIX) + len(user_code))

    try:
        result = _run(parser)
        if result.index != len(wrapped):
            raise ParserInternalError(
                parser.location(result.index, result.line, result.column), "input left after the root sub was closed"
            )
    except (ParserException, ParserInternalError) as e:
        _relocate(e, len(user_code), end)
        LOGGER.debug("Parsing %s failed: %s", file, e)
        raise

    subs = parser.subs
    for index, sub in enumerate(subs):
        if index in (const.ROOT_INDEX, const.PROGRAM_INDEX):
            sub.location = None
        elif sub.location is not None:
            sub.location = _to_user_location(sub.location, len(user_code), end)

    LOGGER.debug("Parsed %d subs from %s", len(subs), file)
    return Program(subs)


def parse_file(filename: str) -> Program:
    """
    Read a UTF-8 encoded file and parse it.
    """
    with open(filename, "r", encoding="utf-8", newline="") as fh:
        code = fh.read()
    return parse(code, filename)
