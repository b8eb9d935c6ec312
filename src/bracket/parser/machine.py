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
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

from bracket import const
from bracket.ast import Location
from bracket.ast.tree import NodeRef, Sub
from bracket.parser import ParserException, ParserInternalError
from bracket.parser.literals import classify

LOGGER = logging.getLogger(__name__)


class State(Enum):
    START = "start"
    SUB_OPEN = "sub_open"
    IN_NAME = "in_name"
    NAME_END = "name_end"
    IN_BODY = "in_body"
    IN_VALUE = "in_value"
    IN_MODIFIER = "in_modifier"
    IN_MODIFIER_NAME = "in_modifier_name"
    MODIFIER_END = "modifier_end"
    DONE = "done"


class CharClass(Enum):
    OPEN = "open"
    CLOSE = "close"
    SPACE = "space"
    OTHER = "other"


class Action(Enum):
    SKIP = "skip"
    """ Consume the character """
    ACCUMULATE = "accumulate"
    """ Consume the character and append it to the token buffer """
    SET_NAME = "set_name"
    """ Consume the character, the token buffer becomes the name of the sub """
    NESTED_SUB = "nested_sub"
    """ Parse a nested sub starting at this character and append it to the children """
    RESCAN = "rescan"
    """ Switch state without consuming the character """
    PUSH_VALUE = "push_value"
    """ Classify the token buffer and append it to the children, without consuming the character """
    MODIFIER_SUB = "modifier_sub"
    """ Parse a nested sub starting at this character and attach it as the modifier """
    SET_MODIFIER = "set_modifier"
    """ Classify the token buffer and attach it as the modifier, without consuming the character """
    SYNTAX_ERROR = "syntax_error"
    INTERNAL_ERROR = "internal_error"


class Transition(NamedTuple):
    state: State
    action: Action
    message: Optional[str] = None


def _syntax_error(state: State, message: str) -> Transition:
    return Transition(state, Action.SYNTAX_ERROR, message)


def _internal_error(state: State, message: str) -> Transition:
    return Transition(state, Action.INTERNAL_ERROR, message)


EXPECTED_SUB = "expected sub after sub open"
EXPECTED_END_AFTER_MODIFIER_NAME = "expected sub end after modifier name"
EXPECTED_END_AFTER_MODIFIER = "expected sub end after modifier"
EXPECTED_START = "a sub must start with '['"
ALREADY_CLOSED = "sub is already closed"
UNMATCHED_CLOSE = "unmatched ']' closes the program"

# Every (state, character class) pair has an entry, unreachable pairs are internal errors.
# Whitespace only terminates a name or a token, everywhere else it is skipped.
TRANSITIONS: Dict[Tuple[State, CharClass], Transition] = {
    (State.START, CharClass.OPEN): Transition(State.SUB_OPEN, Action.SKIP),
    (State.START, CharClass.CLOSE): _internal_error(State.START, EXPECTED_START),
    (State.START, CharClass.SPACE): Transition(State.START, Action.SKIP),
    (State.START, CharClass.OTHER): _internal_error(State.START, EXPECTED_START),
    (State.SUB_OPEN, CharClass.OPEN): Transition(State.IN_BODY, Action.SKIP),
    (State.SUB_OPEN, CharClass.CLOSE): _syntax_error(State.SUB_OPEN, EXPECTED_SUB),
    (State.SUB_OPEN, CharClass.SPACE): Transition(State.SUB_OPEN, Action.SKIP),
    (State.SUB_OPEN, CharClass.OTHER): Transition(State.IN_NAME, Action.ACCUMULATE),
    (State.IN_NAME, CharClass.OPEN): Transition(State.IN_BODY, Action.SET_NAME),
    (State.IN_NAME, CharClass.CLOSE): _syntax_error(State.IN_NAME, EXPECTED_SUB),
    (State.IN_NAME, CharClass.SPACE): Transition(State.NAME_END, Action.SET_NAME),
    (State.IN_NAME, CharClass.OTHER): Transition(State.IN_NAME, Action.ACCUMULATE),
    (State.NAME_END, CharClass.OPEN): Transition(State.IN_BODY, Action.SKIP),
    (State.NAME_END, CharClass.CLOSE): _syntax_error(State.NAME_END, EXPECTED_SUB),
    (State.NAME_END, CharClass.SPACE): Transition(State.NAME_END, Action.SKIP),
    (State.NAME_END, CharClass.OTHER): _syntax_error(State.NAME_END, EXPECTED_SUB),
    (State.IN_BODY, CharClass.OPEN): Transition(State.IN_BODY, Action.NESTED_SUB),
    (State.IN_BODY, CharClass.CLOSE): Transition(State.IN_MODIFIER, Action.SKIP),
    (State.IN_BODY, CharClass.SPACE): Transition(State.IN_BODY, Action.SKIP),
    (State.IN_BODY, CharClass.OTHER): Transition(State.IN_VALUE, Action.RESCAN),
    (State.IN_VALUE, CharClass.OPEN): Transition(State.IN_BODY, Action.PUSH_VALUE),
    (State.IN_VALUE, CharClass.CLOSE): Transition(State.IN_BODY, Action.PUSH_VALUE),
    (State.IN_VALUE, CharClass.SPACE): Transition(State.IN_BODY, Action.PUSH_VALUE),
    (State.IN_VALUE, CharClass.OTHER): Transition(State.IN_VALUE, Action.ACCUMULATE),
    (State.IN_MODIFIER, CharClass.OPEN): Transition(State.MODIFIER_END, Action.MODIFIER_SUB),
    (State.IN_MODIFIER, CharClass.CLOSE): Transition(State.DONE, Action.SKIP),
    (State.IN_MODIFIER, CharClass.SPACE): Transition(State.IN_MODIFIER, Action.SKIP),
    (State.IN_MODIFIER, CharClass.OTHER): Transition(State.IN_MODIFIER_NAME, Action.ACCUMULATE),
    (State.IN_MODIFIER_NAME, CharClass.OPEN): _syntax_error(State.IN_MODIFIER_NAME, EXPECTED_END_AFTER_MODIFIER_NAME),
    (State.IN_MODIFIER_NAME, CharClass.CLOSE): Transition(State.MODIFIER_END, Action.SET_MODIFIER),
    (State.IN_MODIFIER_NAME, CharClass.SPACE): Transition(State.MODIFIER_END, Action.SET_MODIFIER),
    (State.IN_MODIFIER_NAME, CharClass.OTHER): Transition(State.IN_MODIFIER_NAME, Action.ACCUMULATE),
    (State.MODIFIER_END, CharClass.OPEN): _syntax_error(State.MODIFIER_END, EXPECTED_END_AFTER_MODIFIER),
    (State.MODIFIER_END, CharClass.CLOSE): Transition(State.DONE, Action.SKIP),
    (State.MODIFIER_END, CharClass.SPACE): Transition(State.MODIFIER_END, Action.SKIP),
    (State.MODIFIER_END, CharClass.OTHER): _syntax_error(State.MODIFIER_END, EXPECTED_END_AFTER_MODIFIER),
    (State.DONE, CharClass.OPEN): _internal_error(State.DONE, ALREADY_CLOSED),
    (State.DONE, CharClass.CLOSE): _internal_error(State.DONE, ALREADY_CLOSED),
    (State.DONE, CharClass.SPACE): _internal_error(State.DONE, ALREADY_CLOSED),
    (State.DONE, CharClass.OTHER): _internal_error(State.DONE, ALREADY_CLOSED),
}


def char_class(grapheme: str) -> CharClass:
    if grapheme == const.SUB_OPEN:
        return CharClass.OPEN
    if grapheme == const.SUB_CLOSE:
        return CharClass.CLOSE
    if grapheme in const.WHITESPACE:
        return CharClass.SPACE
    return CharClass.OTHER


def transition(state: State, grapheme: str) -> Transition:
    return TRANSITIONS[(state, char_class(grapheme))]


class ParseResult(NamedTuple):
    """
    :param sub: the arena index of the completed sub
    :param index: the position right after the closing bracket of the sub
    :param line: the line at that position
    :param column: the column at that position
    """

    sub: int
    index: int
    line: int
    column: int


class Parser:
    """
    Parses one sub per call to :meth:`parse`, recursing for every nested sub. All subs end up in :attr:`subs`, in the
    order their opening brackets were found.

    :param code: the source, split in graphemes
    :param file: the name used in locations
    :param max_depth: the deepest nesting allowed, a nested sub is one level deeper than its parent. 0 leaves the depth
        unbounded.
    :param input_end: the index where the text written by the user ends, when the code is wrapped in the synthetic
        program subs. The graphemes after it are synthetic, a syntax error on one of them is reported as the end of the
        input. The body of the program sub must not close before it.
    """

    def __init__(
        self, code: List[str], file: str = "<string>", max_depth: int = 0, input_end: Optional[int] = None
    ) -> None:
        self.code = code
        self.file = file
        self.max_depth = max_depth
        self.input_end = input_end
        self.subs: List[Sub] = []

    def location(self, index: int, line: int, column: int) -> Location:
        return Location(self.file, line, column, index)

    def parse(
        self, index: int = 0, line: int = 1, column: int = 0, parent: Optional[int] = None, depth: int = 0
    ) -> ParseResult:
        LOGGER.debug("starting sub at position %d", index)
        if self.max_depth and depth > self.max_depth:
            raise ParserException(
                self.location(index, line, column), "maximum nesting depth of %d exceeded" % (self.max_depth,)
            )

        current = len(self.subs)
        self.subs.append(Sub(parent=parent, location=self.location(index, line, column)))
        sub = self.subs[current]

        state = State.START
        buffer = ""

        while state is not State.DONE:
            if index >= len(self.code):
                raise ParserException(self.location(index, line, column), "unexpected end of input, expected ']'")

            char = self.code[index]
            step = transition(state, char)

            if step.action is Action.SYNTAX_ERROR:
                if self.input_end is not None and index >= self.input_end:
                    message = "unexpected end of input, %s" % step.message
                else:
                    message = "%s, found '%s'" % (step.message, char)
                raise ParserException(self.location(index, line, column), message)
            elif step.action is Action.INTERNAL_ERROR:
                raise ParserInternalError(self.location(index, line, column), "%s, found '%s'" % (step.message, char))
            elif step.action in (Action.NESTED_SUB, Action.MODIFIER_SUB):
                child = self.parse(index, line, column, current, depth + 1)
                if step.action is Action.NESTED_SUB:
                    sub.children.append(NodeRef(child.sub))
                else:
                    sub.modifier = NodeRef(child.sub)
                index, line, column = child.index, child.line, child.column
                state = step.state
                continue
            elif step.action is Action.RESCAN:
                state = step.state
                continue
            elif step.action is Action.PUSH_VALUE:
                LOGGER.debug("found token/literal '%s' at position %d", buffer, index)
                sub.children.append(classify(buffer))
                buffer = ""
                state = step.state
                continue
            elif step.action is Action.SET_MODIFIER:
                LOGGER.debug("modifier: %s at position %d", buffer, index)
                sub.modifier = classify(buffer)
                buffer = ""
                state = step.state
                continue
            elif step.action is Action.ACCUMULATE:
                buffer += char
            elif step.action is Action.SET_NAME:
                LOGGER.debug("name: %s", buffer)
                sub.name = buffer
                buffer = ""
            elif state is State.IN_BODY and step.state is State.IN_MODIFIER:
                if current == const.PROGRAM_INDEX and self.input_end is not None and index < self.input_end:
                    raise ParserException(self.location(index, line, column), UNMATCHED_CLOSE)

            state = step.state

            column += 1
            if char in const.NEWLINES:
                line += 1
                column = 0
            index += 1

        return ParseResult(current, index, line, column)
