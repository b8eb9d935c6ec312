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
import itertools
import logging

import pytest

from bracket.ast import Location
from bracket.ast.tree import BackReference, Integer, Name, NodeRef, Sub
from bracket.parser import ParserException, ParserInternalError
from bracket.parser.graphemes import split_graphemes
from bracket.parser.machine import TRANSITIONS, Action, CharClass, Parser, ParseResult, State, char_class, transition
from utils import log_contains


def parse_sub(code: str, index: int = 0, **kwargs) -> Parser:
    parser = Parser(split_graphemes(code), "test", **kwargs)
    parser.result = parser.parse(index)
    return parser


def test_transition_table_is_complete():
    assert set(TRANSITIONS) == set(itertools.product(State, CharClass))


def test_done_is_terminal():
    for char_cls in CharClass:
        assert TRANSITIONS[(State.DONE, char_cls)].action is Action.INTERNAL_ERROR


@pytest.mark.parametrize(
    "state",
    [state for state in State if state not in (State.IN_NAME, State.IN_VALUE, State.IN_MODIFIER_NAME, State.DONE)],
)
def test_whitespace_is_skipped_outside_tokens(state):
    for char in [" ", "\t", "\n", "\r", "\r\n"]:
        assert transition(state, char) == (state, Action.SKIP, None)


@pytest.mark.parametrize("state", [State.IN_NAME, State.IN_VALUE, State.IN_MODIFIER_NAME])
def test_whitespace_terminates_tokens(state):
    step = transition(state, " ")
    assert step.action in (Action.SET_NAME, Action.PUSH_VALUE, Action.SET_MODIFIER)
    assert step.state is not state


def test_char_class():
    assert char_class("[") is CharClass.OPEN
    assert char_class("]") is CharClass.CLOSE
    assert char_class("\r\n") is CharClass.SPACE
    assert char_class("a") is CharClass.OTHER
    assert char_class("\U0001F1E7\U0001F1EA") is CharClass.OTHER


def test_parse_single_sub():
    parser = parse_sub("[[a 1]]")
    assert parser.result == ParseResult(sub=0, index=7, line=1, column=7)
    assert parser.subs == [Sub(children=[Name("a"), Integer(1)])]


def test_parse_returns_cursor_after_closing_bracket():
    parser = parse_sub("[[a]] [[b]]")
    assert parser.result.index == 5
    assert len(parser.subs) == 1

    parser = parse_sub("[[a]] [[b]]", 6)
    assert parser.result.index == 11
    assert parser.subs[0].children == [Name("b")]


def test_parse_nested_subs_share_the_arena():
    parser = parse_sub("[n[[[x]] [[y]m] &0]]")
    assert [sub.parent for sub in parser.subs] == [None, 0, 0]
    root, first, second = parser.subs
    assert root.name == "n"
    assert root.children == [NodeRef(1), NodeRef(2), BackReference(0)]
    assert first.children == [Name("x")]
    assert second.children == [Name("y")]
    assert second.modifier == Name("m")


def test_parse_modifier_sub_is_lexically_enclosed():
    parser = parse_sub("[[a][[b]]]")
    assert parser.subs[0].modifier == NodeRef(1)
    assert parser.subs[1].parent == 0
    assert parser.subs[1].children == [Name("b")]


def test_parse_name_and_whitespace():
    parser = parse_sub("[ name \n [ a\tb ] mod ]")
    sub = parser.subs[0]
    assert sub.name == "name"
    assert sub.children == [Name("a"), Name("b")]
    assert sub.modifier == Name("mod")


def test_parse_values_touching_brackets():
    parser = parse_sub("[[a[[b]]c]]")
    assert parser.subs[0].children == [Name("a"), NodeRef(1), Name("c")]


def test_parse_position_tracking():
    """Rescanning a character and returning from a nested sub do not advance the column twice"""
    parser = parse_sub("[[abc def [[x]]\n  [[y]]]\n]")
    assert parser.subs[1].location == Location("test", 1, 10, 10)
    assert parser.subs[2].location == Location("test", 2, 2, 18)
    assert parser.result == ParseResult(sub=0, index=26, line=3, column=1)


def test_parse_synthetic_input_is_end_of_input():
    with pytest.raises(ParserException) as e:
        parse_sub("[x]", input_end=2)
    assert e.value.description == "unexpected end of input, expected sub after sub open"
    assert e.value.index == 2

    with pytest.raises(ParserException) as e:
        parse_sub("[x]")
    assert e.value.description == "expected sub after sub open, found ']'"


def test_parse_program_body_closes_at_input_end():
    parse_sub("[[[[a]]]]", input_end=5)

    with pytest.raises(ParserException) as e:
        parse_sub("[[[[a]]]]", input_end=6)
    assert e.value.description == "unmatched ']' closes the program"
    assert e.value.index == 5


def test_parse_logs_progress(caplog):
    caplog.set_level(logging.DEBUG)
    parse_sub("[n[tok]mod]")
    log_contains(caplog, "bracket.parser.machine", logging.DEBUG, "starting sub at position 0")
    log_contains(caplog, "bracket.parser.machine", logging.DEBUG, "name: n")
    log_contains(caplog, "bracket.parser.machine", logging.DEBUG, "found token/literal 'tok' at position 6")
    log_contains(caplog, "bracket.parser.machine", logging.DEBUG, "modifier: mod at position 10")


@pytest.mark.parametrize(
    "code,index,message",
    [
        ("[]", 1, "expected sub after sub open, found ']'"),
        ("[name]", 5, "expected sub after sub open, found ']'"),
        ("[name x[]]", 6, "expected sub after sub open, found 'x'"),
        ("[name ]", 6, "expected sub after sub open, found ']'"),
        ("[[a]mod[]]", 7, "expected sub end after modifier name, found '['"),
        ("[[a]mod x]", 8, "expected sub end after modifier, found 'x'"),
        ("[[a][[b]][]", 9, "expected sub end after modifier, found '['"),
        ("[[a]", 4, "unexpected end of input, expected ']'"),
        ("[[a", 3, "unexpected end of input, expected ']'"),
    ],
)
def test_parse_syntax_errors(code, index, message):
    with pytest.raises(ParserException) as e:
        parse_sub(code)
    assert e.value.description == message
    assert e.value.index == index
    assert e.value.line == 1
    assert e.value.column == index


@pytest.mark.parametrize("code", ["a[[b]]", "][[b]]"])
def test_parse_must_start_at_bracket(code):
    with pytest.raises(ParserInternalError) as e:
        parse_sub(code)
    assert not isinstance(e.value, ParserException)
    assert "a sub must start with '['" in str(e.value)


def test_parse_max_depth():
    parse_sub("[[[[[[x]]]]]]", max_depth=2)

    with pytest.raises(ParserException) as e:
        parse_sub("[[[[[[[[x]]]]]]]]", max_depth=2)
    assert e.value.description == "maximum nesting depth of 2 exceeded"
    assert e.value.index == 6
