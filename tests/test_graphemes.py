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
from bracket.parser.graphemes import split_graphemes


def test_ascii():
    assert split_graphemes("[a b]") == ["[", "a", " ", "b", "]"]


def test_empty():
    assert split_graphemes("") == []


def test_multi_codepoint_graphemes():
    # combining acute accent, regional indicator pair and skin tone modifier each form a single grapheme
    text = "e\u0301\U0001F1E7\U0001F1EA\U0001F44D\U0001F3FD"
    assert split_graphemes(text) == ["e\u0301", "\U0001F1E7\U0001F1EA", "\U0001F44D\U0001F3FD"]


def test_crlf_is_one_grapheme():
    assert split_graphemes("a\r\nb\nc") == ["a", "\r\n", "b", "\n", "c"]
