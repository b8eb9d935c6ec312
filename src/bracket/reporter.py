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

from typing import List, Optional

from bracket import config, const
from bracket.ast import CompilerException, Location
from bracket.parser.graphemes import split_graphemes

INDENT = "    "


def source_lines(code: str) -> List[List[str]]:
    """Split code in lines of graphemes, the way the parser counts them"""
    lines: List[List[str]] = [[]]
    for char in split_graphemes(code):
        if char in const.NEWLINES:
            lines.append([])
        else:
            lines[-1].append(char)
    return lines


def _display(chars: List[str], tab_width: int) -> List[str]:
    return [" " * tab_width if char == "\t" else " " if char == "\r" else char for char in chars]


def format_diagnostic(exception: CompilerException, code: Optional[str] = None) -> str:
    """
    Render an exception for a user. When the code is given, the offending line is shown with a caret under the
    reported column.
    """
    out = str(exception)
    location: Optional[Location] = exception.get_location()
    if code is None or location is None:
        return out

    lines = source_lines(code)
    if location.lnr > len(lines):
        return out

    tab_width = config.reporter_tab_width.get()
    line = lines[location.lnr - 1]
    # one column per grapheme, tabs are expanded
    offset = sum(tab_width if char == "\t" else 1 for char in line[: location.column])
    return "\n".join([out, INDENT + "".join(_display(line, tab_width)), INDENT + " " * offset + "^"])
