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

import math
from decimal import Decimal
from typing import TYPE_CHECKING

from bracket import const
from bracket.ast.tree import BackReference, Float, Integer, Name, NodeRef, StringLiteral, Sub, Value

if TYPE_CHECKING:
    from bracket.program import Program


def to_canonical(program: "Program") -> str:
    """
    Render the user's part of a program in canonical form: one top-level item per line, a single space between the
    children of a sub and no other whitespace. Parsing the result produces the same subs, at the same indices.
    """
    return "\n".join(_render_value(program, value) for value in program.body.children)


def _render_sub(program: "Program", sub: Sub) -> str:
    out = const.SUB_OPEN + sub.name + const.SUB_OPEN
    out += " ".join(_render_value(program, child) for child in sub.children)
    out += const.SUB_CLOSE
    if sub.modifier is not None:
        out += _render_value(program, sub.modifier)
    return out + const.SUB_CLOSE


def _render_float(value: float) -> str:
    if not math.isfinite(value):
        raise ValueError("Float %s has no literal representation" % value)
    # positional notation, the grammar has no exponents
    out = format(Decimal(repr(value)), "f")
    if "." not in out:
        out += ".0"
    return out


def _render_value(program: "Program", value: Value) -> str:
    if isinstance(value, NodeRef):
        return _render_sub(program, program.resolve(value))
    if isinstance(value, BackReference):
        return "%s%d" % (const.BACK_REFERENCE_MARKER, value.index)
    if isinstance(value, Name):
        return value.value
    if isinstance(value, Integer):
        return str(value.value)
    if isinstance(value, Float):
        return _render_float(value.value)
    if isinstance(value, StringLiteral):
        raise ValueError("String literals have no syntax")
    raise TypeError("Unknown value %r" % (value,))
