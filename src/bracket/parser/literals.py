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

import ply.lex as lex

from bracket.ast.tree import BackReference, Float, Integer, Name, Value
from bracket.const import INT64_MAX, INT64_MIN

LOGGER = logging.getLogger(__name__)

# List of token names. Rules are tried in the order they are defined, the first one that matches wins.
tokens = ["BACKREF", "FLOAT", "INT"]


def t_BACKREF(t: lex.LexToken) -> lex.LexToken:  # noqa: N802
    r"&[0-9]*"
    # a bare '&' refers to index 0, exactly like '&0'
    t.value = int(t.value[1:]) if len(t.value) > 1 else 0
    return t


def t_FLOAT(t: lex.LexToken) -> lex.LexToken:  # noqa: N802
    r"[0-9]+[.][0-9]+"
    t.value = float(t.value)
    return t


def t_INT(t: lex.LexToken) -> lex.LexToken:  # noqa: N802
    r"[0-9]+"
    t.value = int(t.value)
    return t


def t_error(t: lex.LexToken) -> None:
    # Not a literal: drop the remainder so the token is classified as a name
    t.lexer.skip(len(t.value))


# Build the lexer
lexer = lex.lex()


def classify(token: str) -> Value:
    """
    Classify a finished token. A literal rule only applies when it matches the entire token, everything else is a name.

    :param token: The token text, never empty.
    :return: The value the token stands for.
    """
    if not token:
        raise ValueError("Can not classify an empty token")

    lexer.input(token)
    tok = lexer.token()
    if tok is None or tok.lexpos != 0 or lexer.lexpos != len(token):
        return Name(token)

    if tok.type == "BACKREF":
        return BackReference(tok.value)
    if tok.type == "FLOAT":
        return Float(tok.value)

    if not INT64_MIN <= tok.value <= INT64_MAX:
        LOGGER.warning("Integer literal %s does not fit in 64 bits, it is treated as a name", token)
        return Name(token)
    return Integer(tok.value)
