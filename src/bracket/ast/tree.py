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

import dataclasses
from typing import List, Optional, Union

from bracket.ast import Location


@dataclasses.dataclass(frozen=True)
class NodeRef:
    """Owning reference to a nested sub, by arena index"""

    index: int


@dataclasses.dataclass(frozen=True)
class BackReference:
    """
    Non-owning reference to another sub by arena index, written as ``&N``.
    These references may point anywhere in the arena, including the sub that contains them.
    """

    index: int


@dataclasses.dataclass(frozen=True)
class Name:
    """A bare identifier that has not been bound to any sub"""

    value: str


@dataclasses.dataclass(frozen=True)
class Integer:
    value: int


@dataclasses.dataclass(frozen=True)
class Float:
    value: float


@dataclasses.dataclass(frozen=True)
class StringLiteral:
    # Reserved: no syntax produces a string literal
    value: str


Value = Union[NodeRef, BackReference, Name, Integer, Float, StringLiteral]


@dataclasses.dataclass
class Sub:
    """
    A single sub of the tree. It is created when its opening bracket is recognised and filled in until its closing
    bracket has been consumed.

    :param name: the name of the sub, empty when it is unnamed
    :param children: the values in the body of the sub, in source order
    :param modifier: the value attached after the body of the sub
    :param parent: the arena index of the lexically enclosing sub, None for the root
    :param location: the position of the opening bracket, None for synthetic subs
    """

    name: str = ""
    children: List[Value] = dataclasses.field(default_factory=list)
    modifier: Optional[Value] = None
    parent: Optional[int] = None
    location: Optional[Location] = dataclasses.field(default=None, compare=False)

    def get_sub_refs(self) -> List[NodeRef]:
        """Return the owning references of this sub, children first and the modifier last"""
        refs = [child for child in self.children if isinstance(child, NodeRef)]
        if isinstance(self.modifier, NodeRef):
            refs.append(self.modifier)
        return refs
