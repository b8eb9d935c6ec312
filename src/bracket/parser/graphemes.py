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

from typing import List

import regex

# One extended grapheme cluster, as defined by UAX #29
GRAPHEME = regex.compile(r"\X")


def split_graphemes(text: str) -> List[str]:
    """
    Split text into user-perceived characters. Every position the parser reports refers to an index in this list.
    """
    return GRAPHEME.findall(text)
