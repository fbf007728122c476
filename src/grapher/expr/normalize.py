"""
Implicit multiplication rewriting.

Users type "2x", "3(x+1)" or "(x+1)(x-1)"; the grammar only knows explicit
'*'. The rewrite is purely textual and runs once before tokenization.
"""

import re
from typing import List, Tuple

# Applied in order, each over the output of the previous one.
IMPLICIT_MULTIPLICATION_RULES: List[Tuple["re.Pattern[str]", str]] = [
    # 2x -> 2*x, 2(x+1) -> 2*(x+1)
    (re.compile(r"([0-9])([a-zA-Z(])"), r"\1*\2"),
    # )2 -> )*2
    (re.compile(r"\)([0-9])"), r")*\1"),
    # )x -> )*x
    (re.compile(r"\)([a-zA-Z])"), r")*\1"),
    # )( -> )*(
    (re.compile(r"\)\("), r")*("),
]


def normalize(source: str) -> str:
    """
    Inserts explicit '*' where multiplication is implied.

    A letter followed by '(' is left alone, so "x(x+1)" stays a call to a
    function named "x".
    """
    normalized = source
    for pattern, replacement in IMPLICIT_MULTIPLICATION_RULES:
        normalized = pattern.sub(replacement, normalized)
    return normalized
