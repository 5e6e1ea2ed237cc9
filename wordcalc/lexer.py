"""Character-level helpers shared by the parsers.

Classification is ASCII-only so that non-ASCII letters and digits in UTF-8
input are reported as errors instead of being read as operator words or
numbers.
"""

import string
from typing import Callable, Optional

DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
WHITESPACE = frozenset(" \t\n\r\v\f")


def is_digit(ch: str) -> bool:
    return ch in DIGITS


def is_alpha(ch: str) -> bool:
    return ch in LETTERS


def is_space(ch: str) -> bool:
    return ch in WHITESPACE


def peek(code: str, i: int) -> str:
    """Character at `i`, or an empty string past the end of input"""
    return code[i] if i < len(code) else ""


def skip_whitespace(code: str, i: int) -> int:
    return consume_while(code, i, is_space)


def consume_while(code: str, i: int, predicate: Callable[[str], bool]) -> int:
    while i < len(code) and predicate(code[i]):
        i += 1
    return i


def find_closing_paren(code: str, open_idx: int) -> Optional[int]:
    """Index of the `)` matching the `(` at `open_idx`, None if it is never closed"""
    depth = 0
    for j in range(open_idx, len(code)):
        if code[j] == "(":
            depth += 1
        elif code[j] == ")":
            depth -= 1
            if depth == 0:
                return j
    return None
