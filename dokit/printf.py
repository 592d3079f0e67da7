"""Check whether a string is a printf-style format and count its arguments."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

__all__ = ["check_printf"]

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")

_NO_FLAG = ""
_NUM_FLAG = " -+.0"
_SHARP_NUM_FLAG = " -+.0#"
_ALL_FLAGS = " -+.0#"

# Flags each known verb accepts.
_VERB_FLAGS: dict[str, str] = {
    "%": _NO_FLAG,
    "b": _SHARP_NUM_FLAG,
    "c": "-",
    "d": _NUM_FLAG,
    "e": _SHARP_NUM_FLAG,
    "E": _SHARP_NUM_FLAG,
    "f": _SHARP_NUM_FLAG,
    "F": _SHARP_NUM_FLAG,
    "g": _SHARP_NUM_FLAG,
    "G": _SHARP_NUM_FLAG,
    "o": _SHARP_NUM_FLAG,
    "O": _SHARP_NUM_FLAG,
    "p": "-#",
    "q": " -+.0#",
    "s": " -+.0",
    "t": "-",
    "T": "-",
    "U": "-#",
    "v": _ALL_FLAGS,
    "w": _ALL_FLAGS,
    "x": _SHARP_NUM_FLAG,
    "X": _SHARP_NUM_FLAG,
}


def _parse_int32(text: str) -> int:
    if not _DECIMAL.fullmatch(text):
        return 0
    return max(_INT32_MIN, min(_INT32_MAX, int(text)))


@dataclass
class _Directive:
    """A parsed directive such as ``%3.*[4]d``."""

    format: str
    arg_num: int
    first_arg: int = 0
    verb: str = ""
    flags: list[str] = field(default_factory=list)
    arg_nums: list[int] = field(default_factory=list)
    has_index: bool = False
    index_pending: bool = False
    pos: int = 1

    def _peek(self) -> str | None:
        return self.format[self.pos] if self.pos < len(self.format) else None

    def parse_flags(self) -> None:
        while (char := self._peek()) is not None and char in "#0+- ":
            self.flags.append(char)
            self.pos += 1

    def scan_num(self) -> None:
        while (char := self._peek()) is not None and "0" <= char <= "9":
            self.pos += 1

    def parse_index(self) -> bool:
        if self._peek() != "[":
            return True
        self.pos += 1
        start = self.pos
        self.scan_num()
        if self.pos == len(self.format) or self.pos == start or self._peek() != "]":
            closing = self.format.find("]", start)
            if closing < 0:
                return False
            self.pos = closing
        arg = _parse_int32(self.format[start : self.pos])
        self.pos += 1
        self.arg_num = arg + self.first_arg - 1
        self.has_index = True
        self.index_pending = True
        return True

    def parse_num(self) -> bool:
        if self._peek() == "*":
            self.index_pending = False
            self.pos += 1
            self.arg_nums.append(self.arg_num)
            self.arg_num += 1
        else:
            self.scan_num()
        return True

    def parse_precision(self) -> bool:
        if self._peek() == ".":
            self.flags.append(".")
            self.pos += 1
            if not self.parse_index():
                return False
            if not self.parse_num():
                return False
        return True

    def is_acceptable(self) -> bool:
        allowed = _VERB_FLAGS.get(self.verb)
        if allowed is None:
            return False
        return all(flag == "0" or flag in allowed for flag in self.flags)


def _parse_directive(text: str, first_arg: int, arg_num: int) -> _Directive | None:
    state = _Directive(format=text, arg_num=arg_num, first_arg=first_arg)
    state.parse_flags()
    if not state.parse_index():
        return None
    if not state.parse_num():
        return None
    if not state.parse_precision():
        return None
    if not state.index_pending and not state.parse_index():
        return None
    if state.pos == len(state.format):
        return None
    state.verb = state.format[state.pos]
    state.pos += 1
    if state.verb != "%":
        state.arg_nums.append(state.arg_num)
    state.format = state.format[: state.pos]
    return state


def check_printf(format_string: str) -> tuple[bool, int]:
    """Return whether ``format_string`` is a printf format, and how many arguments it takes.

    Strings without ``%``, with a malformed directive, or with explicit
    argument indexes are not counted as formats. Directives with an unknown
    verb or a flag the verb does not accept are skipped.
    """
    arg_num = 0
    if "%" not in format_string:
        return False, arg_num
    any_index = False
    i = 0
    while i < len(format_string):
        if format_string[i] != "%":
            i += 1
            continue
        state = _parse_directive(format_string[i:], 0, arg_num)
        if state is None:
            return False, arg_num
        i += len(state.format)
        if not state.is_acceptable():
            continue
        if state.has_index:
            any_index = True
        if state.arg_nums:
            arg_num = state.arg_nums[-1] + 1
    if any_index:
        return False, arg_num
    return True, arg_num