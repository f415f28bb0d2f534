"""Comment stripping for Groovy/Kotlin build descriptors.

The scanner works line by line and carries a single flag across lines: whether
a ``/*`` block comment is still open. Stripped lines are kept as empty strings
so the masked text always has as many lines as the input.
"""
from __future__ import annotations

import re
from typing import Iterable, List

from common.logging import get_logger

LOGGER = get_logger(__name__)

LINE_COMMENT = "//"
BLOCK_COMMENT_START = "/*"
BLOCK_COMMENT_END = "*/"
BLOCK_COMMENT_SPAN_RE = re.compile(r"/\*.*?\*/")
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """Split on ``\\n``, ``\\r\\n`` and ``\\r`` only; a trailing break adds no line."""

    if not text:
        return []
    lines = LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def find_smallest_non_negative(*numbers: int) -> int:
    """Return the smallest number that is ``>= 0``, or ``-1`` if there is none."""

    candidates = [number for number in numbers if number >= 0]
    return min(candidates) if candidates else -1


def remove_block_comment_spans(line: str) -> str:
    """Remove every complete ``/* ... */`` span that starts and ends on ``line``."""

    return BLOCK_COMMENT_SPAN_RE.sub("", line)


class CommentMask:
    """Two-state scanner: normal code or inside an open block comment."""

    def __init__(self) -> None:
        self._in_block_comment = False

    @property
    def in_block_comment(self) -> bool:
        return self._in_block_comment

    def reset(self) -> None:
        self._in_block_comment = False

    def mask_line(self, line: str) -> str:
        reduced = remove_block_comment_spans(line)

        end_index = reduced.find(BLOCK_COMMENT_END)
        if end_index >= 0:
            reduced = reduced[end_index + len(BLOCK_COMMENT_END):]
            self._in_block_comment = False
        elif self._in_block_comment:
            return ""

        line_index = reduced.find(LINE_COMMENT)
        start_index = reduced.find(BLOCK_COMMENT_START)
        comment_index = find_smallest_non_negative(line_index, start_index)
        if comment_index >= 0:
            if comment_index == start_index:
                self._in_block_comment = True
            reduced = reduced[:comment_index]
        return reduced

    def mask_lines(self, lines: Iterable[str]) -> List[str]:
        masked = [self.mask_line(line) for line in lines]
        if self._in_block_comment:
            LOGGER.debug("Block comment still open at end of input")
        return masked


def mask_lines(lines: Iterable[str]) -> List[str]:
    """Return the comment-free version of ``lines`` (same number of lines)."""

    return CommentMask().mask_lines(lines)


def strip_comments(text: str) -> str:
    """Strip comments from ``text``; every resulting line ends with a newline."""

    return "".join(f"{line}\n" for line in mask_lines(split_lines(text)))


__all__ = [
    "BLOCK_COMMENT_SPAN_RE",
    "CommentMask",
    "find_smallest_non_negative",
    "mask_lines",
    "remove_block_comment_spans",
    "split_lines",
    "strip_comments",
]
