"""Locate a named top-level block and inject a dependency into it.

Searching always happens on the comment-stripped text, so a commented-out
``buildscript {`` is never picked up. When the block is found the returned
content is the whole comment-stripped text with the injection inlined right
after the opening brace; original comments are not preserved.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Sequence

from common.logging import get_logger

from injector.comments import strip_comments

LOGGER = get_logger(__name__)

INDENT = "    "


@dataclass(frozen=True)
class RewriteResult:
    updated: bool
    content: Optional[str] = None
    offset: Optional[int] = None


def block_pattern(keyword: str) -> Pattern[str]:
    return re.compile(rf"\b{re.escape(keyword)}[ \t\n\r]*\{{")


def render_block_opening(keyword: str, statement: str, repository: str) -> str:
    """Opening of an existing block with the statement and one repository inlined."""

    return (
        f"{keyword} {{\n"
        f"{INDENT}{statement}\n"
        f"{INDENT}repositories {{\n"
        f"{INDENT}{INDENT}{repository}()\n"
        f"{INDENT}}}"
    )


def render_new_block(keyword: str, statement: str, repositories: Sequence[str]) -> str:
    """A complete block appended when the descriptor has none."""

    repository_lines = "".join(f"{INDENT}{INDENT}{repository}()\n" for repository in repositories)
    return (
        f"\n{keyword} {{\n"
        f"{INDENT}{statement}\n"
        f"{INDENT}repositories {{\n"
        f"{repository_lines}"
        f"{INDENT}}}\n"
        "}"
    )


def rewrite_block(text: str, keyword: str, statement: str, repository: str) -> RewriteResult:
    """Inject ``statement`` into the first ``keyword {`` block of ``text``.

    Only the leftmost match is considered; several blocks with the same name
    are not merged.
    """

    code = strip_comments(text)
    match = block_pattern(keyword).search(code)
    if match is None:
        LOGGER.debug("No %s block found", keyword)
        return RewriteResult(updated=False)
    replacement = render_block_opening(keyword, statement, repository)
    content = code[: match.start()] + replacement + code[match.end():]
    LOGGER.debug("Rewrote %s block at offset %d", keyword, match.start())
    return RewriteResult(updated=True, content=content, offset=match.start())


__all__ = [
    "RewriteResult",
    "block_pattern",
    "render_block_opening",
    "render_new_block",
    "rewrite_block",
]
