# preview/markdown/postprocessors/tokens.py
"""
Structural tokens recognized by the preview postprocessor.

The converter emits a small, predictable tag vocabulary. Each recognized
spelling is described by a TokenMatcher; the matchers enabled by a
FeatureConfiguration are joined into one case-insensitive alternation, and
every match is classified into a TokenKind before anything is rewritten.

Matchers are listed in priority order. Python's regex alternation takes the
first alternative that matches at a position, so a spelling that extends
another one (``<li><p>[x]`` extends ``<li><p>``, which extends ``<li>``) must
come before it.
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Tuple

from ..config import FeatureConfiguration


class TokenKind(Enum):
    TABLE_OPEN = "table_open"
    THEAD_OPEN = "thead_open"
    TBODY_OPEN = "tbody_open"
    ROW_OPEN = "row_open"
    RULE = "rule"
    DEL_OPEN = "del_open"
    DEL_CLOSE = "del_close"
    PARA_CLOSE = "para_close"
    ORDERED_OPEN = "ordered_open"
    ORDERED_CLOSE = "ordered_close"
    UNORDERED_OPEN = "unordered_open"
    UNORDERED_CLOSE = "unordered_close"
    ITEM_OPEN = "item_open"
    ITEM_CHECKED = "item_checked"
    ITEM_UNCHECKED = "item_unchecked"
    TASK_ITEM = "task_item"
    ITEM_PARA = "item_para"
    ITEM_PARA_CHECKED = "item_para_checked"
    ITEM_PARA_UNCHECKED = "item_para_unchecked"
    TASK_ITEM_PARA = "task_item_para"
    OTHER = "other"


@dataclass(frozen=True)
class TokenMatcher:
    """
    One recognized tag spelling.

    Attributes:
        kind: Token kind reported for a canonical match
        pattern: Regex fragment (matched case-insensitively)
        canonical: Exact spellings, after item/paragraph whitespace is
            collapsed, that classify as ``kind``
        feature: FeatureConfiguration flag that enables the matcher, or None
            when it is always active
    """

    kind: TokenKind
    pattern: str
    canonical: Tuple[str, ...]
    feature: Optional[str] = None

    def enabled(self, config: FeatureConfiguration) -> bool:
        return self.feature is None or bool(getattr(config, self.feature))


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    start: int
    end: int


TASK_LIST_ITEM = '<li class="task-list-item">'

MATCHERS: List[TokenMatcher] = [
    TokenMatcher(TokenKind.TABLE_OPEN, r"<table>", ("<table>",)),
    TokenMatcher(TokenKind.THEAD_OPEN, r"<thead>", ("<thead>",)),
    TokenMatcher(TokenKind.TBODY_OPEN, r"<tbody>", ("<tbody>",)),
    TokenMatcher(TokenKind.ROW_OPEN, r"<tr>", ("<tr>",)),
    TokenMatcher(TokenKind.RULE, r"<hr ?/>", ("<hr/>", "<hr />")),
    TokenMatcher(TokenKind.DEL_OPEN, r"<del>", ("<del>",)),
    TokenMatcher(TokenKind.DEL_CLOSE, r"</del>", ("</del>",)),
    TokenMatcher(TokenKind.PARA_CLOSE, r"</p>", ("</p>",)),
    TokenMatcher(
        TokenKind.ITEM_PARA_CHECKED, r"<li>\s*<p>\[x\]", ("<li><p>[x]",), "task_lists"
    ),
    TokenMatcher(
        TokenKind.ITEM_PARA_UNCHECKED, r"<li>\s*<p>\[ \]", ("<li><p>[ ]",), "task_lists"
    ),
    TokenMatcher(TokenKind.ITEM_PARA, r"<li>\s*<p>", ("<li><p>",)),
    TokenMatcher(
        TokenKind.TASK_ITEM_PARA,
        r'<li class="task-list-item">\s*<p>',
        (TASK_LIST_ITEM + "<p>",),
        "task_lists",
    ),
    TokenMatcher(TokenKind.TASK_ITEM, r'<li class="task-list-item">', (TASK_LIST_ITEM,), "task_lists"),
    TokenMatcher(TokenKind.ITEM_CHECKED, r"<li>\[x\]", ("<li>[x]",), "task_lists"),
    TokenMatcher(TokenKind.ITEM_UNCHECKED, r"<li>\[ \]", ("<li>[ ]",), "task_lists"),
    TokenMatcher(TokenKind.ORDERED_OPEN, r"<ol>", ("<ol>",), "icon_bullets"),
    TokenMatcher(TokenKind.ORDERED_CLOSE, r"</ol>", ("</ol>",), "icon_bullets"),
    TokenMatcher(TokenKind.UNORDERED_OPEN, r"<ul>", ("<ul>",), "icon_bullets"),
    TokenMatcher(TokenKind.UNORDERED_CLOSE, r"</ul>", ("</ul>",), "icon_bullets"),
    # Icon bullets need every item, not only the paragraph-wrapped ones
    TokenMatcher(TokenKind.ITEM_OPEN, r"<li>", ("<li>",), "icon_bullets"),
]

_MATCHERS_BY_KIND = {matcher.kind: matcher for matcher in MATCHERS}

# Case-sensitive on purpose: only the converter's own lowercase spelling is
# normalized, anything else fails the canonical comparison. ASCII whitespace
# only, so a non-breaking space is never dropped from the output.
_ITEM_PARAGRAPH_GAP = re.compile(r'^(<li>|<li class="task-list-item">)\s*<p>', re.ASCII)

# Paragraph task items that can fall back to a plain paragraph item
_PARAGRAPH_TASK_KINDS = (TokenKind.ITEM_PARA_CHECKED, TokenKind.ITEM_PARA_UNCHECKED)
TASK_MARKER_LENGTH = len("[x]")


def active_matchers(config: FeatureConfiguration) -> List[TokenMatcher]:
    """Return the matchers enabled by ``config``, in priority order."""
    return [matcher for matcher in MATCHERS if matcher.enabled(config)]


@lru_cache(maxsize=None)
def build_token_pattern(config: FeatureConfiguration) -> re.Pattern:
    """Compile the alternation for ``config``; one named group per token kind."""
    alternatives = [f"(?P<{m.kind.name}>{m.pattern})" for m in active_matchers(config)]
    return re.compile("|".join(alternatives), re.IGNORECASE | re.ASCII)


def normalize_item_paragraph(text: str) -> str:
    """Collapse whitespace between a list-item open tag and a following <p>."""
    return _ITEM_PARAGRAPH_GAP.sub(r"\1<p>", text)


def classify(match) -> Token:
    """
    Classify a match of ``build_token_pattern`` into a Token.

    The alternation is matched case-insensitively, so it can report spellings
    such as ``<TABLE>`` or ``<li>[X]``. Those are not rewritten: a match is
    only given its kind when its normalized text is one of the canonical
    spellings, otherwise it is reported as OTHER and copied through.

    A paragraph task item whose marker is not canonical (``<li><p>[X]``) is
    still a paragraph item: the token is cut back to ``<li><p>`` and the
    marker is left in the surrounding text.
    """
    text = match.group(0)
    kind = TokenKind[match.lastgroup]
    if normalize_item_paragraph(text) in _MATCHERS_BY_KIND[kind].canonical:
        return Token(kind, text, match.start(), match.end())

    if kind in _PARAGRAPH_TASK_KINDS:
        prefix = text[:-TASK_MARKER_LENGTH]
        if normalize_item_paragraph(prefix) in _MATCHERS_BY_KIND[TokenKind.ITEM_PARA].canonical:
            return Token(TokenKind.ITEM_PARA, prefix, match.start(), match.start() + len(prefix))

    return Token(TokenKind.OTHER, text, match.start(), match.end())


def scan(html: str, config: FeatureConfiguration):
    """Yield the tokens of ``html`` in document order."""
    for match in build_token_pattern(config).finditer(html):
        yield classify(match)
