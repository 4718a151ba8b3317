# preview/markdown/postprocessors/preview_enhancer.py
"""
Postprocessor that adds the preview presentation hooks to converter output.

This postprocessor:
- Adds first-child/odd-child/even-child classes to table rows (zebra striping)
- Replaces <hr/> with a styleable <div class="hr">
- Replaces <del> strikethrough with <span class="del">
- Renders "[x]" / "[ ]" task-list items as disabled checkboxes (task_lists)
- Gives unordered list items a checkbox-style icon bullet (icon_bullets)
- Marks paragraph-wrapped list items with "p"/"bulletp"/"taskp" classes
- Wraps the result in <body class="multimarkdown-preview">

The document is not parsed. A single left-to-right scan looks for the fixed
tag vocabulary described in tokens.py; everything between matches is copied
through unchanged. List nesting is tracked only as far as needed to tell
whether an item belongs to an ordered or an unordered list.

Running the postprocessor over its own output is not a no-op: the markup it
emits is outside the vocabulary it recognizes, so apply it exactly once to
fresh converter output.

Usage:
    transform('<ul><li>A</li></ul>', FeatureConfiguration(icon_bullets=True))
"""

import logging

from ..config import FeatureConfiguration
from .list_tracker import ListNestingTracker
from .tokens import Token, TokenKind, scan

logger = logging.getLogger(__name__)

BODY_OPEN = '<body class="multimarkdown-preview">\n'
BODY_CLOSE = "\n</body>\n"

TASK_CHECKBOX_CHECKED = (
    '<input type="checkbox" class="task-list-item-checkbox" checked="checked" disabled="disabled">'
)
TASK_CHECKBOX = '<input type="checkbox" class="task-list-item-checkbox" disabled="disabled">'
BULLET_CHECKBOX = '<input type="checkbox" class="list-item-bullet"></input>'

HR_REPLACEMENT = '<div class="hr">&nbsp;</div>'


def _row_class(row_count: int) -> str:
    # Rows after the first alternate odd/even starting with odd. This is the
    # reverse of the old editor's parity (row 2 was even-child there).
    if row_count == 1:
        return "first-child"
    return "odd-child" if row_count % 2 == 0 else "even-child"


def wrap_body(content: str) -> str:
    return BODY_OPEN + content + BODY_CLOSE


class PreviewPass:
    """
    State of a single postprocessing pass.

    Holds the table row counter and the list tracker. A new instance is
    created for every call to transform(), so nothing carries over between
    documents or threads.
    """

    def __init__(self, config: FeatureConfiguration):
        self.config = config
        self.row_count = 0
        self.lists = ListNestingTracker()
        self._handlers = {
            TokenKind.TABLE_OPEN: self._table_open,
            TokenKind.ROW_OPEN: self._row_open,
            TokenKind.RULE: lambda token: HR_REPLACEMENT,
            TokenKind.DEL_OPEN: lambda token: '<span class="del">',
            TokenKind.DEL_CLOSE: lambda token: "</span>",
            TokenKind.ORDERED_OPEN: self._list_open,
            TokenKind.UNORDERED_OPEN: self._list_open,
            TokenKind.ORDERED_CLOSE: self._list_close,
            TokenKind.UNORDERED_CLOSE: self._list_close,
            TokenKind.ITEM_OPEN: self._item_open,
            TokenKind.ITEM_CHECKED: lambda token: '<li class="task">' + TASK_CHECKBOX_CHECKED,
            TokenKind.ITEM_UNCHECKED: lambda token: '<li class="task">' + TASK_CHECKBOX,
            TokenKind.TASK_ITEM: lambda token: '<li class="task">',
            TokenKind.ITEM_PARA: self._item_paragraph,
            TokenKind.ITEM_PARA_CHECKED: lambda token: (
                '<li class="taskp"><p class="p">' + TASK_CHECKBOX_CHECKED
            ),
            TokenKind.ITEM_PARA_UNCHECKED: lambda token: (
                '<li class="taskp"><p class="p">' + TASK_CHECKBOX
            ),
            TokenKind.TASK_ITEM_PARA: lambda token: '<li class="taskp"><p class="p">',
        }

    def rewrite(self, token: Token) -> str:
        """Return the replacement text for ``token``; unknown kinds copy through."""
        handler = self._handlers.get(token.kind)
        if handler is None:
            return token.text
        return handler(token)

    def _table_open(self, token: Token) -> str:
        self.row_count = 0
        return token.text

    def _row_open(self, token: Token) -> str:
        self.row_count += 1
        return f'<tr class="{_row_class(self.row_count)}">'

    def _list_open(self, token: Token) -> str:
        self.lists.push(token.kind is TokenKind.ORDERED_OPEN)
        return token.text

    def _list_close(self, token: Token) -> str:
        self.lists.pop()
        return token.text

    def _wants_bullet(self) -> bool:
        return self.config.icon_bullets and self.lists.in_unordered_list()

    def _item_open(self, token: Token) -> str:
        if self._wants_bullet():
            return '<li class="bullet">' + BULLET_CHECKBOX
        return token.text

    def _item_paragraph(self, token: Token) -> str:
        if self._wants_bullet():
            return '<li class="bulletp"><p class="p">' + BULLET_CHECKBOX
        return '<li class="p"><p class="p">'


def transform(html: str, config: FeatureConfiguration) -> str:
    """
    Rewrite converter HTML with the preview presentation hooks.

    Args:
        html: HTML produced by the markdown converter
        config: Feature flags snapshot for this call

    Returns:
        The rewritten HTML wrapped in <body class="multimarkdown-preview">
    """
    state = PreviewPass(config)
    output = []
    position = 0
    token_count = 0

    for token in scan(html, config):
        output.append(html[position : token.start])
        output.append(state.rewrite(token))
        position = token.end
        token_count += 1

    output.append(html[position:])

    logger.debug(
        "Preview pass rewrote %d tokens (task_lists=%s, icon_bullets=%s)",
        token_count,
        config.task_lists,
        config.icon_bullets,
    )
    return wrap_body("".join(output))


def preview_enhancer(html: str, context: dict) -> str:
    """
    Apply transform() using the feature flags stored in the render context.

    Args:
        html: HTML string to process
        context: Context dictionary; "features" holds a FeatureConfiguration

    Returns:
        Processed HTML. If the pass fails unexpectedly the original HTML is
        returned inside the preview body so the caller still gets a document.
    """
    config = context.get("features") or FeatureConfiguration()
    try:
        return transform(html, config)
    except Exception as e:
        logger.error(f"Preview postprocessing failed: {e}", exc_info=True)
        return wrap_body(html)


def preview_enhancer_default(html: str, context: dict) -> str:
    """
    Default configuration for preview_enhancer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return preview_enhancer(html, context)
