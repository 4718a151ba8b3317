from dataclasses import dataclass
from typing import List, Tuple

PANDOC_BASE_FORMAT = "markdown"
PANDOC_OUTPUT_FORMAT = "html"


@dataclass(frozen=True)
class FeatureConfiguration:
    """
    Feature flags read by the preview postprocessor.

    Instances are immutable snapshots: take one before rendering and pass it
    down, so a settings change in the middle of a render cannot be observed.
    """

    task_lists: bool = False
    icon_bullets: bool = False


# (preview option, pandoc extensions it controls)
EXTENSION_MAP: List[Tuple[str, Tuple[str, ...]]] = [
    ("abbreviations", ("abbreviations",)),
    ("hard_wraps", ("hard_line_breaks",)),
    ("autolinks", ("autolink_bare_uris",)),
    ("wiki_links", ("wikilinks_title_after_pipe",)),
    ("tables", ("pipe_tables",)),
    ("definitions", ("definition_lists",)),
    ("fenced_code_blocks", ("fenced_code_blocks", "backtick_code_blocks")),
    ("strikethrough", ("strikeout",)),
    ("header_space", ("space_in_atx_header",)),
    ("anchor_links", ("auto_identifiers",)),
]


def _toggle(extension: str, enabled: bool) -> str:
    return f"{'+' if enabled else '-'}{extension}"


def get_pandoc_config(preview_settings):
    """
    Configuration for the pandoc markdown conversion.

    The preview options mirror the MultiMarkdown extension switches; each one
    maps onto one or more pandoc extensions that are explicitly enabled or
    disabled on top of pandoc's default markdown dialect.

    Pandoc's task_lists extension is always disabled: it would turn "[x]" into
    its own checkbox markup, while the preview postprocessor expects the
    literal markers and renders the checkboxes itself.
    """
    toggles = []
    for option, extensions in EXTENSION_MAP:
        enabled = bool(getattr(preview_settings, option))
        toggles.extend(_toggle(ext, enabled) for ext in extensions)

    # Smart quotes and smart punctuation are a single pandoc extension
    toggles.append(_toggle("smart", preview_settings.smarts or preview_settings.quotes))

    # Pandoc cannot suppress block and inline HTML separately
    suppress_html = preview_settings.suppress_html_blocks or preview_settings.suppress_inline_html
    toggles.append(_toggle("raw_html", not suppress_html))

    toggles.append(_toggle("task_lists", False))

    return {
        "from": PANDOC_BASE_FORMAT + "".join(toggles),
        "to": PANDOC_OUTPUT_FORMAT,
        "extra_args": [
            # Keep converter output on predictable lines
            "--wrap=none",
        ],
        "timeout": preview_settings.parsing_timeout / 1000.0,
    }
