"""
Preview settings.

All options live in a single ``MULTIMARKDOWN`` dict in the Django settings:

    MULTIMARKDOWN = {
        "task_lists": True,
        "icon_bullets": True,
        "html_theme": "dark",
    }

Missing keys fall back to DEFAULTS. Unknown keys and values of the wrong type
raise ImproperlyConfigured.
"""

from dataclasses import dataclass, fields, replace
from typing import Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .markdown.config import FeatureConfiguration

SETTINGS_NAME = "MULTIMARKDOWN"

HTML_THEMES = ("light", "dark")


@dataclass(frozen=True)
class PreviewSettings:
    # postprocessor features
    task_lists: bool = True
    icon_bullets: bool = False

    # converter
    parsing_timeout: int = 10000  # milliseconds
    smarts: bool = True
    quotes: bool = True
    abbreviations: bool = False
    hard_wraps: bool = False
    autolinks: bool = True
    wiki_links: bool = False
    tables: bool = True
    definitions: bool = True
    fenced_code_blocks: bool = True
    suppress_html_blocks: bool = False
    suppress_inline_html: bool = False
    strikethrough: bool = True
    header_space: bool = True
    anchor_links: bool = True

    # presentation
    show_html_text_as_modified: bool = False
    html_theme: str = "light"
    custom_css: str = ""
    max_img_width: int = 0  # pixels, 0 means no limit

    def features(self) -> FeatureConfiguration:
        """Snapshot of the flags the postprocessor reads."""
        return FeatureConfiguration(task_lists=self.task_lists, icon_bullets=self.icon_bullets)

    def with_features(
        self, task_lists: Optional[bool] = None, icon_bullets: Optional[bool] = None
    ) -> "PreviewSettings":
        """Return a copy with the given feature flags overridden; None keeps the current value."""
        changes = {}
        if task_lists is not None:
            changes["task_lists"] = task_lists
        if icon_bullets is not None:
            changes["icon_bullets"] = icon_bullets
        return replace(self, **changes) if changes else self

    @property
    def is_dark(self) -> bool:
        return self.html_theme == "dark"


DEFAULTS = {f.name: f.default for f in fields(PreviewSettings)}


def _validate(options: dict) -> None:
    unknown = sorted(set(options) - set(DEFAULTS))
    if unknown:
        raise ImproperlyConfigured(
            f"{SETTINGS_NAME} contains unknown options: {', '.join(unknown)}"
        )

    for name, value in options.items():
        expected = type(DEFAULTS[name])
        # bool is an int subclass, so check it explicitly
        if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise ImproperlyConfigured(f"{SETTINGS_NAME}['{name}'] must be an integer")
        if not isinstance(value, expected):
            raise ImproperlyConfigured(
                f"{SETTINGS_NAME}['{name}'] must be of type {expected.__name__}"
            )

    if options.get("parsing_timeout", 1) <= 0:
        raise ImproperlyConfigured(f"{SETTINGS_NAME}['parsing_timeout'] must be positive")
    if options.get("max_img_width", 0) < 0:
        raise ImproperlyConfigured(f"{SETTINGS_NAME}['max_img_width'] must not be negative")
    if options.get("html_theme", "light") not in HTML_THEMES:
        raise ImproperlyConfigured(
            f"{SETTINGS_NAME}['html_theme'] must be one of: {', '.join(HTML_THEMES)}"
        )


def get_preview_settings() -> PreviewSettings:
    """Read the MULTIMARKDOWN setting into a PreviewSettings snapshot."""
    options = getattr(settings, SETTINGS_NAME, None) or {}
    if not isinstance(options, dict):
        raise ImproperlyConfigured(f"{SETTINGS_NAME} must be a dict")
    _validate(options)
    return PreviewSettings(**options)
