"""Stylesheet selection and full-page preview documents."""

from functools import lru_cache
from pathlib import Path

from django.template.loader import render_to_string

CSS_DIR = Path(__file__).resolve().parent / "static" / "preview" / "css"

PREVIEW_STYLESHEET_LIGHT = "default.css"
PREVIEW_STYLESHEET_DARK = "darcula.css"


@lru_cache(maxsize=None)
def load_bundled_stylesheet(name: str) -> str:
    return (CSS_DIR / name).read_text(encoding="utf-8")


def get_preview_stylesheet(preview_settings) -> str:
    """
    Return the CSS for the preview pane.

    A non-empty custom_css replaces the bundled sheet entirely; otherwise the
    light or dark sheet is chosen by html_theme.
    """
    if preview_settings.custom_css.strip():
        css = preview_settings.custom_css
    else:
        name = PREVIEW_STYLESHEET_DARK if preview_settings.is_dark else PREVIEW_STYLESHEET_LIGHT
        css = load_bundled_stylesheet(name)

    if preview_settings.max_img_width > 0:
        css = css.rstrip("\n") + f"\n\nimg {{ max-width: {preview_settings.max_img_width}px; }}\n"
    return css


def render_preview_document(result, preview_settings, title="Preview") -> str:
    """Render a standalone HTML page around a PreviewResult."""
    return render_to_string(
        "preview/document.html",
        {
            "title": title,
            "stylesheet": get_preview_stylesheet(preview_settings),
            "body": result.html,
            "error": result.error,
        },
    )
