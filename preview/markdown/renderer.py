# preview/markdown/renderer.py

import logging
import subprocess
import time
from dataclasses import dataclass
from typing import Optional

import pypandoc
from django.utils.html import format_html

from ..conf import PreviewSettings, get_preview_settings
from ..exceptions import RenderError, RenderTimeout
from .config import get_pandoc_config
from .postprocessors import apply_postprocessors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreviewResult:
    """
    Outcome of rendering one document.

    Attributes:
        html: Postprocessed HTML for the preview pane
        raw_html: HTML for the HTML-text view (converter output, or the
            postprocessed HTML when show_html_text_as_modified is set)
        error: Converter error message, None when rendering succeeded
    """

    html: str
    raw_html: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def markdown_to_html(text, preview_settings: Optional[PreviewSettings] = None) -> str:
    """
    Convert markdown to HTML with pandoc.

    The conversion runs as a child process and is killed once the parsing
    timeout elapses.

    Raises:
        RenderTimeout: pandoc did not finish within the parsing timeout
        RenderError: pandoc is missing or exited with an error
    """
    preview_settings = preview_settings or get_preview_settings()
    pandoc_config = get_pandoc_config(preview_settings)

    try:
        pandoc_path = pypandoc.get_pandoc_path()
    except OSError as e:
        raise RenderError(f"pandoc is not available: {e}") from e

    args = [
        pandoc_path,
        f"--from={pandoc_config['from']}",
        f"--to={pandoc_config['to']}",
        *pandoc_config["extra_args"],
    ]

    started = time.monotonic()
    try:
        proc = subprocess.run(
            args,
            input=text,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=pandoc_config["timeout"],
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise RenderTimeout(pandoc_config["timeout"]) from e
    except OSError as e:
        raise RenderError(f"Could not run pandoc: {e}") from e

    if proc.returncode != 0:
        message = (proc.stderr or "").strip() or f"exit status {proc.returncode}"
        raise RenderError(f"pandoc failed: {message}")

    logger.debug(
        "Converted %d characters of markdown in %.1f ms",
        len(text),
        (time.monotonic() - started) * 1000,
    )
    return proc.stdout


def postprocess_html(html, preview_settings: Optional[PreviewSettings] = None, context=None):
    """Run the postprocessor pipeline over converter output."""
    preview_settings = preview_settings or get_preview_settings()
    context = dict(context or {})
    context.setdefault("features", preview_settings.features())
    return apply_postprocessors(html, context)


def render_preview(
    text,
    preview_settings: Optional[PreviewSettings] = None,
    previous: Optional[PreviewResult] = None,
) -> PreviewResult:
    """
    Main rendering function: markdown conversion followed by postprocessing.

    Args:
        text: Raw markdown text
        preview_settings: Settings snapshot; read from Django settings if omitted
        previous: Last successful result. When conversion fails it is kept
            (with the error attached) instead of replacing the preview with an
            error message.
    """
    preview_settings = preview_settings or get_preview_settings()

    try:
        html = markdown_to_html(text, preview_settings)
    except RenderTimeout as e:
        logger.warning(f"Markdown preview not updated: {e}")
        return _failed_result(str(e), preview_settings, previous)
    except RenderError as e:
        logger.error(f"Failed processing Markdown document: {e}", exc_info=True)
        return _failed_result(str(e), preview_settings, previous)

    processed = postprocess_html(html, preview_settings)
    raw_html = processed if preview_settings.show_html_text_as_modified else html
    return PreviewResult(html=processed, raw_html=raw_html)


def _failed_result(message, preview_settings, previous):
    if previous is not None:
        return PreviewResult(html=previous.html, raw_html=previous.raw_html, error=message)

    error_html = format_html('<p class="preview-error">{}</p>', message)
    return PreviewResult(
        html=postprocess_html(str(error_html), preview_settings),
        raw_html=str(error_html),
        error=message,
    )
