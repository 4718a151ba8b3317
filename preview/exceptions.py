"""Errors raised while producing a preview."""


class PreviewError(Exception):
    """Base class for preview errors."""


class RenderError(PreviewError):
    """The markdown converter failed or could not be started."""


class RenderTimeout(RenderError):
    """The markdown converter did not finish within the parsing timeout."""

    def __init__(self, timeout):
        self.timeout = timeout
        super().__init__(f"Markdown conversion timed out after {timeout:g}s")
