# preview/markdown/postprocessors/__init__.py

from .preview_enhancer import preview_enhancer_default

POSTPROCESSORS = [
    preview_enhancer_default,  # Presentation hooks for the preview stylesheet
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    for processor in POSTPROCESSORS:
        html = processor(html, context)
    return html
