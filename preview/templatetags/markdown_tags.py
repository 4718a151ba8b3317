# preview/templatetags/markdown_tags.py

from django import template
from django.utils.safestring import mark_safe

from preview.conf import get_preview_settings
from preview.markdown.renderer import render_preview

register = template.Library()


@register.filter(name="multimarkdown")
def multimarkdown_filter(value):
    return mark_safe(render_preview(value or "").html)


@register.simple_tag
def multimarkdown_with_features(value, task_lists=None, icon_bullets=None):
    """Render markdown with the configured feature flags overridden for this call"""
    preview_settings = get_preview_settings().with_features(
        task_lists=task_lists, icon_bullets=icon_bullets
    )
    return mark_safe(render_preview(value or "", preview_settings).html)
