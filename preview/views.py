import json
import logging

from django.http import HttpResponse, HttpResponseBadRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .conf import get_preview_settings
from .markdown.renderer import render_preview
from .stylesheets import render_preview_document

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_flag(value):
    """Interpret an optional boolean request parameter; None when absent."""
    if value is None or isinstance(value, bool):
        return value
    value = str(value).strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


@method_decorator(csrf_exempt, name="dispatch")
class BasePreviewView(View):
    """
    Shared request handling for the preview endpoints.

    Accepts either form data or a JSON object with:
    - markdown: the document source (required)
    - task_lists / icon_bullets: optional overrides of the configured flags
    """

    http_method_names = ["post"]

    def get_payload(self, request):
        if request.content_type == "application/json":
            try:
                payload = json.loads(request.body or b"{}")
            except ValueError:
                return None
            return payload if isinstance(payload, dict) else None
        return request.POST

    def post(self, request, *args, **kwargs):
        payload = self.get_payload(request)
        if payload is None:
            return HttpResponseBadRequest("Request body must be a JSON object")

        text = payload.get("markdown")
        if not isinstance(text, str):
            return HttpResponseBadRequest("Missing 'markdown' field")

        try:
            preview_settings = get_preview_settings().with_features(
                task_lists=_parse_flag(payload.get("task_lists")),
                icon_bullets=_parse_flag(payload.get("icon_bullets")),
            )
        except ValueError as e:
            return HttpResponseBadRequest(str(e))

        result = render_preview(text, preview_settings)
        if not result.ok:
            logger.debug(f"Returning preview with converter error: {result.error}")
        return self.render_result(result, preview_settings)

    def render_result(self, result, preview_settings):
        raise NotImplementedError


class PreviewView(BasePreviewView):
    """Render markdown and return the preview and HTML-text views as JSON."""

    def render_result(self, result, preview_settings):
        return JsonResponse(
            {
                "html": result.html,
                "raw_html": result.raw_html,
                "error": result.error,
            }
        )


class PreviewDocumentView(BasePreviewView):
    """Render markdown into a standalone, styled HTML page."""

    def render_result(self, result, preview_settings):
        return HttpResponse(
            render_preview_document(result, preview_settings),
            content_type="text/html; charset=utf-8",
        )
