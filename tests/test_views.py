import json

from django.test import Client, RequestFactory, override_settings
from django.urls import reverse

from preview.views import PreviewDocumentView, PreviewView

factory = RequestFactory()

CONVERTED = "<ul>\n<li>one</li>\n</ul>\n<table>\n<tr><td>a</td></tr>\n</table>\n"


def post_json(view, payload):
    request = factory.post("/preview/render/", data=json.dumps(payload), content_type="application/json")
    return view.as_view()(request)


@override_settings(MULTIMARKDOWN={"icon_bullets": False})
def test_preview_view_returns_json(fake_pandoc):
    fake_pandoc.returns(CONVERTED)

    response = post_json(PreviewView, {"markdown": "- one"})

    assert response.status_code == 200
    data = json.loads(response.content)
    assert data["error"] is None
    assert data["raw_html"] == CONVERTED
    assert '<tr class="first-child">' in data["html"]
    assert "<li>one</li>" in data["html"]


@override_settings(MULTIMARKDOWN={"icon_bullets": False})
def test_preview_view_accepts_form_data_and_flag_overrides(fake_pandoc):
    fake_pandoc.returns(CONVERTED)

    request = factory.post("/preview/render/", data={"markdown": "- one", "icon_bullets": "true"})
    response = PreviewView.as_view()(request)

    data = json.loads(response.content)
    assert '<li class="bullet">' in data["html"]


def test_preview_view_json_boolean_override(fake_pandoc):
    fake_pandoc.returns("<li>[x] a</li>")

    data = json.loads(post_json(PreviewView, {"markdown": "x", "task_lists": False}).content)

    assert "<li>[x] a</li>" in data["html"]


def test_preview_view_reports_converter_error(fake_pandoc):
    fake_pandoc.returns("", stderr="boom", returncode=2)

    data = json.loads(post_json(PreviewView, {"markdown": "x"}).content)

    assert data["error"] == "pandoc failed: boom"
    assert 'class="preview-error"' in data["html"]


def test_preview_view_requires_markdown(fake_pandoc):
    response = post_json(PreviewView, {"text": "x"})

    assert response.status_code == 400
    assert fake_pandoc.calls == []


def test_preview_view_rejects_bad_json():
    request = factory.post("/preview/render/", data="{not json", content_type="application/json")
    assert PreviewView.as_view()(request).status_code == 400

    request = factory.post("/preview/render/", data="[1, 2]", content_type="application/json")
    assert PreviewView.as_view()(request).status_code == 400


def test_preview_view_rejects_bad_flag():
    response = post_json(PreviewView, {"markdown": "x", "icon_bullets": "maybe"})
    assert response.status_code == 400


def test_preview_view_only_accepts_post():
    response = PreviewView.as_view()(factory.get("/preview/render/"))
    assert response.status_code == 405


@override_settings(MULTIMARKDOWN={"html_theme": "dark"})
def test_preview_document_view_renders_page(fake_pandoc):
    fake_pandoc.returns("<p><del>old</del></p>\n")

    response = post_json(PreviewDocumentView, {"markdown": "~~old~~"})

    assert response.status_code == 200
    assert response["Content-Type"] == "text/html; charset=utf-8"
    page = response.content.decode("utf-8")
    assert page.startswith("<!DOCTYPE html>")
    assert "background-color: #2b2b2b" in page
    assert '<span class="del">old</span>' in page


@override_settings(MULTIMARKDOWN={"icon_bullets": False})
def test_json_clients_do_not_need_a_csrf_token(fake_pandoc):
    fake_pandoc.returns(CONVERTED)
    client = Client(enforce_csrf_checks=True)

    response = client.post(
        reverse("preview:render"), data=json.dumps({"markdown": "- one"}), content_type="application/json"
    )

    assert response.status_code == 200
    assert '<tr class="first-child">' in response.json()["html"]

    response = client.post(reverse("preview:document"), data={"markdown": "- one"})
    assert response.status_code == 200
