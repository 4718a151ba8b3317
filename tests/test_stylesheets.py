from preview.conf import PreviewSettings
from preview.markdown.renderer import PreviewResult
from preview.stylesheets import get_preview_stylesheet, load_bundled_stylesheet, render_preview_document


def test_theme_selects_bundled_stylesheet():
    light = get_preview_stylesheet(PreviewSettings(html_theme="light"))
    dark = get_preview_stylesheet(PreviewSettings(html_theme="dark"))

    assert light == load_bundled_stylesheet("default.css")
    assert dark == load_bundled_stylesheet("darcula.css")
    assert light != dark
    for css in (light, dark):
        for selector in ("div.hr", "span.del", "tr.even-child", "input.list-item-bullet", "li.taskp"):
            assert selector in css


def test_custom_css_replaces_bundled_stylesheet():
    css = get_preview_stylesheet(PreviewSettings(custom_css="body { color: red; }"))
    assert css == "body { color: red; }"


def test_blank_custom_css_is_ignored():
    css = get_preview_stylesheet(PreviewSettings(custom_css="  \n"))
    assert css == load_bundled_stylesheet("default.css")


def test_max_img_width_adds_rule():
    css = get_preview_stylesheet(PreviewSettings(custom_css="p {}", max_img_width=400))
    assert css == "p {}\n\nimg { max-width: 400px; }\n"


def test_render_preview_document_embeds_stylesheet_and_body():
    result = PreviewResult(html='<body class="multimarkdown-preview">\n<p>x</p>\n</body>\n', raw_html="<p>x</p>")

    page = render_preview_document(result, PreviewSettings(custom_css="p { margin: 0; }"), title="notes.md")

    assert page.startswith("<!DOCTYPE html>")
    assert "<title>notes.md</title>" in page
    assert "p { margin: 0; }" in page
    assert '<body class="multimarkdown-preview">\n<p>x</p>\n</body>' in page
    assert "<!--" not in page


def test_render_preview_document_notes_error():
    result = PreviewResult(html="<body></body>", raw_html="", error="pandoc failed: <boom>")

    page = render_preview_document(result, PreviewSettings())

    assert "<!-- pandoc failed: &lt;boom&gt; -->" in page
