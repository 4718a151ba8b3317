import subprocess

import pytest

from preview.conf import PreviewSettings
from preview.exceptions import RenderError, RenderTimeout
from preview.markdown.renderer import PreviewResult, markdown_to_html, postprocess_html, render_preview

CONVERTED = "<ul>\n<li>[x] done</li>\n<li>todo</li>\n</ul>\n<hr />\n"


def test_markdown_to_html_runs_pandoc_with_configured_format(fake_pandoc):
    fake_pandoc.returns("<p>hi</p>\n")

    html = markdown_to_html("hi", PreviewSettings(parsing_timeout=3000, hard_wraps=True))

    assert html == "<p>hi</p>\n"
    call = fake_pandoc.calls[0]
    assert call["args"][0] == "/usr/bin/pandoc"
    assert any(a.startswith("--from=markdown") and "+hard_line_breaks" in a for a in call["args"])
    assert "--to=html" in call["args"]
    assert call["input"] == "hi"
    assert call["timeout"] == 3.0


def test_markdown_to_html_reports_pandoc_failure(fake_pandoc):
    fake_pandoc.returns("", stderr="unknown extension foo", returncode=23)

    with pytest.raises(RenderError, match="unknown extension foo"):
        markdown_to_html("hi", PreviewSettings())


def test_markdown_to_html_timeout(fake_pandoc):
    fake_pandoc.raises(subprocess.TimeoutExpired(cmd="pandoc", timeout=0.5))

    with pytest.raises(RenderTimeout) as excinfo:
        markdown_to_html("hi", PreviewSettings(parsing_timeout=500))

    assert excinfo.value.timeout == 0.5
    assert "timed out after 0.5s" in str(excinfo.value)


def test_markdown_to_html_without_pandoc(monkeypatch):
    import preview.markdown.renderer as renderer

    def missing():
        raise OSError("No pandoc was found")

    monkeypatch.setattr(renderer.pypandoc, "get_pandoc_path", missing)

    with pytest.raises(RenderError, match="pandoc is not available"):
        markdown_to_html("hi", PreviewSettings())


def test_render_preview_postprocesses_converter_output(fake_pandoc):
    fake_pandoc.returns(CONVERTED)

    result = render_preview("- [x] done\n- todo\n\n---\n", PreviewSettings(task_lists=True, icon_bullets=True))

    assert result.ok
    assert result.html.startswith('<body class="multimarkdown-preview">\n<ul>\n<li class="task">')
    assert '<li class="bullet"><input type="checkbox" class="list-item-bullet"></input>todo' in result.html
    assert '<div class="hr">&nbsp;</div>' in result.html
    assert result.raw_html == CONVERTED


def test_render_preview_raw_html_can_show_modified_output(fake_pandoc):
    fake_pandoc.returns(CONVERTED)

    result = render_preview("x", PreviewSettings(show_html_text_as_modified=True))

    assert result.raw_html == result.html


def test_render_preview_substitutes_error_message(fake_pandoc, caplog):
    fake_pandoc.returns("", stderr="bad <input>", returncode=1)

    with caplog.at_level("ERROR", logger="preview"):
        result = render_preview("x", PreviewSettings())

    assert not result.ok
    assert "bad <input>" in result.error
    assert result.html == (
        '<body class="multimarkdown-preview">\n'
        '<p class="preview-error">pandoc failed: bad &lt;input&gt;</p>'
        "\n</body>\n"
    )
    assert "Failed processing Markdown document" in caplog.text


def test_render_preview_keeps_previous_output_on_timeout(fake_pandoc, caplog):
    previous = PreviewResult(html="<body>old</body>", raw_html="old")
    fake_pandoc.raises(subprocess.TimeoutExpired(cmd="pandoc", timeout=10))

    with caplog.at_level("WARNING", logger="preview"):
        result = render_preview("x", PreviewSettings(), previous=previous)

    assert result.html == "<body>old</body>"
    assert result.raw_html == "old"
    assert "timed out" in result.error
    assert "Markdown preview not updated" in caplog.text


def test_postprocess_html_uses_settings_features():
    html = "<li>[ ] a</li>"

    assert 'class="task"' in postprocess_html(html, PreviewSettings(task_lists=True))
    assert postprocess_html(html, PreviewSettings(task_lists=False)) == (
        '<body class="multimarkdown-preview">\n<li>[ ] a</li>\n</body>\n'
    )
