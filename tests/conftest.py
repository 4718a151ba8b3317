import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "MMPreview.settings")
django.setup()


class FakeCompletedProcess:
    def __init__(self, stdout="", stderr="", returncode=0):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode


@pytest.fixture
def fake_pandoc(monkeypatch):
    """Replace the pandoc child process; returns the list of recorded calls."""
    import preview.markdown.renderer as renderer

    calls = []
    state = {"stdout": "", "stderr": "", "returncode": 0, "raises": None}

    def fake_run(args, **kwargs):
        calls.append({"args": args, **kwargs})
        if state["raises"] is not None:
            raise state["raises"]
        return FakeCompletedProcess(state["stdout"], state["stderr"], state["returncode"])

    monkeypatch.setattr(renderer.pypandoc, "get_pandoc_path", lambda: "/usr/bin/pandoc")
    monkeypatch.setattr(renderer.subprocess, "run", fake_run)

    class Controller:
        def __init__(self):
            self.calls = calls

        def returns(self, stdout, stderr="", returncode=0):
            state.update(stdout=stdout, stderr=stderr, returncode=returncode, raises=None)

        def raises(self, exc):
            state["raises"] = exc

    return Controller()
