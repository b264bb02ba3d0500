"""
Pytest configuration and shared fixtures for readme-wizard tests.
"""

import json
from pathlib import Path
from types import SimpleNamespace

import pytest


def write_files(root: Path, files: dict) -> Path:
    """Create ``files`` (relative path -> text) under ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    return root


@pytest.fixture
def project_dir(tmp_path):
    """An empty project directory."""
    root = tmp_path / 'project'
    root.mkdir()
    return root


@pytest.fixture
def make_project(project_dir):
    """Factory that populates the project directory."""
    def _make(files=None, package=None):
        if package is not None:
            (project_dir / 'package.json').write_text(json.dumps(package, indent=2), encoding='utf-8')
        write_files(project_dir, files or {})
        return project_dir
    return _make


@pytest.fixture
def home_dir(tmp_path, monkeypatch):
    """Point the user's home directory at a temporary location."""
    home = tmp_path / 'home'
    home.mkdir()
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.setenv('USERPROFILE', str(home))
    monkeypatch.delenv('OPENAI_API_KEY', raising=False)
    monkeypatch.delenv('ANTHROPIC_API_KEY', raising=False)
    return home


class FakeOpenAI:
    """Minimal stand-in for ``openai.OpenAI`` recording every request."""

    def __init__(self, content='# Title\n\nBody text', error=None):
        self.calls = []
        self._content = content
        self._error = error
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self._error is not None:
            raise self._error
        message = SimpleNamespace(content=self._content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeAnthropic:
    """Minimal stand-in for ``anthropic.Anthropic`` recording every request."""

    def __init__(self, content='# Title\n\nBody text'):
        self.calls = []
        self._content = content
        self.messages = SimpleNamespace(create=self._create)

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(content=[SimpleNamespace(type='text', text=self._content)])


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def fake_anthropic():
    return FakeAnthropic()
