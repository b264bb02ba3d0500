"""
Tests for the CLI flow.
"""

import json
import subprocess
import sys
from pathlib import Path

import pytest
from rich.prompt import Confirm, Prompt

from conftest import FakeOpenAI
from readme_wizard import cli
from readme_wizard.utils.credentials import CredentialStore

KEY = 'sk-test-1234567890'


@pytest.fixture
def wizard(home_dir, make_project, monkeypatch):
    """Run the CLI inside a project with scripted answers and a fake client."""
    root = make_project(package={'name': 'shop', 'dependencies': {'react': '18'}})
    monkeypatch.chdir(root)

    state = {
        'answers': {'project name': 'Shop', 'description': 'Sells things', 'API key': KEY},
        'confirm': True,
        'client': FakeOpenAI(content='```markdown\n# Shop\n\nBody text\n```'),
        'built_with': [],
        'interactive': True,
    }

    def fake_prompt(message, *args, **kwargs):
        for fragment, answer in state['answers'].items():
            if fragment in message:
                return answer
        raise AssertionError(f'unexpected prompt: {message}')

    def fake_build_client(provider, api_key):
        state['built_with'].append((provider, api_key))
        return state['client']

    monkeypatch.setattr(Prompt, 'ask', fake_prompt)
    monkeypatch.setattr(Confirm, 'ask', lambda *a, **k: state['confirm'])
    monkeypatch.setattr(cli, 'build_client', fake_build_client)
    monkeypatch.setattr(cli, '_is_interactive', lambda: state['interactive'])
    state['root'] = root
    return state


class TestMain:

    def test_generates_readme(self, wizard):
        assert cli.main(['-k', KEY]) == 0

        readme = wizard['root'] / 'README.md'
        assert readme.read_text(encoding='utf-8') == '# Shop\n\nBody text\n'
        assert wizard['built_with'] == [('openai', KEY)]
        prompt = wizard['client'].calls[0]['messages'][1]['content']
        assert 'named "Shop"' in prompt
        assert 'Project description: Sells things' in prompt
        assert '"frontend": "React"' in prompt

    def test_prompts_for_key_and_reuses_saved_key(self, wizard):
        assert cli.main([]) == 0
        assert CredentialStore().load() == KEY

        del wizard['answers']['API key']
        (wizard['root'] / 'README.md').unlink()
        assert cli.main([]) == 0
        assert wizard['built_with'][-1] == ('openai', KEY)

    def test_existing_readme_alternate_name(self, wizard):
        (wizard['root'] / 'README.md').write_text('keep me')
        wizard['confirm'] = False
        wizard['answers']['new name'] = 'README.ai'

        assert cli.main(['-k', KEY]) == 0

        assert (wizard['root'] / 'README.md').read_text() == 'keep me'
        assert (wizard['root'] / 'README.ai.md').read_text(encoding='utf-8').startswith('# Shop')

    def test_empty_generation_fails_without_writing(self, wizard):
        wizard['client'] = FakeOpenAI(content='```markdown\n```')

        assert cli.main(['-k', KEY]) == 1
        assert not (wizard['root'] / 'README.md').exists()

    def test_environment_key_with_anthropic(self, wizard, monkeypatch):
        monkeypatch.setenv('ANTHROPIC_API_KEY', 'anthropic-key-000')
        from conftest import FakeAnthropic
        wizard['client'] = FakeAnthropic(content='# Shop')

        assert cli.main(['--provider', 'anthropic']) == 0
        assert wizard['built_with'] == [('anthropic', 'anthropic-key-000')]
        assert wizard['client'].calls[0]['model'] == 'claude-3-5-haiku-latest'

    def test_unexpected_error_exits_nonzero(self, wizard, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError('boom')

        monkeypatch.setattr(cli, 'analyze_project', explode)

        assert cli.main(['-k', KEY]) == 1
        assert not (wizard['root'] / 'README.md').exists()

    def test_missing_key_without_terminal_fails(self, wizard, capsys):
        del wizard['answers']['API key']
        wizard['interactive'] = False

        assert cli.main([]) == 1

        assert not (wizard['root'] / 'README.md').exists()
        assert wizard['built_with'] == []
        out = capsys.readouterr().out
        assert 'OPENAI_API_KEY' in out
        assert 'platform.openai.com' in out

    def test_save_transcript(self, wizard, home_dir):
        assert cli.main(['-k', KEY, '--save-transcript']) == 0

        records = list((home_dir / '.readme-wizard' / 'transcripts').rglob('*.json'))
        assert len(records) == 1
        record = json.loads(records[0].read_text(encoding='utf-8'))
        assert record['exit_code'] == 0
        assert Path(record['output_path']).name == 'README.md'
        assert record['response'].startswith('```markdown')
        assert record['metadata']['project'] == 'Shop'

    def test_transcript_records_failed_generation(self, wizard, home_dir):
        wizard['client'] = FakeOpenAI(content='```markdown')

        assert cli.main(['-k', KEY, '--save-transcript']) == 1

        assert not (wizard['root'] / 'README.md').exists()
        records = list((home_dir / '.readme-wizard' / 'transcripts').rglob('*.json'))
        record = json.loads(records[0].read_text(encoding='utf-8'))
        assert record['exit_code'] == 1
        assert record['output_path'] is None


class TestClearConfig:

    def test_clear_existing(self, home_dir):
        store = CredentialStore()
        store.save(KEY)

        assert cli.main(['--clear-config']) == 0
        assert not store.path.exists()

    def test_clear_when_nothing_saved(self, home_dir):
        assert cli.main(['--clear-config']) == 0

    def test_clear_failure(self, home_dir, monkeypatch):
        from readme_wizard.utils.credentials import CredentialStoreError

        def fail(self):
            raise CredentialStoreError('permission denied')

        monkeypatch.setattr(CredentialStore, 'clear', fail)

        assert cli.main(['--clear-config']) == 1


class TestEntryPoint:

    def test_help(self):
        result = subprocess.run(
            [sys.executable, '-m', 'readme_wizard', '--help'],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert '--clear-config' in result.stdout

    def test_version(self):
        result = subprocess.run(
            [sys.executable, '-m', 'readme_wizard', '--version'],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert '1.0.0' in result.stdout
