"""
Tests for the prompt preview script.
"""

from scripts.preview_prompt import main, render_preview


def test_render_preview_uses_manifest_name(make_project):
    root = make_project(package={'name': 'shop', 'dependencies': {'express': '4'}})

    prompt = render_preview(root)

    assert 'Express.js backend project named "shop"' in prompt


def test_main_prints_prompt(make_project, capsys):
    root = make_project(files={'index.js': ''})

    main([str(root), '--name', 'Demo', '--description', 'A demo'])

    out = capsys.readouterr().out
    assert 'named "Demo"' in out
    assert 'Project description: A demo' in out
