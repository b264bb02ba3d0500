"""
End-to-end profiling tests.
"""

import json

from readme_wizard.generator import build_prompt
from readme_wizard.profiler import analyze_project


class TestAnalyzeProject:

    def test_no_manifest_still_scans_and_builds_prompt(self, make_project):
        root = make_project(files={'src/main.py': 'print("hi")\n', 'CHANGELOG.md': ''})

        profile = analyze_project(root)

        assert profile.name is None
        assert profile.dependencies == set()
        assert profile.fact('hasTests') is False
        assert profile.fact('hasChangelog') is True
        assert profile.folders == ['src']
        assert profile.container_setup is None
        assert profile.pipeline_setup.provider is None

        prompt = build_prompt(profile, 'scratch')
        assert 'named "scratch"' in prompt

    def test_full_project(self, make_project):
        root = make_project(
            package={
                'name': 'shop',
                'version': '1.0.0',
                'dependencies': {'next': '14.0.0', 'react': '18.0.0', 'prisma': '5.0.0'},
                'devDependencies': {'jest': '29.0.0'},
            },
            files={
                'app/page.test.tsx': '',
                'Dockerfile': 'FROM node:20 AS build\nEXPOSE 3000\n',
                '.github/workflows/ci.yml': 'on: [push]\njobs:\n  t:\n    steps:\n      - name: test\n',
                'node_modules/next/package.json': '{}',
            },
        )

        profile = analyze_project(root)

        assert profile.tech_stack.framework.meta == 'Next.js'
        assert profile.tech_stack.framework.frontend == 'React'
        assert profile.tech_stack.testing.framework == 'Jest'
        assert profile.tech_stack.database.orm == 'Prisma'
        assert profile.tech_stack.deployment.containerization == 'Docker'
        assert profile.tech_stack.deployment.ci is True
        assert profile.fact('hasTests')
        assert profile.container_setup.build_stages == ['build']
        assert profile.pipeline_setup.provider == 'GitHub Actions'
        assert profile.pipeline_setup.workflows[0].triggers == ['push']
        assert profile.pipeline_setup.features.testing
        assert 'node_modules/next' not in profile.folders

    def test_profile_serializes_for_prompt(self, make_project):
        root = make_project(package={'name': 'x', 'dependencies': {'vue': '3'}})

        data = analyze_project(root).to_prompt_dict()

        assert data['techStack']['framework']['frontend'] == 'Vue.js'
        assert data['facts']['hasTests'] is False
        json.dumps(data)
