"""
Tests for Dockerfile and docker-compose analysis.
"""

from readme_wizard.profiler import analyze_container_setup
from readme_wizard.profiler.file_tree import list_files

DOCKERFILE = """\
FROM node:18-alpine AS deps
WORKDIR /app
COPY package.json .
RUN npm ci

FROM node:18-alpine as runner
COPY --from=deps /app/node_modules ./node_modules
EXPOSE 3000
EXPOSE 9229
CMD ["node", "server.js"]
"""

COMPOSE = """\
services:
  web:
    build: .
  db:
    image: postgres:16
volumes:
  pgdata: {}
networks:
  backend: {}
"""


def analyze(root):
    return analyze_container_setup(root, list_files(root))


class TestContainerSetup:

    def test_no_container_files_is_absent(self, make_project):
        root = make_project(files={'src/index.js': ''})

        assert analyze(root) is None

    def test_dockerfile_lines(self, make_project):
        root = make_project(files={'Dockerfile': DOCKERFILE, '.dockerignore': 'node_modules\n'})

        setup = analyze(root)

        assert setup.has_dockerfile
        assert not setup.has_compose
        assert setup.has_docker_ignore
        assert setup.build_stages == ['deps', 'runner']
        assert setup.base_image == 'node:18-alpine'
        assert setup.exposed_ports == ['3000', '9229']

    def test_compose_sections(self, make_project):
        root = make_project(files={'docker-compose.yml': COMPOSE})

        setup = analyze(root)

        assert not setup.has_dockerfile
        assert setup.has_compose
        assert setup.services == ['web', 'db']
        assert setup.volumes == ['pgdata']
        assert setup.networks == ['backend']

    def test_malformed_compose_clears_flag_only(self, make_project):
        root = make_project(files={
            'Dockerfile': 'FROM python:3.12\n',
            'docker-compose.yaml': 'services: [web\n  db: {',
        })

        setup = analyze(root)

        assert setup is not None
        assert setup.has_compose is False
        assert setup.has_dockerfile is True
        assert setup.base_image == 'python:3.12'
        assert setup.services == []

    def test_compose_that_is_not_a_mapping(self, make_project):
        root = make_project(files={'docker-compose.yml': '- just\n- a list\n'})

        setup = analyze(root)

        assert setup is not None
        assert setup.has_compose is False

    def test_nested_dockerfile_is_found(self, make_project):
        root = make_project(files={'docker/Dockerfile.prod': 'FROM nginx:1.25\nEXPOSE 80\n'})

        setup = analyze(root)

        assert setup.base_image == 'nginx:1.25'
        assert setup.exposed_ports == ['80']
        assert setup.build_stages == []

    def test_compose_with_impossible_date_clears_flag(self, make_project):
        root = make_project(files={
            'Dockerfile': 'FROM node:18\n',
            'docker-compose.yml': 'version: 2001-13-14\nservices:\n  web: {}\n',
        })

        setup = analyze(root)

        assert setup.has_dockerfile
        assert setup.has_compose is False
        assert setup.services == []
