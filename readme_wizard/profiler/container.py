from __future__ import annotations

import fnmatch
import logging
import re
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .models import ContainerSetup
from .parsing import ParseStatus, load_yaml_mapping, read_text

logger = logging.getLogger(__name__)

DOCKERFILE_PATTERN = "Dockerfile*"
COMPOSE_PATTERNS = ("docker-compose*.yml", "docker-compose*.yaml")

STAGE_PATTERN = re.compile(r"^FROM .+ (?:as|AS) (.+)$", re.MULTILINE)
BASE_IMAGE_PATTERN = re.compile(r"^FROM (\S+)", re.MULTILINE)
EXPOSE_PATTERN = re.compile(r"^EXPOSE (\d+)", re.MULTILINE)


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def find_dockerfiles(files: Sequence[str]) -> List[str]:
    return [path for path in files if fnmatch.fnmatchcase(_basename(path), DOCKERFILE_PATTERN)]


def find_compose_files(files: Sequence[str]) -> List[str]:
    return [
        path
        for path in files
        if any(fnmatch.fnmatchcase(_basename(path), pattern) for pattern in COMPOSE_PATTERNS)
    ]


def _keys(section: Any) -> List[str]:
    if isinstance(section, dict):
        return [str(key) for key in section]
    return []


def _read_dockerfile(setup: ContainerSetup, path: Path) -> None:
    content = read_text(path)
    if content is None:
        logger.warning("Could not read %s", path)
        return
    setup.build_stages = [stage.strip() for stage in STAGE_PATTERN.findall(content)]
    base = BASE_IMAGE_PATTERN.search(content)
    setup.base_image = base.group(1) if base else None
    setup.exposed_ports = EXPOSE_PATTERN.findall(content)


def _read_compose(setup: ContainerSetup, path: Path) -> None:
    result = load_yaml_mapping(path)
    if not result.ok:
        if result.status is ParseStatus.FAILED:
            logger.debug("Ignoring unparsable compose file %s: %s", path, result.error)
        setup.has_compose = False
        return
    compose = result.data
    setup.services = _keys(compose.get("services"))
    setup.volumes = _keys(compose.get("volumes"))
    setup.networks = _keys(compose.get("networks"))


def analyze_container_setup(root: Path, files: Sequence[str]) -> Optional[ContainerSetup]:
    """Summarise Dockerfile and docker-compose usage.

    Returns None when the project has neither. Only the first Dockerfile and
    the first compose file (in sorted path order) are inspected; the Dockerfile
    is matched line by line rather than parsed.
    """
    root = Path(root)
    dockerfiles = find_dockerfiles(files)
    compose_files = find_compose_files(files)
    if not dockerfiles and not compose_files:
        return None

    setup = ContainerSetup(
        has_dockerfile=bool(dockerfiles),
        has_compose=bool(compose_files),
        has_docker_ignore=(root / ".dockerignore").exists(),
    )
    if dockerfiles:
        _read_dockerfile(setup, root / dockerfiles[0])
    if compose_files:
        _read_compose(setup, root / compose_files[0])
    return setup
