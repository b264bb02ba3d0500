from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .models import ProjectProfile
from .parsing import ParseStatus, load_json_mapping

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    return str(value)


def _person(value: Any) -> Optional[str]:
    """Flatten an npm person field (string or ``{name, email}``) to text."""
    if isinstance(value, dict):
        name = _as_str(value.get("name"))
        email = _as_str(value.get("email"))
        if name and email:
            return f"{name} <{email}>"
        return name or email
    return _as_str(value)


def _url(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return _as_str(value.get("url"))
    return _as_str(value)


def _string_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(key): str(item) for key, item in value.items()}


def _names(value: Any) -> set:
    if not isinstance(value, dict):
        return set()
    return {str(key) for key in value}


def read_manifest(root: Path) -> ProjectProfile:
    """Build the initial profile from ``package.json``.

    A missing or malformed manifest yields an empty profile with every fact
    false; the caller keeps going with whatever the file tree can tell it.
    """
    result = load_json_mapping(Path(root) / MANIFEST_NAME)
    if result.status is ParseStatus.UNAVAILABLE:
        logger.warning("No %s found, continuing with limited analysis", MANIFEST_NAME)
        return ProjectProfile()
    if result.status is ParseStatus.FAILED:
        logger.warning("Could not parse %s (%s), continuing with limited analysis", MANIFEST_NAME, result.error)
        return ProjectProfile()

    package = result.data
    return ProjectProfile(
        name=_as_str(package.get("name")),
        version=_as_str(package.get("version")),
        license=_as_str(package.get("license")),
        author=_person(package.get("author")),
        description=_as_str(package.get("description")),
        main_file=_as_str(package.get("main")),
        repository=_url(package.get("repository")),
        homepage=_as_str(package.get("homepage")),
        engines=_string_map(package.get("engines")),
        scripts=_string_map(package.get("scripts")),
        dependencies=_names(package.get("dependencies")),
        dev_dependencies=_names(package.get("devDependencies")),
    )
