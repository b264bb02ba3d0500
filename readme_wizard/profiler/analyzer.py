from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from .container import analyze_container_setup
from .detectors import DetectorRegistry, detect_tech_stack
from .file_tree import DEFAULT_EXCLUDES, scan_file_tree
from .manifest import read_manifest
from .models import ProjectProfile
from .pipeline import analyze_pipeline

logger = logging.getLogger(__name__)


def analyze_project(
    root: Path | str = ".",
    *,
    exclude_patterns: Iterable[str] = DEFAULT_EXCLUDES,
    registry: Optional[DetectorRegistry] = None,
) -> ProjectProfile:
    """Profile the project rooted at ``root``.

    Manifest, file tree, tech stack, container and CI analysis run in that
    order, each enriching the same profile. Nothing here raises for missing or
    malformed project files.
    """
    root = Path(root).resolve()
    profile = read_manifest(root)

    scan = scan_file_tree(root, exclude_patterns)
    profile.facts.update(scan.facts)
    profile.folders = scan.folders
    profile.test_files = scan.test_files
    profile.remote_url = scan.remote_url

    profile.tech_stack = detect_tech_stack(profile, registry)
    profile.container_setup = analyze_container_setup(root, scan.files)
    profile.pipeline_setup = analyze_pipeline(root)

    logger.debug(
        "Profiled %s: %d dependencies, %d dev dependencies",
        root,
        len(profile.dependencies),
        len(profile.dev_dependencies),
    )
    return profile
