from __future__ import annotations

import fnmatch
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .parsing import read_text

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDES: Sequence[str] = ("node_modules/**", ".git/**", "dist/**", "build/**")

# Fact name -> case-insensitive pattern searched in every relative file path.
FILENAME_FACTS: Dict[str, "re.Pattern[str]"] = {
    "hasContribution": re.compile(r"contributing", re.IGNORECASE),
    "hasChangelog": re.compile(r"changelog", re.IGNORECASE),
    "hasDocker": re.compile(r"dockerfile|docker-compose", re.IGNORECASE),
    "hasSecurityPolicy": re.compile(r"security", re.IGNORECASE),
    "hasRoadmap": re.compile(r"roadmap", re.IGNORECASE),
    "hasAPIDoc": re.compile(r"swagger|openapi|api\.json|api\.yaml|postman", re.IGNORECASE),
}

TEST_FILE_PATTERN = re.compile(r"(?:test|spec)\.[^.]*")
CI_LOCATIONS = (".github/workflows", ".gitlab-ci.yml", ".circleci")
MONOREPO_MARKERS = ("lerna.json", "pnpm-workspace.yaml")
GIT_REMOTE_PATTERN = re.compile(r"url = (.+)")


@dataclass
class FileTreeScan:
    """Result of walking the working directory."""

    files: List[str] = field(default_factory=list)
    folders: List[str] = field(default_factory=list)
    test_files: List[str] = field(default_factory=list)
    facts: Dict[str, bool] = field(default_factory=dict)
    remote_url: Optional[str] = None


def _excluded(relative: str, patterns: Iterable[str]) -> bool:
    for pattern in patterns:
        if fnmatch.fnmatch(relative, pattern):
            return True
        # "dir/**" also covers the directory itself so the walk can prune it.
        if pattern.endswith("/**") and relative == pattern[:-3]:
            return True
    return False


def list_files(root: Path, exclude_patterns: Iterable[str] = DEFAULT_EXCLUDES) -> List[str]:
    """Return every non-ignored file under ``root`` as a sorted POSIX-style relative path."""
    patterns = list(exclude_patterns)
    found: List[str] = []
    for current, dirnames, filenames in os.walk(root, onerror=lambda exc: logger.debug("Skipping %s", exc)):
        base = Path(current).relative_to(root).as_posix()
        prefix = "" if base == "." else f"{base}/"
        dirnames[:] = sorted(d for d in dirnames if not _excluded(f"{prefix}{d}", patterns))
        for filename in filenames:
            relative = f"{prefix}{filename}"
            if not _excluded(relative, patterns):
                found.append(relative)
    return sorted(found)


def _hidden(relative: str) -> bool:
    return any(part.startswith(".") for part in relative.split("/"))


def _git_remote(root: Path) -> Optional[str]:
    content = read_text(root / ".git" / "config")
    if not content:
        return None
    match = GIT_REMOTE_PATTERN.search(content)
    return match.group(1).strip() if match else None


def scan_file_tree(root: Path, exclude_patterns: Iterable[str] = DEFAULT_EXCLUDES) -> FileTreeScan:
    root = Path(root)
    files = list_files(root, exclude_patterns)

    # Filename facts ignore paths under dot-directories such as .github.
    visible = [path for path in files if not _hidden(path)]
    facts: Dict[str, bool] = {
        name: any(pattern.search(path) for path in visible)
        for name, pattern in FILENAME_FACTS.items()
    }
    test_files = [path for path in files if TEST_FILE_PATTERN.search(path.rsplit("/", 1)[-1])]
    facts["hasTests"] = bool(test_files)
    facts["hasCI"] = any((root / location).exists() for location in CI_LOCATIONS)
    facts["isMonorepo"] = any((root / marker).exists() for marker in MONOREPO_MARKERS)
    facts["hasCoverage"] = (root / "coverage").is_dir()
    facts["hasGit"] = (root / ".git").exists()

    folders = sorted({path.rsplit("/", 1)[0] for path in files if "/" in path})

    logger.debug("Scanned %d files in %d folders", len(files), len(folders))
    return FileTreeScan(
        files=files,
        folders=folders,
        test_files=test_files,
        facts=facts,
        remote_url=_git_remote(root) if facts["hasGit"] else None,
    )
