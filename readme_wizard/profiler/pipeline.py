from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .models import PipelineFeatures, PipelineSetup, Workflow
from .parsing import ParseResult, load_yaml_mapping

logger = logging.getLogger(__name__)

GITHUB_ACTIONS = "GitHub Actions"
GITLAB_CI = "GitLab CI"
CIRCLE_CI = "Circle CI"

GITHUB_WORKFLOWS_DIR = Path(".github") / "workflows"
GITLAB_CONFIG = Path(".gitlab-ci.yml")
CIRCLE_CONFIG = Path(".circleci") / "config.yml"

FEATURE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "testing": ("test",),
    "building": ("build",),
    "deployment": ("deploy",),
    "container_build": ("docker",),
    "code_quality": ("lint", "sonar", "quality"),
    "security": ("security", "scan", "snyk"),
}

# Top-level .gitlab-ci.yml keys that configure the pipeline rather than name a job.
GITLAB_GLOBAL_KEYS = frozenset(
    {
        "default",
        "include",
        "stages",
        "variables",
        "workflow",
        "image",
        "services",
        "cache",
        "before_script",
        "after_script",
    }
)


def detect_features(step_names: Iterable[str]) -> PipelineFeatures:
    names = [name.lower() for name in step_names]
    return PipelineFeatures(
        **{
            feature: any(keyword in name for name in names for keyword in keywords)
            for feature, keywords in FEATURE_KEYWORDS.items()
        }
    )


def _steps(job: Any) -> List[Any]:
    steps = job.get("steps") if isinstance(job, dict) else None
    return steps if isinstance(steps, list) else []


def _triggers(parsed: Dict[Any, Any]) -> List[str]:
    # YAML 1.1 loads a bare ``on:`` key as boolean True.
    triggers = parsed.get("on", parsed.get(True))
    if isinstance(triggers, str):
        return [triggers]
    if isinstance(triggers, list):
        return [str(item) for item in triggers]
    if isinstance(triggers, dict):
        return [str(key) for key in triggers]
    return []


def _github_step_names(parsed: Dict[Any, Any]) -> List[str]:
    jobs = parsed.get("jobs")
    if not isinstance(jobs, dict):
        return []
    names = []
    for job in jobs.values():
        for step in _steps(job):
            if isinstance(step, dict) and step.get("name"):
                names.append(str(step["name"]))
    return names


def _gitlab_job_names(parsed: Dict[Any, Any]) -> List[str]:
    return [
        str(key)
        for key in parsed
        if not str(key).startswith(".") and str(key) not in GITLAB_GLOBAL_KEYS
    ]


def _circle_step_names(parsed: Dict[Any, Any]) -> List[str]:
    jobs = parsed.get("jobs")
    if not isinstance(jobs, dict):
        return []
    names = list(str(key) for key in jobs)
    for job in jobs.values():
        for step in _steps(job):
            run = step.get("run") if isinstance(step, dict) else None
            if isinstance(run, dict) and run.get("name"):
                names.append(str(run["name"]))
    return names


def _warn(result: ParseResult, path: Path) -> None:
    logger.warning("Could not parse %s: %s", path, result.error or "unreadable")


def _github_workflow_files(root: Path) -> List[Path]:
    directory = root / GITHUB_WORKFLOWS_DIR
    if not directory.is_dir():
        return []
    return sorted(
        path for path in directory.iterdir() if path.is_file() and path.suffix in (".yml", ".yaml")
    )


def _check_github(root: Path, setup: PipelineSetup, step_names: List[str]) -> None:
    workflow_files = _github_workflow_files(root)
    if not workflow_files:
        return
    setup.provider = GITHUB_ACTIONS
    workflows = []
    for path in workflow_files:
        result = load_yaml_mapping(path)
        if not result.ok:
            _warn(result, path)
            continue
        workflows.append(Workflow(name=path.stem, triggers=_triggers(result.data)))
        step_names.extend(_github_step_names(result.data))
    setup.workflows = workflows


def _check_gitlab(root: Path, setup: PipelineSetup, step_names: List[str]) -> None:
    path = root / GITLAB_CONFIG
    if not path.is_file():
        return
    setup.provider = GITLAB_CI
    result = load_yaml_mapping(path)
    if not result.ok:
        _warn(result, path)
        return
    jobs = _gitlab_job_names(result.data)
    setup.workflows = [Workflow(name=job) for job in jobs]
    step_names.extend(jobs)


def _check_circle(root: Path, setup: PipelineSetup, step_names: List[str]) -> None:
    path = root / CIRCLE_CONFIG
    if not path.is_file():
        return
    setup.provider = CIRCLE_CI
    result = load_yaml_mapping(path)
    if not result.ok:
        _warn(result, path)
        return
    workflows = result.data.get("workflows")
    setup.workflows = [
        Workflow(name=str(name))
        for name, body in (workflows.items() if isinstance(workflows, dict) else [])
        if name != "version" and isinstance(body, dict)
    ]
    step_names.extend(_circle_step_names(result.data))


PROVIDER_CHECKS: Sequence = (_check_github, _check_gitlab, _check_circle)


def analyze_pipeline(root: Path) -> PipelineSetup:
    """Inspect CI configuration for GitHub Actions, GitLab CI and CircleCI.

    Every provider is checked; when several are configured the last one
    checked owns ``provider`` and ``workflows``. Feature flags pool the step
    names of every configuration that parsed.
    """
    root = Path(root)
    setup = PipelineSetup()
    step_names: List[str] = []
    for check in PROVIDER_CHECKS:
        check(root, setup, step_names)
    setup.features = detect_features(step_names)
    return setup
