"""Project profiling: manifest, file tree, tech-stack, container and CI detection."""

from .analyzer import analyze_project
from .container import analyze_container_setup
from .detectors import DetectorRegistry, build_registry, detect_tech_stack
from .file_tree import DEFAULT_EXCLUDES, FileTreeScan, scan_file_tree
from .manifest import read_manifest
from .models import ContainerSetup, PipelineSetup, ProjectProfile, TechStack
from .parsing import ParseResult, ParseStatus
from .pipeline import analyze_pipeline

__all__ = [
    "analyze_project",
    "analyze_container_setup",
    "analyze_pipeline",
    "build_registry",
    "detect_tech_stack",
    "read_manifest",
    "scan_file_tree",
    "DEFAULT_EXCLUDES",
    "ContainerSetup",
    "DetectorRegistry",
    "FileTreeScan",
    "ParseResult",
    "ParseStatus",
    "PipelineSetup",
    "ProjectProfile",
    "TechStack",
]
