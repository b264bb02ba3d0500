"""
readme-wizard - generate a README for the current project with a hosted LLM.

Profiles the working directory (package manifest, file tree, container and CI
configuration) and turns the result into a single generation request.
"""

__version__ = "1.0.0"

from readme_wizard.profiler import ProjectProfile, analyze_project

__all__ = ["ProjectProfile", "analyze_project", "__version__"]
