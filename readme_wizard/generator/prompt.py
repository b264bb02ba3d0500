from __future__ import annotations

import json
from typing import Any, Dict, Optional

from readme_wizard.profiler.models import ProjectProfile, TechStack

from .badges import build_badges

SYSTEM_PROMPT = """You are a senior technical writer producing README files for software projects.
Stay grounded in the project analysis you are given. Never invent commands, scripts, or services
that the analysis does not support. Answer with the README content only, as GitHub-flavoured Markdown."""

README_TEMPLATE = """Generate a beautiful, modern, and comprehensive README.md that follows best practices for a {project_type} project named "{project_name}". Make it visually appealing with strategic use of badges, emojis, and formatting.

{description_line}

Project Analysis:
{analysis}

{badges_section}Structure Requirements (Standard-README Specification):
1. Title & Description
   - Clear project name with logo/banner (if available)
   - Concise description of the project's purpose
   - Essential badges (build status, version, license)

2. Table of Contents
   - Links to all major sections

3. Background/Security (if applicable)
   - Context and problem the project solves
   - Security considerations and warnings

4. Installation & Prerequisites
   - System requirements and dependencies
   - Step-by-step installation guide
   - Environment setup with .env example

5. Usage/Examples
   - Basic usage examples with code blocks
   - Common use cases
   - API documentation if applicable

6. Project Architecture
   - High-level architecture overview
   - Project structure with explanations
   - Key components and their interactions

7. Development
   - Setting up the development environment
   - Running tests and code coverage
   - Contribution guidelines
   - Code style and standards

8. Maintenance & Support
   - Issue reporting guidelines
   - Troubleshooting common issues

9. License & Credits
   - License information
   - Acknowledgments and contributors

Style Guidelines:
- Use semantic emojis for section headers (📦 Installation, 🚀 Usage, etc.)
- Include code blocks with proper language tags
- Use tables for structured information
- Include collapsible sections for lengthy content
- Use badges from shields.io for status indicators
- Follow proper Markdown heading hierarchy
- Add direct links to important files/folders
- Include a "Quick Start" section for experienced developers
- Add status badges for CI/CD pipelines if applicable
- Add a "Features" section with key highlights

Make the README professional, comprehensive, and maintainable while following the Standard-README specification and modern documentation best practices."""


def describe_project_type(tech_stack: TechStack, has_dependencies: bool) -> str:
    framework = tech_stack.framework
    if framework.meta:
        return f"{framework.meta} web application"
    if framework.frontend and framework.backend:
        return f"full-stack {framework.frontend} and {framework.backend}"
    if framework.frontend:
        return f"{framework.frontend} frontend"
    if framework.backend:
        return f"{framework.backend} backend"
    if has_dependencies:
        return "Node.js"
    return "software"


def build_analysis(profile: ProjectProfile, project_name: str, description: Optional[str]) -> Dict[str, Any]:
    """Structured excerpt of the profile embedded in the prompt."""
    analysis: Dict[str, Any] = {
        "name": project_name,
        "version": profile.version,
        "description": description,
        "author": profile.author,
        "license": profile.license,
        "isMonorepo": profile.fact("isMonorepo"),
        "hasTests": profile.fact("hasTests"),
        "hasCoverage": profile.fact("hasCoverage"),
        "hasCI": profile.fact("hasCI"),
        "hasDocker": profile.fact("hasDocker"),
        "hasContribution": profile.fact("hasContribution"),
        "hasChangelog": profile.fact("hasChangelog"),
        "hasAPIDoc": profile.fact("hasAPIDoc"),
        "techStack": profile.tech_stack.to_prompt_dict(),
        "projectStructure": list(profile.folders),
    }
    if profile.scripts:
        analysis["scripts"] = dict(sorted(profile.scripts.items()))
    if profile.dependencies:
        analysis["dependencies"] = sorted(profile.dependencies)
    if profile.dev_dependencies:
        analysis["devDependencies"] = sorted(profile.dev_dependencies)
    if profile.repository or profile.remote_url:
        analysis["repository"] = profile.repository or profile.remote_url
    if profile.container_setup is not None:
        analysis["containerSetup"] = profile.container_setup.to_prompt_dict()
    if profile.pipeline_setup.provider:
        analysis["pipelineSetup"] = profile.pipeline_setup.to_prompt_dict()
    return analysis


def build_prompt(profile: ProjectProfile, project_name: str, description: Optional[str] = None) -> str:
    """Render the generation request for ``profile``.

    ``description`` is the user's answer; when blank the manifest description is
    used, and when that is missing too the model is asked to write one.
    """
    description = (description or "").strip() or profile.description
    if description:
        description_line = f"Project description: {description}"
    else:
        description_line = "No description was provided; write a concise one from the project analysis."

    badges = build_badges(profile)
    badges_section = ""
    if badges:
        badges_section = "Suggested badges:\n" + "\n".join(badges) + "\n\n"

    return README_TEMPLATE.format(
        project_type=describe_project_type(profile.tech_stack, bool(profile.all_dependencies)),
        project_name=project_name,
        description_line=description_line,
        analysis=json.dumps(build_analysis(profile, project_name, description), indent=2),
        badges_section=badges_section,
    )
