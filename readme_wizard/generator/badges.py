from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote

from readme_wizard.profiler.models import ProjectProfile

SHIELDS_URL = "https://img.shields.io/badge"

FRAMEWORK_COLORS = {
    "React": "blue",
    "Next.js": "black",
    "Vue.js": "green",
    "Angular": "red",
    "Svelte": "orange",
    "Express.js": "green",
    "NestJS": "red",
    "Fastify": "black",
    "Jest": "orange",
    "Prisma": "blue",
    "TypeORM": "red",
    "PostgreSQL": "blue",
    "MongoDB": "green",
}


def _escape(text: str) -> str:
    # shields.io treats "-" and "_" as separators; doubling them keeps them literal.
    return quote(text.replace("-", "--").replace("_", "__"), safe="")


def badge(label: str, message: str, color: str, alt: Optional[str] = None) -> str:
    return f"![{alt or label}]({SHIELDS_URL}/{_escape(label)}-{_escape(message)}-{color}.svg)"


def common_badges(profile: ProjectProfile) -> List[str]:
    badges = []
    if profile.version:
        badges.append(badge("version", profile.version, "blue", alt="Version"))
    if profile.license:
        badges.append(badge("license", profile.license, "green", alt="License"))
    if profile.all_dependencies:
        badges.append(badge("node", ">= 14.0.0", "brightgreen", alt="Node.js"))
    if profile.fact("hasTests"):
        badges.append(badge("tests", "passing", "brightgreen", alt="Tests"))
    return badges


def technology_badges(profile: ProjectProfile) -> List[str]:
    stack = profile.tech_stack
    detected = [
        stack.framework.frontend,
        stack.framework.meta,
        stack.framework.backend,
        "TypeScript" if "typescript" in profile.all_dependencies else None,
        stack.testing.framework,
        stack.database.orm,
        stack.database.database,
    ]
    badges = []
    seen = set()
    for name in detected:
        if not name or name in seen:
            continue
        seen.add(name)
        badges.append(badge(name, "used", FRAMEWORK_COLORS.get(name, "informational"), alt=name))
    return badges


def build_badges(profile: ProjectProfile) -> List[str]:
    """shields.io badges suggested to the model for the README header."""
    return common_badges(profile) + technology_badges(profile)
