from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AbstractSet, Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel

from .models import (
    ApiLayerStack,
    DatabaseStack,
    DeploymentStack,
    DocumentationStack,
    FrameworkStack,
    ProjectProfile,
    StateManagementStack,
    TechStack,
    TestingStack,
    UIStack,
)

Predicate = Callable[[AbstractSet[str]], bool]
Rule = Tuple[Predicate, str]


class DetectorRegistryError(Exception):
    """Base error for detector registry operations."""


class DetectorNotFoundError(DetectorRegistryError):
    """Raised when the requested category has no registered detector."""


def requires(*packages: str) -> Predicate:
    """Predicate that holds when any of ``packages`` is a dependency."""

    def predicate(dependencies: AbstractSet[str]) -> bool:
        return any(package in dependencies for package in packages)

    return predicate


def first_match(rules: Sequence[Rule], dependencies: AbstractSet[str]) -> Optional[str]:
    for predicate, label in rules:
        if predicate(dependencies):
            return label
    return None


class Detector(ABC):
    """One tech-stack category, resolved to a fixed-shape record."""

    category: str
    model: Type[BaseModel]

    def detect(self, profile: ProjectProfile) -> BaseModel:
        return self.model.model_validate(self.run(profile))

    @abstractmethod
    def run(self, profile: ProjectProfile) -> Dict[str, Any]:  # pragma: no cover - implemented in subclasses
        """Map each role of the category to a technology name or None."""


class RuleChainDetector(Detector):
    """Evaluates an ordered rule list per role; the first matching rule wins."""

    roles: Dict[str, Sequence[Rule]]
    include_dev: bool = True

    def dependencies(self, profile: ProjectProfile) -> AbstractSet[str]:
        if self.include_dev:
            return profile.all_dependencies
        return profile.dependencies

    def run(self, profile: ProjectProfile) -> Dict[str, Any]:
        dependencies = self.dependencies(profile)
        return {role: first_match(rules, dependencies) for role, rules in self.roles.items()}


class FrameworkDetector(RuleChainDetector):
    category = "framework"
    model = FrameworkStack
    roles = {
        "frontend": [
            (requires("react"), "React"),
            (requires("vue"), "Vue.js"),
            (requires("@angular/core"), "Angular"),
            (requires("svelte"), "Svelte"),
        ],
        "backend": [
            (requires("express"), "Express.js"),
            (requires("@nestjs/core"), "NestJS"),
            (requires("fastify"), "Fastify"),
            (requires("koa"), "Koa"),
        ],
        "meta": [
            (requires("next"), "Next.js"),
            (requires("@nuxt/core"), "Nuxt.js"),
            (requires("@sveltejs/kit"), "SvelteKit"),
        ],
    }


class TestingDetector(RuleChainDetector):
    category = "testing"
    model = TestingStack
    roles = {
        "framework": [
            (requires("jest"), "Jest"),
            (requires("mocha"), "Mocha"),
            (requires("vitest"), "Vitest"),
            (requires("@playwright/test"), "Playwright"),
        ],
        "e2e": [
            (requires("cypress"), "Cypress"),
            (requires("@playwright/test"), "Playwright"),
            (requires("puppeteer"), "Puppeteer"),
        ],
    }
    coverage = staticmethod(requires("nyc", "@istanbul/core"))

    def run(self, profile: ProjectProfile) -> Dict[str, Any]:
        values = super().run(profile)
        values["coverage"] = self.coverage(self.dependencies(profile))
        return values


class DatabaseDetector(RuleChainDetector):
    category = "database"
    model = DatabaseStack
    include_dev = False
    roles = {
        "orm": [
            (requires("prisma"), "Prisma"),
            (requires("typeorm"), "TypeORM"),
            (requires("sequelize"), "Sequelize"),
            (requires("mongoose"), "Mongoose"),
        ],
        "database": [
            (requires("pg"), "PostgreSQL"),
            (requires("mysql2"), "MySQL"),
            (requires("mongodb"), "MongoDB"),
            (requires("sqlite3"), "SQLite"),
        ],
    }


class DeploymentDetector(RuleChainDetector):
    category = "deployment"
    model = DeploymentStack
    include_dev = False
    roles = {
        "pm": [(requires("pm2"), "PM2")],
    }

    def run(self, profile: ProjectProfile) -> Dict[str, Any]:
        values = super().run(profile)
        values["containerization"] = "Docker" if profile.fact("hasDocker") else None
        values["ci"] = profile.fact("hasCI")
        return values


class DocumentationDetector(RuleChainDetector):
    category = "documentation"
    model = DocumentationStack
    roles = {
        "docs": [
            (requires("typedoc"), "TypeDoc"),
            (requires("jsdoc"), "JSDoc"),
        ],
    }

    def run(self, profile: ProjectProfile) -> Dict[str, Any]:
        values = super().run(profile)
        values["api"] = "OpenAPI/Swagger" if profile.fact("hasAPIDoc") else None
        return values


class UIDetector(RuleChainDetector):
    category = "ui"
    model = UIStack
    include_dev = False
    roles = {
        "component": [
            (requires("@mui/material"), "Material UI"),
            (requires("@chakra-ui/react"), "Chakra UI"),
            (requires("tailwindcss"), "Tailwind CSS"),
            (requires("@mantine/core"), "Mantine"),
        ],
        "styling": [
            (requires("styled-components"), "styled-components"),
            (requires("@emotion/react"), "Emotion"),
            (requires("sass"), "Sass"),
        ],
    }


class StateManagementDetector(RuleChainDetector):
    category = "state_management"
    model = StateManagementStack
    include_dev = False
    roles = {
        "global_store": [
            (requires("redux"), "Redux"),
            (requires("recoil"), "Recoil"),
            (requires("mobx"), "MobX"),
            (requires("zustand"), "Zustand"),
        ],
        "server": [
            (requires("react-query"), "React Query"),
            (requires("@tanstack/react-query"), "TanStack Query"),
            (requires("swr"), "SWR"),
        ],
    }


class ApiLayerDetector(RuleChainDetector):
    category = "api"
    model = ApiLayerStack
    include_dev = False
    roles = {
        "rest": [
            (requires("axios"), "Axios"),
            (requires("got"), "Got"),
        ],
        "graphql": [
            (requires("graphql"), "GraphQL"),
            (requires("@apollo/client"), "Apollo Client"),
        ],
    }


class DetectorRegistry:
    """Keeps the category detectors in evaluation order."""

    def __init__(self, detectors: Optional[Sequence[Detector]] = None) -> None:
        self._detectors: Dict[str, Detector] = {}
        if detectors:
            for detector in detectors:
                self.register(detector)

    def register(self, detector: Detector) -> None:
        self._detectors[detector.category] = detector

    def get(self, category: str) -> Detector:
        try:
            return self._detectors[category]
        except KeyError as exc:
            raise DetectorNotFoundError(f"No detector registered for '{category}'.") from exc

    def categories(self) -> List[str]:
        return list(self._detectors)

    def detect(self, profile: ProjectProfile) -> TechStack:
        return TechStack(
            **{category: detector.detect(profile) for category, detector in self._detectors.items()}
        )


def build_registry() -> DetectorRegistry:
    return DetectorRegistry(
        [
            FrameworkDetector(),
            TestingDetector(),
            DatabaseDetector(),
            DeploymentDetector(),
            DocumentationDetector(),
            UIDetector(),
            StateManagementDetector(),
            ApiLayerDetector(),
        ]
    )


def detect_tech_stack(profile: ProjectProfile, registry: Optional[DetectorRegistry] = None) -> TechStack:
    """Run every category detector against the profile's dependencies and facts."""
    return (registry or build_registry()).detect(profile)
