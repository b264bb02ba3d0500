from __future__ import annotations

from typing import Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

FACT_NAMES = (
    "hasTests",
    "hasCoverage",
    "hasCI",
    "hasDocker",
    "hasContribution",
    "hasChangelog",
    "hasSecurityPolicy",
    "hasRoadmap",
    "hasAPIDoc",
    "hasGit",
    "isMonorepo",
)


def default_facts() -> Dict[str, bool]:
    return {name: False for name in FACT_NAMES}


class ProfileModel(BaseModel):
    """Base for profile records; dumps with the camelCase names used in prompts."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_prompt_dict(self) -> Dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class FrameworkStack(ProfileModel):
    frontend: Optional[str] = None
    backend: Optional[str] = None
    meta: Optional[str] = None


class TestingStack(ProfileModel):
    __test__ = False

    framework: Optional[str] = None
    e2e: Optional[str] = Field(default=None, alias="e2e")
    coverage: bool = False


class DatabaseStack(ProfileModel):
    orm: Optional[str] = None
    database: Optional[str] = None


class DeploymentStack(ProfileModel):
    containerization: Optional[str] = None
    ci: bool = False
    pm: Optional[str] = None


class DocumentationStack(ProfileModel):
    api: Optional[str] = None
    docs: Optional[str] = None


class UIStack(ProfileModel):
    component: Optional[str] = None
    styling: Optional[str] = None


class StateManagementStack(ProfileModel):
    global_store: Optional[str] = Field(default=None, alias="global")
    server: Optional[str] = None


class ApiLayerStack(ProfileModel):
    rest: Optional[str] = None
    graphql: Optional[str] = None


class TechStack(ProfileModel):
    framework: FrameworkStack = Field(default_factory=FrameworkStack)
    testing: TestingStack = Field(default_factory=TestingStack)
    database: DatabaseStack = Field(default_factory=DatabaseStack)
    deployment: DeploymentStack = Field(default_factory=DeploymentStack)
    documentation: DocumentationStack = Field(default_factory=DocumentationStack)
    ui: UIStack = Field(default_factory=UIStack)
    state_management: StateManagementStack = Field(default_factory=StateManagementStack)
    api: ApiLayerStack = Field(default_factory=ApiLayerStack)


class ContainerSetup(ProfileModel):
    has_dockerfile: bool = False
    has_compose: bool = False
    has_docker_ignore: bool = False
    build_stages: List[str] = Field(default_factory=list)
    base_image: Optional[str] = None
    exposed_ports: List[str] = Field(default_factory=list)
    services: List[str] = Field(default_factory=list)
    volumes: List[str] = Field(default_factory=list)
    networks: List[str] = Field(default_factory=list)


class Workflow(ProfileModel):
    name: str
    triggers: List[str] = Field(default_factory=list)


class PipelineFeatures(ProfileModel):
    testing: bool = False
    building: bool = False
    deployment: bool = False
    container_build: bool = False
    code_quality: bool = False
    security: bool = False


class PipelineSetup(ProfileModel):
    provider: Optional[str] = None
    workflows: List[Workflow] = Field(default_factory=list)
    features: PipelineFeatures = Field(default_factory=PipelineFeatures)


class ProjectProfile(ProfileModel):
    """Everything the profiler learned about the working directory."""

    name: Optional[str] = None
    version: Optional[str] = None
    license: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    main_file: Optional[str] = None
    repository: Optional[str] = None
    homepage: Optional[str] = None
    engines: Dict[str, str] = Field(default_factory=dict)
    scripts: Dict[str, str] = Field(default_factory=dict)

    dependencies: Set[str] = Field(default_factory=set)
    dev_dependencies: Set[str] = Field(default_factory=set)
    facts: Dict[str, bool] = Field(default_factory=default_facts)

    folders: List[str] = Field(default_factory=list)
    test_files: List[str] = Field(default_factory=list)
    remote_url: Optional[str] = None

    tech_stack: TechStack = Field(default_factory=TechStack)
    container_setup: Optional[ContainerSetup] = None
    pipeline_setup: PipelineSetup = Field(default_factory=PipelineSetup)

    @property
    def all_dependencies(self) -> Set[str]:
        return self.dependencies | self.dev_dependencies

    def fact(self, name: str) -> bool:
        return bool(self.facts.get(name, False))
