"""Module, dependency and stub matrix for generated projects.

Everything that varies with the feature flags of a ``ProjectConfig`` is
declared here as data: which plugins and dependencies each Gradle module
gets, and which placeholder sources it owns.  The planner only walks these
tables and the templates only render what they are given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

from .models import ApiStyle, DbDriver, Module, ProjectConfig
from .templates import pascal_case


# ---------------------------------------------------------------------------
# Pinned versions
# ---------------------------------------------------------------------------

DEPENDENCY_MANAGEMENT_VERSION = "1.1.5"
LOMBOK_VERSION = "1.18.42"
MAPSTRUCT_VERSION = "1.5.5.Final"
PROJECT_VERSION = "0.0.1-SNAPSHOT"

MAPSTRUCT_COMPILER_ARG = "-Amapstruct.defaultComponentModel=spring"

# Example feature package nested in every module.
EXAMPLE_FEATURE = "patient"


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Dependency:
    """One line of a Gradle ``dependencies`` block."""

    configuration: str
    coordinate: str

    def render(self) -> str:
        return f"{self.configuration} '{self.coordinate}'"


@dataclass(frozen=True)
class StubSpec:
    """A placeholder Java type owned by a module.

    ``folder`` is relative to the module package root and may contain the
    ``{feature}`` placeholder, as may ``name``.  ``api_style`` restricts the
    stub to configs that selected that style.
    """

    folder: str
    name: str
    kind: str = "class"
    api_style: Optional[ApiStyle] = None

    def applies_to(self, config: ProjectConfig) -> bool:
        return self.api_style is None or self.api_style in config.api_style


@dataclass(frozen=True)
class ModuleSpec:
    """Static description of one Gradle module."""

    module: Module
    sub_package: str
    project_dependencies: tuple[Module, ...] = ()
    plugins: tuple[str, ...] = ()
    uses_boot_platform: bool = False
    jar_enabled: bool = True
    dependencies: tuple[Dependency, ...] = ()
    stubs: tuple[StubSpec, ...] = ()


class BuildDescriptor(BaseModel):
    """Rendering context for a module ``build.gradle``."""

    module: Module
    plugins: list[str] = Field(default_factory=list)
    platform: Optional[str] = None
    project_dependencies: list[str] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    jar_enabled: bool = True


class RootBuildDescriptor(BaseModel):
    """Rendering context for the root ``build.gradle``."""

    group_id: str
    project_version: str = PROJECT_VERSION
    java_version: str
    springboot_version: str
    dependency_management_version: str = DEPENDENCY_MANAGEMENT_VERSION
    dependencies: list[str] = Field(default_factory=list)
    compiler_args: list[str] = Field(default_factory=list)


class JavaStub(BaseModel):
    """A resolved stub: where it goes and what it declares."""

    module: Module
    package: str
    name: str
    kind: str = "class"

    @property
    def relative_path(self) -> str:
        """Path below ``src/main/java``."""
        return f"{self.package.replace('.', '/')}/{self.name}.java"


# ---------------------------------------------------------------------------
# Dependency tables
# ---------------------------------------------------------------------------

LOMBOK_DEPENDENCIES: tuple[Dependency, ...] = tuple(
    Dependency(conf, f"org.projectlombok:lombok:{LOMBOK_VERSION}")
    for conf in (
        "compileOnly",
        "annotationProcessor",
        "testCompileOnly",
        "testAnnotationProcessor",
    )
)

MAPSTRUCT_DEPENDENCIES: tuple[Dependency, ...] = (
    Dependency("implementation", f"org.mapstruct:mapstruct:{MAPSTRUCT_VERSION}"),
    Dependency("annotationProcessor", f"org.mapstruct:mapstruct-processor:{MAPSTRUCT_VERSION}"),
)

JPA_STARTER = Dependency(
    "implementation", "org.springframework.boot:spring-boot-starter-data-jpa"
)

DRIVER_DEPENDENCIES: dict[DbDriver, Dependency] = {
    DbDriver.POSTGRESQL: Dependency("runtimeOnly", "org.postgresql:postgresql"),
    DbDriver.H2: Dependency("runtimeOnly", "com.h2database:h2"),
    DbDriver.MYSQL: Dependency("runtimeOnly", "mysql:mysql-connector-java:8.0.33"),
    DbDriver.MONGODB: Dependency(
        "implementation", "org.springframework.boot:spring-boot-starter-data-mongodb"
    ),
}


# ---------------------------------------------------------------------------
# Module table
# ---------------------------------------------------------------------------

MODULE_SPECS: dict[Module, ModuleSpec] = {
    Module.DOMAIN: ModuleSpec(
        module=Module.DOMAIN,
        sub_package="domain",
        stubs=(
            StubSpec("shared/model", "AggregateRoot", kind="abstract class"),
            StubSpec("shared/event", "DomainEvent", kind="interface"),
            StubSpec("shared/error", "ErrorOr"),
            StubSpec("{feature}/model", "{Feature}"),
            StubSpec("{feature}/model", "{Feature}Name"),
            StubSpec("{feature}/repository", "{Feature}Repository", kind="interface"),
            StubSpec("{feature}/event", "{Feature}CreatedEvent"),
        ),
    ),
    Module.APPLICATION: ModuleSpec(
        module=Module.APPLICATION,
        sub_package="application",
        project_dependencies=(Module.DOMAIN,),
        stubs=(
            StubSpec("{feature}", "{Feature}CommandHandler"),
            StubSpec("{feature}", "{Feature}QueryHandler"),
            StubSpec("{feature}", "{Feature}EventHandler"),
            StubSpec("{feature}/command", "Create{Feature}Command"),
            StubSpec("{feature}/query", "Get{Feature}ByIdQuery"),
            StubSpec("{feature}/query", "{Feature}Details"),
        ),
    ),
    Module.INFRASTRUCTURE: ModuleSpec(
        module=Module.INFRASTRUCTURE,
        sub_package="infrastructure",
        project_dependencies=(Module.DOMAIN, Module.APPLICATION),
        plugins=("java", "io.spring.dependency-management"),
        uses_boot_platform=True,
        stubs=(
            StubSpec("bus", "AnnotationDrivenCommandBus"),
            StubSpec("bus", "AnnotationDrivenQueryBus"),
            StubSpec("bus", "AnnotationDrivenEventBus"),
            StubSpec("{feature}/persistence/entity", "{Feature}Dbo"),
            StubSpec("{feature}/persistence/mapper", "{Feature}PersistenceMapper", kind="interface"),
            StubSpec("{feature}/persistence/repository", "{Feature}RepositoryImpl"),
            StubSpec("{feature}/persistence/repository/jpa", "{Feature}JpaRepository", kind="interface"),
        ),
    ),
    Module.API: ModuleSpec(
        module=Module.API,
        sub_package="",
        project_dependencies=(Module.APPLICATION, Module.INFRASTRUCTURE),
        plugins=("java", "org.springframework.boot", "io.spring.dependency-management"),
        jar_enabled=False,
        dependencies=(
            Dependency("implementation", "org.springframework.boot:spring-boot-starter-web"),
            Dependency("implementation", "org.springframework.boot:spring-boot-starter-graphql"),
            Dependency("implementation", "com.fasterxml.jackson.core:jackson-databind"),
        ),
        stubs=(
            StubSpec("config", "SecurityConfig"),
            StubSpec("{feature}/controllers/rest", "{Feature}RestController", api_style=ApiStyle.REST),
            StubSpec(
                "{feature}/controllers/graphql", "{Feature}QueryResolver", api_style=ApiStyle.GRAPHQL
            ),
            StubSpec("{feature}/mapper", "{Feature}ApiMapper", kind="interface"),
            StubSpec("{feature}/model", "Create{Feature}Request"),
            StubSpec("{feature}/model", "{Feature}Response"),
        ),
    ),
}


# ---------------------------------------------------------------------------
# Resolution against a config
# ---------------------------------------------------------------------------


def module_package(module: Module, config: ProjectConfig) -> str:
    """Return the package root of *module* (``com.example.domain``)."""
    sub = MODULE_SPECS[module].sub_package
    return f"{config.group_id}.{sub}" if sub else config.group_id


def conditional_dependencies(module: Module, config: ProjectConfig) -> list[Dependency]:
    """Dependencies a module gains from the config's feature flags."""
    if module is not Module.INFRASTRUCTURE or not config.jpa:
        return []
    deps = [JPA_STARTER]
    deps.extend(DRIVER_DEPENDENCIES[driver] for driver in config.active_drivers)
    return deps


def build_descriptor(module: Module, config: ProjectConfig) -> BuildDescriptor:
    """Resolve the ``build.gradle`` context of *module* for *config*."""
    spec = MODULE_SPECS[module]
    deps = list(spec.dependencies) + conditional_dependencies(module, config)
    platform = (
        f"org.springframework.boot:spring-boot-dependencies:{config.springboot_version}"
        if spec.uses_boot_platform
        else None
    )
    return BuildDescriptor(
        module=module,
        plugins=list(spec.plugins),
        platform=platform,
        project_dependencies=[m.value for m in spec.project_dependencies],
        dependencies=[d.render() for d in deps],
        jar_enabled=spec.jar_enabled,
    )


def root_build_descriptor(config: ProjectConfig) -> RootBuildDescriptor:
    """Resolve the root ``build.gradle`` context for *config*."""
    deps: list[Dependency] = []
    compiler_args: list[str] = []
    if config.lombok:
        deps.extend(LOMBOK_DEPENDENCIES)
    if config.mapstruct:
        deps.extend(MAPSTRUCT_DEPENDENCIES)
        compiler_args.append(MAPSTRUCT_COMPILER_ARG)
    return RootBuildDescriptor(
        group_id=config.group_id,
        java_version=config.java_version,
        springboot_version=config.springboot_version,
        dependencies=[d.render() for d in deps],
        compiler_args=compiler_args,
    )


def stubs_for(module: Module, config: ProjectConfig) -> list[JavaStub]:
    """Resolve the placeholder types *module* owns under *config*."""
    feature = EXAMPLE_FEATURE
    names = {"feature": feature, "Feature": pascal_case(feature)}
    base = module_package(module, config)
    stubs: list[JavaStub] = []
    for stub in MODULE_SPECS[module].stubs:
        if not stub.applies_to(config):
            continue
        folder = stub.folder.format(**names)
        stubs.append(
            JavaStub(
                module=module,
                package=".".join([base, *folder.split("/")]),
                name=stub.name.format(**names),
                kind=stub.kind,
            )
        )
    return stubs
