"""Pydantic v2 models for the Anvil project scaffolder.

Defines the resolved project configuration consumed by the generation engine
and the file-tree descriptors (directories and files) that the planner emits
and the writers materialise.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ConfigurationError(ValueError):
    """Raised when a project configuration is invalid or contradictory.

    Always raised before generation starts, so no file is ever written for a
    rejected configuration.
    """


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class DbDriver(str, Enum):
    """Database drivers selectable when JPA is enabled."""
    POSTGRESQL = "PostgreSQL"
    H2 = "H2"
    MYSQL = "MySQL"
    MONGODB = "MongoDB"


class ApiStyle(str, Enum):
    """API styles that decide which controller stubs are generated."""
    REST = "REST"
    GRAPHQL = "GraphQL"


class Module(str, Enum):
    """The four fixed Gradle subprojects of a generated project.

    Declaration order follows the logical dependency order
    (``domain`` <- ``application`` <- ``infrastructure`` <- ``api``).
    """
    DOMAIN = "domain"
    APPLICATION = "application"
    INFRASTRUCTURE = "infrastructure"
    API = "api"


# Order in which module directories are generated.  Independent of the
# dependency order above.
GENERATION_ORDER: tuple[Module, ...] = (
    Module.API,
    Module.APPLICATION,
    Module.DOMAIN,
    Module.INFRASTRUCTURE,
)

_JAVA_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_PROJECT_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Fully resolved, immutable description of the project to generate."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Project name; the root directory is '<name>-api'")
    group_id: str = Field(..., description="Dot-separated Java group / base package")
    java_version: str = Field(..., description="Java toolchain language version")
    springboot_version: str = Field(..., description="Spring Boot plugin / BOM version")
    jpa: bool = Field(default=True, description="Include Spring Data JPA")
    db_driver: frozenset[DbDriver] = Field(
        default_factory=frozenset,
        description="Database drivers; only meaningful when jpa is enabled",
    )
    lombok: bool = Field(default=True, description="Include Lombok")
    mapstruct: bool = Field(default=True, description="Include MapStruct")
    api_style: frozenset[ApiStyle] = Field(
        default_factory=lambda: frozenset({ApiStyle.REST}),
        description="Controller stubs to generate",
    )

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("project name must not be empty")
        if not _PROJECT_NAME.match(value):
            raise ValueError(
                f"project name {value!r} must start with a letter and contain only "
                "letters, digits, '_' and '-'"
            )
        return value

    @field_validator("group_id")
    @classmethod
    def _check_group_id(cls, value: str) -> str:
        value = value.strip()
        segments = value.split(".")
        if not value or not all(_JAVA_IDENTIFIER.match(s) for s in segments):
            raise ValueError(
                f"group id {value!r} must be dot-separated Java identifiers (e.g. 'com.example')"
            )
        return value

    @field_validator("java_version", "springboot_version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("version must not be empty")
        return value

    # -- Construction ------------------------------------------------------

    @classmethod
    def create(cls, **data: Any) -> "ProjectConfig":
        """Validate *data* and build a config, raising ``ConfigurationError``.

        This is the entry point used by the CLI and prompts; it turns
        pydantic's ``ValidationError`` into a single readable error.
        """
        try:
            return cls(**data)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
                for err in exc.errors()
            )
            raise ConfigurationError(f"Invalid project configuration: {problems}") from exc

    # -- Derived values ----------------------------------------------------

    @property
    def root_name(self) -> str:
        """Root directory name, also the Gradle root project / artifact name."""
        return f"{self.project_name}-api"

    @property
    def base_package_path(self) -> str:
        """``group_id`` as a relative directory path (``com/example``)."""
        return self.group_id.replace(".", "/")

    @property
    def application_class_name(self) -> str:
        """Name of the Spring Boot entry-point class.

        ``my-clinic`` -> ``MyClinicApiApplication``.  Only the first letter of
        each hyphen-separated segment is changed.
        """
        segments = [s for s in self.project_name.split("-") if s]
        return "".join(s[:1].upper() + s[1:] for s in segments) + "ApiApplication"

    @property
    def active_drivers(self) -> list[DbDriver]:
        """Selected drivers in declaration order; empty unless ``jpa`` is set."""
        if not self.jpa:
            return []
        return [d for d in DbDriver if d in self.db_driver]


# ---------------------------------------------------------------------------
# Generated tree
# ---------------------------------------------------------------------------


class GeneratedDirectory(BaseModel):
    """A directory to create (recursively), relative to the output directory."""

    model_config = ConfigDict(frozen=True)

    path: str


class GeneratedFile(BaseModel):
    """A file to write, relative to the output directory."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str = ""


TreeEntry = Union[GeneratedDirectory, GeneratedFile]


class ProjectTree(BaseModel):
    """Ordered sequence of directories and files for one generation pass.

    Every path starts with ``root``.  Entries are kept in write order.
    """

    root: str
    entries: list[TreeEntry] = Field(default_factory=list)

    def add_directory(self, path: str) -> None:
        self.entries.append(GeneratedDirectory(path=path))

    def add_file(self, path: str, content: str) -> None:
        self.entries.append(GeneratedFile(path=path, content=content))

    def files(self) -> list[GeneratedFile]:
        return [e for e in self.entries if isinstance(e, GeneratedFile)]

    def directories(self) -> list[GeneratedDirectory]:
        return [e for e in self.entries if isinstance(e, GeneratedDirectory)]

    def paths(self) -> list[str]:
        return [e.path for e in self.entries]

    def get(self, path: str) -> GeneratedFile | None:
        """Return the file at *path*, or ``None`` if the tree has no such file."""
        for entry in self.entries:
            if isinstance(entry, GeneratedFile) and entry.path == path:
                return entry
        return None

    def __contains__(self, path: object) -> bool:
        return any(e.path == path for e in self.entries)

    def __len__(self) -> int:
        return len(self.entries)
