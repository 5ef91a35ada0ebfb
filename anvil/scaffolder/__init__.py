"""Anvil scaffolder -- generates multi-module Spring Boot project skeletons.

This module takes a ``ProjectConfig`` and renders a Gradle multi-module
project laid out around a hexagonal architecture (``domain``,
``application``, ``infrastructure``, ``api``).

Quick usage::

    from anvil.scaffolder import ProjectConfig, ProjectGenerator

    config = ProjectConfig.create(
        project_name="clinic",
        group_id="com.example",
        java_version="21",
        springboot_version="3.2.0",
        db_driver=["PostgreSQL"],
    )
    project_path = ProjectGenerator(config).generate("/tmp/output")
"""

from anvil.scaffolder.generator import ProjectGenerator
from anvil.scaffolder.models import (
    ApiStyle,
    ConfigurationError,
    DbDriver,
    GeneratedDirectory,
    GeneratedFile,
    Module,
    ProjectConfig,
    ProjectTree,
)
from anvil.scaffolder.planner import ProjectPlanner
from anvil.scaffolder.templates import TemplateRenderer
from anvil.scaffolder.writer import (
    FileSystemError,
    FileSystemWriter,
    InMemoryWriter,
    ProjectExistsError,
    TreeWriter,
)

__all__ = [
    "ApiStyle",
    "ConfigurationError",
    "DbDriver",
    "FileSystemError",
    "FileSystemWriter",
    "GeneratedDirectory",
    "GeneratedFile",
    "InMemoryWriter",
    "Module",
    "ProjectConfig",
    "ProjectExistsError",
    "ProjectGenerator",
    "ProjectPlanner",
    "ProjectTree",
    "TemplateRenderer",
    "TreeWriter",
]
