"""Interactive collection of a ``ProjectConfig``.

Asks the questions of the scaffolder with Rich prompts, using the resolved
versions as choices and the command-line values as defaults.  Multi-choice
questions (database drivers, API styles) take a comma-separated answer.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from anvil.config import PromptDefaults
from anvil.scaffolder.models import ApiStyle, DbDriver, ProjectConfig
from anvil.utils import console as default_console
from anvil.versions import VersionChoices

E = TypeVar("E", bound=Enum)


def parse_multi_choice(answer: str, enum_cls: type[E]) -> list[E]:
    """Parse ``"PostgreSQL, h2"`` into enum members (case-insensitive).

    An empty answer or ``none`` selects nothing.

    Raises:
        ValueError: If any entry is not a member value of *enum_cls*.
    """
    lookup = {member.value.lower(): member for member in enum_cls}
    selected: list[E] = []
    for raw in answer.split(","):
        token = raw.strip().lower()
        if not token or token == "none":
            continue
        if token not in lookup:
            valid = ", ".join(m.value for m in enum_cls)
            raise ValueError(f"'{raw.strip()}' is not one of: {valid}")
        member = lookup[token]
        if member not in selected:
            selected.append(member)
    return selected


class ConfigPrompter:
    """Asks the user for every ``ProjectConfig`` field."""

    def __init__(
        self,
        boot_versions: VersionChoices,
        java_versions: VersionChoices,
        defaults: PromptDefaults | None = None,
        console: Console | None = None,
    ) -> None:
        self.boot_versions = boot_versions
        self.java_versions = java_versions
        self.defaults = defaults or PromptDefaults()
        self.console = console or default_console

    # -- Public API --------------------------------------------------------

    def ask(self) -> ProjectConfig:
        """Run the interactive questionnaire and return a validated config.

        Raises:
            ConfigurationError: If the answers do not form a valid config.
        """
        project_name = Prompt.ask(
            "Project Name", default=self.defaults.project_name, console=self.console
        )
        group_id = Prompt.ask("Group ID", default=self.defaults.group_id, console=self.console)
        java_version = Prompt.ask(
            "Java Version",
            choices=self.java_versions.versions,
            default=self.java_versions.default,
            console=self.console,
        )
        springboot_version = Prompt.ask(
            "Spring Boot Version",
            choices=self.boot_versions.versions,
            default=self.boot_versions.default,
            console=self.console,
        )
        jpa = Confirm.ask("Include JPA?", default=True, console=self.console)
        db_driver: list[DbDriver] = []
        if jpa:
            db_driver = self._ask_multi("Database Driver", DbDriver, default="")
        lombok = Confirm.ask("Include Lombok?", default=True, console=self.console)
        mapstruct = Confirm.ask("Include MapStruct?", default=True, console=self.console)
        api_style = self._ask_multi("API Style", ApiStyle, default=ApiStyle.REST.value)

        return ProjectConfig.create(
            project_name=project_name,
            group_id=group_id,
            java_version=java_version,
            springboot_version=springboot_version,
            jpa=jpa,
            db_driver=db_driver,
            lombok=lombok,
            mapstruct=mapstruct,
            api_style=api_style,
        )

    def defaults_config(self) -> ProjectConfig:
        """Build the config every prompt would produce if accepted as-is."""
        return ProjectConfig.create(
            project_name=self.defaults.project_name,
            group_id=self.defaults.group_id,
            java_version=self.java_versions.default,
            springboot_version=self.boot_versions.default,
            jpa=True,
            db_driver=[],
            lombok=True,
            mapstruct=True,
            api_style=[ApiStyle.REST],
        )

    # -- Helpers -----------------------------------------------------------

    def _ask_multi(self, label: str, enum_cls: type[E], default: str) -> list[E]:
        options = ", ".join(m.value for m in enum_cls)
        while True:
            answer: Optional[str] = Prompt.ask(
                f"{label} [dim](comma-separated: {options})[/dim]",
                default=default,
                show_default=bool(default),
                console=self.console,
            )
            try:
                return parse_multi_choice(answer or "", enum_cls)
            except ValueError as exc:
                self.console.print(f"[prompt.invalid]{escape(str(exc))}")

