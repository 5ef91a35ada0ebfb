"""Anvil command-line entry point.

Resolves the available Java / Spring Boot versions, collects the project
configuration (interactively, or from defaults with ``--yes``) and
generates the multi-module project in the output directory.

Usage::

    anvil
    anvil --project-name clinic --group-id com.acme -o ./out
    anvil --yes --offline --project-name clinic
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from anvil import __version__
from anvil.config import Settings
from anvil.prompts import ConfigPrompter
from anvil.scaffolder import (
    ApiStyle,
    ConfigurationError,
    FileSystemError,
    ProjectConfig,
    ProjectGenerator,
)
from anvil.utils import (
    console,
    print_banner,
    print_error,
    print_info,
    print_success,
    print_summary_table,
)
from anvil.versions import VersionChoices, VersionResolver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anvil",
        description="Anvil -- multi-module Spring Boot project scaffolder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  anvil\n"
            "  anvil --project-name clinic --group-id com.acme -o ./out\n"
            "  anvil --yes --offline --project-name clinic\n"
        ),
    )
    parser.add_argument(
        "--project-name",
        default=None,
        help="Default project name offered by the prompt (default: my-project)",
    )
    parser.add_argument(
        "--group-id",
        default=None,
        help="Default group id offered by the prompt (default: com.example)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory in which '<project-name>-api' is created (default: cwd)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Regenerate in place if the project directory already exists",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not prompt; accept every default",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Do not query start.spring.io; use the built-in version lists",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Overlay command-line flags on the environment settings."""
    settings = Settings.from_env()
    if args.project_name:
        settings.defaults.project_name = args.project_name
    if args.group_id:
        settings.defaults.group_id = args.group_id
    if args.output:
        settings.output_dir = Path(args.output)
    if args.force:
        settings.overwrite = True
    if args.offline:
        settings.metadata.offline = True
    return settings


async def resolve_versions(settings: Settings) -> tuple[VersionChoices, VersionChoices]:
    resolver = VersionResolver(
        url=settings.metadata.url,
        timeout=settings.metadata.timeout,
        offline=settings.metadata.offline,
    )
    return await resolver.resolve_all()


def collect_config(settings: Settings, assume_defaults: bool) -> ProjectConfig:
    """Resolve versions and build the ``ProjectConfig`` for this run."""
    boot, java = asyncio.run(resolve_versions(settings))
    prompter = ConfigPrompter(boot, java, defaults=settings.defaults, console=console)
    if assume_defaults:
        return prompter.defaults_config()
    return prompter.ask()


def summary_rows(config: ProjectConfig) -> dict[str, str]:
    """Key/value rows describing *config* for the completion summary."""
    return {
        "Project": config.root_name,
        "Group": config.group_id,
        "Java": config.java_version,
        "Spring Boot": config.springboot_version,
        "JPA": "yes" if config.jpa else "no",
        "Database drivers": ", ".join(d.value for d in config.active_drivers) or "none",
        "Lombok": "yes" if config.lombok else "no",
        "MapStruct": "yes" if config.mapstruct else "no",
        "API style": ", ".join(s.value for s in ApiStyle if s in config.api_style) or "none",
    }


def run(argv: list[str] | None = None) -> int:
    """Execute the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)

    print_banner("Anvil", "Multi-module Spring Boot project scaffolder")

    try:
        settings = settings_from_args(args)
        config = collect_config(settings, assume_defaults=args.yes)
    except ConfigurationError as exc:
        print_error(f"Error: {exc}")
        return 1

    console.print("\nCreating multi-module project...")
    try:
        root = ProjectGenerator(config).generate(
            settings.output_dir, overwrite=settings.overwrite
        )
    except FileSystemError as exc:
        print_error(f"Error: could not {exc.operation} {exc.path}: {exc.reason}")
        return 1

    print_summary_table(summary_rows(config), title="Generated project")
    print_success(f"Project generated at: {root}")
    print_info(
        f"Please run 'gradle wrapper' in the '{root.name}' directory "
        "to generate the Gradle wrapper scripts."
    )
    return 0


def main() -> None:
    """Console-script entry point for ``anvil``."""
    try:
        code = run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted.[/yellow]")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
