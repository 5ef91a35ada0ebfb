"""Anvil configuration.

Typed settings for the command-line tool.  Everything here is consumed by
the CLI and the version resolver; the generation engine itself only ever
sees a ``ProjectConfig``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from anvil.scaffolder.models import ConfigurationError


DEFAULT_METADATA_URL = "https://start.spring.io/metadata/client"

_TRUTHY = {"1", "true", "yes", "on"}


class MetadataConfig(BaseModel):
    """Where and how to query the Spring Initializr metadata endpoint."""

    url: str = Field(default=DEFAULT_METADATA_URL)
    timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")
    offline: bool = Field(
        default=False, description="Skip the remote fetch and use the built-in version lists"
    )


class PromptDefaults(BaseModel):
    """Defaults offered by the interactive prompts."""

    project_name: str = Field(default="my-project")
    group_id: str = Field(default="com.example")


class Settings(BaseModel):
    """Global Anvil settings.

    Instances are created once by the CLI entry point, from environment
    variables and then overridden by command-line flags.
    """

    output_dir: Path = Field(default_factory=Path.cwd)
    overwrite: bool = Field(default=False)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
    defaults: PromptDefaults = Field(default_factory=PromptDefaults)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            ANVIL_OUTPUT_DIR, ANVIL_METADATA_URL, ANVIL_METADATA_TIMEOUT,
            ANVIL_OFFLINE, ANVIL_PROJECT_NAME, ANVIL_GROUP_ID.

        Raises:
            ConfigurationError: If a variable holds an unusable value.
        """
        metadata_kwargs: dict[str, Any] = {}
        if os.environ.get("ANVIL_METADATA_URL"):
            metadata_kwargs["url"] = os.environ["ANVIL_METADATA_URL"]
        if os.environ.get("ANVIL_METADATA_TIMEOUT"):
            # Validated (and converted) by MetadataConfig.
            metadata_kwargs["timeout"] = os.environ["ANVIL_METADATA_TIMEOUT"].strip()
        if os.environ.get("ANVIL_OFFLINE"):
            metadata_kwargs["offline"] = os.environ["ANVIL_OFFLINE"].strip().lower() in _TRUTHY

        defaults_kwargs: dict[str, Any] = {}
        if os.environ.get("ANVIL_PROJECT_NAME"):
            defaults_kwargs["project_name"] = os.environ["ANVIL_PROJECT_NAME"]
        if os.environ.get("ANVIL_GROUP_ID"):
            defaults_kwargs["group_id"] = os.environ["ANVIL_GROUP_ID"]

        try:
            kwargs: dict[str, Any] = {
                "metadata": MetadataConfig(**metadata_kwargs),
                "defaults": PromptDefaults(**defaults_kwargs),
            }
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise ConfigurationError(f"Invalid ANVIL_* environment setting: {problems}") from exc
        if os.environ.get("ANVIL_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["ANVIL_OUTPUT_DIR"])

        return cls(**kwargs)
