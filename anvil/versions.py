"""Async resolver for available Java and Spring Boot versions.

Queries the Spring Initializr metadata endpoint
(``https://start.spring.io/metadata/client``) once per version kind.  A
failed or malformed fetch is an expected outcome, not an error: the resolver
returns the built-in version list instead, flagged as a fallback, and prints
a warning.  No retries are attempted.

Typical usage::

    resolver = VersionResolver()
    boot, java = await resolver.resolve_all()
    print(boot.default, java.versions)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

import httpx
from pydantic import BaseModel, Field

from anvil.config import DEFAULT_METADATA_URL
from anvil.utils import print_warning


class MetadataFetchError(Exception):
    """Raised when the metadata payload does not have the expected shape."""


class VersionKind(str, Enum):
    """Which list of versions to resolve."""
    SPRING_BOOT = "bootVersion"
    JAVA = "javaVersion"


class VersionSource(str, Enum):
    """Where a ``VersionChoices`` came from."""
    REMOTE = "remote"
    FALLBACK = "fallback"


_LABELS: dict[VersionKind, str] = {
    VersionKind.SPRING_BOOT: "Spring Boot",
    VersionKind.JAVA: "Java",
}

_RELEASE_SUFFIX = ".RELEASE"


class VersionChoices(BaseModel):
    """Ordered candidate versions plus the default to preselect."""

    kind: VersionKind
    versions: list[str] = Field(default_factory=list)
    default: str = ""
    source: VersionSource = Field(default=VersionSource.REMOTE)
    error: Optional[str] = Field(default=None, description="Why the fallback was used")

    @property
    def is_fallback(self) -> bool:
        return self.source is VersionSource.FALLBACK


FALLBACK_VERSIONS: dict[VersionKind, tuple[list[str], str]] = {
    VersionKind.SPRING_BOOT: (["3.2.0", "3.1.5", "3.0.13", "2.7.18"], "3.2.0"),
    VersionKind.JAVA: (["25", "21", "17", "11", "8"], "25"),
}


def fallback_choices(kind: VersionKind, error: str | None = None) -> VersionChoices:
    """Return the built-in version list for *kind*."""
    versions, default = FALLBACK_VERSIONS[kind]
    return VersionChoices(
        kind=kind,
        versions=list(versions),
        default=default,
        source=VersionSource.FALLBACK,
        error=error,
    )


class VersionResolver:
    """Resolves version choices from the Spring Initializr metadata API."""

    def __init__(
        self,
        url: str = DEFAULT_METADATA_URL,
        timeout: float = 10.0,
        offline: bool = False,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.offline = offline

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our timeout."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 5.0)),
            headers={"Accept": "application/json"},
            follow_redirects=True,
        )

    @staticmethod
    def _parse_choices(kind: VersionKind, data: Any) -> VersionChoices:
        """Extract the candidates for *kind* from a metadata document.

        Spring Boot identifiers lose their ``.RELEASE`` suffix.  A default
        that is not among the candidates is replaced by the first one.

        Raises:
            MetadataFetchError: If the payload is not shaped as expected.
        """
        try:
            section = data[kind.value]
            raw_values = section["values"]
            versions = [str(v["id"]) for v in raw_values]
            default = str(section["default"])
        except (KeyError, TypeError) as exc:
            raise MetadataFetchError(
                f"metadata has no usable '{kind.value}' section ({exc!r})"
            ) from exc

        if kind is VersionKind.SPRING_BOOT:
            versions = [v.replace(_RELEASE_SUFFIX, "") for v in versions]
            default = default.replace(_RELEASE_SUFFIX, "")

        if not versions:
            raise MetadataFetchError(f"metadata lists no '{kind.value}' values")
        if default not in versions:
            default = versions[0]

        return VersionChoices(kind=kind, versions=versions, default=default)

    def _fallback(self, kind: VersionKind, error: str) -> VersionChoices:
        print_warning(
            f"Could not fetch {_LABELS[kind]} versions from {self.url}. "
            f"Using default versions. Error: {error}"
        )
        return fallback_choices(kind, error)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def resolve(self, kind: VersionKind) -> VersionChoices:
        """Resolve the candidate versions for *kind*.

        Performs a single GET against the metadata URL.  Never raises: any
        network, HTTP or payload problem yields the fallback list.
        """
        if self.offline:
            return fallback_choices(kind, "offline mode")

        try:
            async with self._client() as client:
                response = await client.get(self.url)
                response.raise_for_status()
                data = response.json()
            return self._parse_choices(kind, data)
        except httpx.ConnectError:
            return self._fallback(kind, f"cannot connect to {self.url}")
        except httpx.TimeoutException:
            return self._fallback(kind, f"request timed out after {self.timeout}s")
        except httpx.HTTPStatusError as exc:
            return self._fallback(kind, f"HTTP {exc.response.status_code}")
        except MetadataFetchError as exc:
            return self._fallback(kind, str(exc))
        except ValueError as exc:
            # Body was not JSON.
            return self._fallback(kind, f"invalid metadata payload: {exc}")
        except httpx.HTTPError as exc:
            return self._fallback(kind, f"{type(exc).__name__}: {exc}")

    async def resolve_all(self) -> tuple[VersionChoices, VersionChoices]:
        """Resolve Spring Boot, then Java versions (two sequential fetches)."""
        boot = await self.resolve(VersionKind.SPRING_BOOT)
        java = await self.resolve(VersionKind.JAVA)
        return boot, java
