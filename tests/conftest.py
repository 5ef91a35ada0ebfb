"""Shared pytest fixtures for the Anvil test suite.

Provides reusable fixtures for:
- Project configurations (minimal, end-to-end "clinic", feature variants)
- In-memory tree writer
- Spring Initializr metadata payloads
- Mocked ``httpx.AsyncClient`` factory
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from anvil.scaffolder import ApiStyle, DbDriver, InMemoryWriter, ProjectConfig


# ---------------------------------------------------------------------------
# Project configurations
# ---------------------------------------------------------------------------

def make_config(**overrides: Any) -> ProjectConfig:
    """Build a ``ProjectConfig`` with test defaults, overriding any field."""
    data: dict[str, Any] = {
        "project_name": "demo",
        "group_id": "com.example",
        "java_version": "21",
        "springboot_version": "3.2.0",
        "jpa": True,
        "db_driver": [],
        "lombok": True,
        "mapstruct": True,
        "api_style": [ApiStyle.REST],
    }
    data.update(overrides)
    return ProjectConfig(**data)


@pytest.fixture
def config_factory():
    """The ``make_config`` builder, for tests that vary a single flag."""
    return make_config


@pytest.fixture
def minimal_config() -> ProjectConfig:
    """Every optional feature switched off."""
    return make_config(
        jpa=False,
        db_driver=[],
        lombok=False,
        mapstruct=False,
        api_style=[],
    )


@pytest.fixture
def clinic_config() -> ProjectConfig:
    """The reference end-to-end configuration."""
    return make_config(
        project_name="clinic",
        group_id="com.example",
        jpa=True,
        db_driver=[DbDriver.POSTGRESQL],
        lombok=True,
        mapstruct=True,
        api_style=[ApiStyle.REST],
    )


@pytest.fixture
def full_config() -> ProjectConfig:
    """Every feature and every driver enabled."""
    return make_config(
        project_name="acme-billing-service",
        group_id="io.acme.billing",
        db_driver=list(DbDriver),
        api_style=list(ApiStyle),
    )


@pytest.fixture
def memory_writer() -> InMemoryWriter:
    return InMemoryWriter()


# ---------------------------------------------------------------------------
# Spring Initializr metadata
# ---------------------------------------------------------------------------

@pytest.fixture
def metadata_payload() -> dict[str, Any]:
    """A trimmed-down but realistic ``/metadata/client`` document."""
    return {
        "bootVersion": {
            "type": "single-select",
            "default": "3.3.4.RELEASE",
            "values": [
                {"id": "3.4.0-SNAPSHOT", "name": "3.4.0 (SNAPSHOT)"},
                {"id": "3.3.4.RELEASE", "name": "3.3.4"},
                {"id": "3.2.10.RELEASE", "name": "3.2.10"},
            ],
        },
        "javaVersion": {
            "type": "single-select",
            "default": "17",
            "values": [
                {"id": "23", "name": "23"},
                {"id": "21", "name": "21"},
                {"id": "17", "name": "17"},
            ],
        },
    }


@pytest.fixture
def mock_http():
    """Factory patching ``httpx.AsyncClient`` with a canned GET outcome.

    Pass ``json_data`` for a successful response, or ``side_effect`` for an
    exception raised by ``client.get``.  Returns ``(patcher, client)``.

    Usage:
        def test_something(mock_http):
            patcher, client = mock_http(json_data={...})
            with patcher:
                ...
    """
    def factory(
        json_data: Any = None,
        side_effect: BaseException | None = None,
        json_error: BaseException | None = None,
    ) -> tuple[Any, AsyncMock]:
        mock_response = MagicMock()
        mock_response.status_code = 200
        if json_error is not None:
            mock_response.json.side_effect = json_error
        else:
            mock_response.json.return_value = json_data
        mock_response.raise_for_status = MagicMock()

        mock_client = AsyncMock()
        if side_effect is not None:
            mock_client.get = AsyncMock(side_effect=side_effect)
        else:
            mock_client.get = AsyncMock(return_value=mock_response)
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)

        return patch("httpx.AsyncClient", return_value=mock_client), mock_client

    return factory
