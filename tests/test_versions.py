"""Unit tests for VersionResolver (anvil.versions).

Tests cover:
- VersionChoices model and fallback_choices
- VersionResolver._parse_choices (suffix stripping, default repair, bad shapes)
- VersionResolver.resolve (success, offline, connect error, timeout,
  HTTP error, non-JSON body, malformed payload)
- VersionResolver.resolve_all ordering
"""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from anvil.versions import (
    FALLBACK_VERSIONS,
    MetadataFetchError,
    VersionChoices,
    VersionKind,
    VersionResolver,
    VersionSource,
    fallback_choices,
)


# ---------------------------------------------------------------------------
# VersionChoices / fallbacks
# ---------------------------------------------------------------------------


class TestVersionChoices:
    @pytest.mark.unit
    def test_defaults(self):
        choices = VersionChoices(kind=VersionKind.JAVA)
        assert choices.versions == []
        assert choices.source is VersionSource.REMOTE
        assert choices.is_fallback is False
        assert choices.error is None

    @pytest.mark.unit
    def test_boot_fallback(self):
        choices = fallback_choices(VersionKind.SPRING_BOOT, "boom")
        assert choices.versions == ["3.2.0", "3.1.5", "3.0.13", "2.7.18"]
        assert choices.default == "3.2.0"
        assert choices.is_fallback is True
        assert choices.error == "boom"

    @pytest.mark.unit
    def test_java_fallback(self):
        choices = fallback_choices(VersionKind.JAVA)
        assert choices.versions == ["25", "21", "17", "11", "8"]
        assert choices.default == "25"

    @pytest.mark.unit
    def test_fallback_lists_are_copies(self):
        choices = fallback_choices(VersionKind.JAVA)
        choices.versions.append("99")
        assert "99" not in FALLBACK_VERSIONS[VersionKind.JAVA][0]


# ---------------------------------------------------------------------------
# _parse_choices
# ---------------------------------------------------------------------------


class TestParseChoices:
    @pytest.mark.unit
    def test_boot_strips_release_suffix(self, metadata_payload):
        choices = VersionResolver._parse_choices(VersionKind.SPRING_BOOT, metadata_payload)
        assert choices.versions == ["3.4.0-SNAPSHOT", "3.3.4", "3.2.10"]
        assert choices.default == "3.3.4"
        assert choices.source is VersionSource.REMOTE

    @pytest.mark.unit
    def test_java_kept_verbatim(self, metadata_payload):
        choices = VersionResolver._parse_choices(VersionKind.JAVA, metadata_payload)
        assert choices.versions == ["23", "21", "17"]
        assert choices.default == "17"

    @pytest.mark.unit
    def test_default_not_listed_uses_first(self, metadata_payload):
        metadata_payload["javaVersion"]["default"] = "1.8"
        choices = VersionResolver._parse_choices(VersionKind.JAVA, metadata_payload)
        assert choices.default == "23"

    @pytest.mark.unit
    def test_default_is_always_a_candidate(self, metadata_payload):
        for kind in VersionKind:
            choices = VersionResolver._parse_choices(kind, metadata_payload)
            assert choices.default in choices.versions

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"javaVersion": {}},
            {"javaVersion": {"values": [{"name": "21"}], "default": "21"}},
            {"javaVersion": None},
            [],
        ],
    )
    def test_malformed(self, payload):
        with pytest.raises(MetadataFetchError):
            VersionResolver._parse_choices(VersionKind.JAVA, payload)

    @pytest.mark.unit
    def test_empty_values(self):
        with pytest.raises(MetadataFetchError, match="no 'javaVersion' values"):
            VersionResolver._parse_choices(
                VersionKind.JAVA, {"javaVersion": {"values": [], "default": "21"}}
            )


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


class TestResolve:
    @pytest.mark.unit
    def test_init_defaults(self):
        resolver = VersionResolver()
        assert resolver.url == "https://start.spring.io/metadata/client"
        assert resolver.timeout == 10.0
        assert resolver.offline is False

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, mock_http, metadata_payload):
        patcher, client = mock_http(json_data=metadata_payload)
        with patcher:
            choices = await VersionResolver(url="http://meta.test/client").resolve(
                VersionKind.SPRING_BOOT
            )
        assert choices.default == "3.3.4"
        assert not choices.is_fallback
        client.get.assert_awaited_once_with("http://meta.test/client")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_offline_skips_network(self, mock_http):
        patcher, client = mock_http(json_data={})
        with patcher, patch("anvil.versions.print_warning") as warn:
            choices = await VersionResolver(offline=True).resolve(VersionKind.JAVA)
        assert choices.is_fallback
        assert choices.error == "offline mode"
        client.get.assert_not_called()
        warn.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_connect_error(self, mock_http):
        patcher, _ = mock_http(side_effect=httpx.ConnectError("Connection refused"))
        with patcher, patch("anvil.versions.print_warning") as warn:
            choices = await VersionResolver(url="http://meta.test").resolve(VersionKind.JAVA)
        assert choices.is_fallback
        assert choices.default == "25"
        assert "cannot connect" in choices.error
        warn.assert_called_once()
        assert "Java" in warn.call_args.args[0]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout(self, mock_http):
        patcher, _ = mock_http(side_effect=httpx.ReadTimeout("timed out"))
        with patcher, patch("anvil.versions.print_warning"):
            choices = await VersionResolver(timeout=2.0).resolve(VersionKind.SPRING_BOOT)
        assert choices.is_fallback
        assert choices.default == "3.2.0"
        assert "timed out after 2.0s" in choices.error

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_http_status_error(self, mock_http):
        request = httpx.Request("GET", "http://meta.test")
        response = httpx.Response(503, request=request)
        error = httpx.HTTPStatusError("unavailable", request=request, response=response)
        patcher, _ = mock_http(side_effect=error)
        with patcher, patch("anvil.versions.print_warning"):
            choices = await VersionResolver().resolve(VersionKind.SPRING_BOOT)
        assert choices.is_fallback
        assert choices.error == "HTTP 503"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_json_body(self, mock_http):
        patcher, _ = mock_http(json_error=ValueError("Expecting value"))
        with patcher, patch("anvil.versions.print_warning"):
            choices = await VersionResolver().resolve(VersionKind.JAVA)
        assert choices.is_fallback
        assert choices.error.startswith("invalid metadata payload")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_malformed_payload(self, mock_http):
        patcher, _ = mock_http(json_data={"bootVersion": {"values": []}})
        with patcher, patch("anvil.versions.print_warning"):
            choices = await VersionResolver().resolve(VersionKind.SPRING_BOOT)
        assert choices.is_fallback
        assert "bootVersion" in choices.error

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_other_transport_error(self, mock_http):
        patcher, _ = mock_http(side_effect=httpx.RemoteProtocolError("bad frame"))
        with patcher, patch("anvil.versions.print_warning"):
            choices = await VersionResolver().resolve(VersionKind.JAVA)
        assert choices.is_fallback
        assert choices.error.startswith("RemoteProtocolError")


class TestResolveAll:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_boot_then_java(self, mock_http, metadata_payload):
        patcher, client = mock_http(json_data=metadata_payload)
        with patcher:
            boot, java = await VersionResolver().resolve_all()
        assert boot.kind is VersionKind.SPRING_BOOT
        assert java.kind is VersionKind.JAVA
        assert client.get.await_count == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_offline(self):
        boot, java = await VersionResolver(offline=True).resolve_all()
        assert boot.default == "3.2.0"
        assert java.default == "25"
