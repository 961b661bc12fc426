"""Tests for per-request version and scope headers."""

import asyncio

import httpx
import pytest
import respx

from contentful_kit import AsyncClient, ConflictError, ContentfulConfig, TransportError
from contentful_kit.versioning import (
    CONTENT_TYPE_HEADER,
    ORGANIZATION_HEADER,
    VERSION_HEADER,
    scope_headers,
    with_version,
)

ENTRY_URL = "https://api.contentful.com/spaces/space1/entries/entry1"
PUBLISH_URL = f"{ENTRY_URL}/published"


class TestWithVersion:
    """Tests for with_version."""

    def test_adds_header(self) -> None:
        assert with_version(7) == {VERSION_HEADER: "7"}

    def test_none_adds_nothing(self) -> None:
        assert with_version(None) == {}

    def test_does_not_mutate_input(self) -> None:
        base = {"Accept": "application/json"}

        result = with_version(2, base)

        assert base == {"Accept": "application/json"}
        assert result == {"Accept": "application/json", VERSION_HEADER: "2"}

    def test_scope_headers(self) -> None:
        headers = scope_headers(version=1, organization_id="org1", content_type_id="post")

        assert headers == {
            ORGANIZATION_HEADER: "org1",
            CONTENT_TYPE_HEADER: "post",
            VERSION_HEADER: "1",
        }


class TestClientVersionScoping:
    """The version header only ever travels with the request it was given for."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_header_sent_then_gone(
        self, contentful_config: ContentfulConfig, entry_factory
    ) -> None:
        publish = respx.put(PUBLISH_URL).mock(
            return_value=httpx.Response(200, json=entry_factory(version=4))
        )
        fetch = respx.get(ENTRY_URL).mock(
            return_value=httpx.Response(200, json=entry_factory(version=4))
        )

        async with AsyncClient(contentful_config) as client:
            await client.publish_entry("entry1", 3)
            await client.get_entry("entry1")

            assert VERSION_HEADER not in client._client.headers

        assert publish.calls.last.request.headers[VERSION_HEADER] == "3"
        assert VERSION_HEADER not in fetch.calls.last.request.headers

    @pytest.mark.asyncio
    @respx.mock
    async def test_conflict_propagates_and_header_is_gone(
        self, contentful_config: ContentfulConfig, entry_factory
    ) -> None:
        respx.put(PUBLISH_URL).mock(
            return_value=httpx.Response(
                409,
                json={
                    "sys": {"type": "Error", "id": "VersionMismatch"},
                    "message": "Version mismatch",
                    "requestId": "req-1",
                },
            )
        )
        fetch = respx.get(ENTRY_URL).mock(
            return_value=httpx.Response(200, json=entry_factory(version=4))
        )

        async with AsyncClient(contentful_config) as client:
            with pytest.raises(ConflictError) as exc_info:
                await client.publish_entry("entry1", 2)
            await client.get_entry("entry1")

            assert VERSION_HEADER not in client._client.headers

        error = exc_info.value
        assert error.status_code == 409
        assert error.request_id == "req-1"
        assert error.method == "PUT"
        assert error.url == PUBLISH_URL
        assert error.details["sys"]["id"] == "VersionMismatch"
        assert VERSION_HEADER not in fetch.calls.last.request.headers

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_failure_leaves_no_header(
        self, contentful_config: ContentfulConfig, entry_factory
    ) -> None:
        respx.put(PUBLISH_URL).mock(side_effect=httpx.ConnectError("connection refused"))
        fetch = respx.get(ENTRY_URL).mock(
            return_value=httpx.Response(200, json=entry_factory(version=4))
        )

        async with AsyncClient(contentful_config) as client:
            with pytest.raises(TransportError):
                await client.publish_entry("entry1", 2)
            await client.get_entry("entry1")

            assert VERSION_HEADER not in client._client.headers

        assert VERSION_HEADER not in fetch.calls.last.request.headers

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_version_supplied(
        self, contentful_config: ContentfulConfig, entry_factory
    ) -> None:
        route = respx.put(ENTRY_URL).mock(
            return_value=httpx.Response(201, json=entry_factory(version=1))
        )

        async with AsyncClient(contentful_config) as client:
            entry = await client.create_entry_for_locale(
                {"title": "Hello"}, "entry1", "blogPost", locale="en-US"
            )

            assert VERSION_HEADER not in client._client.headers

        assert entry.version == 1
        assert VERSION_HEADER not in route.calls.last.request.headers
        assert route.calls.last.request.headers[CONTENT_TYPE_HEADER] == "blogPost"

    @pytest.mark.asyncio
    @respx.mock
    async def test_concurrent_calls_do_not_share_headers(
        self, contentful_config: ContentfulConfig, entry_factory
    ) -> None:
        seen: dict[str, str | None] = {}

        def respond(request: httpx.Request) -> httpx.Response:
            entry_id = request.url.path.removesuffix("/published").rsplit("/", 1)[-1]
            seen[entry_id] = request.headers.get(VERSION_HEADER)
            return httpx.Response(200, json=entry_factory(entry_id, version=10))

        respx.put(url__regex=r".*/entries/\w+/published$").mock(side_effect=respond)
        respx.get(url__regex=r".*/entries/\w+$").mock(side_effect=respond)

        async with AsyncClient(contentful_config) as client:
            await asyncio.gather(
                client.publish_entry("alpha", 1),
                client.publish_entry("beta", 2),
                client.get_entry("gamma"),
            )

        assert seen == {"alpha": "1", "beta": "2", "gamma": None}
