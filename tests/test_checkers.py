"""Tests for wren.checks — in-memory and HTTP duplicate checkers."""

import asyncio

import httpx
import pytest

from wren import AsyncCheck, AsyncCheckState, FieldSpec, FormConfiguration, FormOptions, create_form
from wren.checks import DuplicateChecker, HttpDuplicateChecker, InMemoryDuplicateChecker
from wren.errors import RemoteCheckError
from wren.validation import email, required

URL = "https://api.test/emails/exists"


class TestInMemoryDuplicateChecker:
    @pytest.mark.asyncio
    async def test_reports_existing_values(self) -> None:
        checker = InMemoryDuplicateChecker({"test@example.com"})
        assert await checker.exists("test@example.com") is True
        assert await checker.exists("new@example.com") is False

    @pytest.mark.asyncio
    async def test_case_insensitive_by_default(self) -> None:
        checker = InMemoryDuplicateChecker({"Test@Example.com"})
        assert await checker.exists("TEST@example.COM") is True

    @pytest.mark.asyncio
    async def test_case_sensitive(self) -> None:
        checker = InMemoryDuplicateChecker({"Alice"}, case_sensitive=True)
        assert await checker.exists("alice") is False
        assert await checker.exists("Alice") is True

    @pytest.mark.asyncio
    async def test_add_and_calls(self) -> None:
        checker = InMemoryDuplicateChecker()
        await checker.exists("a@b.co")
        checker.add("a@b.co")
        assert await checker.exists("a@b.co") is True
        assert checker.calls == ["a@b.co", "a@b.co"]

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryDuplicateChecker(), DuplicateChecker)
        assert isinstance(HttpDuplicateChecker(URL), DuplicateChecker)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestHttpDuplicateChecker:
    @pytest.mark.asyncio
    async def test_sends_value_as_query_param(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"exists": True})

        async with _client(handler) as client:
            checker = HttpDuplicateChecker(URL, param="email", client=client)
            assert await checker.exists("x@y.com") is True

        assert seen[0].method == "GET"
        assert seen[0].url.params["email"] == "x@y.com"

    @pytest.mark.asyncio
    async def test_available(self) -> None:
        async with _client(lambda r: httpx.Response(200, json={"exists": False})) as client:
            assert await HttpDuplicateChecker(URL, client=client).exists("x@y.com") is False

    @pytest.mark.asyncio
    async def test_custom_result_key(self) -> None:
        async with _client(lambda r: httpx.Response(200, json={"taken": True})) as client:
            checker = HttpDuplicateChecker(URL, result_key="taken", client=client)
            assert await checker.exists("x@y.com") is True

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        async with _client(lambda r: httpx.Response(503, text="maintenance")) as client:
            checker = HttpDuplicateChecker(URL, client=client)
            with pytest.raises(RemoteCheckError) as excinfo:
                await checker.exists("x@y.com")

        assert excinfo.value.status == 503
        assert excinfo.value.detail == "maintenance"

    @pytest.mark.asyncio
    async def test_malformed_body_raises(self) -> None:
        async with _client(lambda r: httpx.Response(200, json={"exists": "yes"})) as client:
            checker = HttpDuplicateChecker(URL, client=client)
            with pytest.raises(RemoteCheckError, match="expected a boolean 'exists'"):
                await checker.exists("x@y.com")

    @pytest.mark.asyncio
    async def test_non_object_body_raises(self) -> None:
        async with _client(lambda r: httpx.Response(200, json=[True])) as client:
            checker = HttpDuplicateChecker(URL, client=client)
            with pytest.raises(RemoteCheckError):
                await checker.exists("x@y.com")


class TestHttpCheckerInForm:
    @pytest.mark.asyncio
    async def test_remote_rejection_reaches_the_form(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"exists": request.url.params["value"] == "x@y.com"})

        async with _client(handler) as client:
            config = FormConfiguration(
                email=FieldSpec(
                    validators=(required, email),
                    check=AsyncCheck(HttpDuplicateChecker(URL, client=client), "Taken"),
                ),
            )
            form = create_form(config, FormOptions(debounce_seconds=0))
            form.handle_change("email", "x@y.com")
            async with asyncio.timeout(2):
                while form.async_state("email") is not AsyncCheckState.REJECTED:
                    await asyncio.sleep(0.005)

        assert form.errors["email"] == "Taken"
