"""BDD step definitions for scrape features."""

import asyncio
import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
from pytest_bdd import given, parsers, then, when
from tests.helpers import UPSTREAM_ADDRESS, sample_payload

from dynomite_exporter.adapters.frameworks.asgi import create_asgi_app
from dynomite_exporter.adapters.upstream.http import HTTPStatusSource
from dynomite_exporter.core.collector import DynomiteCollector
from dynomite_exporter.core.registry import CollectorRegistry


@dataclass
class ScrapeScenarioContext:
    """Shared state between steps in a scrape scenario."""

    registry: CollectorRegistry = field(default_factory=CollectorRegistry)
    respond: Callable[[httpx.Request], httpx.Response] | None = None
    upstream_requests: int = 0
    responses: list[httpx.Response] = field(default_factory=list)


def run_async(coro: Any) -> Any:
    """Run a coroutine synchronously."""
    return asyncio.run(coro)


def sample_lines(response: httpx.Response) -> list[str]:
    return [line for line in response.text.splitlines() if not line.startswith("#")]


@pytest.fixture
def ctx() -> ScrapeScenarioContext:
    """Fresh scenario context for each test."""
    return ScrapeScenarioContext()


# === Background Steps ===
@given("a collector registry with a dynomite collector")
def step_registry(ctx: ScrapeScenarioContext) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        ctx.upstream_requests += 1
        assert ctx.respond is not None
        return ctx.respond(request)

    source = HTTPStatusSource(
        UPSTREAM_ADDRESS, 1.0, transport=httpx.MockTransport(handler)
    )
    ctx.registry.register(DynomiteCollector(source))


# === Upstream Steps ===
@given("the dynomite node answers with its stats")
def step_node_answers(ctx: ScrapeScenarioContext) -> None:
    body = json.dumps(sample_payload()).encode()
    ctx.respond = lambda request: httpx.Response(200, content=body)


@given(parsers.parse('the dynomite node answers with "{body}"'))
def step_node_answers_body(ctx: ScrapeScenarioContext, body: str) -> None:
    ctx.respond = lambda request: httpx.Response(200, content=body.encode())


@given("the dynomite node refuses connections")
def step_node_refuses(ctx: ScrapeScenarioContext) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    ctx.respond = refuse


# === Scrape Steps ===
async def _scrape(ctx: ScrapeScenarioContext, times: int) -> None:
    app = create_asgi_app(ctx.registry)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        for _ in range(times):
            ctx.responses.append(await client.get("/metrics"))


@when("the metrics endpoint is scraped")
def step_scrape(ctx: ScrapeScenarioContext) -> None:
    run_async(_scrape(ctx, 1))


@when(parsers.parse("the metrics endpoint is scraped {n:d} times"))
def step_scrape_times(ctx: ScrapeScenarioContext, n: int) -> None:
    run_async(_scrape(ctx, n))


# === Assertion Steps ===
@then(parsers.parse("the response status is {status:d}"))
def step_status(ctx: ScrapeScenarioContext, status: int) -> None:
    assert ctx.responses[-1].status_code == status


@then(parsers.parse("the sample '{name}' has value {value:d}"))
def step_sample_value(ctx: ScrapeScenarioContext, name: str, value: int) -> None:
    assert f"{name} {value}" in sample_lines(ctx.responses[-1])


@then(parsers.parse("the response contains {n:d} samples"))
def step_sample_count(ctx: ScrapeScenarioContext, n: int) -> None:
    assert len(sample_lines(ctx.responses[-1])) == n


@then(parsers.parse("the dynomite node received {n:d} requests"))
def step_request_count(ctx: ScrapeScenarioContext, n: int) -> None:
    assert ctx.upstream_requests == n
    assert all(r.status_code == 200 for r in ctx.responses)
