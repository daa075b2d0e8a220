#!/usr/bin/env python3
"""Smoke test: drive the frontend client against a live httpbin-compatible server."""

from __future__ import annotations

import asyncio
import os
import sys
from typing import Any, Awaitable, Callable

from frontend_client import (
    ClientOptions,
    ClientRequest,
    CollectingDiagnostics,
    FrontendClientError,
    HttpMethod,
    InterceptorRejection,
    QueryDefinition,
    RequestInterceptorResult,
    init_frontend_client,
)

BASE_URL = os.getenv("FRONTEND_CLIENT_BASE_URL", "https://httpbin.org")

passed: list[str] = []
failed: list[tuple[str, str]] = []


def ok(name: str, result: object = None) -> None:
    tag = type(result).__name__ if result is not None else "None"
    print(f"  PASS  {name}  -> {tag}")
    passed.append(name)


def fail(name: str, reason: str) -> None:
    print(f"  FAIL  {name}  -> {reason[:200]}")
    failed.append((name, reason[:200]))


async def run(name: str, fn: Callable[[], Awaitable[Any]], check: Callable[[Any], bool] = lambda r: True) -> Any:
    """Await fn(), record pass/fail depending on ``check``."""
    try:
        result = await fn()
    except FrontendClientError as e:
        fail(name, f"{type(e).__name__}: {e}")
        return None
    if check(result):
        ok(name, result)
    else:
        fail(name, f"unexpected result {result!r}")
    return result


async def main() -> int:
    diagnostics = CollectingDiagnostics()
    options = ClientOptions().headers({"X-Smoke": "1"}).credentials("bogus")

    async with init_frontend_client(BASE_URL, options, diagnostics=diagnostics, allow_http=True) as client:
        print("\n=== Query serialization ===")
        await run(
            "exploded_index_query",
            lambda: client.request(
                ClientRequest(
                    url="/get",
                    query={
                        "ids": QueryDefinition(exploded=True, explode_format="index", value=[1, 2]),
                        "tag": ["a", "b"],
                    },
                )
            ),
            check=lambda r: r.http_status == 200 and r.payload["args"].get("tag") == ["a", "b"],
        )

        print("\n=== JSON body ===")
        await run(
            "post_json",
            lambda: client.request(ClientRequest(url="/post", method=HttpMethod.POST, data={"name": "smoke"})),
            check=lambda r: r.payload["json"] == {"name": "smoke"},
        )

        print("\n=== Opaque body ===")
        await run(
            "plain_text_blob",
            lambda: client.request(ClientRequest(url="/robots.txt", headers={"Accept": "text/plain"})),
            check=lambda r: isinstance(r.payload, bytes),
        )

        print("\n=== Status passthrough ===")
        await run(
            "status_404",
            lambda: client.request(ClientRequest(url="/status/{code}", path_params={"code": 404})),
            check=lambda r: r.http_status == 404,
        )

    if diagnostics.codes and set(diagnostics.codes) == {"invalid_credentials"}:
        ok("credentials_diagnostics", diagnostics.codes)
    else:
        fail("credentials_diagnostics", repr(diagnostics.codes))

    print("\n=== Interceptor veto ===")
    veto = ClientOptions().request_interceptor(lambda intercepted: RequestInterceptorResult(proceed=False))
    async with init_frontend_client(BASE_URL, veto, allow_http=True) as client:
        try:
            await client.request(ClientRequest(url="/get"))
        except InterceptorRejection as e:
            ok("interceptor_veto", e)
        else:
            fail("interceptor_veto", "request was dispatched")

    print("\n" + "=" * 60)
    print(f"PASSED: {len(passed)}   FAILED: {len(failed)}")
    if failed:
        print("\nFailed checks:")
        for name, err in failed:
            print(f"  - {name}: {err}")
    print("=" * 60)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
