"""Authentication strategies injected into the call executor.

A strategy is any zero-argument coroutine function returning the headers
for a single request. The executor awaits it before every request and
passes the result to that request only.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Awaitable, Callable

AuthStrategy = Callable[[], Awaitable[Mapping[str, str]]]
TokenProvider = Callable[[], str | Awaitable[str]]


async def no_auth() -> Mapping[str, str]:
    return {}


class StaticHeaders:
    """Send the same headers on every request (API keys and the like)."""

    def __init__(self, headers: Mapping[str, str]):
        self._headers = dict(headers)

    async def __call__(self) -> Mapping[str, str]:
        return dict(self._headers)


class BearerToken:
    """Fetch a token per request and send it as a bearer authorization header.

    The provider owns any caching or refresh of the token.
    """

    def __init__(self, token_provider: TokenProvider):
        self._token_provider = token_provider

    async def __call__(self) -> Mapping[str, str]:
        token = self._token_provider()
        if inspect.isawaitable(token):
            token = await token
        return {"authorization": f"Bearer {token}"}
