"""Call executor: authenticate, send, classify and log outbound HTTP calls."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, TypeVar

import httpx

from outcall.auth import AuthStrategy, no_auth
from outcall.config import ClientSettings
from outcall.errors import RequestCancelledError
from outcall.logger import CallLogger
from outcall.outcome import Error, Faulted, Outcome, Success

T = TypeVar("T")

RequestContent = bytes | str


class CallExecutor:
    """Issues one outbound call per method and returns its classified outcome.

    No method raises: protocol failures come back as :class:`Error`, runtime
    faults (including a failing auth strategy) as :class:`Faulted`. Auth
    headers are resolved per request and never stored on the shared client.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        auth: AuthStrategy | None = None,
        logger: CallLogger | None = None,
        component: str | None = None,
        owns_client: bool = False,
    ):
        self._client = client
        self._auth = auth or no_auth
        self._logger = logger or CallLogger()
        self._component = component or type(self).__name__
        self._owns_client = owns_client

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        auth: AuthStrategy | None = None,
        logger: CallLogger | None = None,
    ) -> CallExecutor:
        """Build an executor that owns its own client."""
        client = httpx.AsyncClient(base_url=settings.base_url, timeout=settings.timeout)
        return cls(
            client,
            auth=auth,
            logger=logger,
            component=settings.component,
            owns_client=True,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> CallExecutor:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # -- verbs -------------------------------------------------------------

    async def get(self, url: str, *, cancel: asyncio.Event | None = None) -> Outcome[httpx.Response]:
        return await self._execute("get", "GET", url, cancel)

    async def post(
        self,
        url: str,
        content: RequestContent,
        *,
        cancel: asyncio.Event | None = None,
    ) -> Outcome[httpx.Response]:
        return await self._execute("post", "POST", url, cancel, content=content)

    async def put(
        self,
        url: str,
        content: RequestContent,
        *,
        cancel: asyncio.Event | None = None,
    ) -> Outcome[httpx.Response]:
        return await self._execute("put", "PUT", url, cancel, content=content)

    async def delete(self, url: str, *, cancel: asyncio.Event | None = None) -> Outcome[httpx.Response]:
        return await self._execute("delete", "DELETE", url, cancel)

    async def post_json(
        self,
        url: str,
        body: Any,
        *,
        cancel: asyncio.Event | None = None,
    ) -> Outcome[httpx.Response]:
        return await self._execute("post_json", "POST", url, cancel, json=body)

    async def put_json(
        self,
        url: str,
        body: Any,
        *,
        cancel: asyncio.Event | None = None,
    ) -> Outcome[httpx.Response]:
        return await self._execute("put_json", "PUT", url, cancel, json=body)

    # -- core --------------------------------------------------------------

    async def _execute(
        self,
        operation: str,
        verb: str,
        url: str,
        cancel: asyncio.Event | None,
        **request_kwargs: Any,
    ) -> Outcome[httpx.Response]:
        self._logger.information_http_request(self._component, operation, verb, url)
        try:
            headers = dict(await self._auth())
            response = await _until_cancelled(
                self._client.request(verb, url, headers=headers, **request_kwargs),
                cancel,
                url,
            )

            if response.is_success:
                self._logger.info(
                    "http_request_succeeded",
                    url=url,
                    status_code=response.status_code,
                )
                return Success(response)

            await response.aread()
            self._logger.warning(
                "http_request_failed",
                url=url,
                status_code=response.status_code,
            )
            return Error(
                [
                    f"StatusCode: {response.status_code}",
                    f"Content: {response.text}",
                    f"ReasonPhrase: {response.reason_phrase}",
                ],
                response.status_code,
            )
        except Exception as exc:
            self._logger.fatal_http_exception(self._component, operation, verb, url, exc)
            return Faulted(exc)


async def _until_cancelled(call: Awaitable[T], cancel: asyncio.Event | None, url: str) -> T:
    """Await *call* unless *cancel* fires first, then raise RequestCancelledError."""
    if cancel is None:
        return await call
    if cancel.is_set():
        if asyncio.iscoroutine(call):
            call.close()
        raise RequestCancelledError(url)

    call_task = asyncio.ensure_future(call)
    cancel_task = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({call_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        call_task.cancel()
        raise
    finally:
        cancel_task.cancel()

    if call_task.done():
        return call_task.result()

    call_task.cancel()
    await asyncio.wait({call_task})
    raise RequestCancelledError(url)
