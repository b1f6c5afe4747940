"""Shared fixtures: a fake Transmission daemon served over real HTTP.

The daemon answers 409 with its current session id to any request that does
not carry it, like the real one does, and replies to methods from a table
that tests fill in.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from transmission_client import TransmissionClient
from transmission_client.api.protocol import SESSION_ID_HEADER

RPC_PATH = "/transmission/rpc"

Reply = Union[dict, Callable[[dict], Any]]


@dataclass
class RecordedRequest:
    token: Optional[str]
    payload: dict


class FakeDaemon:
    def __init__(self, token: str = "session-token-1"):
        self.token = token
        self.url = ""
        self.requests: list[RecordedRequest] = []
        self.replies: dict[str, Reply] = {}
        # Extra 409s returned even for requests carrying the right token
        self.forced_rejections = 0
        # Hold stale requests until this many have arrived
        self.stale_barrier = 0
        self._stale_arrivals = 0
        self._barrier_reached = asyncio.Event()
        self.omit_session_header = False

    @property
    def rejections(self) -> list[RecordedRequest]:
        return [r for r in self.requests if r.token != self.token]

    def reply(self, method: str, reply: Reply) -> None:
        self.replies[method] = reply

    async def _wait_for_barrier(self) -> None:
        self._stale_arrivals += 1
        if self._stale_arrivals >= self.stale_barrier:
            self._barrier_reached.set()
        await asyncio.wait_for(self._barrier_reached.wait(), timeout=5)

    def _conflict(self) -> web.Response:
        headers = {} if self.omit_session_header else {SESSION_ID_HEADER: self.token}
        return web.Response(
            status=409, text="<h1>409: Conflict</h1>", headers=headers
        )

    async def handle(self, request: web.Request) -> web.StreamResponse:
        payload = await request.json()
        token = request.headers.get(SESSION_ID_HEADER)
        self.requests.append(RecordedRequest(token, payload))

        if token != self.token:
            if self.stale_barrier:
                await self._wait_for_barrier()
            return self._conflict()

        if self.forced_rejections > 0:
            self.forced_rejections -= 1
            return self._conflict()

        reply = self.replies.get(payload["method"], {"result": "success"})
        if callable(reply):
            reply = reply(payload)
        if asyncio.iscoroutine(reply):
            reply = await reply
        if isinstance(reply, web.StreamResponse):
            return reply
        return web.json_response(reply)


@pytest.fixture
async def daemon():
    fake = FakeDaemon()
    app = web.Application()
    app.router.add_post(RPC_PATH, fake.handle)
    server = TestServer(app)
    await server.start_server()
    fake.url = str(server.make_url(RPC_PATH))
    yield fake
    await server.close()


@pytest.fixture
async def client(daemon):
    transmission = TransmissionClient(daemon.url)
    yield transmission
    await transmission.close()
