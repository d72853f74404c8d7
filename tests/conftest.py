"""Shared fixtures: a fake Mi TV served over HTTP and a recording client."""

import hashlib
import json
import time
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from mitv import Keys, MiTV, RequestFailed

ETHMAC = "a4:39:b3:0e:4f:11"
DEVICE_NAME = "Xiaomi Mi TV 4S"


def _ok(data: Any) -> dict[str, Any]:
    return {"request_result": 200, "msg": "success", "data": data}


class FakeTV:
    """Minimal emulation of the Mi TV remote-control API."""

    def __init__(self, ethmac: str = ETHMAC, volume: int = 42) -> None:
        self.ethmac = ethmac
        self.volume = volume
        self.port: int | None = None
        self.requests: list[tuple[float, str, dict[str, str]]] = []
        self.overrides: dict[str, Any] = {}

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/{path}", self.handle)
        return app

    def actions(self, action: str) -> list[dict[str, str]]:
        return [params for _, _, params in self.requests if params.get("action") == action]

    async def handle(self, request: web.Request) -> web.Response:
        path = request.match_info["path"]
        params = dict(request.query)
        self.requests.append((time.monotonic(), path, params))
        action = params.get("action", "")

        if action in self.overrides:
            override = self.overrides[action]
            if isinstance(override, str):
                return web.Response(text=override)
            return web.json_response(override)

        match (path, action):
            case ("request", "isalive"):
                return web.json_response(_ok({"devicename": DEVICE_NAME}))
            case ("controller", "getsysteminfo"):
                return web.json_response(
                    _ok({"devicename": DEVICE_NAME, "ethmac": self.ethmac})
                )
            case ("general", "getVolum"):
                document = {"stream": "0", "maxVolum": 100, "volum": self.volume}
                return web.json_response(_ok(json.dumps(document)))
            case ("general", "setVolum"):
                expected = hashlib.md5(
                    f"mitvsignsalt{params['volum']}{self.ethmac}{params['ts'][-5:]}".encode()
                ).hexdigest()
                if params.get("sign") != expected:
                    return web.json_response({"request_result": 400, "msg": "sign error"})
                self.volume = int(params["volum"])
                return web.json_response(_ok(None))
            case ("controller", "changesource"):
                return web.json_response(_ok({"devicename": DEVICE_NAME}))
            case ("controller", "keyevent"):
                return web.json_response(_ok(None))
        return web.json_response({"request_result": 404, "msg": "unknown action"})


@pytest.fixture
async def fake_tv():
    tv = FakeTV()
    server = TestServer(tv.app())
    await server.start_server()
    tv.port = server.port
    yield tv
    await server.close()


@pytest.fixture
def client(fake_tv: FakeTV) -> MiTV:
    return MiTV("127.0.0.1", fake_tv.port)


class RecordingClient:
    """Stand-in for MiTV that records calls instead of sending requests."""

    def __init__(self, volume: int = 42, alive: bool = True) -> None:
        self.volume = volume
        self.alive = alive
        self.fail = False
        self.calls: list[tuple[str, Any]] = []

    def _check(self) -> None:
        if self.fail:
            raise RequestFailed("request fail")

    async def status(self) -> dict[str, Any]:
        self.calls.append(("status", None))
        if not self.alive:
            raise RequestFailed("connection refused")
        return {"devicename": DEVICE_NAME}

    async def get_volume(self) -> dict[str, Any]:
        self.calls.append(("get_volume", None))
        self._check()
        return {"stream": "0", "maxVolum": 100, "volum": self.volume}

    async def set_volume(self, volume: int) -> None:
        self.calls.append(("set_volume", volume))
        self._check()
        self.volume = volume

    async def change_source(self, source: str) -> dict[str, Any]:
        self.calls.append(("change_source", source))
        self._check()
        return {"devicename": DEVICE_NAME}

    async def press_key(self, key: Keys) -> None:
        self.calls.append(("press_key", key))
        self._check()

    async def power_off(self) -> None:
        self.calls.append(("power_off", None))
        self._check()


@pytest.fixture
def recording_client() -> RecordingClient:
    return RecordingClient()
