"""
HTTP client for the Xiaomi Mi TV remote-control API.

The TV listens on port 6095 and answers plain GET requests with a JSON
envelope. Volume changes must be signed with the TV's ethernet MAC and a
slice of the request timestamp.

:license: Mozilla Public License Version 2.0, see LICENSE for more details.
"""

import asyncio
import hashlib
import json
import logging
import time
from enum import StrEnum
from typing import Any, TypedDict

import aiohttp

_LOG = logging.getLogger(__name__)

DEFAULT_PORT = 6095
DEFAULT_TIMEOUT = 5.0
SIGN_SALT = "mitvsignsalt"
POWER_OFF_DELAY = 0.3
SOURCES = ("hdmi1", "hdmi2")


class Keys(StrEnum):
    """Key codes understood by the keyevent action."""

    POWER = "power"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    ENTER = "enter"
    BACK = "back"
    MENU = "menu"
    VOLUME_UP = "volumeup"
    VOLUME_DOWN = "volumedown"


class VolumeInfo(TypedDict):
    """Volume document returned by getVolum."""

    stream: str
    maxVolum: int
    volum: int


class RequestFailed(Exception):
    """A request to the TV failed."""


class TransportError(RequestFailed):
    """The TV could not be reached or did not answer with JSON."""


class DeviceRejected(RequestFailed):
    """The TV answered with an unsuccessful envelope."""

    def __init__(self, envelope: Any) -> None:
        super().__init__(f"request fail: message: {json.dumps(envelope)}")
        self.envelope = envelope


def compute_signature(volume: int, ethmac: str, timestamp: str) -> str:
    """Return the setVolum signature for a volume level and timestamp."""
    payload = f"{SIGN_SALT}{volume}{ethmac}{timestamp[-5:]}"
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


def is_success(envelope: dict[str, Any]) -> bool:
    """Return True if any of the known status fields signals success."""
    return (
        envelope.get("msg") == "success"
        or envelope.get("request_result") == 200
        or envelope.get("response_result") == 200
    )


def _timestamp() -> str:
    return str(int(time.time() * 1000))


class MiTV:
    """Client for a single Mi TV."""

    def __init__(
        self, host: str, port: int = DEFAULT_PORT, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        """Create instance."""
        self._host = host
        self._port = port
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._base_url = f"http://{host}:{port}"

    @property
    def host(self) -> str:
        """Return the TV address."""
        return self._host

    @property
    def port(self) -> int:
        """Return the TV port."""
        return self._port

    async def status(self) -> dict[str, Any]:
        """Check whether the TV is alive. Returns the device name payload."""
        return await self._request("request", action="isalive")

    async def system_info(self) -> dict[str, Any]:
        """Return system information, including the ethernet MAC (ethmac)."""
        return await self._request("controller", action="getsysteminfo")

    async def get_volume(self) -> VolumeInfo:
        """
        Return the current volume.

        The data field of this action is itself a JSON encoded string.
        """
        raw = await self._request("general", action="getVolum")
        if not isinstance(raw, str):
            raise TransportError(f"Unexpected volume payload: {raw!r}")
        try:
            volume = json.loads(raw)
        except json.JSONDecodeError as err:
            raise TransportError(f"Invalid volume payload: {raw!r}") from err
        if (
            not isinstance(volume, dict)
            or not isinstance(volume.get("volum"), int)
            or isinstance(volume.get("volum"), bool)
        ):
            raise TransportError(f"Invalid volume payload: {raw!r}")
        return volume

    async def set_volume(self, volume: int) -> Any:
        """Set an absolute volume level with a signed request."""
        if isinstance(volume, bool) or not isinstance(volume, int) or not 0 <= volume <= 100:
            raise ValueError(f"Volume must be an integer between 0 and 100, got {volume}")
        info = await self.system_info()
        ethmac = info.get("ethmac") if isinstance(info, dict) else None
        if not ethmac:
            raise DeviceRejected(info)
        timestamp = _timestamp()
        return await self._request(
            "general",
            action="setVolum",
            volum=str(volume),
            ts=timestamp,
            sign=compute_signature(volume, ethmac, timestamp),
        )

    async def change_source(self, source: str) -> dict[str, Any]:
        """Switch to an HDMI input ('hdmi1' or 'hdmi2')."""
        if source not in SOURCES:
            raise ValueError(f"Invalid source: {source}. Valid sources: {', '.join(SOURCES)}")
        return await self._request("controller", action="changesource", source=source)

    async def press_key(self, key: Keys | str) -> Any:
        """Send a single key event."""
        try:
            key = Keys(key)
        except ValueError as err:
            raise ValueError(f"Invalid key: {key}") from err
        return await self._request("controller", action="keyevent", keycode=key.value)

    async def power_off(self) -> None:
        """
        Turn the TV off.

        A single power key press does not reliably reach the off state, so
        the key is pressed twice with a short pause in between.
        """
        await self.press_key(Keys.POWER)
        await asyncio.sleep(POWER_OFF_DELAY)
        await self.press_key(Keys.POWER)

    async def _request(self, path: str, **params: str) -> Any:
        """Send a GET request and return the data field of a successful envelope."""
        url = f"{self._base_url}/{path}"
        _LOG.debug("[%s] GET /%s %s", self._host, path, params.get("action"))
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.get(url, params=params) as response:
                    response.raise_for_status()
                    envelope = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise TransportError(f"Request to {url} failed: {err}") from err
        except ValueError as err:
            raise TransportError(f"Invalid response from {url}: {err}") from err

        if not isinstance(envelope, dict) or not is_success(envelope):
            raise DeviceRejected(envelope)
        return envelope.get("data")
