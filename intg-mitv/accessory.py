"""
Accessory adapter between Remote Two commands and the Mi TV client.

:license: Mozilla Public License Version 2.0, see LICENSE for more details.
"""

import logging

from const import DEFAULT_NAME, DEFAULT_VOLUME, SimpleCommands, SourceIdentifier
from mitv import Keys, MiTV, RequestFailed
from ucapi import media_player

_LOG = logging.getLogger(__name__)

REMOTE_KEY_MAPPING: dict[str, Keys] = {
    media_player.Commands.CURSOR_UP.value: Keys.UP,
    media_player.Commands.CURSOR_DOWN.value: Keys.DOWN,
    media_player.Commands.CURSOR_LEFT.value: Keys.LEFT,
    media_player.Commands.CURSOR_RIGHT.value: Keys.RIGHT,
    media_player.Commands.CURSOR_ENTER.value: Keys.ENTER,
    media_player.Commands.PLAY_PAUSE.value: Keys.ENTER,
    media_player.Commands.BACK.value: Keys.BACK,
    media_player.Commands.HOME.value: Keys.HOME,
    SimpleCommands.EXIT.value: Keys.HOME,
    media_player.Commands.MENU.value: Keys.MENU,
    media_player.Commands.INFO.value: Keys.MENU,
    media_player.Commands.VOLUME_UP.value: Keys.VOLUME_UP,
    media_player.Commands.VOLUME_DOWN.value: Keys.VOLUME_DOWN,
}


class AccessoryError(Exception):
    """Error raised by the accessory before talking to the TV."""


class InvalidKey(AccessoryError):
    """The remote key has no Mi TV counterpart."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Invalid key: {key}")
        self.key = key


class PowerOnNotSupported(AccessoryError):
    """The Mi TV cannot be turned on over the network."""

    def __init__(self) -> None:
        super().__init__("Activate mi TV is not supported")


def to_mitv_key(command: str) -> Keys:
    """Map a remote command id to a Mi TV key, raising InvalidKey if unmapped."""
    key = getattr(command, "value", command)
    try:
        return REMOTE_KEY_MAPPING[key]
    except (KeyError, TypeError):
        raise InvalidKey(key) from None


class MiTvAccessory:
    """Television accessory backed by a Mi TV client."""

    def __init__(self, client: MiTV, name: str | None = None) -> None:
        """Create instance."""
        self._client = client
        self._name = name or DEFAULT_NAME
        self._volume_before_mute: int | None = None

    @property
    def name(self) -> str:
        """Return the accessory name."""
        return self._name

    @property
    def client(self) -> MiTV:
        """Return the Mi TV client."""
        return self._client

    @property
    def volume_before_mute(self) -> int | None:
        """Return the volume recorded when muting, if any."""
        return self._volume_before_mute

    async def get_active(self) -> bool:
        """Return True if the TV answers the liveness probe."""
        try:
            await self._client.status()
        except RequestFailed as err:
            _LOG.debug("[%s] TV not reachable, assuming off: %s", self._name, err)
            return False
        return True

    async def set_active(self, active: bool) -> None:
        """Turn the TV off. Turning it on is not supported."""
        if active:
            raise PowerOnNotSupported()
        await self._client.power_off()

    async def press_remote_key(self, command: str) -> None:
        """Press the Mi TV key matching a remote command."""
        key = to_mitv_key(command)
        _LOG.debug("[%s] Pressing Key: %s", self._name, key)
        await self._client.press_key(key)
        _LOG.debug("[%s] Successfully pressed key: %s", self._name, key)

    async def set_source(self, identifier: int) -> None:
        """Switch to the home screen or an HDMI input."""
        match identifier:
            case SourceIdentifier.HOME_SCREEN:
                await self._client.press_key(Keys.HOME)
            case SourceIdentifier.HDMI1:
                await self._client.change_source("hdmi1")
            case SourceIdentifier.HDMI2:
                await self._client.change_source("hdmi2")
            case _:
                _LOG.debug("[%s] Ignoring unknown source %s", self._name, identifier)

    async def get_muted(self) -> bool:
        """Return True if the volume is zero."""
        volume = await self._client.get_volume()
        return volume["volum"] == 0

    async def set_muted(self, muted: bool) -> None:
        """
        Mute or unmute the TV.

        The TV has no mute action. Muting records the current volume and
        sets it to zero, unmuting restores the recorded volume or
        DEFAULT_VOLUME.
        """
        if muted:
            if self._volume_before_mute is None:
                volume = (await self._client.get_volume())["volum"]
                if volume > 0:
                    self._volume_before_mute = volume
            await self._client.set_volume(0)
        else:
            volume = self._volume_before_mute
            if volume is None:
                volume = DEFAULT_VOLUME
            await self._client.set_volume(volume)
            self._volume_before_mute = None

    async def get_volume(self) -> int:
        """Return the current volume."""
        return (await self._client.get_volume())["volum"]

    async def set_volume(self, volume: int) -> None:
        """Set the volume."""
        await self._client.set_volume(volume)
