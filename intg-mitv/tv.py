"""
This module implements the Mi TV communication of the Remote Two integration driver.

"""

import logging
from asyncio import AbstractEventLoop
from typing import Any

from accessory import MiTvAccessory
from const import (
    DEFAULT_VOLUME,
    MITV_STATE_MAPPING,
    SOURCE_NAMES,
    MiTvConfig,
    States,
)
from mitv import MiTV, RequestFailed
from ucapi import EntityTypes
from ucapi.media_player import Attributes as MediaAttr
from ucapi_framework import ExternalClientDevice, create_entity_id
from ucapi_framework.device import DeviceEvents

_LOG = logging.getLogger(__name__)


class MiTvDevice(ExternalClientDevice):
    """Representing a Mi TV Device."""

    def __init__(
        self,
        device_config: MiTvConfig,
        loop: AbstractEventLoop | None = None,
        config_manager=None,
    ) -> None:
        """Create instance."""
        super().__init__(
            device_config,
            loop,
            enable_watchdog=False,
            max_reconnect_attempts=None,
            config_manager=config_manager,
        )
        self._state: States = States.UNKNOWN
        self._volume: int | None = None
        self._muted: bool | None = None
        self._source: str = ""

    @property
    def identifier(self) -> str:
        """Return the device identifier."""
        if not self._device_config.identifier:
            raise ValueError("Instance not initialized, no identifier available")
        return self._device_config.identifier

    @property
    def log_id(self) -> str:
        """Return a log identifier."""
        return (
            self._device_config.name
            if self._device_config.name
            else self._device_config.identifier
        )

    @property
    def name(self) -> str:
        """Return the device name."""
        return self._device_config.name

    @property
    def address(self) -> str | None:
        """Return the optional device address."""
        return self._device_config.address

    @property
    def state(self) -> States:
        """Return the device state."""
        return self._state

    @property
    def volume(self) -> int | None:
        """Return the last known volume."""
        return self._volume

    @property
    def muted(self) -> bool | None:
        """Return the last known mute state."""
        return self._muted

    @property
    def source_list(self) -> list[str]:
        """Return a list of available input sources."""
        return list(SOURCE_NAMES)

    @property
    def source(self) -> str:
        """Return the last selected input source."""
        return self._source

    @property
    def attributes(self) -> dict[str, Any]:
        """Return the device attributes."""
        updated_data = {
            MediaAttr.STATE: MITV_STATE_MAPPING[self._state],
            MediaAttr.SOURCE_LIST: self.source_list,
        }
        if self._volume is not None:
            updated_data[MediaAttr.VOLUME] = self._volume
        if self._muted is not None:
            updated_data[MediaAttr.MUTED] = self._muted
        if self._source:
            updated_data[MediaAttr.SOURCE] = self._source
        return updated_data

    def check_client_connected(self) -> bool:
        """
        Check if the accessory has been created.

        The Mi TV API is stateless HTTP, so this does not say anything about
        the power state. Use refresh() for that.
        """
        return self._client is not None

    async def create_client(self) -> MiTvAccessory:
        """
        Create the Mi TV accessory.

        Called by base class when connecting.
        """
        _LOG.debug(
            "[%s] Creating client for %s", self.log_id, self._device_config.address
        )
        return MiTvAccessory(
            MiTV(self._device_config.address, self._device_config.port),
            self._device_config.name,
        )

    async def connect_client(self) -> None:
        """
        Read the initial state of the TV.

        Called by base class after create_client().
        A TV that does not respond is simply OFF, not in an error state.
        """
        await self.refresh()

    async def disconnect_client(self) -> None:
        """
        Forget the Mi TV accessory.

        Called by base class during disconnect.
        """
        _LOG.debug("[%s] Releasing client", self.log_id)
        self._client = None

    async def _accessory(self) -> MiTvAccessory:
        if self._client is None:
            self._client = await self.create_client()
        return self._client

    async def refresh(self) -> dict[str, Any]:
        """Probe the TV and emit its power state and volume."""
        accessory = await self._accessory()
        if await accessory.get_active():
            self._state = States.ON
            try:
                self._volume = await accessory.get_volume()
                self._muted = self._volume == 0
            except RequestFailed as err:
                _LOG.debug("[%s] Could not read volume: %s", self.log_id, err)
        else:
            _LOG.debug("[%s] TV is off", self.log_id)
            self._state = States.OFF
            self._volume = None
            self._muted = None
        return self._emit_update()

    async def power_on(self) -> None:
        """Turn the TV on. Always raises PowerOnNotSupported."""
        accessory = await self._accessory()
        await accessory.set_active(True)

    async def power_off(self) -> None:
        """Turn the TV off."""
        accessory = await self._accessory()
        await accessory.set_active(False)
        self._state = States.OFF
        self._volume = None
        self._muted = None
        self._emit_update()

    async def toggle_power(self) -> None:
        """Turn the TV off if it is on. Turning it on is not supported."""
        accessory = await self._accessory()
        if self._state != States.ON and not await accessory.get_active():
            self._state = States.OFF
            await self.power_on()
        await self.power_off()

    async def send_key(self, command: str) -> None:
        """Press the Mi TV key matching a remote command."""
        accessory = await self._accessory()
        await accessory.press_remote_key(command)

    async def select_source(self, source: str) -> None:
        """Select an input source by name."""
        accessory = await self._accessory()
        identifier = SOURCE_NAMES.get(source)
        if identifier is None:
            _LOG.warning("[%s] Unknown source '%s'", self.log_id, source)
            return
        await accessory.set_source(identifier)
        self._source = source
        self._emit_update()

    async def set_volume(self, volume: int) -> None:
        """Set an absolute volume level."""
        accessory = await self._accessory()
        await accessory.set_volume(volume)
        self._volume = volume
        self._muted = volume == 0
        self._emit_update()

    async def mute(self) -> None:
        """Mute by setting the volume to zero."""
        accessory = await self._accessory()
        await accessory.set_muted(True)
        self._volume = 0
        self._muted = True
        self._emit_update()

    async def unmute(self) -> None:
        """Restore the volume recorded when muting."""
        accessory = await self._accessory()
        restored = accessory.volume_before_mute
        await accessory.set_muted(False)
        self._volume = restored if restored is not None else DEFAULT_VOLUME
        self._muted = False
        self._emit_update()

    async def mute_toggle(self) -> None:
        """Toggle the mute state."""
        accessory = await self._accessory()
        if await accessory.get_muted():
            await self.unmute()
        else:
            await self.mute()

    def _emit_update(self) -> dict[str, Any]:
        update = self.attributes
        self.events.emit(DeviceEvents.UPDATE, self.get_entity_id(), update)
        self.events.emit(
            DeviceEvents.UPDATE,
            create_entity_id(EntityTypes.REMOTE, self.identifier),
            {MediaAttr.STATE: update[MediaAttr.STATE]},
        )
        return update

    def get_entity_id(self) -> str:
        """Return the entity ID for this device."""
        return create_entity_id(EntityTypes.MEDIA_PLAYER, self.identifier)
