"""
Media-player entity functions.

:license: Mozilla Public License Version 2.0, see LICENSE for more details.
"""

import logging
from typing import Any

import ucapi
from accessory import InvalidKey, PowerOnNotSupported
from const import SOURCE_NAMES, MiTvConfig, SimpleCommands
from mitv import RequestFailed
from tv import MiTvDevice
from ucapi import EntityTypes, MediaPlayer, media_player
from ucapi.media_player import DeviceClasses
from ucapi_framework import create_entity_id

_LOG = logging.getLogger(__name__)


features = [
    media_player.Features.ON_OFF,
    media_player.Features.TOGGLE,
    media_player.Features.VOLUME,
    media_player.Features.VOLUME_UP_DOWN,
    media_player.Features.MUTE_TOGGLE,
    media_player.Features.MUTE,
    media_player.Features.UNMUTE,
    media_player.Features.HOME,
    media_player.Features.DPAD,
    media_player.Features.SELECT_SOURCE,
    media_player.Features.MENU,
    media_player.Features.INFO,
    media_player.Features.PLAY_PAUSE,
]


class MiTvMediaPlayer(MediaPlayer):
    """Representation of a Mi TV MediaPlayer entity."""

    def __init__(self, config_device: MiTvConfig, device: MiTvDevice):
        """Initialize the class."""
        self._device = device
        _LOG.debug("MiTvMediaPlayer init")
        entity_id = create_entity_id(EntityTypes.MEDIA_PLAYER, config_device.identifier)
        self.config = config_device
        super().__init__(
            entity_id,
            config_device.name,
            features,
            attributes=device.attributes,
            device_class=DeviceClasses.TV,
            options={
                media_player.Options.SIMPLE_COMMANDS: [
                    command.value for command in SimpleCommands
                ]
            },
            cmd_handler=self.media_player_cmd_handler,
        )

    async def media_player_cmd_handler(
        self, entity: MediaPlayer, cmd_id: str, params: dict[str, Any] | None
    ) -> ucapi.StatusCodes:
        """
        Media-player entity command handler.

        Called by the integration-API if a command is sent to a configured media-player entity.

        :param entity: media-player entity
        :param cmd_id: command
        :param params: optional command parameters
        :return: status code of the command. StatusCodes.OK if the command succeeded.
        """
        _LOG.info(
            "Got %s command request: %s %s", entity.id, cmd_id, params if params else ""
        )

        try:
            match cmd_id:
                case media_player.Commands.ON:
                    await self._device.power_on()
                case media_player.Commands.OFF:
                    await self._device.power_off()
                case media_player.Commands.TOGGLE:
                    await self._device.toggle_power()
                case media_player.Commands.VOLUME:
                    volume = int(float((params or {}).get("volume", "")))
                    await self._device.set_volume(volume)
                case media_player.Commands.MUTE:
                    await self._device.mute()
                case media_player.Commands.UNMUTE:
                    await self._device.unmute()
                case media_player.Commands.MUTE_TOGGLE:
                    await self._device.mute_toggle()
                case media_player.Commands.SELECT_SOURCE:
                    source = (params or {}).get("source")
                    if source not in SOURCE_NAMES:
                        _LOG.warning("Unknown source: %s", source)
                        return ucapi.StatusCodes.BAD_REQUEST
                    await self._device.select_source(source)
                # --- simple commands ---
                case SimpleCommands.HDMI1:
                    await self._device.select_source(SimpleCommands.HDMI1.value)
                case SimpleCommands.HDMI2:
                    await self._device.select_source(SimpleCommands.HDMI2.value)
                case _:
                    await self._device.send_key(cmd_id)

        except InvalidKey as ex:
            _LOG.warning("Unsupported command %s: %s", cmd_id, ex)
            return ucapi.StatusCodes.NOT_IMPLEMENTED
        except PowerOnNotSupported as ex:
            _LOG.warning("%s", ex)
            return ucapi.StatusCodes.NOT_IMPLEMENTED
        except ValueError as ex:
            _LOG.error("Invalid parameters for command %s: %s", cmd_id, ex)
            return ucapi.StatusCodes.BAD_REQUEST
        except RequestFailed as ex:
            _LOG.error("Error executing command %s: %s", cmd_id, ex)
            return ucapi.StatusCodes.SERVICE_UNAVAILABLE
        return ucapi.StatusCodes.OK
