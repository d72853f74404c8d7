"""
Remote entity functions.

:license: Mozilla Public License Version 2.0, see LICENSE for more details.
"""

import asyncio
import logging
from typing import Any

from accessory import InvalidKey, PowerOnNotSupported
from const import DEFAULT_NAME, SOURCE_NAMES, MiTvConfig, SimpleCommands
from mitv import RequestFailed
from tv import MiTvDevice
from ucapi import EntityTypes, Remote, StatusCodes, media_player
from ucapi.media_player import States as MediaStates
from ucapi.remote import Attributes, Commands, Features
from ucapi.remote import States as RemoteStates
from ucapi.ui import Buttons, DeviceButtonMapping
from ucapi_framework import create_entity_id

_LOG = logging.getLogger(__name__)

MITV_REMOTE_STATE_MAPPING = {
    MediaStates.UNKNOWN: RemoteStates.UNKNOWN,
    MediaStates.UNAVAILABLE: RemoteStates.UNAVAILABLE,
    MediaStates.OFF: RemoteStates.OFF,
    MediaStates.ON: RemoteStates.ON,
}


class MiTvRemote(Remote):
    """Representation of a Mi TV Remote entity."""

    def __init__(self, config_device: MiTvConfig, device: MiTvDevice):
        """Initialize the class."""
        self._device = device
        _LOG.debug("Mi TV Remote init")
        entity_id = create_entity_id(EntityTypes.REMOTE, config_device.identifier)
        features = [Features.SEND_CMD, Features.ON_OFF, Features.TOGGLE]
        super().__init__(
            entity_id,
            f"{config_device.name} Remote",
            features,
            attributes={
                Attributes.STATE: MITV_REMOTE_STATE_MAPPING[
                    device.attributes[media_player.Attributes.STATE]
                ],
            },
            simple_commands=MITV_REMOTE_SIMPLE_COMMANDS,
            button_mapping=MITV_REMOTE_BUTTONS_MAPPING,
            ui_pages=MITV_REMOTE_UI_PAGES,
            cmd_handler=self.command,
        )

    def get_int_param(self, param: str, params: dict[str, Any], default: int):
        """Get parameter in integer format."""
        try:
            value = params.get(param, default)
        except AttributeError:
            return default

        if isinstance(value, str) and len(value) > 0:
            return int(float(value))
        if isinstance(value, int):
            return value
        return default

    async def command(
        self, cmd_id: str, params: dict[str, Any] | None = None
    ) -> StatusCodes:
        """
        Remote entity command handler.

        Called by the integration-API if a command is sent to a configured remote entity.

        :param cmd_id: command
        :param params: optional command parameters
        :return: status code of the command request
        """
        _LOG.info("Got %s command request: %s %s", self.id, cmd_id, params)

        if self._device is None:
            _LOG.warning("No Mi TV instance for entity: %s", self.id)
            return StatusCodes.SERVICE_UNAVAILABLE

        try:
            match cmd_id:
                case Commands.ON:
                    await self._device.power_on()
                case Commands.OFF:
                    await self._device.power_off()
                case Commands.TOGGLE:
                    await self._device.toggle_power()
                case Commands.SEND_CMD:
                    if not params or not params.get("command"):
                        return StatusCodes.BAD_REQUEST
                    repeat = self.get_int_param("repeat", params, 1)
                    delay = self.get_int_param("delay", params, 0)
                    for i in range(repeat):
                        if i > 0 and delay > 0:
                            await asyncio.sleep(delay / 1000)
                        await self.handle_command(params["command"])
                case _:
                    return StatusCodes.NOT_IMPLEMENTED
        except (InvalidKey, PowerOnNotSupported) as ex:
            _LOG.warning("Unsupported command %s: %s", cmd_id, ex)
            return StatusCodes.NOT_IMPLEMENTED
        except ValueError as ex:
            _LOG.error("Invalid parameters for command %s: %s", cmd_id, ex)
            return StatusCodes.BAD_REQUEST
        except RequestFailed as ex:
            _LOG.error("Error executing command %s: %s", cmd_id, ex)
            return StatusCodes.SERVICE_UNAVAILABLE
        return StatusCodes.OK

    async def handle_command(self, command: str) -> None:
        """Handle a single send_cmd command."""
        match command:
            case media_player.Commands.ON:
                await self._device.power_on()
            case media_player.Commands.OFF:
                await self._device.power_off()
            case media_player.Commands.TOGGLE:
                await self._device.toggle_power()
            case media_player.Commands.MUTE_TOGGLE:
                await self._device.mute_toggle()
            case _ if command in SOURCE_NAMES:
                await self._device.select_source(command)
            case _:
                await self._device.send_key(command)


MITV_REMOTE_SIMPLE_COMMANDS = [
    SimpleCommands.EXIT.value,
    SimpleCommands.HDMI1.value,
    SimpleCommands.HDMI2.value,
]

MITV_REMOTE_BUTTONS_MAPPING: list[DeviceButtonMapping] = [
    {"button": Buttons.BACK, "short_press": {"cmd_id": media_player.Commands.BACK}},
    {"button": Buttons.HOME, "short_press": {"cmd_id": media_player.Commands.HOME}},
    {
        "button": Buttons.DPAD_UP,
        "short_press": {"cmd_id": media_player.Commands.CURSOR_UP},
    },
    {
        "button": Buttons.DPAD_DOWN,
        "short_press": {"cmd_id": media_player.Commands.CURSOR_DOWN},
    },
    {
        "button": Buttons.DPAD_LEFT,
        "short_press": {"cmd_id": media_player.Commands.CURSOR_LEFT},
    },
    {
        "button": Buttons.DPAD_RIGHT,
        "short_press": {"cmd_id": media_player.Commands.CURSOR_RIGHT},
    },
    {
        "button": Buttons.DPAD_MIDDLE,
        "short_press": {"cmd_id": media_player.Commands.CURSOR_ENTER},
    },
    {
        "button": Buttons.VOLUME_UP,
        "short_press": {"cmd_id": media_player.Commands.VOLUME_UP},
    },
    {
        "button": Buttons.VOLUME_DOWN,
        "short_press": {"cmd_id": media_player.Commands.VOLUME_DOWN},
    },
    {"button": Buttons.MUTE, "short_press": {"cmd_id": media_player.Commands.MUTE_TOGGLE}},
    {"button": Buttons.POWER, "short_press": {"cmd_id": media_player.Commands.TOGGLE}},
]


def _text_item(command: str, text: str, x: int, y: int) -> dict[str, Any]:
    return {
        "command": {"cmd_id": "remote.send", "params": {"command": command, "repeat": 1}},
        "text": text,
        "location": {"x": x, "y": y},
        "size": {"height": 1, "width": 2},
        "type": "text",
    }


def _icon_item(command: str, icon: str, x: int, y: int) -> dict[str, Any]:
    return {
        "command": {"cmd_id": "remote.send", "params": {"command": command, "repeat": 1}},
        "icon": icon,
        "location": {"x": x, "y": y},
        "size": {"height": 1, "width": 1},
        "type": "icon",
    }


MITV_REMOTE_UI_PAGES = [
    {
        "page_id": "Mi TV commands",
        "name": "TV commands",
        "grid": {"width": 4, "height": 6},
        "items": [
            _icon_item(media_player.Commands.HOME, "uc:home", 0, 0),
            _icon_item(media_player.Commands.MENU, "uc:menu", 1, 0),
            _icon_item(media_player.Commands.BACK, "uc:back", 2, 0),
            _icon_item(media_player.Commands.MUTE_TOGGLE, "uc:mute", 3, 0),
            _text_item(DEFAULT_NAME, "Mi TV", 0, 1),
            _text_item(SimpleCommands.HDMI1, "HDMI 1", 2, 1),
            _text_item(SimpleCommands.HDMI2, "HDMI 2", 0, 2),
            _icon_item(media_player.Commands.CURSOR_UP, "uc:up-arrow", 1, 3),
            _icon_item(media_player.Commands.CURSOR_LEFT, "uc:left-arrow", 0, 4),
            _icon_item(media_player.Commands.CURSOR_ENTER, "uc:circle", 1, 4),
            _icon_item(media_player.Commands.CURSOR_RIGHT, "uc:right-arrow", 2, 4),
            _icon_item(media_player.Commands.CURSOR_DOWN, "uc:down-arrow", 1, 5),
            _icon_item(media_player.Commands.VOLUME_UP, "uc:plus", 3, 3),
            _icon_item(media_player.Commands.VOLUME_DOWN, "uc:minus", 3, 5),
        ],
    },
]
