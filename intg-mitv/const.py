"""Mi TV integration constants."""

from dataclasses import dataclass
from enum import IntEnum, StrEnum

from mitv import DEFAULT_PORT
from ucapi.media_player import States as MediaStates


@dataclass
class MiTvConfig:
    """Mi TV device configuration."""

    identifier: str
    """Unique identifier of the device. (Ethernet MAC Address)"""
    name: str
    """Friendly name of the device."""
    address: str
    """IP Address of device"""
    port: int = DEFAULT_PORT
    """Port of the remote-control API"""


DEFAULT_NAME = "Mi TV"
MANUFACTURER = "Xiaomi"

DEFAULT_VOLUME = 10
"""Volume restored on unmute when no volume was recorded before muting."""


class SourceIdentifier(IntEnum):
    """Input source identifiers."""

    HOME_SCREEN = 1
    HDMI1 = 2
    HDMI2 = 3


SOURCE_NAMES = {
    "Mi TV": SourceIdentifier.HOME_SCREEN,
    "HDMI 1": SourceIdentifier.HDMI1,
    "HDMI 2": SourceIdentifier.HDMI2,
}


class SimpleCommands(StrEnum):
    """Additional simple commands of the Mi TV not covered by media-player features."""

    EXIT = "Exit"
    HDMI1 = "HDMI 1"
    HDMI2 = "HDMI 2"


class States(IntEnum):
    """State of a Mi TV."""

    UNKNOWN = 0
    UNAVAILABLE = 1
    OFF = 2
    ON = 3


MITV_STATE_MAPPING = {
    States.OFF: MediaStates.OFF,
    States.ON: MediaStates.ON,
    States.UNAVAILABLE: MediaStates.UNAVAILABLE,
    States.UNKNOWN: MediaStates.UNKNOWN,
}
