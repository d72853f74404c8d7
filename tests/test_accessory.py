"""Tests for the accessory adapter."""

import pytest
from accessory import InvalidKey, MiTvAccessory, PowerOnNotSupported, to_mitv_key
from const import DEFAULT_VOLUME, SimpleCommands, SourceIdentifier
from mitv import Keys, RequestFailed
from ucapi import media_player


@pytest.fixture
def accessory(recording_client):
    return MiTvAccessory(recording_client, "Living Room")


def test_default_name(recording_client):
    assert MiTvAccessory(recording_client).name == "Mi TV"
    assert MiTvAccessory(recording_client, "").name == "Mi TV"


async def test_active_when_tv_answers(accessory):
    assert await accessory.get_active() is True


async def test_inactive_when_tv_does_not_answer(accessory, recording_client):
    recording_client.alive = False
    assert await accessory.get_active() is False


async def test_turning_on_is_not_supported(accessory, recording_client):
    with pytest.raises(PowerOnNotSupported):
        await accessory.set_active(True)
    assert recording_client.calls == []


async def test_turning_off_powers_off(accessory, recording_client):
    await accessory.set_active(False)
    assert recording_client.calls == [("power_off", None)]


async def test_power_off_failure_propagates(accessory, recording_client):
    recording_client.fail = True
    with pytest.raises(RequestFailed):
        await accessory.set_active(False)


@pytest.mark.parametrize(
    "command, key",
    [
        (media_player.Commands.CURSOR_UP, Keys.UP),
        (media_player.Commands.CURSOR_DOWN, Keys.DOWN),
        (media_player.Commands.CURSOR_LEFT, Keys.LEFT),
        (media_player.Commands.CURSOR_RIGHT, Keys.RIGHT),
        (media_player.Commands.CURSOR_ENTER, Keys.ENTER),
        (media_player.Commands.PLAY_PAUSE, Keys.ENTER),
        (media_player.Commands.BACK, Keys.BACK),
        (media_player.Commands.HOME, Keys.HOME),
        (SimpleCommands.EXIT, Keys.HOME),
        (media_player.Commands.MENU, Keys.MENU),
        (media_player.Commands.INFO, Keys.MENU),
        (media_player.Commands.VOLUME_UP, Keys.VOLUME_UP),
        (media_player.Commands.VOLUME_DOWN, Keys.VOLUME_DOWN),
    ],
)
async def test_remote_key_mapping(accessory, recording_client, command, key):
    await accessory.press_remote_key(command)
    assert recording_client.calls == [("press_key", key)]


async def test_remote_key_mapping_accepts_plain_strings(accessory, recording_client):
    await accessory.press_remote_key("cursor_up")
    assert recording_client.calls == [("press_key", Keys.UP)]


@pytest.mark.parametrize(
    "command",
    [media_player.Commands.DIGIT_5, media_player.Commands.FAST_FORWARD, "rewind", 7],
)
async def test_unmapped_key_fails_without_request(accessory, recording_client, command):
    with pytest.raises(InvalidKey) as excinfo:
        await accessory.press_remote_key(command)
    assert "Invalid key" in str(excinfo.value)
    assert recording_client.calls == []


def test_invalid_key_names_the_key():
    with pytest.raises(InvalidKey) as excinfo:
        to_mitv_key("digit_5")
    assert excinfo.value.key == "digit_5"
    assert str(excinfo.value) == "Invalid key: digit_5"


@pytest.mark.parametrize(
    "identifier, call",
    [
        (SourceIdentifier.HOME_SCREEN, ("press_key", Keys.HOME)),
        (SourceIdentifier.HDMI1, ("change_source", "hdmi1")),
        (SourceIdentifier.HDMI2, ("change_source", "hdmi2")),
        (1, ("press_key", Keys.HOME)),
        (3, ("change_source", "hdmi2")),
    ],
)
async def test_set_source(accessory, recording_client, identifier, call):
    await accessory.set_source(identifier)
    assert recording_client.calls == [call]


@pytest.mark.parametrize("identifier", [0, 4, 99])
async def test_unknown_source_is_ignored(accessory, recording_client, identifier):
    await accessory.set_source(identifier)
    assert recording_client.calls == []


async def test_muted_when_volume_is_zero(accessory, recording_client):
    recording_client.volume = 0
    assert await accessory.get_muted() is True
    recording_client.volume = 3
    assert await accessory.get_muted() is False


async def test_mute_remembers_volume_and_unmute_restores_it(accessory, recording_client):
    await accessory.set_muted(True)
    assert accessory.volume_before_mute == 42
    assert recording_client.volume == 0

    await accessory.set_muted(False)
    assert recording_client.volume == 42
    assert accessory.volume_before_mute is None


async def test_second_mute_keeps_remembered_volume(accessory, recording_client):
    await accessory.set_muted(True)
    await accessory.set_muted(True)
    assert accessory.volume_before_mute == 42

    await accessory.set_muted(False)
    assert recording_client.volume == 42


async def test_mute_when_already_silent_remembers_nothing(accessory, recording_client):
    recording_client.volume = 0
    await accessory.set_muted(True)
    assert accessory.volume_before_mute is None


async def test_unmute_without_mute_restores_default(accessory, recording_client):
    await accessory.set_muted(False)
    assert recording_client.calls == [("set_volume", DEFAULT_VOLUME)]
    assert DEFAULT_VOLUME == 10


async def test_mute_failure_propagates_and_keeps_state(accessory, recording_client):
    recording_client.fail = True
    with pytest.raises(RequestFailed):
        await accessory.set_muted(True)
    assert accessory.volume_before_mute is None


async def test_remembered_volume_is_per_accessory(recording_client):
    from conftest import RecordingClient

    first = MiTvAccessory(recording_client)
    second = MiTvAccessory(RecordingClient(volume=7))
    await first.set_muted(True)
    assert second.volume_before_mute is None


async def test_get_and_set_volume(accessory, recording_client):
    assert await accessory.get_volume() == 42
    await accessory.set_volume(17)
    assert recording_client.calls[-1] == ("set_volume", 17)


async def test_get_volume_failure_propagates(accessory, recording_client):
    recording_client.fail = True
    with pytest.raises(RequestFailed):
        await accessory.get_volume()
