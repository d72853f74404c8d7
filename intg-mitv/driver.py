"""
This module implements a Remote Two integration driver for Xiaomi Mi TV devices.

:license: Mozilla Public License Version 2.0, see LICENSE for more details.
"""

import asyncio
import logging
import os

from const import MiTvConfig
from media_player import MiTvMediaPlayer
from remote import MiTvRemote
from setup import MiTvSetupFlow
from tv import MiTvDevice
from ucapi_framework import BaseConfigManager, BaseIntegrationDriver, get_config_path


async def main():
    """Start the Remote Two integration driver."""
    logging.basicConfig()

    level = os.getenv("UC_LOG_LEVEL", "DEBUG").upper()
    logging.getLogger("mitv").setLevel(level)
    logging.getLogger("accessory").setLevel(level)
    logging.getLogger("tv").setLevel(level)
    logging.getLogger("media_player").setLevel(level)
    logging.getLogger("remote").setLevel(level)
    logging.getLogger("driver").setLevel(level)
    logging.getLogger("config").setLevel(level)
    logging.getLogger("setup").setLevel(level)

    driver = BaseIntegrationDriver(
        device_class=MiTvDevice,
        entity_classes=[MiTvMediaPlayer, MiTvRemote],
    )

    driver.config_manager = BaseConfigManager(
        get_config_path(driver.api.config_dir_path),
        driver.on_device_added,
        driver.on_device_removed,
        config_class=MiTvConfig,
    )

    await driver.register_all_configured_devices()

    setup_handler = MiTvSetupFlow.create_handler(driver)

    await driver.api.init("driver.json", setup_handler)

    await asyncio.Future()


if __name__ == "__main__":
    asyncio.run(main())
