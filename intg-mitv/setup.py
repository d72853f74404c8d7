"""
Setup flow for Mi TV integration.

:license: Mozilla Public License Version 2.0, see LICENSE for more details.
"""

import logging
from typing import Any

from const import DEFAULT_NAME, MiTvConfig
from mitv import MiTV, RequestFailed
from ucapi import IntegrationSetupError, RequestUserInput, SetupError
from ucapi_framework import BaseSetupFlow

_LOG = logging.getLogger(__name__)

_MANUAL_INPUT_SCHEMA = RequestUserInput(
    {"en": "Mi TV Setup"},
    [
        {
            "id": "info",
            "label": {
                "en": "Setup your Mi TV",
            },
            "field": {
                "label": {
                    "value": {
                        "en": (
                            "Please supply the IP address of your Mi TV. "
                            "The TV must be switched on during setup."
                        ),
                    }
                }
            },
        },
        {
            "field": {"text": {"value": ""}},
            "id": "address",
            "label": {
                "en": "IP Address",
            },
        },
        {
            "field": {"text": {"value": ""}},
            "id": "name",
            "label": {
                "en": "Name (optional)",
            },
        },
    ],
)


class MiTvSetupFlow(BaseSetupFlow[MiTvConfig]):
    """Setup flow handler for Mi TV integration."""

    def get_manual_entry_form(self) -> RequestUserInput:
        """
        Get the manual entry form for Mi TV setup.

        :return: RequestUserInput for manual entry
        """
        return _MANUAL_INPUT_SCHEMA

    async def query_device(
        self, input_values: dict[str, Any]
    ) -> RequestUserInput | MiTvConfig | SetupError:
        """
        Process user data response from the first setup process screen.

        :param input_values: response data from the requested user data
        :return: the setup action on how to continue
        """
        ip = (input_values.get("address") or "").strip()
        if not ip:
            return _MANUAL_INPUT_SCHEMA

        _LOG.debug("Connecting to Mi TV at %s", ip)
        tv = MiTV(ip)
        try:
            status = await tv.status()
            info = await tv.system_info()
        except RequestFailed as err:
            _LOG.error("Setup error for Mi TV at %s: %s", ip, err)
            return SetupError(IntegrationSetupError.CONNECTION_REFUSED)

        _LOG.info("Mi TV info: %s", info)

        identifier = info.get("ethmac") if isinstance(info, dict) else None
        if not identifier:
            _LOG.error("Mi TV at %s did not report an ethernet MAC", ip)
            return SetupError(IntegrationSetupError.OTHER)

        # fails before the framework repeats this check when the config is saved
        if self._add_mode and self.config is not None and self.config.contains(identifier):
            _LOG.info("Skipping found device %s: already configured", identifier)
            return SetupError(IntegrationSetupError.OTHER)

        name = (
            (input_values.get("name") or "").strip()
            or (status.get("devicename") if isinstance(status, dict) else None)
            or DEFAULT_NAME
        )

        return MiTvConfig(
            identifier=identifier,
            name=name,
            address=ip,
        )
