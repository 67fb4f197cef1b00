#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
from unittest.mock import Mock

from requests.models import Response

from ocean_publisher.chain.pricing import PricingResult

ACCOUNT_ID = "0xbe5449a6a97ad46c8558a3356267ee5d2731ab5e"
NFT_ADDRESS = "0x6f7f6d4b0e6e07bd3c5d4e6e3e0f0ff1c9f1e6f2"
DATATOKEN_ADDRESS = "0x1b5f6b7e2c4f5a0d9e8c7b6a5f4e3d2c1b0a9f8e"
OCEAN_ADDRESS = "0xcfdda22c9837ae76e0faa845354f33c62e03653a"
MARKET_FEE_ADDRESS = "0x9984b2453ec7d99a73a5b3a46da81f197b753c8d"
FRE_ADDRESS = "0xfa48673a7c36a2a768f89ac1ee8c355d5c367b02"
DISPENSER_ADDRESS = "0x5461b629e01f72e0a468931a36e039eea394f9ea"
TX_HASH = "0x" + "ab" * 32


def new_response(status_code, json_data=None, text=None):
    the_response = Mock(spec=Response)
    the_response.status_code = status_code
    if json_data is not None:
        the_response.json.return_value = json_data
    else:
        the_response.json.side_effect = ValueError("No JSON")
    the_response.text = text if text is not None else ""
    the_response.content = the_response.text.encode("utf-8")

    return the_response


class FakeNftFactory:
    """Records the factory calls, returns a fixed PricingResult."""

    def __init__(self, result=None, error=None, on_create=None):
        self.result = result or PricingResult(NFT_ADDRESS, DATATOKEN_ADDRESS, TX_HASH)
        self.error = error
        self.on_create = on_create
        self.calls = []

    def _create(self, kind, *args):
        self.calls.append((kind, args))
        if self.on_create:
            self.on_create()
        if self.error:
            raise self.error

        return self.result

    def create_nft_with_datatoken_with_fixed_rate(
        self, account_id, nft_create_data, erc_params, fre_params
    ):
        return self._create(
            "fixed", account_id, nft_create_data, erc_params, fre_params
        )

    def create_nft_with_datatoken_with_dispenser(
        self, account_id, nft_create_data, erc_params, dispenser_params
    ):
        return self._create(
            "free", account_id, nft_create_data, erc_params, dispenser_params
        )
